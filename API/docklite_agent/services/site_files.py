import json
import logging
from pathlib import Path
from typing import Dict

import aiofiles
import aiofiles.os

from docklite_agent.core.errors import DockliteError
from docklite_agent.domain.templates import TemplateKind

logger = logging.getLogger(__name__)

_PAGE = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <title>{domain}</title>
  </head>
  <body>
    <h1>{domain}</h1>
    <p>{body}</p>
  </body>
</html>
"""

_NODE_SERVER = """const http = require('http');

const port = process.env.PORT || {port};

const server = http.createServer((req, res) => {{
  res.writeHead(200, {{ 'Content-Type': 'text/html' }});
  res.end('<h1>Docklite Node Site</h1><p>Server is running.</p>');
}});

server.listen(port, () => {{
  console.log('Server running on port', port);
}});
"""


def starter_files(domain: str, kind: TemplateKind, port: int) -> Dict[str, str]:
    """File name -> content of the starter site for a template."""
    if kind is TemplateKind.PHP:
        return {"index.php": _PAGE.format(domain=domain, body='<?php echo "PHP is running."; ?>')}
    if kind is TemplateKind.NODE:
        package = {
            "name": domain,
            "version": "1.0.0",
            "private": True,
            "scripts": {"start": "node index.js"},
        }
        return {
            "package.json": json.dumps(package, indent=2) + "\n",
            "index.js": _NODE_SERVER.format(port=port),
        }
    return {"index.html": _PAGE.format(domain=domain, body="Welcome to your Docklite site.")}


async def seed_site_files(site_path: Path, domain: str, kind: TemplateKind, port: int) -> None:
    """Create the site folder and any missing starter file. Existing files are kept."""
    try:
        await aiofiles.os.makedirs(site_path, exist_ok=True)
        for filename, content in starter_files(domain, kind, port).items():
            target = site_path / filename
            if await aiofiles.os.path.exists(target):
                continue
            async with aiofiles.open(target, "w") as out_file:
                await out_file.write(content)
            logger.info(f"[Site] Wrote starter file {target}")
    except OSError as e:
        raise DockliteError(f"Cannot prepare site directory {site_path}: {e}") from e
