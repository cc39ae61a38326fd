from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from docklite_agent.core.config import Settings
from docklite_agent.core.errors import ValidationError


class TemplateKind(str, Enum):
    STATIC = "static"
    PHP = "php"
    NODE = "node"
    DATABASE = "database"


SITE_KINDS = (TemplateKind.STATIC, TemplateKind.PHP, TemplateKind.NODE)

DEFAULT_NODE_PORT = 3000
DATABASE_PORT = 5432


@dataclass(frozen=True)
class TemplateProfile:
    kind: TemplateKind
    mount_target: str
    writable: bool
    default_port: int
    env: Dict[str, str] = field(default_factory=dict)
    command: Optional[List[str]] = None
    working_dir: Optional[str] = None

    def environment(self, port: int) -> Dict[str, str]:
        env = dict(self.env)
        if self.kind is TemplateKind.NODE:
            env["PORT"] = str(port)
        return env


TEMPLATES: Dict[TemplateKind, TemplateProfile] = {
    TemplateKind.STATIC: TemplateProfile(
        kind=TemplateKind.STATIC,
        mount_target="/usr/share/nginx/html",
        writable=False,
        default_port=80,
    ),
    TemplateKind.PHP: TemplateProfile(
        kind=TemplateKind.PHP,
        mount_target="/app",
        writable=True,
        default_port=80,
        env={
            "WEB_DOCUMENT_ROOT": "/app",
            "PHP_DISPLAY_ERRORS": "1",
            "PHP_MEMORY_LIMIT": "256M",
            "PHP_MAX_EXECUTION_TIME": "300",
            "PHP_POST_MAX_SIZE": "50M",
            "PHP_UPLOAD_MAX_FILESIZE": "50M",
        },
    ),
    TemplateKind.NODE: TemplateProfile(
        kind=TemplateKind.NODE,
        mount_target="/app",
        writable=True,
        default_port=DEFAULT_NODE_PORT,
        env={"NODE_ENV": "production"},
        command=["npm", "start"],
        working_dir="/app",
    ),
}


def image_for_kind(kind: TemplateKind, settings: Settings) -> str:
    return {
        TemplateKind.STATIC: settings.STATIC_IMAGE,
        TemplateKind.PHP: settings.PHP_IMAGE,
        TemplateKind.NODE: settings.NODE_IMAGE,
        TemplateKind.DATABASE: settings.DATABASE_IMAGE,
    }[kind]


def parse_site_kind(value: Optional[str]) -> TemplateKind:
    """Map a request's template string to a site kind. Blank means static."""
    normalized = (value or "").strip().lower() or TemplateKind.STATIC.value
    try:
        kind = TemplateKind(normalized)
    except ValueError:
        raise ValidationError(f"unsupported template type: {value}")
    if kind not in SITE_KINDS:
        raise ValidationError(f"unsupported template type: {value}")
    return kind
