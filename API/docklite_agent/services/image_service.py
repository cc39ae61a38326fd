import logging

from docklite_agent.core.config import Settings
from docklite_agent.domain.ports import ContainerEngine
from docklite_agent.domain.templates import TemplateKind, image_for_kind

logger = logging.getLogger(__name__)


class ImageService:
    """Resolves template kinds to image references and pulls them."""

    def __init__(self, docker_runtime: ContainerEngine, settings: Settings):
        self.docker_runtime = docker_runtime
        self.settings = settings

    def image_for(self, kind: TemplateKind) -> str:
        return image_for_kind(kind, self.settings)

    async def ensure_image(self, image: str) -> None:
        # No local cache: the engine's layer store makes a repeated pull cheap.
        logger.info(f"[Image] Pulling image: {image}")
        await self.docker_runtime.pull_image(image)
