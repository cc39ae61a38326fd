import logging
import secrets
import string
from typing import Any, Dict, Optional

from docklite_agent.core.config import Settings
from docklite_agent.core.errors import EngineError
from docklite_agent.domain.container import ContainerCreateSpec
from docklite_agent.domain.database import DatabaseCredentials, DatabaseSpec
from docklite_agent.domain.metadata import ResourceMetadata
from docklite_agent.domain.naming import (
    database_container_name,
    sanitize_database_name,
    validate_port,
)
from docklite_agent.domain.ports import ContainerEngine
from docklite_agent.domain.templates import DATABASE_PORT, TemplateKind
from docklite_agent.services.image_service import ImageService
from docklite_agent.services.network_service import NetworkService
from docklite_agent.services.provisioning import create_with_conflict_retry

logger = logging.getLogger(__name__)

DEFAULT_USERNAME = "docklite"
PASSWORD_LENGTH = 24
PASSWORD_ALPHABET = string.ascii_letters + string.digits


def generate_password(length: int = PASSWORD_LENGTH) -> str:
    # secrets draws from the OS CSPRNG; if that fails the error propagates.
    return "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))


def _random_suffix(name: str) -> str:
    return f"{name}-{secrets.randbelow(99999)}"


def published_port(inspected: Dict[str, Any], container_port: int = DATABASE_PORT) -> int:
    """First host port bound to `container_port` in an inspect document, 0 if none."""
    ports = (inspected.get("NetworkSettings") or {}).get("Ports") or {}
    bindings = ports.get(f"{container_port}/tcp") or []
    for binding in bindings:
        host_port = (binding or {}).get("HostPort")
        if not host_port:
            continue
        try:
            return int(host_port)
        except (TypeError, ValueError):
            continue
    return 0


class DatabaseService:
    def __init__(
        self,
        docker_runtime: ContainerEngine,
        network_service: NetworkService,
        image_service: ImageService,
        settings: Settings,
    ):
        self.docker_runtime = docker_runtime
        self.network_service = network_service
        self.image_service = image_service
        self.settings = settings

    def build_spec(
        self,
        name: str,
        username: str = "",
        password: str = "",
        port: Optional[int] = None,
    ) -> DatabaseSpec:
        """None lets the engine pick a host port; any other value must be a valid port."""
        name = sanitize_database_name(name or "")
        if port is not None:
            validate_port(port)
        return DatabaseSpec(
            name=name,
            username=(username or "").strip() or DEFAULT_USERNAME,
            password=password or generate_password(),
            port=port or 0,
        )

    def container_spec(self, db: DatabaseSpec, image: str) -> ContainerCreateSpec:
        metadata = ResourceMetadata(
            kind=TemplateKind.DATABASE,
            database=db.name,
            username=db.username,
            password=db.password,
            db_port=db.port or None,
        )
        return ContainerCreateSpec(
            name=database_container_name(db.name),
            image=image,
            container_port=DATABASE_PORT,
            labels=metadata.to_labels(),
            environment={
                "POSTGRES_DB": db.name,
                "POSTGRES_USER": db.username,
                "POSTGRES_PASSWORD": db.password,
            },
            host_port=db.port or None,
            network=self.settings.NETWORK_NAME,
        )

    async def create_database(
        self,
        name: str,
        username: str = "",
        password: str = "",
        port: Optional[int] = None,
    ) -> DatabaseCredentials:
        db = self.build_spec(name, username, password, port)

        await self.network_service.ensure_network(self.settings.NETWORK_NAME)
        image = self.image_service.image_for(TemplateKind.DATABASE)
        await self.image_service.ensure_image(image)

        spec = self.container_spec(db, image)
        container_id = await create_with_conflict_retry(
            self.docker_runtime, spec, _random_suffix
        )
        await self.docker_runtime.start(container_id)

        assigned_port = db.port
        if not assigned_port:
            try:
                assigned_port = published_port(await self.docker_runtime.inspect(container_id))
            except EngineError as e:
                # The database is running; the caller retries inspection later.
                logger.warning(f"[Database] Could not read port of {container_id[:12]}: {e}")
                assigned_port = 0

        logger.info(f"[Database] Started database {db.name} on port {assigned_port} ({container_id[:12]})")
        return DatabaseCredentials(
            id=container_id,
            name=db.name,
            port=assigned_port,
            username=db.username,
            password=db.password,
        )
