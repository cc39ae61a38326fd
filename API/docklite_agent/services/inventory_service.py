from typing import List

from docker.utils import parse_repository_tag

from docklite_agent.domain.container import ManagedResource
from docklite_agent.domain.database import DatabaseRecord
from docklite_agent.domain.metadata import MANAGED_LABEL
from docklite_agent.domain.ports import ContainerEngine
from docklite_agent.domain.templates import DATABASE_PORT


def _is_postgres_image(image: str) -> bool:
    repository, _ = parse_repository_tag(image or "")
    return repository.rsplit("/", 1)[-1] == "postgres"


def is_database(resource: ManagedResource) -> bool:
    # Containers created before databases were labelled only have their image.
    return resource.metadata.is_database or _is_postgres_image(resource.image)


def to_database_record(resource: ManagedResource) -> DatabaseRecord:
    metadata = resource.metadata
    return DatabaseRecord(
        id=resource.id,
        name=metadata.database or resource.name,
        port=metadata.db_port or resource.public_port(DATABASE_PORT),
        username=metadata.username or "",
        password=metadata.password or "",
        status=resource.status,
    )


class InventoryService:
    """
    Reads container state straight from the engine on every call.

    Nothing is cached: the engine is the only record, so every listing is a
    fresh look at what actually exists.
    """

    def __init__(self, docker_runtime: ContainerEngine):
        self.docker_runtime = docker_runtime

    async def list_containers(self, all: bool = True, managed_only: bool = False) -> List[ManagedResource]:
        labels = [f"{MANAGED_LABEL}=true"] if managed_only else None
        entries = await self.docker_runtime.list_containers(all=all, labels=labels)
        return [ManagedResource.from_engine(entry) for entry in entries]

    async def list_databases(self) -> List[DatabaseRecord]:
        resources = await self.list_containers(all=True)
        return [to_database_record(r) for r in resources if is_database(r)]
