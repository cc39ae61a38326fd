from dataclasses import dataclass

from fastapi import Request

from docklite_agent.core.config import Settings
from docklite_agent.domain.ports import ContainerEngine
from docklite_agent.services.container_service import ContainerService
from docklite_agent.services.database_service import DatabaseService
from docklite_agent.services.image_service import ImageService
from docklite_agent.services.inventory_service import InventoryService
from docklite_agent.services.network_service import NetworkService
from docklite_agent.services.site_service import SiteService


@dataclass
class Services:
    settings: Settings
    docker_runtime: ContainerEngine
    containers: ContainerService
    sites: SiteService
    databases: DatabaseService
    inventory: InventoryService


def build_services(docker_runtime: ContainerEngine, settings: Settings) -> Services:
    network_service = NetworkService(docker_runtime)
    image_service = ImageService(docker_runtime, settings)
    return Services(
        settings=settings,
        docker_runtime=docker_runtime,
        containers=ContainerService(docker_runtime),
        sites=SiteService(docker_runtime, network_service, image_service, settings),
        databases=DatabaseService(docker_runtime, network_service, image_service, settings),
        inventory=InventoryService(docker_runtime),
    )


def get_services(request: Request) -> Services:
    return request.app.state.services
