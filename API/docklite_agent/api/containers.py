from fastapi import APIRouter, Depends, Query

from docklite_agent.api.dependencies import Services, get_services
from docklite_agent.core.deadline import with_deadline
from docklite_agent.schemas.container import (
    ContainerListResponse,
    ContainerResponse,
    InspectResponse,
    LogsResponse,
    SiteCreateRequest,
    SiteCreateResponse,
    StatsResponse,
    SuccessResponse,
    UtilizationResponse,
)

router = APIRouter(prefix="/api/containers", tags=["containers"])


@router.get("", response_model=ContainerListResponse)
async def list_containers(
    all: bool = Query(True, description="Include stopped containers"),
    managed: bool = Query(False, description="Only containers created by this agent"),
    services: Services = Depends(get_services),
):
    resources = await with_deadline(
        services.inventory.list_containers(all=all, managed_only=managed),
        services.settings.LIST_DEADLINE,
    )
    return ContainerListResponse(
        containers=[ContainerResponse.from_resource(r) for r in resources]
    )


@router.post("", response_model=SiteCreateResponse)
async def create_site(
    payload: SiteCreateRequest,
    services: Services = Depends(get_services),
):
    container_id = await with_deadline(
        services.sites.create_site(
            payload.domain,
            payload.template_type,
            include_www=payload.include_www,
            port=payload.port,
        ),
        services.settings.CREATE_DEADLINE,
    )
    return SiteCreateResponse(id=container_id)


@router.get("/{container_id}/inspect", response_model=InspectResponse)
async def inspect_container(container_id: str, services: Services = Depends(get_services)):
    state = await with_deadline(
        services.containers.inspect_container(container_id),
        services.settings.ACTION_DEADLINE,
    )
    return InspectResponse(container=state)


@router.get("/{container_id}/stats", response_model=StatsResponse)
async def container_stats(container_id: str, services: Services = Depends(get_services)):
    report = await with_deadline(
        services.containers.get_utilization(container_id),
        services.settings.ACTION_DEADLINE,
    )
    return StatsResponse(stats=UtilizationResponse.from_report(report))


@router.get("/{container_id}/logs", response_model=LogsResponse)
async def container_logs(
    container_id: str,
    tail: int = Query(200, ge=1, description="Number of lines from the end"),
    services: Services = Depends(get_services),
):
    logs = await with_deadline(
        services.containers.get_logs(container_id, tail=tail),
        services.settings.ACTION_DEADLINE,
    )
    return LogsResponse(logs=logs)


@router.post("/{container_id}/start", response_model=SuccessResponse)
async def start_container(container_id: str, services: Services = Depends(get_services)):
    await with_deadline(
        services.containers.start_container(container_id),
        services.settings.ACTION_DEADLINE,
    )
    return SuccessResponse()


@router.post("/{container_id}/stop", response_model=SuccessResponse)
async def stop_container(container_id: str, services: Services = Depends(get_services)):
    await with_deadline(
        services.containers.stop_container(container_id),
        services.settings.ACTION_DEADLINE,
    )
    return SuccessResponse()


@router.post("/{container_id}/restart", response_model=SuccessResponse)
async def restart_container(container_id: str, services: Services = Depends(get_services)):
    await with_deadline(
        services.containers.restart_container(container_id),
        services.settings.ACTION_DEADLINE,
    )
    return SuccessResponse()


@router.delete("/{container_id}", response_model=SuccessResponse)
async def delete_container(container_id: str, services: Services = Depends(get_services)):
    await with_deadline(
        services.containers.remove_container(container_id),
        services.settings.ACTION_DEADLINE,
    )
    return SuccessResponse()
