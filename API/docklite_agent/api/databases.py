from fastapi import APIRouter, Depends, status

from docklite_agent.api.dependencies import Services, get_services
from docklite_agent.core.deadline import with_deadline
from docklite_agent.schemas.database import (
    DatabaseCreateRequest,
    DatabaseCreateResponse,
    DatabaseListResponse,
    DatabaseResponse,
)

router = APIRouter(prefix="/api/databases", tags=["databases"])


@router.get("", response_model=DatabaseListResponse)
async def list_databases(services: Services = Depends(get_services)):
    records = await with_deadline(
        services.inventory.list_databases(),
        services.settings.LIST_DEADLINE,
    )
    return DatabaseListResponse(databases=[DatabaseResponse.from_record(r) for r in records])


@router.post("", response_model=DatabaseCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_database(
    payload: DatabaseCreateRequest,
    services: Services = Depends(get_services),
):
    creds = await with_deadline(
        services.databases.create_database(
            payload.name,
            username=payload.username,
            password=payload.password,
            port=payload.port,
        ),
        services.settings.CREATE_DEADLINE,
    )
    return DatabaseCreateResponse.from_credentials(creds)
