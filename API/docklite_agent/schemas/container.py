from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional

from docklite_agent.domain.container import ManagedResource
from docklite_agent.domain.metrics import UtilizationReport


class SiteCreateRequest(BaseModel):
    domain: str = Field(..., description="Domain served by the site, e.g. example.com")
    template_type: Optional[str] = Field("static", description="static, php or node")
    include_www: bool = Field(True, description="Also route www.<domain>")
    port: Optional[int] = Field(None, description="Internal port of a node site (default 3000)")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "domain": "example.com",
                "template_type": "node",
                "include_www": True,
                "port": 3000,
            }
        }
    )


class SiteCreateResponse(BaseModel):
    id: str


class ContainerResponse(BaseModel):
    id: str
    name: str
    image: str
    created: str
    state: str
    status: str
    kind: Optional[str] = None
    labels: Dict[str, str]

    @classmethod
    def from_resource(cls, resource: ManagedResource) -> "ContainerResponse":
        return cls(
            id=resource.id,
            name=resource.name,
            image=resource.image,
            created=str(resource.created),
            state=resource.state.value,
            status=resource.status,
            kind=resource.kind.value if resource.kind else None,
            labels=resource.labels,
        )


class ContainerListResponse(BaseModel):
    containers: List[ContainerResponse]


class UtilizationResponse(BaseModel):
    # Field names the panel frontend reads
    cpu_percent: float = Field(alias="cpuUsage")
    memory_usage: int = Field(alias="memoryUsage")
    memory_limit: int = Field(alias="memoryLimit")
    memory_percent: float = Field(alias="memoryPct")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_report(cls, report: UtilizationReport) -> "UtilizationResponse":
        return cls(
            cpu_percent=report.cpu_percent,
            memory_usage=report.memory_usage,
            memory_limit=report.memory_limit,
            memory_percent=report.memory_percent,
        )


class StatsResponse(BaseModel):
    stats: UtilizationResponse


class InspectResponse(BaseModel):
    container: Dict[str, Any]


class LogsResponse(BaseModel):
    logs: str


class SuccessResponse(BaseModel):
    success: bool = True
