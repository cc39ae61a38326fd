from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping

from docklite_agent.domain.metadata import ResourceMetadata
from docklite_agent.domain.templates import TemplateKind


class LifecycleState(str, Enum):
    CREATED = "created"
    RUNNING = "running"
    STOPPED = "stopped"
    REMOVED = "removed"

    @classmethod
    def from_engine(cls, state: str | None) -> "LifecycleState":
        """Fold Docker's container states into the four this agent reports."""
        state = (state or "").lower()
        if state == "created":
            return cls.CREATED
        if state in ("running", "restarting", "paused"):
            return cls.RUNNING
        if state in ("removing", "removed"):
            return cls.REMOVED
        return cls.STOPPED


@dataclass(frozen=True)
class PortMapping:
    private_port: int
    public_port: int = 0
    protocol: str = "tcp"


@dataclass
class ManagedResource:
    id: str
    name: str
    image: str
    state: LifecycleState
    status: str
    created: int
    labels: Dict[str, str] = field(default_factory=dict)
    metadata: ResourceMetadata = field(default_factory=ResourceMetadata)
    ports: List[PortMapping] = field(default_factory=list)

    @property
    def kind(self) -> TemplateKind | None:
        return self.metadata.kind

    @property
    def managed(self) -> bool:
        return self.metadata.managed

    @classmethod
    def from_engine(cls, entry: Mapping[str, Any]) -> "ManagedResource":
        """Build a resource from one entry of the engine's container list."""
        names = entry.get("Names") or []
        labels = dict(entry.get("Labels") or {})
        return cls(
            id=entry.get("Id", ""),
            name=names[0].lstrip("/") if names else "",
            image=entry.get("Image", ""),
            state=LifecycleState.from_engine(entry.get("State")),
            status=entry.get("Status", ""),
            created=int(entry.get("Created") or 0),
            labels=labels,
            metadata=ResourceMetadata.from_labels(labels),
            ports=[
                PortMapping(
                    private_port=int(p.get("PrivatePort") or 0),
                    public_port=int(p.get("PublicPort") or 0),
                    protocol=p.get("Type", "tcp"),
                )
                for p in entry.get("Ports") or []
            ],
        )

    def public_port(self, private_port: int) -> int:
        """First host port published for `private_port`, 0 if none."""
        for mapping in self.ports:
            if mapping.private_port == private_port and mapping.public_port:
                return mapping.public_port
        return 0


@dataclass
class SiteSpec:
    domain: str
    kind: TemplateKind
    include_www: bool
    internal_port: int
    source_path: str
    read_only: bool


@dataclass
class ContainerCreateSpec:
    """Everything the engine needs to create one container."""
    name: str
    image: str
    container_port: int
    labels: Dict[str, str] = field(default_factory=dict)
    environment: Dict[str, str] = field(default_factory=dict)
    command: List[str] | None = None
    working_dir: str | None = None
    host_port: int | None = None  # None lets the engine pick an ephemeral port
    binds: List[str] = field(default_factory=list)
    restart_policy: str = "unless-stopped"
    network: str | None = None

    @property
    def port_key(self) -> str:
        return f"{self.container_port}/tcp"
