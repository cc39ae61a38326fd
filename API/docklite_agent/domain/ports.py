from typing import Any, Dict, List, Protocol

from docklite_agent.domain.container import ContainerCreateSpec


class ContainerEngine(Protocol):
    # -------------------------------
    # Session
    # -------------------------------
    async def ping(self) -> bool:
        """Check the engine answers."""
        ...

    async def close(self) -> None:
        """Release the underlying connection."""
        ...

    # -------------------------------
    # Networks
    # -------------------------------
    async def list_networks(self) -> List[str]:
        """Names of every network the engine knows."""
        ...

    async def create_network(self, name: str, labels: Dict[str, str]) -> None:
        """Create a bridge network. Raises EngineConflict if it exists."""
        ...

    # -------------------------------
    # Images
    # -------------------------------
    async def pull_image(self, image: str) -> None:
        """Pull an image, consuming the whole progress stream."""
        ...

    # -------------------------------
    # Containers
    # -------------------------------
    async def create_container(self, spec: ContainerCreateSpec) -> str:
        """Create a container and return its id. Raises EngineConflict on a name clash."""
        ...

    async def start(self, container_id: str) -> None:
        ...

    async def stop(self, container_id: str) -> None:
        ...

    async def restart(self, container_id: str) -> None:
        ...

    async def remove(self, container_id: str) -> None:
        """Force-remove a container, running or not."""
        ...

    async def inspect(self, container_id: str) -> Dict[str, Any]:
        """Raw engine state of one container."""
        ...

    async def list_containers(
        self, *, all: bool = True, labels: List[str] | None = None
    ) -> List[Dict[str, Any]]:
        """Raw container list entries, optionally filtered by label."""
        ...

    async def stats(self, container_id: str) -> Dict[str, Any]:
        """One-shot resource-accounting document."""
        ...

    async def logs(self, container_id: str, tail: int = 200) -> str:
        """Recent stdout and stderr of a container."""
        ...
