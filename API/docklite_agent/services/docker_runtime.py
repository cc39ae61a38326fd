import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional, TypeVar

import docker
import requests
from docker.errors import APIError, DockerException, NotFound
from docker.utils import parse_repository_tag

from docklite_agent.core.config import Settings
from docklite_agent.core.errors import (
    EngineConflict,
    EngineError,
    EngineTimeout,
    ResourceNotFound,
)
from docklite_agent.domain.container import ContainerCreateSpec
from docklite_agent.domain.ports import ContainerEngine

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _explain(exc: Exception) -> str:
    if isinstance(exc, APIError) and exc.explanation:
        return str(exc.explanation)
    return str(exc)


class DockerSDKRuntime(ContainerEngine):
    """
    Session over one Docker Engine endpoint.

    Every SDK call is blocking, so each one runs in a worker thread. The SDK
    client carries an HTTP timeout, which keeps those threads from hanging on
    an unresponsive engine even when the awaiting task has given up.
    """

    def __init__(self, settings: Settings, client: Optional[docker.DockerClient] = None):
        self.settings = settings
        if client is None:
            try:
                client = docker.DockerClient(
                    base_url=settings.DOCKER_HOST,
                    timeout=settings.DOCKER_TIMEOUT,
                )
            except DockerException as e:
                raise EngineError(f"Cannot connect to Docker at {settings.DOCKER_HOST}: {e}") from e
        self.docker_client = client

    async def _call(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        try:
            return await asyncio.to_thread(fn, *args, **kwargs)
        except NotFound as e:
            raise ResourceNotFound(_explain(e)) from e
        except APIError as e:
            if e.status_code == 409:
                raise EngineConflict(_explain(e)) from e
            raise EngineError(_explain(e)) from e
        except requests.exceptions.Timeout as e:
            raise EngineTimeout(f"Docker request timed out: {e}") from e
        except (DockerException, requests.exceptions.RequestException) as e:
            raise EngineError(str(e)) from e

    # -------------------------------
    # Session
    # -------------------------------
    async def ping(self) -> bool:
        return bool(await self._call(self.docker_client.ping))

    async def close(self) -> None:
        await asyncio.to_thread(self.docker_client.close)

    # -------------------------------
    # Networks
    # -------------------------------
    async def list_networks(self) -> List[str]:
        networks = await self._call(self.docker_client.networks.list)
        return [n.name for n in networks]

    async def create_network(self, name: str, labels: Dict[str, str]) -> None:
        await self._call(
            self.docker_client.networks.create,
            name,
            driver="bridge",
            labels=labels,
        )

    # -------------------------------
    # Images
    # -------------------------------
    async def pull_image(self, image: str) -> None:
        repository, tag = parse_repository_tag(image)
        await self._call(self._drain_pull, repository, tag or "latest")

    def _drain_pull(self, repository: str, tag: str) -> None:
        # Reading the stream to the end is what completes the pull; a
        # half-read response would also leave the connection unusable.
        stream = self.docker_client.api.pull(repository, tag=tag, stream=True, decode=True)
        for event in stream:
            if isinstance(event, dict) and event.get("error"):
                raise EngineError(f"Pull of {repository}:{tag} failed: {event['error']}")

    # -------------------------------
    # Containers
    # -------------------------------
    async def create_container(self, spec: ContainerCreateSpec) -> str:
        container = await self._call(
            self.docker_client.containers.create,
            spec.image,
            name=spec.name,
            command=spec.command,
            working_dir=spec.working_dir,
            environment=spec.environment or None,
            labels=spec.labels,
            ports={spec.port_key: spec.host_port},
            volumes=spec.binds or None,
            restart_policy={"Name": spec.restart_policy},
            network=spec.network,
        )
        return container.id

    async def _get(self, container_id: str):
        return await self._call(self.docker_client.containers.get, container_id)

    async def start(self, container_id: str) -> None:
        container = await self._get(container_id)
        await self._call(container.start)

    async def stop(self, container_id: str) -> None:
        container = await self._get(container_id)
        await self._call(container.stop)

    async def restart(self, container_id: str) -> None:
        container = await self._get(container_id)
        await self._call(container.restart)

    async def remove(self, container_id: str) -> None:
        container = await self._get(container_id)
        await self._call(container.remove, force=True)

    async def inspect(self, container_id: str) -> Dict[str, Any]:
        return await self._call(self.docker_client.api.inspect_container, container_id)

    async def list_containers(
        self, *, all: bool = True, labels: List[str] | None = None
    ) -> List[Dict[str, Any]]:
        filters = {"label": labels} if labels else None
        return await self._call(self.docker_client.api.containers, all=all, filters=filters)

    async def stats(self, container_id: str) -> Dict[str, Any]:
        # stream=False without one_shot: the engine waits for a second sample
        # so precpu_stats is populated and a CPU delta exists.
        return await self._call(self.docker_client.api.stats, container_id, stream=False)

    async def logs(self, container_id: str, tail: int = 200) -> str:
        container = await self._get(container_id)
        raw = await self._call(container.logs, stdout=True, stderr=True, tail=tail)
        return raw.decode("utf-8", errors="replace")
