import logging
from typing import Any, Dict

from docklite_agent.domain.metrics import UtilizationReport
from docklite_agent.domain.ports import ContainerEngine
from docklite_agent.services.metrics import decode_utilization, snapshots_from_stats

logger = logging.getLogger(__name__)


class ContainerService:
    def __init__(self, docker_runtime: ContainerEngine):
        self.docker_runtime = docker_runtime

    # -------------------------------
    # Docker lifecycle
    # -------------------------------
    async def start_container(self, container_id: str) -> None:
        await self.docker_runtime.start(container_id)
        logger.info(f"[Engine] Started: {container_id[:12]}")

    async def stop_container(self, container_id: str) -> None:
        await self.docker_runtime.stop(container_id)
        logger.info(f"[Engine] Stopped: {container_id[:12]}")

    async def restart_container(self, container_id: str) -> None:
        await self.docker_runtime.restart(container_id)
        logger.info(f"[Engine] Restarted: {container_id[:12]}")

    async def remove_container(self, container_id: str) -> None:
        await self.docker_runtime.remove(container_id)
        logger.info(f"[Engine] Removed: {container_id[:12]}")

    # -------------------------------
    # State
    # -------------------------------
    async def inspect_container(self, container_id: str) -> Dict[str, Any]:
        return await self.docker_runtime.inspect(container_id)

    async def get_logs(self, container_id: str, tail: int = 200) -> str:
        return await self.docker_runtime.logs(container_id, tail=tail)

    async def get_utilization(self, container_id: str) -> UtilizationReport:
        """One stats call, one (previous, current) pair, one report."""
        stats = await self.docker_runtime.stats(container_id)
        prev, curr = snapshots_from_stats(stats)
        return decode_utilization(prev, curr)
