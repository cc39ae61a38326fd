import logging

from docklite_agent.core.errors import EngineConflict
from docklite_agent.domain.metadata import MANAGED_LABEL
from docklite_agent.domain.ports import ContainerEngine

logger = logging.getLogger(__name__)


class NetworkService:
    def __init__(self, docker_runtime: ContainerEngine):
        self.docker_runtime = docker_runtime

    async def ensure_network(self, name: str) -> None:
        """
        Make sure the bridge network `name` exists.

        Safe to call from concurrent provisioning requests: when another
        request creates the network between our list and our create, the
        engine answers with a conflict and that counts as success.
        """
        existing = await self.docker_runtime.list_networks()
        if name in existing:
            return
        try:
            await self.docker_runtime.create_network(name, labels={MANAGED_LABEL: "true"})
            logger.info(f"[Network] Created network: {name}")
        except EngineConflict:
            logger.debug(f"[Network] {name} created concurrently, reusing it")
