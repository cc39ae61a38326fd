import logging
from dataclasses import replace
from typing import Callable

from docklite_agent.core.errors import EngineConflict, EngineError
from docklite_agent.domain.container import ContainerCreateSpec
from docklite_agent.domain.ports import ContainerEngine

logger = logging.getLogger(__name__)


async def create_with_conflict_retry(
    docker_runtime: ContainerEngine,
    spec: ContainerCreateSpec,
    alternate_name: Callable[[str], str],
) -> str:
    """
    Create a container, retrying once under another name on a name clash.

    One retry covers the usual case of a leftover container with the same
    name. Two concurrent requests for the same name can still collide twice;
    that second clash is a plain failure, there is no loop and no lock.
    """
    try:
        return await docker_runtime.create_container(spec)
    except EngineConflict:
        retry = replace(spec, name=alternate_name(spec.name))
        logger.warning(f"[Engine] Name {spec.name} is taken, retrying as {retry.name}")

    try:
        return await docker_runtime.create_container(retry)
    except EngineConflict as e:
        raise EngineError(f"Container name {retry.name} is also taken: {e}") from e
