import pytest
from unittest.mock import AsyncMock

from docklite_agent.core.errors import EngineConflict, EngineError
from docklite_agent.services.network_service import NetworkService


@pytest.mark.asyncio
async def test_creates_missing_network():
    docker_runtime = AsyncMock()
    docker_runtime.list_networks = AsyncMock(return_value=["bridge", "host"])

    await NetworkService(docker_runtime).ensure_network("docklite_network")

    docker_runtime.create_network.assert_awaited_once_with(
        "docklite_network", labels={"docklite.managed": "true"}
    )


@pytest.mark.asyncio
async def test_name_match_is_exact():
    docker_runtime = AsyncMock()
    docker_runtime.list_networks = AsyncMock(return_value=["docklite_network_old"])

    await NetworkService(docker_runtime).ensure_network("docklite_network")

    docker_runtime.create_network.assert_awaited_once()


@pytest.mark.asyncio
async def test_ensure_twice_is_idempotent():
    created = []
    docker_runtime = AsyncMock()
    docker_runtime.list_networks = AsyncMock(side_effect=lambda: list(created))
    docker_runtime.create_network = AsyncMock(side_effect=lambda name, labels: created.append(name))
    service = NetworkService(docker_runtime)

    await service.ensure_network("docklite_network")
    await service.ensure_network("docklite_network")

    assert created == ["docklite_network"]


@pytest.mark.asyncio
async def test_concurrent_create_conflict_is_success():
    docker_runtime = AsyncMock()
    docker_runtime.list_networks = AsyncMock(return_value=[])
    docker_runtime.create_network = AsyncMock(
        side_effect=EngineConflict("network with name docklite_network already exists")
    )

    await NetworkService(docker_runtime).ensure_network("docklite_network")


@pytest.mark.asyncio
async def test_other_create_errors_propagate():
    docker_runtime = AsyncMock()
    docker_runtime.list_networks = AsyncMock(return_value=[])
    docker_runtime.create_network = AsyncMock(side_effect=EngineError("daemon unavailable"))

    with pytest.raises(EngineError):
        await NetworkService(docker_runtime).ensure_network("docklite_network")
