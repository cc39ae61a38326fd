from unittest.mock import AsyncMock

import pytest

from docklite_agent.core.config import Settings


@pytest.fixture
def settings(tmp_path):
    return Settings(SITES_BASE_DIR=tmp_path / "sites")


@pytest.fixture
def docker_runtime():
    """ContainerEngine double: network exists, creates succeed."""
    runtime = AsyncMock()
    runtime.list_networks = AsyncMock(return_value=["docklite_network"])
    runtime.create_container = AsyncMock(return_value="c0ffee1234567890")
    runtime.inspect = AsyncMock(return_value={})
    return runtime
