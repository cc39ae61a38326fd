import asyncio

import pytest

from docklite_agent.core.deadline import with_deadline
from docklite_agent.core.errors import EngineError, EngineTimeout


async def slow(seconds, value="done"):
    await asyncio.sleep(seconds)
    return value


@pytest.mark.asyncio
async def test_returns_result_within_deadline():
    assert await with_deadline(slow(0), 1.0) == "done"


@pytest.mark.asyncio
async def test_elapsed_deadline_raises_engine_timeout():
    with pytest.raises(EngineTimeout) as exc_info:
        await with_deadline(slow(5), 0.01)

    assert isinstance(exc_info.value, EngineError)


@pytest.mark.asyncio
async def test_no_deadline_waits():
    assert await with_deadline(slow(0, "ok"), None) == "ok"
