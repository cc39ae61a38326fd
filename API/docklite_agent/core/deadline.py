import asyncio
from typing import Awaitable, Optional, TypeVar

from docklite_agent.core.errors import EngineTimeout

T = TypeVar("T")


async def with_deadline(awaitable: Awaitable[T], seconds: Optional[float]) -> T:
    """
    Await `awaitable` for at most `seconds`.

    On expiry the awaiting task is cancelled and EngineTimeout is raised. A
    Docker call already running in a worker thread cannot be interrupted; it is
    still bounded by the SDK client's own HTTP timeout. Whatever the engine
    created before the deadline is left in place.
    """
    if seconds is None:
        return await awaitable
    try:
        return await asyncio.wait_for(awaitable, timeout=seconds)
    except asyncio.TimeoutError:
        raise EngineTimeout(f"Docker engine did not answer within {seconds:g}s")
