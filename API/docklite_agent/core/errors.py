class DockliteError(Exception):
    """Base class for every error raised by the agent core."""


class ValidationError(DockliteError):
    """The request has the wrong shape. Never retried."""


class EngineError(DockliteError):
    """The Docker engine rejected or failed a call. Carries the engine message."""


class EngineConflict(EngineError):
    """A resource with the requested name already exists."""


class ResourceNotFound(EngineError):
    """The engine does not know the requested container."""


class EngineTimeout(EngineError):
    """The engine did not answer before the deadline elapsed."""
