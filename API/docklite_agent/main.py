import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from docklite_agent.api import containers, databases
from docklite_agent.api.dependencies import Services, build_services, get_services
from docklite_agent.core.config import Settings, get_settings
from docklite_agent.core.deadline import with_deadline
from docklite_agent.core.errors import (
    DockliteError,
    EngineConflict,
    EngineError,
    EngineTimeout,
    ResourceNotFound,
    ValidationError,
)
from docklite_agent.core.logging import configure_logging
from docklite_agent.domain.ports import ContainerEngine
from docklite_agent.services.docker_runtime import DockerSDKRuntime

logger = logging.getLogger(__name__)

# Most specific first: the first matching class wins.
ERROR_STATUS = (
    (ValidationError, 400),
    (ResourceNotFound, 404),
    (EngineConflict, 409),
    (EngineTimeout, 504),
    (EngineError, 502),
    (DockliteError, 500),
)


async def handle_docklite_error(request: Request, exc: DockliteError) -> JSONResponse:
    status_code = next(code for cls, code in ERROR_STATUS if isinstance(exc, cls))
    if status_code >= 500:
        logger.error(f"[API] {request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def create_app(
    settings: Optional[Settings] = None,
    docker_runtime: Optional[ContainerEngine] = None,
) -> FastAPI:
    settings = settings or get_settings()

    # ---------- Startup / Shutdown ----------

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        runtime = docker_runtime or DockerSDKRuntime(settings)
        app.state.services = build_services(runtime, settings)
        logger.info(f"[STARTUP] Docker engine at {settings.DOCKER_HOST}")
        try:
            yield
        finally:
            await runtime.close()
            logger.info("[SHUTDOWN] Docker session closed")

    app = FastAPI(title="Docklite Agent", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(DockliteError, handle_docklite_error)

    app.include_router(containers.router)
    app.include_router(databases.router)

    @app.get("/api/health", tags=["system"])
    async def health(services: Services = Depends(get_services)):
        await with_deadline(services.docker_runtime.ping(), services.settings.LIST_DEADLINE)
        return {"status": "ok"}

    return app


def run() -> None:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT)
