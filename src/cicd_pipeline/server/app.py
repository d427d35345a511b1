"""FastAPI app factory for the demo API.

Response bodies are part of the pipeline's smoke tests; keep them stable.
"""

from __future__ import annotations

import logging
import time
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cicd_pipeline.server.config import ServerSettings
from cicd_pipeline.server.models import Health, RouteNotFound, User, UserList, Welcome

logger = logging.getLogger(__name__)

USERS: tuple[User, ...] = (
    User(id=1, name="John Doe", email="john@example.com"),
    User(id=2, name="Jane Smith", email="jane@example.com"),
)


def _now_iso() -> str:
    # Millisecond precision with a Z suffix, e.g. 2025-01-01T00:00:00.000Z
    return datetime.now(tz=UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def create_app(settings: ServerSettings | None = None) -> FastAPI:
    settings = settings or ServerSettings()

    app = FastAPI(
        title="CI/CD Pipeline Example",
        version=settings.app_version,
        description="Demo service built, scanned and deployed by the CI/CD pipeline.",
    )
    app.state.settings = settings
    app.state.started_at = time.monotonic()

    @app.get("/", response_model=Welcome)
    def welcome() -> Welcome:
        return Welcome(
            message="Welcome to CI/CD Pipeline Example!",
            version=settings.app_version,
            timestamp=_now_iso(),
        )

    @app.get("/health", response_model=Health)
    def health() -> Health:
        return Health(
            status="healthy",
            uptime=round(time.monotonic() - app.state.started_at, 3),
            timestamp=_now_iso(),
        )

    @app.get("/api/users", response_model=UserList)
    def list_users() -> UserList:
        return UserList(users=list(USERS))

    _setup_exception_handlers(app)
    return app


def _setup_exception_handlers(app: FastAPI) -> None:
    """Unknown routes answer with a JSON 404, whatever the method."""

    async def route_not_found(request: Request, _exc: Exception) -> JSONResponse:
        logger.info(
            "Route not found", extra={"path": request.url.path, "method": request.method}
        )
        body = RouteNotFound(path=request.url.path)
        return JSONResponse(status_code=404, content=body.model_dump())

    app.add_exception_handler(404, route_not_found)
    app.add_exception_handler(405, route_not_found)


def serve() -> None:
    """Console entrypoint: run the demo API under uvicorn."""

    import uvicorn

    from cicd_pipeline.orchestrator.logging import configure_logging

    settings = ServerSettings()
    configure_logging(settings.log_level)
    logger.info("Starting demo API", extra={"host": settings.host, "port": settings.port})

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    serve()
