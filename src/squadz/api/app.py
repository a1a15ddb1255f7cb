"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from squadz.api.dashboard import router as dashboard_router
from squadz.api.squads import router as squads_router
from squadz.app_logging import configure_logging
from squadz.containers import AppContainer
from squadz.domain.errors import (
    InvalidJoinCodeError,
    JoinCodeMismatchError,
    MemberNotFoundError,
    NameTakenError,
    NotLeaderError,
    NotMemberError,
    SquadError,
    SquadFullError,
    SquadNotFoundError,
)

_ERROR_STATUS: dict[type[SquadError], int] = {
    SquadNotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidJoinCodeError: status.HTTP_404_NOT_FOUND,
    MemberNotFoundError: status.HTTP_404_NOT_FOUND,
    NameTakenError: status.HTTP_409_CONFLICT,
    SquadFullError: status.HTTP_409_CONFLICT,
    NotLeaderError: status.HTTP_403_FORBIDDEN,
    NotMemberError: status.HTTP_403_FORBIDDEN,
    JoinCodeMismatchError: status.HTTP_400_BAD_REQUEST,
}


def error_status(exc: SquadError) -> int:
    """Map a squad error to its HTTP status code."""
    for error_type in type(exc).__mro__:
        code = _ERROR_STATUS.get(error_type)
        if code is not None:
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        if state_container.dashboard_password_generated:
            logger.info(
                "Generated dashboard password: %s",
                state_container.dashboard_password,
            )
        state_container.cleanup_scheduler.start()
        logger.info(
            "Squadz ready (location TTL %ss, cleanup every %ss)",
            state_container.settings.location_ttl_secs,
            state_container.settings.cleanup_interval_secs,
        )
        yield
        await state_container.close_resources()

    app = FastAPI(title="Squadz", lifespan=lifespan)
    app.state.container = container
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(SquadError)
    async def squad_error_handler(request: Request, exc: SquadError) -> JSONResponse:
        code = error_status(exc)
        logger.info("%s %s -> %s: %s", request.method, request.url.path, code, exc)
        return JSONResponse(status_code=code, content={"detail": str(exc)})

    @app.get("/api/v1/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    app.include_router(squads_router)
    app.include_router(dashboard_router)
    return app
