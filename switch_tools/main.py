"""FastAPI application entry-point."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from switch_tools import __version__
from switch_tools.routers import config, health, show
from switch_tools.services.session_manager import session_manager
from switch_tools.services.shell_driver import TransportError
from switch_tools.utils.logging import get_logger, setup_logging

log = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown hooks."""
    setup_logging()
    yield
    # Shutdown: close the shell session
    await session_manager.close()


app = FastAPI(
    title="Switch Tools API",
    description="Scripted CLI inspection and configuration of an access switch",
    version=__version__,
    lifespan=lifespan,
)


@app.exception_handler(TransportError)
async def transport_error_handler(request: Request, exc: TransportError) -> JSONResponse:
    """The switch session broke mid-operation; nothing was retried."""
    log.error("api.transport_error", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=502, content={"detail": str(exc)})


app.include_router(health.router)
app.include_router(show.router)
app.include_router(config.router)
