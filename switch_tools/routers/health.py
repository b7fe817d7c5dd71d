"""Health-check endpoints."""

from __future__ import annotations

from collections import Counter

from fastapi import APIRouter, Depends

from switch_tools import __version__
from switch_tools.auth import require_api_key
from switch_tools.models.responses import HealthResponse, SwitchHealthResponse
from switch_tools.services.session_manager import session_manager
from switch_tools.services.shell_driver import TransportError

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def service_health() -> HealthResponse:
    """Basic liveness probe (no auth required)."""
    return HealthResponse(status="ok", version=__version__)


@router.get(
    "/switch/health",
    response_model=SwitchHealthResponse,
    dependencies=[Depends(require_api_key)],
)
async def switch_health() -> SwitchHealthResponse:
    """Check switch reachability and summarise port states."""
    try:
        records = await session_manager.interface_status()
    except TransportError as exc:
        return SwitchHealthResponse(reachable=False, error=str(exc))
    return SwitchHealthResponse(
        reachable=True,
        port_count=len(records),
        ports_by_status=dict(Counter(r.status for r in records)),
    )
