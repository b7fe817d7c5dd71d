"""Interface configuration endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from switch_tools.auth import require_api_key
from switch_tools.models.commands import CommandResult
from switch_tools.models.responses import PortActionRequest, PortActionResponse
from switch_tools.services.session_manager import session_manager

router = APIRouter(tags=["config"], dependencies=[Depends(require_api_key)])


@router.post("/interfaces/actions", response_model=PortActionResponse)
async def apply_port_action(req: PortActionRequest) -> PortActionResponse:
    """Apply one bulk action (enable, disable, describe, PoE) to a set of ports.

    IOS errors in the output are reported per command; the remaining
    commands are still sent.
    """
    try:
        results = await session_manager.apply_port_action(
            req.action, req.ports, req.description,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return PortActionResponse(
        action=req.action,
        ports=req.ports,
        results=results,
        errors=[f"{r.command}: {r.error}" for r in results if r.error],
    )


@router.post("/write-memory", response_model=CommandResult)
async def write_memory() -> CommandResult:
    """Save the running configuration to startup-config."""
    return await session_manager.save_config()
