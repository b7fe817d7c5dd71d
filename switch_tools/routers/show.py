"""Read-only endpoints: raw show commands and parsed status tables."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from switch_tools.auth import require_api_key
from switch_tools.config import settings
from switch_tools.models.commands import CommandResult
from switch_tools.models.interfaces import InterfaceStatus, IpInterface, VlanEntry
from switch_tools.models.responses import (
    ExportResponse,
    ShowCommandRequest,
    ShowCommandResponse,
)
from switch_tools.services.command_filter import check_exec_command
from switch_tools.services.export import export_interface_csv, interfaces_to_csv
from switch_tools.services.session_manager import session_manager

router = APIRouter(tags=["show"], dependencies=[Depends(require_api_key)])


@router.post("/show", response_model=ShowCommandResponse)
async def run_show_command(req: ShowCommandRequest) -> ShowCommandResponse:
    """Run an allowlisted exec-mode command."""
    filt = check_exec_command(req.command)
    if not filt.allowed:
        raise HTTPException(status_code=403, detail=filt.reason)

    result = await session_manager.send_show(req.command)
    return ShowCommandResponse(
        command=req.command,
        output=result.output,
        success=result.error is None,
        error=result.error,
    )


@router.get("/interfaces/status", response_model=list[InterfaceStatus])
async def interface_status() -> list[InterfaceStatus]:
    return await session_manager.interface_status()


@router.get("/interfaces/status.csv", response_class=PlainTextResponse)
async def interface_status_csv() -> PlainTextResponse:
    records = await session_manager.interface_status()
    return PlainTextResponse(
        interfaces_to_csv(records),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="interfaces.csv"'},
    )


@router.post("/interfaces/status/export", response_model=ExportResponse)
async def export_interface_status() -> ExportResponse:
    """Write the current status table to a CSV file in the export directory."""
    records = await session_manager.interface_status()
    path = await asyncio.to_thread(export_interface_csv, records, settings.export_dir)
    return ExportResponse(path=str(path), rows=len(records))


@router.get("/interfaces/ip-brief", response_model=list[IpInterface])
async def ip_interface_brief() -> list[IpInterface]:
    return await session_manager.ip_interface_brief()


@router.get("/vlans", response_model=list[VlanEntry])
async def vlan_brief() -> list[VlanEntry]:
    return await session_manager.vlan_brief()


@router.get("/power/inline", response_model=CommandResult)
async def power_inline() -> CommandResult:
    return await session_manager.power_inline()
