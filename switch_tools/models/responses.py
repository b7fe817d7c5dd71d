"""Common API response models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from switch_tools.models.commands import CommandResult, PortAction


class HealthResponse(BaseModel):
    status: str
    version: str


class SwitchHealthResponse(BaseModel):
    reachable: bool
    port_count: int = 0
    ports_by_status: dict[str, int] = {}
    error: Optional[str] = None


class ShowCommandRequest(BaseModel):
    command: str


class ShowCommandResponse(BaseModel):
    command: str
    output: str
    success: bool
    error: Optional[str] = None


class PortActionRequest(BaseModel):
    action: PortAction
    ports: list[str] = Field(min_length=1)
    description: Optional[str] = None


class PortActionResponse(BaseModel):
    action: PortAction
    ports: list[str]
    results: list[CommandResult]
    errors: list[str] = []


class ExportResponse(BaseModel):
    path: str
    rows: int
