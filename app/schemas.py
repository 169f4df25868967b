"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class SyncState(str, Enum):
    """Lifecycle states of a single sync run."""

    start = "start"
    fetching = "fetching"
    parsing = "parsing"
    no_data = "no_data"
    writing = "writing"
    success = "success"
    failed = "failed"


class SyncReport(BaseModel):
    """Outcome of a completed sync run."""

    status: SyncState
    record_count: int = Field(..., ge=0)
    collection_path: str
    message: str


class SyncResponse(BaseModel):
    """Body returned to the trigger when a run completes."""

    message: str


class ErrorResponse(BaseModel):
    """Body returned to the trigger when a run fails."""

    error: str
