"""HTTP route definitions for the service."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from app.schemas import ErrorResponse, SyncResponse
from services.sync import SyncService, build_default_sync_service

router = APIRouter()


def get_sync_service() -> SyncService:
    return build_default_sync_service()


@router.api_route(
    "/api/sync",
    methods=["GET", "POST"],
    response_model=SyncResponse,
    responses={status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse}},
    summary="Run one synchronization of the monitoring page.",
)
def trigger_sync(
    service: SyncService = Depends(get_sync_service),
) -> SyncResponse:
    report = service.run()
    return SyncResponse(message=report.message)


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}
