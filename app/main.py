from __future__ import annotations
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.api import router
from app.schemas import ErrorResponse
from exceptions import SyncError
from logging_config import configure_logging
from services.sync import build_default_sync_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    try:
        yield
    finally:
        if build_default_sync_service.cache_info().currsize:
            build_default_sync_service().close()
        build_default_sync_service.cache_clear()


async def handle_sync_error(_request: Request, exc: SyncError) -> JSONResponse:
    logger.error("Error during sync: %s", exc)
    body = ErrorResponse(error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(),
    )


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title="Beehive Sync",
        description="Copies scale readings from the KaptarGSM monitoring page into Firestore.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.add_exception_handler(SyncError, handle_sync_error)
    app.include_router(router)
    return app

app = create_app()
