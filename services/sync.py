"""Orchestration of one fetch, parse and persist pass."""

from __future__ import annotations

import logging
from datetime import tzinfo
from functools import lru_cache
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.schemas import SyncReport, SyncState
from datastore.base import DocumentStore
from datastore.factory import build_default_store
from exceptions import ConfigurationError, StoreWriteError, SyncError
from services.fetcher import PageFetcher
from services.parser import parse_page
from settings import get_settings

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "Sync check complete: No data found in source HTML."


def collection_path(app_id: str) -> str:
    return f"artifacts/{app_id}/public_data/beehive_data"


class SyncService:
    """Runs a single end-to-end synchronization of the monitoring page."""

    def __init__(
        self,
        fetcher: PageFetcher,
        store: DocumentStore,
        app_id: str,
        tz: Optional[tzinfo] = None,
    ) -> None:
        self.fetcher = fetcher
        self.store = store
        self.app_id = app_id
        self.tz = tz

    @property
    def collection_path(self) -> str:
        return collection_path(self.app_id)

    def run(self) -> SyncReport:
        """Fetch, parse and persist; raises ``SyncError`` on run-level failure."""
        self._enter(SyncState.start)
        try:
            return self._run()
        except SyncError:
            self._enter(SyncState.failed)
            raise
        except Exception as exc:
            self._enter(SyncState.failed)
            raise SyncError(f"Unexpected error during sync: {exc}") from exc

    def close(self) -> None:
        self.fetcher.close()

    def _run(self) -> SyncReport:
        self._enter(SyncState.fetching)
        html = self.fetcher.fetch()

        self._enter(SyncState.parsing)
        records = parse_page(html, self.tz)
        if not records:
            self._enter(SyncState.no_data)
            self._enter(SyncState.success)
            return SyncReport(
                status=SyncState.no_data,
                record_count=0,
                collection_path=self.collection_path,
                message=NO_DATA_MESSAGE,
            )
        logger.info("Parsed %d data points from HTML", len(records), extra={"record_count": len(records)})

        self._enter(SyncState.writing)
        documents = {record.id: record.to_document() for record in records}
        try:
            self.store.commit_batch(self.collection_path, documents)
        except Exception as exc:
            raise StoreWriteError(f"Batch commit failed: {exc}") from exc

        self._enter(SyncState.success)
        return SyncReport(
            status=SyncState.success,
            record_count=len(records),
            collection_path=self.collection_path,
            message=f"Sync successful, committed {len(records)} items.",
        )

    def _enter(self, state: SyncState) -> None:
        logger.info(
            "Sync state changed",
            extra={"state": state.value, "app_id": self.app_id, "collection_path": self.collection_path},
        )


def _resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    if name is None:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigurationError(f"Unknown source time zone {name!r}.") from exc


@lru_cache
def build_default_sync_service() -> SyncService:
    """Factory that wires the sync service from process configuration."""
    settings = get_settings()
    try:
        store = build_default_store()
    except SyncError:
        raise
    except Exception as exc:
        raise ConfigurationError(f"Document store initialization failed: {exc}") from exc
    tz = _resolve_timezone(settings.source_timezone)
    fetcher = PageFetcher(settings.source_url, timeout=settings.fetch_timeout)
    return SyncService(fetcher=fetcher, store=store, app_id=settings.app_id, tz=tz)
