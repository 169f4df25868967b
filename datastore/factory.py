from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from datastore.base import DocumentStore
from datastore.firestore_store import FirestoreDocumentStore, load_service_account
from datastore.memory_store import InMemoryDocumentStore
from exceptions import ConfigurationError
from settings import get_settings

FIRESTORE_BACKEND = "firestore"
MEMORY_BACKEND = "memory"


@lru_cache
def build_default_store(backend: Optional[str] = None) -> DocumentStore:
    """Process-wide document store handle, constructed once and reused."""
    settings = get_settings()
    selected = settings.store_backend if backend is None else backend
    if selected == MEMORY_BACKEND:
        path = settings.memory_store_path
        return InMemoryDocumentStore(persistence_path=Path(path) if path else None)
    if selected == FIRESTORE_BACKEND:
        service_account = load_service_account(settings.service_account_key)
        return FirestoreDocumentStore.from_service_account(service_account)
    raise ConfigurationError(f"Unknown store backend {selected!r}.")
