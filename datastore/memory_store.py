from __future__ import annotations
import copy
import json
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Mapping, Optional


class InMemoryDocumentStore:
    """Local document store keyed by collection path and document id."""

    def __init__(self, persistence_path: Optional[Path] = None) -> None:
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self.persistence_path = persistence_path
        self.commit_count = 0
        self._lock = Lock()
        if persistence_path:
            persistence_path.parent.mkdir(parents=True, exist_ok=True)
            self._load_from_disk()

    def commit_batch(
        self, collection_path: str, documents: Mapping[str, Dict[str, Any]]
    ) -> None:
        with self._lock:
            staged = copy.deepcopy(self._collections)
            collection = staged.setdefault(collection_path, {})
            for document_id, document in documents.items():
                merged = collection.get(document_id, {})
                merged.update(copy.deepcopy(dict(document)))
                collection[document_id] = merged
            self._persist(staged)
            self._collections = staged
            self.commit_count += 1

    def get_document(self, collection_path: str, document_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            document = self._collections.get(collection_path, {}).get(document_id)
            if document is None:
                return None
            return copy.deepcopy(document)

    def list_documents(self, collection_path: str) -> Dict[str, Dict[str, Any]]:
        """Return deep copies of every document in the collection."""

        with self._lock:
            return copy.deepcopy(self._collections.get(collection_path, {}))

    def _persist(self, collections: Dict[str, Dict[str, Dict[str, Any]]]) -> None:
        if not self.persistence_path:
            return
        self.persistence_path.write_text(json.dumps(collections, indent=2, sort_keys=True))

    def _load_from_disk(self) -> None:
        if not self.persistence_path or not self.persistence_path.exists():
            return

        try:
            raw = self.persistence_path.read_text() or "{}"
            data = json.loads(raw)
        except (OSError, json.JSONDecodeError):
            data = {}

        for collection_path, documents in data.items():
            self._collections[collection_path] = dict(documents)
