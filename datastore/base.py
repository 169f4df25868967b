from __future__ import annotations

from typing import Any, Dict, Mapping, Protocol


class DocumentStore(Protocol):
    """Destination for measurement documents."""

    def commit_batch(
        self, collection_path: str, documents: Mapping[str, Dict[str, Any]]
    ) -> None:
        """Upsert-with-merge every document in one atomic batch."""
        ...
