"""Firestore backend built on the Firebase Admin SDK."""

from __future__ import annotations

import json
import logging
from threading import Lock
from typing import Any, Dict, Mapping, Optional

import firebase_admin
from firebase_admin import credentials, firestore

from exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_init_lock = Lock()


def load_service_account(raw: Optional[str]) -> Dict[str, Any]:
    """Decode the JSON service account credential supplied via the environment."""
    if not raw:
        raise ConfigurationError("FIREBASE_SERVICE_ACCOUNT_KEY is not set.")
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(
            f"FIREBASE_SERVICE_ACCOUNT_KEY is not valid JSON: {exc.msg}"
        ) from exc
    if not isinstance(payload, dict):
        raise ConfigurationError("FIREBASE_SERVICE_ACCOUNT_KEY must be a JSON object.")
    return payload


def initialize_firebase_app(service_account: Mapping[str, Any]) -> firebase_admin.App:
    """Return the default Firebase app, initializing it only if absent."""
    with _init_lock:
        try:
            return firebase_admin.get_app()
        except ValueError:
            pass

        try:
            certificate = credentials.Certificate(dict(service_account))
        except ValueError as exc:
            raise ConfigurationError(f"Invalid service account credential: {exc}") from exc

        logger.info("Initializing Firebase app")
        return firebase_admin.initialize_app(certificate)


class FirestoreDocumentStore:
    """Writes measurement documents through Firestore write batches."""

    def __init__(self, client: Any) -> None:
        self.client = client

    @classmethod
    def from_service_account(cls, service_account: Mapping[str, Any]) -> "FirestoreDocumentStore":
        app = initialize_firebase_app(service_account)
        return cls(firestore.client(app))

    def commit_batch(
        self, collection_path: str, documents: Mapping[str, Dict[str, Any]]
    ) -> None:
        collection = self.client.collection(collection_path)
        batch = self.client.batch()
        for document_id, document in documents.items():
            batch.set(collection.document(document_id), document, merge=True)
        batch.commit()
