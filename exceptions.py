"""Run-level failures raised by the sync pipeline."""

from __future__ import annotations


class SyncError(Exception):
    """Base class for failures that abort a sync run."""


class ConfigurationError(SyncError):
    """Credential or setting is missing or malformed."""


class FetchError(SyncError):
    """The monitoring page could not be retrieved."""


class StoreWriteError(SyncError):
    """The batch commit to the document store failed."""
