from __future__ import annotations

import logging
from logging.config import dictConfig
from typing import Iterable, Sequence

from settings import get_settings

RUN_CONTEXT_KEYS = (
    "state",
    "app_id",
    "source_url",
    "status_code",
    "row_index",
    "reason",
    "record_count",
    "collection_path",
)

_configured = False


class RunContextFormatter(logging.Formatter):
    """Appends sync-run context passed through ``extra`` as ``key=value`` pairs."""

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: str = "%",
        context_keys: Iterable[str] | None = None,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt, style=style)
        self.context_keys: Sequence[str] = tuple(context_keys or RUN_CONTEXT_KEYS)

    def run_context(self, record: logging.LogRecord) -> str:
        pairs = (
            f"{key}={getattr(record, key)}"
            for key in self.context_keys
            if getattr(record, key, None) is not None
        )
        return " ".join(pairs)

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = self.run_context(record)
        return f"{message} | {context}" if context else message


def configure_logging(level: str | int | None = None) -> None:
    """Install the run-context formatter on the root logger once per process."""
    global _configured
    if _configured:
        return

    log_level = level if level is not None else get_settings().log_level

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "run_context": {
                    "()": "logging_config.RunContextFormatter",
                    "fmt": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                    "datefmt": "%Y-%m-%dT%H:%M:%S",
                    "context_keys": list(RUN_CONTEXT_KEYS),
                }
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "level": log_level,
                    "formatter": "run_context",
                }
            },
            "root": {"handlers": ["stderr"], "level": log_level},
        }
    )

    _configured = True
