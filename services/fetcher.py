"""Outbound retrieval of the monitoring page."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from exceptions import FetchError

logger = logging.getLogger(__name__)


class PageFetcher:
    """Single-shot HTTP GET of the configured source page."""

    def __init__(
        self,
        url: str,
        timeout: float = 30.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.url = url
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=True)

    def close(self) -> None:
        self._client.close()

    def fetch(self) -> str:
        logger.info("Fetching monitoring page", extra={"source_url": self.url})
        try:
            response = self._client.get(self.url)
        except httpx.RequestError as exc:
            raise FetchError(f"Failed to fetch data: {exc}") from exc

        if not response.is_success:
            raise FetchError(
                f"Failed to fetch data: {response.status_code} {response.reason_phrase}".rstrip()
            )

        logger.info(
            "Monitoring page fetched",
            extra={"source_url": self.url, "status_code": response.status_code},
        )
        return response.text
