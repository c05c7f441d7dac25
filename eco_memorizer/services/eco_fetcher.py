"""HTTP client for the upstream ECO table."""

import logging
from typing import Optional

import httpx

from ..config import get_settings
from ..exceptions import FetchFailedError

logger = logging.getLogger(__name__)


class EcoTableFetcher:
    """Downloads the raw ECO help document. No retries."""

    def __init__(
        self,
        url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the fetcher.

        Args:
            url: Upstream document URL. Defaults to the configured URL.
            timeout_seconds: Request timeout. Defaults to the configured value.
            transport: Optional httpx transport (used by tests).
        """
        if url is None or timeout_seconds is None:
            settings = get_settings()
            url = url or settings.eco_table_url
            timeout_seconds = timeout_seconds if timeout_seconds is not None else settings.fetch_timeout_seconds
        self._url = url
        self._timeout = timeout_seconds
        self._transport = transport

    @property
    def url(self) -> str:
        return self._url

    async def fetch(self) -> bytes:
        """Fetch the upstream document.

        Returns:
            Raw response body.

        Raises:
            FetchFailedError: On invalid URLs, transport errors, timeouts or error statuses.
        """
        logger.info(f"Fetching ECO table from {self._url}")
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self._timeout) as client:
                response = await client.get(self._url)
                response.raise_for_status()
                return response.content
        except httpx.HTTPStatusError as e:
            logger.error(f"ECO table request returned {e.response.status_code}")
            raise FetchFailedError(self._url, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error(f"ECO table request failed: {e!r}")
            raise FetchFailedError(self._url, type(e).__name__) from e
        except httpx.InvalidURL as e:
            logger.error(f"ECO table URL is invalid: {e}")
            raise FetchFailedError(self._url, f"InvalidURL: {e}") from e
