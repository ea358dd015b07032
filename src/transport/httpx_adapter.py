"""httpx implementation of the transport interface."""

import logging
from typing import Mapping, Optional, Sequence

import httpx

from src.mail.models import WirePart

from .adapter import TransportAdapter
from .exceptions import TransportConnectionError, TransportTimeoutError
from .models import RawResponse

logger = logging.getLogger(__name__)


class HttpxTransport(TransportAdapter):
    """Transport posting multipart forms with an ``httpx.Client``.

    Uses lazy initialization for the client. A client passed in by the
    caller is never closed by this transport.

    Example usage:
        transport = HttpxTransport()
        transport = HttpxTransport(client=httpx.Client(proxy="http://proxy:3128"))
    """

    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Initialize the transport.

        Args:
            client: Pre-built httpx client. Created on first use if omitted.
            timeout: Request timeout in seconds for a created client.
        """
        self._client = client
        self._owns_client = client is None
        self._timeout = timeout

    def _get_client(self) -> httpx.Client:
        """Get or create the httpx client (lazy initialization)."""
        if self._client is None:
            self._client = httpx.Client(timeout=self._timeout)
        return self._client

    @staticmethod
    def _to_files(parts: Sequence[WirePart]) -> list[tuple[str, tuple[Optional[str], bytes]]]:
        # httpx sends every entry of ``files`` in order; a None filename
        # renders a plain form field.
        return [(part.name, (part.filename, part.to_bytes())) for part in parts]

    def submit(
        self,
        url: str,
        headers: Mapping[str, str],
        parts: Sequence[WirePart],
    ) -> RawResponse:
        client = self._get_client()
        logger.debug("POST %s with %d form parts", url, len(parts))

        try:
            response = client.post(url, headers=dict(headers), files=self._to_files(parts))
        except httpx.TimeoutException as e:
            raise TransportTimeoutError(f"Request to {url} timed out: {e}", url) from e
        except httpx.HTTPError as e:
            raise TransportConnectionError(f"Request to {url} failed: {e}", url) from e

        logger.debug("Response from %s: status=%d", url, response.status_code)
        return RawResponse(status_code=response.status_code, body=response.content)

    def close(self) -> None:
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None
