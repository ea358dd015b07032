"""Abstract interface for HTTP transports."""

from abc import ABC, abstractmethod
from typing import Mapping, Sequence

from src.mail.models import WirePart

from .models import RawResponse


class TransportAdapter(ABC):
    """Abstract base class for the HTTP layer under EmailSender.

    Implementations should handle:
    - Connection setup and pooling
    - Rendering WireParts as multipart/form-data, in order
    - Translating client-library errors to exceptions from exceptions.py

    HTTP error statuses are not errors at this level: they are returned
    as a RawResponse so the caller can classify the body.

    Example usage:
        with HttpxTransport() as transport:
            response = transport.submit(url, {"Authorization": "Bearer ..."}, parts)
    """

    @abstractmethod
    def submit(
        self,
        url: str,
        headers: Mapping[str, str],
        parts: Sequence[WirePart],
    ) -> RawResponse:
        """POST the parts as a multipart form.

        Args:
            url: Endpoint to post to.
            headers: Extra request headers (e.g. Authorization).
            parts: Form fields in the order they should be sent.

        Returns:
            The response status and raw body.

        Raises:
            TransportConnectionError: Failed to reach the endpoint.
            TransportTimeoutError: The endpoint did not answer in time.
        """
        pass

    def close(self) -> None:
        """Release any held connections."""
        pass

    def __enter__(self) -> "TransportAdapter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
