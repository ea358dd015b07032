"""Main EmailSender class for sending mail through the SendGrid API."""

import logging
import os
from typing import Any, Iterable, Optional

from src.mail import ApiErrors, ApiOutcome, EmailRequest, Success, classify, encode
from src.mail.exceptions import MissingApiKeyError
from src.transport import HttpxTransport, TransportAdapter

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.sendgrid.com/api/"
SEND_EMAIL_ENDPOINT = "mail.send.json"


class EmailSender:
    """Sends EmailRequests and classifies the API's answer.

    Encoding and classification are pure; the only I/O is the transport
    call. Nothing is retried: ApiErrors and UnparseableResponse are
    returned to the caller, transport exceptions propagate.

    Example usage:
        sender = EmailSender()  # Uses SENDGRID_API_KEY env var
        outcome = sender.send(request)
        if isinstance(outcome, ApiErrors):
            for error in outcome.errors:
                print(error.field, error.message)

    With custom transport:
        sender = EmailSender(api_key="SG...", transport=HttpxTransport(timeout=5))
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        transport: Optional[TransportAdapter] = None,
        base_url: Optional[str] = None,
    ):
        """Initialize the EmailSender.

        Args:
            api_key: SendGrid API key. Defaults to SENDGRID_API_KEY env var.
            transport: Transport to post with. Defaults to HttpxTransport.
            base_url: API base URL. Defaults to SENDGRID_API_URL env var,
                then the public SendGrid v2 API.

        Raises:
            MissingApiKeyError: If no API key is available.
        """
        self._api_key = api_key or os.getenv("SENDGRID_API_KEY")
        if not self._api_key:
            raise MissingApiKeyError()
        self._transport = transport
        base = base_url or os.getenv("SENDGRID_API_URL") or DEFAULT_BASE_URL
        self._endpoint = base.rstrip("/") + "/" + SEND_EMAIL_ENDPOINT

    def _get_transport(self) -> TransportAdapter:
        """Get transport, creating default if needed (lazy init)."""
        if self._transport is None:
            self._transport = HttpxTransport()
        return self._transport

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._api_key}"}

    def send(self, request: EmailRequest[Any]) -> ApiOutcome:
        """Send one request.

        Args:
            request: The email to send.

        Returns:
            Success, ApiErrors or UnparseableResponse.

        Raises:
            TransportConnectionError: Failed to reach the API.
            TransportTimeoutError: The API did not answer in time.
        """
        parts = encode(request)
        logger.debug("Encoded request into %d parts for %s", len(parts), self._endpoint)

        response = self._get_transport().submit(self._endpoint, self._auth_headers(), parts)
        outcome = classify(response.status_code, response.body)

        if isinstance(outcome, Success):
            logger.info("SendGrid accepted email (subject=%r)", request.subject)
        elif isinstance(outcome, ApiErrors):
            logger.warning(
                "SendGrid rejected email (status=%d, errors=%d): %s",
                outcome.status_code,
                len(outcome.errors),
                "; ".join(e.message for e in outcome.errors),
            )
        else:
            logger.warning(
                "Unrecognized SendGrid response (status=%d, %d bytes)",
                response.status_code,
                len(response.body),
            )
        return outcome

    def send_batch(self, requests: Iterable[EmailRequest[Any]]) -> list[ApiOutcome]:
        """Send multiple requests sequentially.

        Returns:
            One outcome per request, in input order.
        """
        return [self.send(request) for request in requests]

    def close(self) -> None:
        """Close the transport if one was created."""
        if self._transport is not None:
            self._transport.close()

    @property
    def endpoint(self) -> str:
        """Full URL requests are posted to."""
        return self._endpoint

    @property
    def transport(self) -> TransportAdapter:
        """Access the transport."""
        return self._get_transport()
