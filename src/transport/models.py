"""Data models for the transport module."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RawResponse:
    """Status and body of an HTTP response, before classification.

    Attributes:
        status_code: HTTP status code.
        body: Undecoded response body.
    """

    status_code: int
    body: bytes
