"""Exceptions for the transport module."""


class TransportError(Exception):
    """Base exception for transport failures.

    Attributes:
        url: The URL the request was sent to.
    """

    def __init__(self, message: str, url: str):
        super().__init__(message)
        self.url = url


class TransportConnectionError(TransportError):
    """Failed to reach the remote API."""

    pass


class TransportTimeoutError(TransportError):
    """The remote API did not answer in time."""

    pass
