"""Transport module for posting encoded mail requests over HTTP.

Public API:
    - TransportAdapter: Interface for HTTP transports (for custom implementations)
    - HttpxTransport: httpx implementation
    - RawResponse: Status and raw body handed back by a transport
    - TransportError: Base exception for transport failures
    - TransportConnectionError: Endpoint unreachable
    - TransportTimeoutError: Endpoint did not answer in time
"""

from .adapter import TransportAdapter
from .exceptions import TransportConnectionError, TransportError, TransportTimeoutError
from .httpx_adapter import HttpxTransport
from .models import RawResponse

__all__ = [
    "TransportAdapter",
    "HttpxTransport",
    "RawResponse",
    "TransportError",
    "TransportConnectionError",
    "TransportTimeoutError",
]
