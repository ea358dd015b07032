"""Mail module for building and encoding SendGrid mail-send requests.

This module provides the request model, the multipart field encoder,
the ``x-smtpapi`` metadata merger and the response classifier. None of
it performs I/O; sending is done by ``src.sender`` through a transport.

Public API:
    - EmailRequest: Immutable email-send intent
    - make_request / make_single_recipient_request: Minimal constructors
    - NamedRecipients / PlainRecipients: Recipient groups
    - HtmlBody / TextBody / HtmlAndTextBody: Body variants
    - encode: Map a request to ordered WireParts
    - merge_metadata: Build the ``x-smtpapi`` object
    - classify: Map (status, body) to Success, ApiErrors or UnparseableResponse

Example:
    from src.mail import EmailAddress, TextBody, encode, make_single_recipient_request

    request = make_single_recipient_request(
        EmailAddress.parse("alex@example.com"),
        "Hello",
        TextBody("Hi Alex"),
        EmailAddress.parse("noreply@example.com"),
    )
    parts = encode(request)
"""

from .encoder import encode, encode_recipients, format_send_date
from .exceptions import (
    EmptyRecipientGroupError,
    InvalidEmailAddressError,
    MailError,
    MissingApiKeyError,
)
from .models import (
    ApiError,
    ApiErrors,
    ApiOutcome,
    Attachment,
    Body,
    EmailAddress,
    EmailRequest,
    HtmlAndTextBody,
    HtmlBody,
    InlineContent,
    NamedAddress,
    NamedRecipients,
    PartKind,
    PlainRecipients,
    RecipientGroup,
    Success,
    TextBody,
    UnparseableResponse,
    WirePart,
    make_request,
    make_single_recipient_request,
)
from .response import classify
from .smtpapi import merge_metadata

__all__ = [
    # Operations
    "encode",
    "encode_recipients",
    "format_send_date",
    "merge_metadata",
    "classify",
    "make_request",
    "make_single_recipient_request",
    # Models
    "ApiError",
    "ApiErrors",
    "ApiOutcome",
    "Attachment",
    "Body",
    "EmailAddress",
    "EmailRequest",
    "HtmlAndTextBody",
    "HtmlBody",
    "InlineContent",
    "NamedAddress",
    "NamedRecipients",
    "PartKind",
    "PlainRecipients",
    "RecipientGroup",
    "Success",
    "TextBody",
    "UnparseableResponse",
    "WirePart",
    # Exceptions
    "MailError",
    "EmptyRecipientGroupError",
    "InvalidEmailAddressError",
    "MissingApiKeyError",
]
