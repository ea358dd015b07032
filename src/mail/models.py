"""Data models for the mail module.

Every model here is an immutable value object. Sequences are stored as
tuples so that a request can be encoded any number of times with the
same result.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Generic, Iterator, Optional, TypeVar, Union

from .exceptions import EmptyRecipientGroupError, InvalidEmailAddressError

CategoryT = TypeVar("CategoryT")


@dataclass(frozen=True)
class EmailAddress:
    """A structurally well-formed ``local@domain`` address.

    Attributes:
        local_part: Everything before the last ``@``.
        domain: Everything after the last ``@``.
    """

    local_part: str
    domain: str

    @classmethod
    def parse(cls, value: str) -> "EmailAddress":
        """Parse a bare ``local@domain`` string.

        The split is on the last ``@``, so a quoted local part may itself
        contain ``@``. Only the shape is checked (both halves non-empty, no
        whitespace). Deliverability is not.

        Raises:
            InvalidEmailAddressError: If the string is not shaped like an address.
        """
        if not value:
            raise InvalidEmailAddressError(value, "empty address")
        if any(ch.isspace() for ch in value):
            raise InvalidEmailAddressError(value, "contains whitespace")
        local_part, at, domain = value.rpartition("@")
        if not at:
            raise InvalidEmailAddressError(value, "missing '@'")
        if not local_part:
            raise InvalidEmailAddressError(value, "empty local part")
        if not domain or "." in (domain[0], domain[-1]):
            raise InvalidEmailAddressError(value, "malformed domain")
        return cls(local_part=local_part, domain=domain)

    def to_bytes(self) -> bytes:
        """Raw address bytes as sent on the wire."""
        return str(self).encode("utf-8")

    def __str__(self) -> str:
        return f"{self.local_part}@{self.domain}"


@dataclass(frozen=True)
class NamedAddress:
    """An address paired with the display name shown to the recipient."""

    address: EmailAddress
    display_name: str

    def to_dict(self) -> dict[str, str]:
        return {"address": str(self.address), "display_name": self.display_name}


@dataclass(frozen=True)
class NamedRecipients:
    """Recipients that all carry a display name. Never empty."""

    entries: tuple[NamedAddress, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", tuple(self.entries))
        if not self.entries:
            raise EmptyRecipientGroupError("NamedRecipients")

    @classmethod
    def of(cls, *entries: NamedAddress) -> "NamedRecipients":
        return cls(entries=tuple(entries))

    def to_plain(self) -> "PlainRecipients":
        """Drop the display names, keeping the addresses in order."""
        return PlainRecipients(addresses=tuple(e.address for e in self.entries))

    def __iter__(self) -> Iterator[NamedAddress]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class PlainRecipients:
    """Recipients given as bare addresses. Never empty."""

    addresses: tuple[EmailAddress, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "addresses", tuple(self.addresses))
        if not self.addresses:
            raise EmptyRecipientGroupError("PlainRecipients")

    @classmethod
    def of(cls, *addresses: EmailAddress) -> "PlainRecipients":
        return cls(addresses=tuple(addresses))

    def __iter__(self) -> Iterator[EmailAddress]:
        return iter(self.addresses)

    def __len__(self) -> int:
        return len(self.addresses)


RecipientGroup = Union[NamedRecipients, PlainRecipients]


@dataclass(frozen=True)
class HtmlBody:
    """Pre-rendered HTML only."""

    html: str


@dataclass(frozen=True)
class TextBody:
    """Plain text only."""

    text: str


@dataclass(frozen=True)
class HtmlAndTextBody:
    """Both representations; the HTML is sent first."""

    html: str
    text: str


Body = Union[HtmlBody, TextBody, HtmlAndTextBody]


@dataclass(frozen=True)
class Attachment:
    """A file attached to the email.

    Attributes:
        name: File name the content appears under. Also used in the
            ``files[<name>]`` field key, so it should be unique per request.
        content: Raw file bytes.
    """

    name: str
    content: bytes


@dataclass(frozen=True)
class InlineContent:
    """An attachment that can be referenced from the HTML body by content id.

    Do not also list ``file`` in ``EmailRequest.attachments``; inline
    content is attached on its own.
    """

    file: Attachment
    content_id: str


@dataclass(frozen=True)
class EmailRequest(Generic[CategoryT]):
    """One email-send intent for the SendGrid mail API.

    ``CategoryT`` is any JSON-serializable label type, e.g. ``str`` or an
    application ``Enum`` (members are sent as their ``value``).

    Attributes:
        to: Primary recipients.
        subject: Subject line.
        body: HTML, text or both.
        sender: From address.
        cc: Optional carbon-copy recipients.
        bcc: Optional blind carbon-copy recipients.
        sender_name: Display name for the sender.
        reply_to: Reply-To address.
        send_at: Date sent in the ``date`` field.
        attachments: Plain file attachments.
        inline_content: Attachments referenced by content id.
        custom_headers: Raw (name, value) transport headers.
        categories: Category labels for SendGrid statistics.
        template_id: Transactional template to apply.
        unsubscribe_group_id: ASM group the recipient can unsubscribe from.
        unsubscribe_group_ids_for_preference_page: ASM groups shown on the
            preference page.
        custom_metadata: Extra ``x-smtpapi`` keys. Derived keys above win
            on collision.
    """

    to: RecipientGroup
    subject: str
    body: Body
    sender: EmailAddress
    cc: Optional[RecipientGroup] = None
    bcc: Optional[RecipientGroup] = None
    sender_name: Optional[str] = None
    reply_to: Optional[EmailAddress] = None
    send_at: Optional[datetime] = None
    attachments: tuple[Attachment, ...] = ()
    inline_content: tuple[InlineContent, ...] = ()
    custom_headers: tuple[tuple[str, str], ...] = ()
    categories: tuple[CategoryT, ...] = ()
    template_id: Optional[str] = None
    unsubscribe_group_id: Optional[int] = None
    unsubscribe_group_ids_for_preference_page: tuple[int, ...] = ()
    custom_metadata: Optional[dict[str, Any]] = field(default=None, hash=False)

    def __post_init__(self) -> None:
        # Freeze caller sequences so later mutation cannot change the encoding.
        for name in (
            "attachments",
            "inline_content",
            "categories",
            "unsubscribe_group_ids_for_preference_page",
        ):
            object.__setattr__(self, name, tuple(getattr(self, name)))
        object.__setattr__(
            self, "custom_headers", tuple(tuple(pair) for pair in self.custom_headers)
        )
        if self.custom_metadata is not None:
            object.__setattr__(self, "custom_metadata", dict(self.custom_metadata))

    def with_to(self, group: RecipientGroup) -> "EmailRequest[CategoryT]":
        """Return a copy with the primary recipients replaced."""
        return replace(self, to=group)

    def with_cc(self, group: Optional[RecipientGroup]) -> "EmailRequest[CategoryT]":
        """Return a copy with the cc group replaced (``None`` clears it)."""
        return replace(self, cc=group)

    def with_bcc(self, group: Optional[RecipientGroup]) -> "EmailRequest[CategoryT]":
        """Return a copy with the bcc group replaced (``None`` clears it)."""
        return replace(self, bcc=group)


def make_request(
    to: RecipientGroup,
    subject: str,
    body: Body,
    sender: EmailAddress,
) -> EmailRequest[Any]:
    """Build the minimal request; everything optional is absent or empty."""
    return EmailRequest(to=to, subject=subject, body=body, sender=sender)


def make_single_recipient_request(
    to: EmailAddress,
    subject: str,
    body: Body,
    sender: EmailAddress,
) -> EmailRequest[Any]:
    """Build a minimal request addressed to one plain recipient."""
    return make_request(PlainRecipients.of(to), subject, body, sender)


# -------------------- API outcomes --------------------


@dataclass(frozen=True)
class ApiError:
    """One error reported by the SendGrid API.

    Attributes:
        message: Human readable error text.
        field: Request field the error refers to, if any.
    """

    message: str
    field: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "field": self.field}


@dataclass(frozen=True)
class Success:
    """The API accepted the request."""

    @property
    def is_success(self) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        return {"outcome": "success"}


@dataclass(frozen=True)
class ApiErrors:
    """The API rejected the request with a structured error list."""

    status_code: int
    errors: tuple[ApiError, ...]

    @property
    def is_success(self) -> bool:
        return False

    def to_dict(self) -> dict[str, Any]:
        return {
            "outcome": "api_errors",
            "status_code": self.status_code,
            "errors": [e.to_dict() for e in self.errors],
        }


@dataclass(frozen=True)
class UnparseableResponse:
    """The response body matched neither known JSON shape."""

    raw_body: bytes

    @property
    def is_success(self) -> bool:
        return False

    def to_dict(self) -> dict[str, Any]:
        return {
            "outcome": "unparseable_response",
            "raw_body": self.raw_body.decode("utf-8", errors="replace"),
        }


ApiOutcome = Union[Success, ApiErrors, UnparseableResponse]


# -------------------- Wire parts --------------------


class PartKind(Enum):
    """How a wire part is carried in the multipart form."""

    TEXT = "text"
    BYTES = "bytes"
    FILE = "file"


@dataclass(frozen=True)
class WirePart:
    """One named field of the multipart form.

    Attributes:
        name: Literal field name (``to[]``, ``files[a.txt]``, ...).
        value: ``str`` for text fields, ``bytes`` for raw or file fields.
        filename: Set only for file upload fields.
    """

    name: str
    value: Union[str, bytes]
    filename: Optional[str] = None

    @property
    def kind(self) -> PartKind:
        if self.filename is not None:
            return PartKind.FILE
        if isinstance(self.value, bytes):
            return PartKind.BYTES
        return PartKind.TEXT

    def to_bytes(self) -> bytes:
        """Field content as bytes (text is UTF-8 encoded)."""
        if isinstance(self.value, bytes):
            return self.value
        return self.value.encode("utf-8")

    @classmethod
    def text(cls, name: str, value: str) -> "WirePart":
        return cls(name=name, value=value)

    @classmethod
    def raw(cls, name: str, value: bytes) -> "WirePart":
        return cls(name=name, value=value)

    @classmethod
    def file(cls, name: str, filename: str, content: bytes) -> "WirePart":
        return cls(name=name, value=content, filename=filename)

