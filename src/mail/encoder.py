"""Encodes an EmailRequest into the multipart fields of ``mail.send.json``."""

from datetime import datetime, timezone
from typing import Any, Optional

from .models import (
    Attachment,
    Body,
    EmailRequest,
    HtmlAndTextBody,
    HtmlBody,
    NamedRecipients,
    RecipientGroup,
    TextBody,
    WirePart,
)
from .smtpapi import dumps, merge_metadata

_DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def format_send_date(value: datetime) -> str:
    """Format as ``EEE, d MMM yyyy HH:mm:ss Z``, e.g. ``Sat, 1 Jan 2000 00:00:00 +0000``.

    Naive datetimes are taken to be UTC. Day and month names are always
    English, independent of the process locale.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    offset = value.utcoffset()
    total_minutes = int(offset.total_seconds() // 60) if offset else 0
    sign = "-" if total_minutes < 0 else "+"
    hours, minutes = divmod(abs(total_minutes), 60)
    return (
        f"{_DAY_NAMES[value.weekday()]}, {value.day} {_MONTH_NAMES[value.month - 1]} "
        f"{value.year:04d} {value:%H:%M:%S} {sign}{hours:02d}{minutes:02d}"
    )


def encode_recipients(email_key: str, name_key: str, group: RecipientGroup) -> list[WirePart]:
    """Encode one recipient group.

    Named groups interleave address and name parts per entry; plain groups
    only ever emit address parts.
    """
    if isinstance(group, NamedRecipients):
        parts = []
        for entry in group.entries:
            parts.append(WirePart.raw(email_key, entry.address.to_bytes()))
            parts.append(WirePart.text(name_key, entry.display_name))
        return parts
    return [WirePart.raw(email_key, address.to_bytes()) for address in group.addresses]


def _body_parts(body: Body) -> list[WirePart]:
    if isinstance(body, HtmlBody):
        return [WirePart.raw("html", body.html.encode("utf-8"))]
    if isinstance(body, TextBody):
        return [WirePart.text("text", body.text)]
    if isinstance(body, HtmlAndTextBody):
        return [
            WirePart.raw("html", body.html.encode("utf-8")),
            WirePart.text("text", body.text),
        ]
    raise TypeError(f"Unsupported body type: {type(body).__name__}")


def _file_part(attachment: Attachment) -> WirePart:
    return WirePart.file(f"files[{attachment.name}]", attachment.name, attachment.content)


def _headers_part(headers: tuple[tuple[str, str], ...]) -> Optional[WirePart]:
    if not headers:
        return None
    # Later duplicates overwrite earlier ones.
    return WirePart.raw("headers", dumps(dict(headers)))


def encode(request: EmailRequest[Any]) -> list[WirePart]:
    """Map a request to its ordered list of multipart fields.

    The order is fixed: recipients, subject, body, sender, cc, bcc, sender
    name, reply-to, date, headers, attachments, inline content and finally
    the ``x-smtpapi`` metadata. Optional fields are left out entirely when
    absent.
    """
    parts = encode_recipients("to[]", "toname[]", request.to)
    parts.append(WirePart.text("subject", request.subject))
    parts.extend(_body_parts(request.body))
    parts.append(WirePart.raw("from", request.sender.to_bytes()))

    if request.cc is not None:
        parts.extend(encode_recipients("cc[]", "ccname[]", request.cc))
    if request.bcc is not None:
        parts.extend(encode_recipients("bcc[]", "bccname[]", request.bcc))
    if request.sender_name is not None:
        parts.append(WirePart.text("fromname", request.sender_name))
    if request.reply_to is not None:
        parts.append(WirePart.raw("replyto", request.reply_to.to_bytes()))
    if request.send_at is not None:
        parts.append(WirePart.text("date", format_send_date(request.send_at)))

    headers_part = _headers_part(request.custom_headers)
    if headers_part is not None:
        parts.append(headers_part)

    parts.extend(_file_part(a) for a in request.attachments)
    for inline in request.inline_content:
        parts.append(_file_part(inline.file))
        parts.append(WirePart.text(f"content[{inline.file.name}]", inline.content_id))

    metadata = merge_metadata(
        request.template_id,
        request.categories,
        request.unsubscribe_group_id,
        request.unsubscribe_group_ids_for_preference_page,
        request.custom_metadata,
    )
    if metadata is not None:
        parts.append(WirePart.raw("x-smtpapi", dumps(metadata)))

    return parts
