"""CLI entry point for sending one email through SendGrid."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from src.logging_config import configure_logging
from src.mail import (
    Attachment,
    Body,
    EmailAddress,
    EmailRequest,
    HtmlAndTextBody,
    HtmlBody,
    MailError,
    NamedAddress,
    NamedRecipients,
    PlainRecipients,
    RecipientGroup,
    Success,
    TextBody,
)
from src.sender import EmailSender
from src.transport import TransportError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Send an email via the SendGrid API")
    parser.add_argument(
        "--to",
        action="append",
        required=True,
        metavar="EMAIL",
        help="Recipient address (repeatable)",
    )
    parser.add_argument(
        "--to-name",
        action="append",
        default=None,
        metavar="NAME",
        help="Display name for the matching --to (repeatable, one per --to)",
    )
    parser.add_argument("--from", dest="sender", required=True, metavar="EMAIL", help="Sender address")
    parser.add_argument("--from-name", default=None, help="Sender display name")
    parser.add_argument("--subject", required=True, help="Subject line")
    parser.add_argument("--text", default=None, help="Plain text body")
    parser.add_argument("--html-file", type=Path, default=None, help="File holding the HTML body")
    parser.add_argument(
        "--attach",
        action="append",
        type=Path,
        default=[],
        metavar="PATH",
        help="File to attach (repeatable)",
    )
    parser.add_argument(
        "--category",
        action="append",
        default=[],
        help="Category label (repeatable)",
    )
    parser.add_argument("--template-id", default=None, help="SendGrid template to apply")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set logging level (overrides LOG_LEVEL env var)",
    )
    return parser


def _build_recipients(addresses: list[str], names: Optional[list[str]]) -> RecipientGroup:
    parsed = tuple(EmailAddress.parse(a) for a in addresses)
    if names is None:
        return PlainRecipients(addresses=parsed)
    if len(names) != len(parsed):
        raise ValueError("--to-name must be given once per --to")
    return NamedRecipients(
        entries=tuple(NamedAddress(address=a, display_name=n) for a, n in zip(parsed, names))
    )


def _build_body(text: Optional[str], html_file: Optional[Path]) -> Body:
    html = html_file.read_text(encoding="utf-8") if html_file else None
    if html is not None and text is not None:
        return HtmlAndTextBody(html=html, text=text)
    if html is not None:
        return HtmlBody(html=html)
    if text is not None:
        return TextBody(text=text)
    raise ValueError("one of --text or --html-file is required")


def build_request(args: argparse.Namespace) -> EmailRequest[str]:
    """Translate parsed arguments into an EmailRequest.

    Raises:
        ValueError: On malformed addresses or missing body.
        OSError: If a body or attachment file cannot be read.
    """
    return EmailRequest(
        to=_build_recipients(args.to, args.to_name),
        subject=args.subject,
        body=_build_body(args.text, args.html_file),
        sender=EmailAddress.parse(args.sender),
        sender_name=args.from_name,
        attachments=tuple(Attachment(name=p.name, content=p.read_bytes()) for p in args.attach),
        categories=tuple(args.category),
        template_id=args.template_id,
    )


def main(argv: Optional[list[str]] = None) -> int:
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(level_override=args.log_level)

    try:
        request = build_request(args)
    except (ValueError, OSError) as e:
        parser.error(str(e))

    try:
        sender = EmailSender()
    except MailError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    try:
        outcome = sender.send(request)
    except TransportError as e:
        logger.error("Transport failure: %s", e)
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    finally:
        sender.close()

    print(json.dumps(outcome.to_dict(), indent=2))
    return 0 if isinstance(outcome, Success) else 1


if __name__ == "__main__":
    sys.exit(main())
