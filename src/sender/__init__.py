"""Sender module for delivering mail requests to SendGrid.

Public API:
    - EmailSender: Encodes, posts and classifies email requests

Example:
    from src.mail import EmailAddress, TextBody, make_single_recipient_request
    from src.sender import EmailSender

    sender = EmailSender()
    outcome = sender.send(request)
    print(outcome.to_dict())
"""

from .email_sender import DEFAULT_BASE_URL, SEND_EMAIL_ENDPOINT, EmailSender

__all__ = [
    "EmailSender",
    "DEFAULT_BASE_URL",
    "SEND_EMAIL_ENDPOINT",
]
