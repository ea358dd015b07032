"""Exceptions for the mail module."""


class MailError(Exception):
    """Base exception for mail request errors."""

    pass


class InvalidEmailAddressError(MailError, ValueError):
    """Raised when a string is not a structurally valid email address."""

    def __init__(self, value: str, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid email address {value!r}: {reason}")


class EmptyRecipientGroupError(MailError, ValueError):
    """Raised when a recipient group is constructed without recipients."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"{kind} requires at least one recipient")


class MissingApiKeyError(MailError):
    """Raised when no SendGrid API key is configured."""

    def __init__(self) -> None:
        super().__init__(
            "SendGrid API key not provided. Set SENDGRID_API_KEY environment variable "
            "or pass api_key parameter."
        )
