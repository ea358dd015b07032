"""Classifies raw ``mail.send.json`` responses into ApiOutcome values."""

import json
import logging
from typing import Any, Optional, Union

from .models import ApiError, ApiErrors, ApiOutcome, Success, UnparseableResponse

logger = logging.getLogger(__name__)


def _parse_errors(data: dict[str, Any]) -> Optional[tuple[ApiError, ...]]:
    """Return the error list if ``data`` has the error shape, else None."""
    raw_errors = data.get("errors")
    if not isinstance(raw_errors, list):
        return None

    errors = []
    for item in raw_errors:
        if not isinstance(item, dict):
            return None
        message = item.get("message")
        field = item.get("field")
        if not isinstance(message, str):
            return None
        if field is not None and not isinstance(field, str):
            return None
        errors.append(ApiError(message=message, field=field))
    return tuple(errors)


def classify(status_code: int, body: Union[bytes, str]) -> ApiOutcome:
    """Turn an HTTP status and body into an ApiOutcome.

    The error shape is checked before the success marker because SendGrid
    error bodies also carry a top-level ``message`` (``"error"``).

    Args:
        status_code: HTTP status of the response.
        body: Raw response body.

    Returns:
        Success, ApiErrors carrying the status, or UnparseableResponse
        carrying the raw body when the JSON matched neither shape.
    """
    raw_body = body.encode("utf-8") if isinstance(body, str) else body

    try:
        data = json.loads(raw_body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError, RecursionError):
        logger.debug("Response body is not JSON (status=%d)", status_code)
        return UnparseableResponse(raw_body=raw_body)

    if isinstance(data, dict):
        errors = _parse_errors(data)
        if errors is not None:
            return ApiErrors(status_code=status_code, errors=errors)
        if data.get("message") == "success":
            return Success()

    logger.debug("Response JSON matched no known shape (status=%d)", status_code)
    return UnparseableResponse(raw_body=raw_body)
