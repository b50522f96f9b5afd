"""
Checks applied to decoded gateway responses.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from .errors import ResponseValidationError

__all__ = ["REQUIRED_CREATE_KEYS", "validate_create_payment"]

REQUIRED_CREATE_KEYS = ("code", "message", "transId", "redirect")


def _as_int(value: Any) -> Optional[int]:
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def validate_create_payment(data: Any) -> Mapping[str, Any]:
    """
    Validate the body returned by ``POST /v2.0/payment.json``.

    A non-zero ``code`` is a business error reported by the gateway, even
    though it arrives with a 2xx status. A null ``code`` counts as zero;
    a code that is not a whole number is reported as an API error rather
    than being read as zero.
    """
    if not isinstance(data, Mapping):
        raise ResponseValidationError(
            f"Unexpected response type: {type(data).__name__}"
        )

    missing = [key for key in REQUIRED_CREATE_KEYS if key not in data]
    if missing:
        raise ResponseValidationError(f"Missing response keys: {', '.join(missing)}")

    if _as_int(data["code"]) != 0:
        raise ResponseValidationError(f"API error: {data['code']} {data['message']}")

    return data
