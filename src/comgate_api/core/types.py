"""
Reusable field constraints shared by the request models.

Length and range constraints are expressed as annotated pydantic types and
are enforced when a model is constructed. ``Text`` accepts identifiers and dates of
any type and keeps their ``str()`` form. Pattern constraints are plain
helpers the models call from their validation step.
"""

from __future__ import annotations

import re
from typing import Annotated, Any, Optional

from pydantic import BeforeValidator, Field, StringConstraints

__all__ = [
    "DATE_PATTERN",
    "EXPIRATION_TIME_PATTERN",
    "MIN_PRICE",
    "Label",
    "MinPrice",
    "Text",
    "is_blank",
    "matches_pattern",
]

# Smallest amount the gateway accepts in any currency (1 CZK in haler).
# Currency-specific limits are left to the gateway.
MIN_PRICE = 100

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
EXPIRATION_TIME_PATTERN = re.compile(r"^\d+[mhd]$")

Label = Annotated[str, StringConstraints(min_length=1, max_length=16)]
MinPrice = Annotated[int, Field(ge=MIN_PRICE)]


def _as_text(value: Any) -> Any:
    # dates, UUIDs and other identifiers are sent in their str() form
    return value if value is None else str(value)


Text = Annotated[Optional[str], BeforeValidator(_as_text)]


def matches_pattern(value: Any, pattern: re.Pattern[str]) -> bool:
    return pattern.fullmatch(str(value)) is not None


def is_blank(value: Any) -> bool:
    return value is None or not str(value).strip()
