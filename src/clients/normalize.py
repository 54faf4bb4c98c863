"""Input normalization and output enrichment for client records.

Request bodies arrive as loosely typed JSON. Each field goes through one of
the parsers below, which never raise: they return either the coerced value
or one of three markers.

- ``ABSENT``: the field was not sent (leave the column untouched)
- ``CLEAR``: the field was sent as null or blank text (write NULL)
- ``INVALID``: the value cannot be coerced

Callers look a field up with ``body.get(name, ABSENT)`` so that an omitted
key and an explicit ``null`` stay distinguishable.
"""

from __future__ import annotations

import enum
import math
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Literal

from src.clients.models import EnrichedClient
from src.models.client import Client
from src.plans.catalog import PlanCatalog


class Marker(enum.Enum):
    """Non-value parse outcomes."""

    ABSENT = "absent"
    CLEAR = "clear"
    INVALID = "invalid"

    def __repr__(self) -> str:
        return self.name


ABSENT = Marker.ABSENT
CLEAR = Marker.CLEAR
INVALID = Marker.INVALID

Invalid = Literal[Marker.INVALID]

MAX_HOURS_INCREMENT = 24
DEFAULT_HOURS_INCREMENT = 1

# Column limits: INTEGER id and hours, NUMERIC(12, 2) abono
MAX_INTEGER = 2**31 - 1
MAX_AMOUNT = 9_999_999_999.99

OPTIONAL_TEXT_FIELDS = (
    "dni",
    "representative",
    "representative_dni",
    "email",
    "address",
    "phone",
)


def _is_blank(raw: object) -> bool:
    """Absent, null, or empty string: the inputs that fall back to a default."""
    return raw is ABSENT or raw is None or raw == ""


def _to_number(raw: object) -> float | int | None:
    """Coerce a JSON scalar to a finite number, or None if it is not one."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return raw if math.isfinite(raw) else None
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            value = float(text)
        except ValueError:
            return None
        return value if math.isfinite(value) else None
    return None


def _to_integral(raw: object) -> int | None:
    """Coerce to an int only when the number has no fractional part."""
    value = _to_number(raw)
    if value is None:
        return None
    if isinstance(value, float):
        if not value.is_integer():
            return None
        return int(value)
    return value


def parse_identifier(raw: object) -> int | Invalid:
    """Parse a client id. Only positive integers are valid."""
    value = _to_integral(raw)
    if value is None or not 0 < value <= MAX_INTEGER:
        return INVALID
    return value


def parse_increment(raw: object) -> int | Invalid:
    """Parse an hours delta: defaults to 1, must be an integer in 1..24."""
    if _is_blank(raw):
        return DEFAULT_HOURS_INCREMENT
    value = _to_integral(raw)
    if value is None or not 1 <= value <= MAX_HOURS_INCREMENT:
        return INVALID
    return value


def parse_optional_text(raw: object) -> str | Marker:
    """Parse an optional text column.

    Returns the trimmed string, ``ABSENT`` when omitted, ``CLEAR`` for null or
    blank input, and ``INVALID`` for non-string values.
    """
    if raw is ABSENT:
        return ABSENT
    if raw is None:
        return CLEAR
    if not isinstance(raw, str):
        return INVALID
    text = raw.strip()
    return text if text else CLEAR


def parse_required_text(raw: object) -> str | Marker:
    """Parse a text column that may be omitted but never blanked."""
    value = parse_optional_text(raw)
    if value is CLEAR:
        return INVALID
    return value


def parse_non_negative_amount(raw: object, default: float = 0.0) -> float | Invalid:
    """Parse a money amount; blank input yields ``default``."""
    if _is_blank(raw):
        return default
    value = _to_number(raw)
    if value is None or not 0 <= value <= MAX_AMOUNT:
        return INVALID
    return float(value)


def parse_non_negative_integer(raw: object, default: int = 0) -> int | Invalid:
    """Parse a count, truncating any fractional part toward zero."""
    if _is_blank(raw):
        return default
    value = _to_number(raw)
    if value is None or not 0 <= value <= MAX_INTEGER:
        return INVALID
    truncated = math.trunc(value)
    return truncated if truncated >= 0 else default


def validate_plan_id(raw: object, catalog: PlanCatalog) -> str | Invalid:
    """Accept only string plan ids present in the catalog."""
    if isinstance(raw, str) and raw in catalog:
        return raw
    return INVALID


def text_or_none(value: str | Marker) -> str | None:
    """Collapse a parsed optional text value to what gets stored on insert."""
    return value if isinstance(value, str) else None


def _amount_to_float(value: Decimal | float | int | None) -> float:
    if value is None:
        return 0.0
    return float(value)


def enrich(record: Client | Mapping[str, Any], catalog: PlanCatalog) -> EnrichedClient:
    """Build the read projection of a stored client.

    Unknown plan ids resolve to ``plan_info=None`` rather than failing, so
    legacy rows stay readable.
    """
    if isinstance(record, Mapping):
        row = dict(record)
    else:
        row = {column: getattr(record, column) for column in Client.__table__.columns.keys()}

    row["abono"] = _amount_to_float(row.get("abono"))
    row["hours"] = int(row.get("hours") or 0)
    row["plan_info"] = catalog.get_plan_info(row.get("plan"))
    return EnrichedClient.model_validate(row)
