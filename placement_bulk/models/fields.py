from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any

"""Canonical student fields and the header aliases accepted for each.

Uploaded sheets are filled in by hand, so the same column shows up under the
template label ("First Name") or the API-style camelCase name ("firstName").
``FIELD_ALIASES`` lists, per canonical field, the accepted headers in priority
order; ``resolve`` returns the first one holding a present value.

The numeric helpers parse the leading number of a cell, so "8.5 CGPA" gives
8.5 and "2024.0" gives 2024 for an integer field.
"""

__all__ = [
    "FIELD_ALIASES",
    "RawRow",
    "is_present",
    "resolve",
    "parse_leading_float",
    "parse_leading_int",
]

RawRow = Mapping[str, Any]

FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "first_name": ("First Name", "firstName"),
    "last_name": ("Last Name", "lastName"),
    "email": ("Email", "email"),
    "phone": ("Phone", "phone", "Mobile"),
    "gender": ("Gender", "gender"),
    "department": ("Department", "department"),
    "batch": ("Batch", "batch"),
    "roll_number": ("Roll Number", "rollNumber"),
    "cgpa": ("CGPA", "cgpa"),
    "active_backlogs": ("Active Backlogs", "activeBacklogs"),
    "backlog_history": ("Backlog History", "backlogHistory"),
    "tenth_percentage": ("10th %", "tenthPercentage"),
    "twelfth_percentage": ("12th %", "twelfthPercentage"),
    "skills": ("Skills", "skills"),
}

_LEADING_FLOAT = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_LEADING_INT = re.compile(r"[+-]?\d+")


def is_present(value: Any) -> bool:
    """True unless the value is missing, NaN or a blank string."""
    if value is None:
        return False
    if isinstance(value, float) and math.isnan(value):
        return False
    if isinstance(value, str) and value.strip() == "":
        return False
    return True


def resolve(row: RawRow, field: str) -> Any:
    """Return the value of ``field`` under its first present alias, else None."""
    for header in FIELD_ALIASES[field]:
        value = row.get(header)
        if is_present(value):
            return value
    return None


def parse_leading_float(value: Any) -> float | None:
    """Leading number of ``value``; "1e400" overflows to inf and is returned as such."""
    if not is_present(value) or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    m = _LEADING_FLOAT.match(str(value).strip())
    if m is None:
        return None
    return float(m.group(0))


def parse_leading_int(value: Any) -> int | None:
    if not is_present(value) or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    m = _LEADING_INT.match(str(value).strip())
    if m is None:
        return None
    return int(m.group(0))
