from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from ..models.fields import RawRow, is_present, parse_leading_float, resolve
from ..models.validation import RowValidationError, ValidationOptions

"""Row validator for student uploads.

The checks are a rule table rather than a chain of if statements. Every rule
runs on every row (no short-circuit) and messages come out in table order;
the portal UI and the error log both rely on these exact strings.

A rule's check receives the resolved field value (see ``models.fields``) and
the active options, and returns True when the row passes.
"""

__all__ = [
    "Rule",
    "RULES",
    "EMAIL_PATTERN",
    "validate_row",
    "validate_rows",
]

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")

CGPA_MIN = 0.0
CGPA_MAX = 10.0


@dataclass(frozen=True)
class Rule:
    field: str
    message: str
    check: Callable[[Any, ValidationOptions], bool]


def _required(value: Any, options: ValidationOptions) -> bool:
    return is_present(value)


def _email_format(value: Any, options: ValidationOptions) -> bool:
    if not is_present(value):
        return True  # reported by the required rule
    return EMAIL_PATTERN.fullmatch(str(value)) is not None


def _cgpa_range(value: Any, options: ValidationOptions) -> bool:
    cgpa = parse_leading_float(value)
    if cgpa is None:
        return True
    if cgpa == 0 and not options.strict_zero_scores:
        # legacy: zero counts as "no CGPA given"
        return True
    return CGPA_MIN <= cgpa <= CGPA_MAX


RULES: tuple[Rule, ...] = (
    Rule("first_name", "First Name is required", _required),
    Rule("email", "Email is required", _required),
    Rule("department", "Department is required", _required),
    Rule("roll_number", "Roll Number is required", _required),
    Rule("email", "Invalid email format", _email_format),
    Rule("cgpa", "CGPA must be between 0 and 10", _cgpa_range),
)


def validate_row(row: RawRow, options: ValidationOptions | None = None) -> list[str]:
    """Return the failed-rule messages for one row; empty means valid."""
    opts = options or ValidationOptions()
    return [rule.message for rule in RULES if not rule.check(resolve(row, rule.field), opts)]


def validate_rows(
    rows: Sequence[RawRow], options: ValidationOptions | None = None
) -> list[RowValidationError]:
    """Validate a decoded batch; one record per failing row, in row order."""
    errors: list[RowValidationError] = []
    for index, row in enumerate(rows):
        messages = validate_row(row, options)
        if messages:
            errors.append(RowValidationError.for_index(index, messages))
    return errors
