from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import date
from typing import Any

from ..models.fields import RawRow, parse_leading_float, parse_leading_int, resolve
from ..models.student import Backlogs, Education, NormalizedStudent, Score, StudentName
from ..models.validation import ValidationOptions

"""Row normalizer: raw spreadsheet row -> NormalizedStudent.

Runs on every row independently of validation and never raises; an empty row
yields a record of empty strings and defaults. Flagging that row is the
validator's job.
"""

__all__ = [
    "normalize_row",
    "normalize_rows",
    "split_skills",
]


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        # 9876543210.0 from a numeric cell should read as 9876543210
        return str(int(value))
    return str(value)


def _score(value: Any, options: ValidationOptions) -> float | None:
    parsed = parse_leading_float(value)
    if parsed is not None and not math.isfinite(parsed):
        return None
    if parsed == 0 and not options.strict_zero_scores:
        return None
    return parsed


def _batch(value: Any, options: ValidationOptions) -> int:
    parsed = parse_leading_int(value)
    if parsed:
        return parsed
    if options.default_batch is not None:
        return options.default_batch
    return date.today().year


def _count(value: Any) -> int:
    parsed = parse_leading_int(value)
    return parsed if parsed is not None else 0


def split_skills(value: Any) -> tuple[str, ...]:
    """Split a comma separated skills cell, dropping blank entries."""
    if value is None:
        return ()
    return tuple(piece.strip() for piece in _text(value).split(",") if piece.strip())


def normalize_row(row: RawRow, options: ValidationOptions | None = None) -> NormalizedStudent:
    opts = options or ValidationOptions()
    return NormalizedStudent(
        name=StudentName(
            first_name=_text(resolve(row, "first_name")),
            last_name=_text(resolve(row, "last_name")),
        ),
        email=_text(resolve(row, "email")),
        phone=_text(resolve(row, "phone")),
        gender=_text(resolve(row, "gender")).lower(),
        department=_text(resolve(row, "department")),
        batch=_batch(resolve(row, "batch"), opts),
        roll_number=_text(resolve(row, "roll_number")),
        cgpa=_score(resolve(row, "cgpa"), opts),
        backlogs=Backlogs(
            active=_count(resolve(row, "active_backlogs")),
            history=_count(resolve(row, "backlog_history")),
        ),
        skills=split_skills(resolve(row, "skills")),
        education=Education(
            tenth=Score(percentage=_score(resolve(row, "tenth_percentage"), opts)),
            twelfth=Score(percentage=_score(resolve(row, "twelfth_percentage"), opts)),
        ),
    )


def normalize_rows(
    rows: Sequence[RawRow], options: ValidationOptions | None = None
) -> list[NormalizedStudent]:
    return [normalize_row(row, options) for row in rows]
