from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .student import NormalizedStudent
from .validation import RowValidationError

"""ParsedUpload: the state held between decoding a file and submitting it."""

__all__ = [
    "ParsedUpload",
]


@dataclass(frozen=True)
class ParsedUpload:
    """One decoded, validated and normalized spreadsheet.

    ``students`` always has one entry per raw row, whether or not the row
    failed validation.
    """
    file_name: str
    sheet_name: str
    columns: list[str]
    rows: list[dict[str, Any]] = field(default_factory=list)
    students: list[NormalizedStudent] = field(default_factory=list)
    errors: list[RowValidationError] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)
