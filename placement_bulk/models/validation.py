from __future__ import annotations

from dataclasses import dataclass
from typing import Any

"""Row-level validation results.

A ``RowValidationError`` is data, not an exception: the validator returns a
list of them and the upload continues to the normalizer regardless.
"""

__all__ = [
    "RowValidationError",
    "ValidationOptions",
    "HEADER_OFFSET",
]

# data index 0 is spreadsheet line 2 (line 1 holds the header)
HEADER_OFFSET = 2


@dataclass(frozen=True)
class RowValidationError:
    """All failed checks for one row.

    Attributes:
        row: spreadsheet line number (data index + 2)
        errors: messages in rule order
    """
    row: int
    errors: tuple[str, ...]

    @classmethod
    def for_index(cls, index: int, errors: list[str]) -> RowValidationError:
        return cls(row=index + HEADER_OFFSET, errors=tuple(errors))

    def to_dict(self) -> dict[str, Any]:
        return {"row": self.row, "errors": list(self.errors)}

    def describe(self) -> str:
        return f"Row {self.row}: {', '.join(self.errors)}"


@dataclass(frozen=True)
class ValidationOptions:
    """Knobs shared by the validator and the normalizer.

    strict_zero_scores: when False (legacy portal behaviour) a CGPA or
        percentage that parses to 0 is treated as missing; when True it is a
        real value, range-checked and kept.
    default_batch: batch year used when the cell is missing or not a number;
        None means the current calendar year.
    """
    strict_zero_scores: bool = False
    default_batch: int | None = None
