from __future__ import annotations

import logging
from pathlib import Path

from ..excel.reader import decode_upload
from ..logging.error_log import VALIDATION_FAILED, ErrorLogBuffer, ErrorRecord
from ..models.parsed_upload import ParsedUpload
from ..models.validation import RowValidationError, ValidationOptions
from .normalizer import normalize_row
from .progress import RowProgress
from .validator import validate_row

"""Decode -> validate + normalize for one uploaded file.

Validation and normalization are independent passes over the same row: a row
with errors still produces a NormalizedStudent, so ``students`` always lines
up one-to-one with the decoded rows.
"""

__all__ = [
    "prepare_upload",
]

logger = logging.getLogger(__name__)


def prepare_upload(
    path: Path,
    options: ValidationOptions | None = None,
    *,
    keep_na_strings: list[str] | None = None,
    error_log: ErrorLogBuffer | None = None,
) -> ParsedUpload:
    """Decode ``path`` and run the row checks.

    ParseError (and its subclasses) propagate; the caller reports them.
    Validation errors are returned in the ParsedUpload and, when an
    ``error_log`` is given, appended to it as VALIDATION_FAILED records.
    """
    opts = options or ValidationOptions()
    sheet = decode_upload(path, keep_na_strings=keep_na_strings)
    logger.debug(f"decoded '{path.name}' sheet={sheet.sheet_name} columns={sheet.columns}")

    students = []
    errors: list[RowValidationError] = []
    with RowProgress(len(sheet.rows)) as progress:
        for index, row in enumerate(sheet.rows):
            messages = validate_row(row, opts)
            if messages:
                errors.append(RowValidationError.for_index(index, messages))
            students.append(normalize_row(row, opts))
            progress.advance(errors=len(errors))

    if error_log is not None:
        for err in errors:
            error_log.append(
                ErrorRecord.create(path.name, err.row, VALIDATION_FAILED, "; ".join(err.errors))
            )

    if errors:
        logger.warning(f"Found {len(errors)} errors in the data")
    elif students:
        logger.info(f"Parsed {len(students)} students successfully")
    else:
        logger.warning(f"no student rows found in '{path.name}'")

    return ParsedUpload(
        file_name=path.name,
        sheet_name=sheet.sheet_name,
        columns=sheet.columns,
        rows=sheet.rows,
        students=students,
        errors=errors,
    )
