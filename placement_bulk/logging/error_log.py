from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path

"""Structured error log (JSON Lines) for upload runs.

Each run that hits a problem writes ``<logs_dir>/errors-YYYYMMDD-HHMMSS.log``
(UTC). One line per record, fixed key set:

    {"timestamp", "file", "row", "error_type", "message"}

``row`` is the spreadsheet line number (header is line 1), or -1 when the
problem concerns the whole file (parse failure, rejected submission).
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
    "VALIDATION_FAILED",
    "PARSE_FAILED",
    "SUBMISSION_FAILED",
    "ROW_REJECTED",
]

DEFAULT_LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"

VALIDATION_FAILED = "VALIDATION_FAILED"
PARSE_FAILED = "PARSE_FAILED"
SUBMISSION_FAILED = "SUBMISSION_FAILED"
ROW_REJECTED = "ROW_REJECTED"


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: uploaded file name
        row: spreadsheet line number, -1 for file-level errors
        error_type: error classification in UPPER_SNAKE_CASE
        message: human readable description
    """
    timestamp: str
    file: str
    row: int
    error_type: str
    message: str

    @staticmethod
    def create(file: str, row: int, error_type: str, message: str) -> ErrorRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            row=row,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)


class ErrorLogBuffer:
    """In-memory buffer for error records. ``flush()`` appends JSON Lines.

    The file path is decided on first access and reused for the rest of the
    run, so several flushes land in the same file.
    """

    def __init__(self, logs_dir: Path | None = None) -> None:
        self._logs_dir = logs_dir if logs_dir is not None else DEFAULT_LOGS_DIR
        self._records: list[ErrorRecord] = []
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"errors-{stamp}.log"
        return self._file_path

    def append(self, record: ErrorRecord) -> None:
        self._records.append(record)

    def __len__(self) -> int:  # pragma: no cover (trivial)
        return len(self._records)

    def flush(self) -> Path | None:
        """Write buffered records; returns the log path, or None when empty."""
        if not self._records:
            return None
        fp = self.file_path
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
