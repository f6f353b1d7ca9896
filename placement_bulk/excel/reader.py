from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

"""Spreadsheet decoder for student uploads.

- Accepts .xlsx / .xls (first sheet only) and .csv, checked by extension
  before anything is read.
- Row 1 is the header; each later row becomes a dict keyed by header label.
  Cells beyond the header width have no label and are dropped.
- CSV is read as utf-8 (BOM optional), falling back to cp1252 for Excel exports.
- Empty cells are left out of the row dict instead of being stored as None,
  and completely blank rows are skipped.
- Any failure to read the bytes is a ParseError and no rows are returned.
"""

__all__ = [
    "ALLOWED_EXTENSIONS",
    "ParseError",
    "UnsupportedFileError",
    "SheetHeaderError",
    "SheetData",
    "check_extension",
    "read_upload_file",
    "normalize_sheet",
    "decode_upload",
]

ALLOWED_EXTENSIONS = {".xlsx", ".xls", ".csv"}
CSV_SHEET_NAME = "csv"
CSV_ENCODINGS = ("utf-8-sig", "cp1252")


class ParseError(Exception):
    """Raised when an uploaded file cannot be decoded as a spreadsheet."""


class UnsupportedFileError(ParseError):
    """Raised when the file extension is not .xlsx, .xls or .csv."""


class SheetHeaderError(ParseError):
    """Raised when the sheet has no header row."""


@dataclass
class SheetData:
    sheet_name: str
    columns: list[str]
    rows: list[dict[str, Any]]  # header label -> stripped cell value


def check_extension(path: Path) -> str:
    ext = path.suffix.lower()
    if ext not in ALLOWED_EXTENSIONS:
        raise UnsupportedFileError(
            f"unsupported file type '{path.suffix or path.name}': "
            "please upload an Excel file (.xlsx, .xls) or CSV"
        )
    return ext


def _na_options(keep_na_strings: list[str] | None) -> tuple[bool, list[str] | None]:
    # pandas turns "NA", "null", "N/A"... into NaN by default. Strings listed in
    # keep_na_strings (a surname "NA", say) are removed from that set.
    import pandas._libs.parsers as parsers

    if keep_na_strings:
        custom_na = parsers.STR_NA_VALUES - set(keep_na_strings)
        return False, list(custom_na)
    return True, None


def _read_csv_as(
    path: Path, encoding: str, keep_default_na: bool, na_values: list[str] | None
) -> pd.DataFrame:
    options: dict[str, Any] = {
        "header": None,
        "dtype": str,
        "keep_default_na": keep_default_na,
        "na_values": na_values,
        "skip_blank_lines": True,
        "encoding": encoding,
        "engine": "python",
    }
    width = pd.read_csv(path, nrows=1, **options).shape[1]
    # cells past the header width have no label and would be dropped anyway
    return pd.read_csv(path, on_bad_lines=lambda bad: bad[:width], **options)


def _read_csv(
    path: Path, keep_default_na: bool, na_values: list[str] | None
) -> pd.DataFrame:
    # Excel's "CSV (Comma delimited)" export is cp1252, not utf-8
    for encoding in CSV_ENCODINGS[:-1]:
        try:
            return _read_csv_as(path, encoding, keep_default_na, na_values)
        except UnicodeDecodeError:
            continue
    return _read_csv_as(path, CSV_ENCODINGS[-1], keep_default_na, na_values)


def read_upload_file(
    path: Path, keep_na_strings: list[str] | None = None
) -> tuple[str, pd.DataFrame]:
    """Read the raw table of an upload, returning ``(sheet_name, frame)``.

    Every cell is read as a string (or NaN when empty); no header is applied.
    """
    ext = check_extension(path)
    keep_default_na, na_values = _na_options(keep_na_strings)
    try:
        if ext == ".csv":
            return CSV_SHEET_NAME, _read_csv(path, keep_default_na, na_values)
        with pd.ExcelFile(path) as xls:
            if not xls.sheet_names:
                raise SheetHeaderError(f"workbook '{path.name}' has no sheets")
            name = str(xls.sheet_names[0])
            df = xls.parse(
                xls.sheet_names[0],
                header=None,
                dtype=str,
                keep_default_na=keep_default_na,
                na_values=na_values,
            )
            return name, df
    except ParseError:
        raise
    except Exception as e:
        raise ParseError(f"failed to parse '{path.name}': {e}") from e


def _header_labels(values: list[Any]) -> list[str | None]:
    labels: list[str | None] = []
    seen: dict[str, int] = {}
    for v in values:
        if pd.isna(v) or str(v).strip() == "":
            labels.append(None)
            continue
        label = str(v).strip()
        if label in seen:
            seen[label] += 1
            label = f"{label}_{seen[label]}"
        else:
            seen[label] = 0
        labels.append(label)
    return labels


def normalize_sheet(df: pd.DataFrame, sheet_name: str) -> SheetData:
    """Apply the first row as header and build one dict per data row.

    Columns with a blank header are dropped. Repeated header labels get a
    ``_1``, ``_2`` suffix so no cell is silently overwritten.
    """
    if df.shape[0] < 1:
        raise SheetHeaderError(f"sheet '{sheet_name}' has no header row")
    labels = _header_labels(df.iloc[0].tolist())
    if all(label is None for label in labels):
        raise SheetHeaderError(f"sheet '{sheet_name}' header row is empty")
    columns = [label for label in labels if label is not None]

    rows: list[dict[str, Any]] = []
    for _, raw in df.iloc[1:].iterrows():
        row_dict: dict[str, Any] = {}
        for label, val in zip(labels, raw.tolist(), strict=False):
            if label is None or pd.isna(val):
                continue
            if isinstance(val, str):
                val = val.strip()
                if val == "":
                    continue
            row_dict[label] = val
        if not row_dict:
            continue
        rows.append(row_dict)

    return SheetData(sheet_name=sheet_name, columns=columns, rows=rows)


def decode_upload(path: Path, keep_na_strings: list[str] | None = None) -> SheetData:
    """Decode an uploaded spreadsheet into header-keyed rows."""
    sheet_name, df = read_upload_file(path, keep_na_strings=keep_na_strings)
    return normalize_sheet(df, sheet_name)
