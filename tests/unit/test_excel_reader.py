from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from placement_bulk.excel.reader import (
    ParseError,
    SheetHeaderError,
    UnsupportedFileError,
    check_extension,
    decode_upload,
    normalize_sheet,
    read_upload_file,
)
from tests.helpers import make_excel


def test_decode_xlsx_first_sheet_only(temp_workdir: Path):
    excel = make_excel(
        temp_workdir / "students.xlsx",
        {
            "Batch2024": [
                ["First Name", "Email", "CGPA"],
                ["Asha", "asha@x.com", 8.5],
                ["Ravi", "ravi@x.com", 7],
            ],
            "Other": [["First Name"], ["Ignored"]],
        },
    )
    sheet = decode_upload(excel)
    assert sheet.sheet_name == "Batch2024"
    assert sheet.columns == ["First Name", "Email", "CGPA"]
    assert sheet.rows == [
        {"First Name": "Asha", "Email": "asha@x.com", "CGPA": "8.5"},
        {"First Name": "Ravi", "Email": "ravi@x.com", "CGPA": "7"},
    ]


def test_missing_cells_are_absent_not_errors(temp_workdir: Path):
    excel = make_excel(
        temp_workdir / "ragged.xlsx",
        {"S": [["First Name", "Email", "Skills"], ["Asha", None, None], [None, "b@x.com", "  "]]},
    )
    sheet = decode_upload(excel)
    assert sheet.rows == [{"First Name": "Asha"}, {"Email": "b@x.com"}]


def test_blank_rows_are_skipped(temp_workdir: Path):
    excel = make_excel(
        temp_workdir / "blank.xlsx",
        {"S": [["First Name"], ["A"], [None], ["B"]]},
    )
    assert [r["First Name"] for r in decode_upload(excel).rows] == ["A", "B"]


def test_decode_csv_with_short_rows(temp_workdir: Path):
    csv = temp_workdir / "students.csv"
    csv.write_text("First Name,Email,Skills\n Asha ,asha@x.com,\"Python, SQL\"\nRavi\n\n", encoding="utf-8")
    sheet = decode_upload(csv)
    assert sheet.sheet_name == "csv"
    assert sheet.rows == [
        {"First Name": "Asha", "Email": "asha@x.com", "Skills": "Python, SQL"},
        {"First Name": "Ravi"},
    ]


def test_csv_keeps_leading_zeros_and_long_numbers(temp_workdir: Path):
    csv = temp_workdir / "ids.csv"
    csv.write_text("Roll Number,Phone\n007,9876543210\n", encoding="utf-8")
    assert decode_upload(csv).rows == [{"Roll Number": "007", "Phone": "9876543210"}]


def test_keep_na_strings(temp_workdir: Path):
    csv = temp_workdir / "na.csv"
    csv.write_text("First Name,Last Name\nKiran,NA\n", encoding="utf-8")
    assert decode_upload(csv).rows == [{"First Name": "Kiran"}]
    assert decode_upload(csv, keep_na_strings=["NA"]).rows == [{"First Name": "Kiran", "Last Name": "NA"}]


def test_header_only_file_has_no_rows(temp_workdir: Path):
    csv = temp_workdir / "empty_body.csv"
    csv.write_text("First Name,Email\n", encoding="utf-8")
    sheet = decode_upload(csv)
    assert sheet.columns == ["First Name", "Email"]
    assert sheet.rows == []


def test_blank_and_duplicate_headers():
    df = pd.DataFrame([["Email", None, "Email"], ["a@x.com", "dropped", "b@x.com"]])
    sheet = normalize_sheet(df, "S")
    assert sheet.columns == ["Email", "Email_1"]
    assert sheet.rows == [{"Email": "a@x.com", "Email_1": "b@x.com"}]


def test_no_header_row():
    with pytest.raises(SheetHeaderError):
        normalize_sheet(pd.DataFrame(), "Empty")


def test_empty_csv_is_parse_error(temp_workdir: Path):
    csv = temp_workdir / "empty.csv"
    csv.write_bytes(b"")
    with pytest.raises(ParseError):
        decode_upload(csv)


def test_garbage_xlsx_is_parse_error(temp_workdir: Path):
    bad = temp_workdir / "bad.xlsx"
    bad.write_bytes(b"this is not a workbook")
    with pytest.raises(ParseError) as e:
        read_upload_file(bad)
    assert "bad.xlsx" in str(e.value)


def test_csv_cells_past_header_are_dropped(temp_workdir: Path):
    csv = temp_workdir / "wide.csv"
    csv.write_text(
        "First Name,Email,Department,Roll Number\n"
        "A,a@x.com,CS,1\n"
        "B,b@x.com,CS,2,\n"
        "C,c@x.com,CS,3,extra,more\n",
        encoding="utf-8",
    )
    sheet = decode_upload(csv)
    assert sheet.columns == ["First Name", "Email", "Department", "Roll Number"]
    assert [r["Roll Number"] for r in sheet.rows] == ["1", "2", "3"]
    assert all(len(r) == 4 for r in sheet.rows)


def test_csv_short_rows_keep_present_cells(temp_workdir: Path):
    csv = temp_workdir / "short.csv"
    csv.write_text("First Name,Email,Department\nA\n", encoding="utf-8")
    assert decode_upload(csv).rows == [{"First Name": "A"}]


def test_cp1252_csv_from_excel_is_decoded(temp_workdir: Path):
    csv = temp_workdir / "windows.csv"
    csv.write_bytes("First Name,Email,Department,Roll Number\r\nJos\u00e9,j@x.com,CS,1\r\n".encode("cp1252"))
    (row,) = decode_upload(csv).rows
    assert row["First Name"] == "Jos\u00e9"


def test_utf8_bom_csv_is_decoded(temp_workdir: Path):
    csv = temp_workdir / "bom.csv"
    csv.write_bytes("First Name,Email\nZo\u00eb,z@x.com\n".encode("utf-8-sig"))
    sheet = decode_upload(csv)
    assert sheet.columns == ["First Name", "Email"]
    assert sheet.rows[0]["First Name"] == "Zo\u00eb"


def test_extension_checked_before_reading(temp_workdir: Path):
    missing = temp_workdir / "students.pdf"  # never created
    with pytest.raises(UnsupportedFileError):
        decode_upload(missing)


def test_check_extension_case_insensitive():
    assert check_extension(Path("A.XLSX")) == ".xlsx"
    assert check_extension(Path("a.csv")) == ".csv"
    assert check_extension(Path("a.xls")) == ".xls"
    with pytest.raises(UnsupportedFileError):
        check_extension(Path("noext"))
