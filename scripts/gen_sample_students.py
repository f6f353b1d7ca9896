#!/usr/bin/env python3
"""Sample upload generator for manual and performance testing.

Writes a spreadsheet in the upload template layout (row 1 header, one student
per row) with a configurable share of rows that break a validation rule, so
the check/upload commands can be exercised on realistic volumes.

    python scripts/gen_sample_students.py --rows 5000 --invalid-ratio 0.02 -o data/students.xlsx
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd

from placement_bulk.services.template import TEMPLATE_HEADERS

FIRST_NAMES = ["Aarav", "Diya", "Ishaan", "Kavya", "Rohan", "Sneha", "Vikram", "Ananya", "Arjun", "Meera"]
LAST_NAMES = ["Sharma", "Iyer", "Reddy", "Patel", "Nair", "Das", "Khan", "Singh", "Rao", ""]
DEPARTMENTS = ["Computer Science", "Electronics", "Mechanical", "Civil", "Information Technology"]
SKILLS = ["Python", "Java", "SQL", "React", "C++", "AutoCAD", "MATLAB", "Docker", "Excel"]

# (column, bad value) pairs, one picked per invalid row
_BREAKAGES = [
    ("First Name", ""),
    ("Email", ""),
    ("Email", "not-an-email"),
    ("Department", ""),
    ("Roll Number", ""),
    ("CGPA", "11.5"),
]


def generate_students(rows: int, invalid_ratio: float = 0.0, seed: int = 42) -> pd.DataFrame:
    """Build a DataFrame of string cells in template column order.

    Roll numbers are unique (DEPT prefix + running number); the first
    ``round(rows * invalid_ratio)`` rows chosen at random get one breakage.
    """
    rng = np.random.default_rng(seed)
    firsts = rng.choice(FIRST_NAMES, rows)
    lasts = rng.choice(LAST_NAMES, rows)
    depts = rng.choice(DEPARTMENTS, rows)
    cgpas = np.round(rng.uniform(5.0, 10.0, rows), 2)
    tenths = np.round(rng.uniform(55.0, 99.0, rows), 1)
    twelfths = np.round(rng.uniform(55.0, 99.0, rows), 1)
    backlogs = rng.integers(0, 3, rows)
    batches = rng.integers(2023, 2027, rows)

    records: list[list[str]] = []
    for i in range(rows):
        skills = ", ".join(rng.choice(SKILLS, size=int(rng.integers(1, 4)), replace=False))
        prefix = "".join(word[0] for word in str(depts[i]).split()).upper()
        records.append([
            str(firsts[i]),
            str(lasts[i]),
            f"{str(firsts[i]).lower()}.{i}@college.edu",
            str(9000000000 + i),
            "female" if i % 2 else "male",
            str(depts[i]),
            str(batches[i]),
            f"{prefix}{i:05d}",
            f"{cgpas[i]}",
            str(backlogs[i]),
            f"{tenths[i]}",
            f"{twelfths[i]}",
            skills,
        ])

    df = pd.DataFrame(records, columns=TEMPLATE_HEADERS)
    n_invalid = round(rows * invalid_ratio)
    if n_invalid:
        picked = rng.choice(rows, size=n_invalid, replace=False)
        for j, idx in enumerate(sorted(picked)):
            column, value = _BREAKAGES[j % len(_BREAKAGES)]
            df.at[idx, column] = value
    return df


def write_students(df: pd.DataFrame, output: Path) -> Path:
    output.parent.mkdir(parents=True, exist_ok=True)
    if output.suffix.lower() == ".csv":
        df.to_csv(output, index=False)
    else:
        df.to_excel(output, sheet_name="Students", index=False, engine="openpyxl")
    return output


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Generate a sample student upload file")
    p.add_argument("--rows", type=int, default=1000)
    p.add_argument("--invalid-ratio", type=float, default=0.0)
    p.add_argument("--seed", type=int, default=42)
    p.add_argument("-o", "--output", type=Path, default=Path("data/sample_students.xlsx"))
    args = p.parse_args(argv)

    if args.rows < 1 or not 0.0 <= args.invalid_ratio <= 1.0:
        print("rows must be >= 1 and invalid-ratio within [0, 1]", file=sys.stderr)
        return 1
    path = write_students(generate_students(args.rows, args.invalid_ratio, args.seed), args.output)
    print(f"wrote {args.rows} students to {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
