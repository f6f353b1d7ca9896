from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Progress display with tqdm (TTY only).

Large uploads take a moment to validate and normalize; on a terminal a single
progress bar counts the rows. In non-TTY output (CI, redirected logs) the bar
is disabled so no control sequences end up in the log.
"""

__all__ = [
    "RowProgress",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class RowProgress:
    """Row counter for the validate/normalize pass."""

    def __init__(self, total_rows: int, *, description: str = "Checking rows") -> None:
        self.total_rows = total_rows
        self.description = description
        self.done = 0

        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total_rows,
                desc=description,
                unit="row",
                leave=False,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def advance(self, errors: int = 0) -> None:
        self.done += 1
        if self.pbar is not None:
            self.pbar.update(1)
            if errors:
                self.pbar.set_postfix(errors=errors)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> RowProgress:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
