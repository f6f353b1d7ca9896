from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

"""Result of a bulk submission, as reported by the college API.

The API answers ``{message, data: {success: [...], failed: [...]}}``. The tool
only displays this breakdown; it does not reinterpret it.
"""

__all__ = [
    "FailedEntry",
    "UploadResult",
]


@dataclass(frozen=True)
class FailedEntry:
    """A row the server refused."""
    name: str
    roll_number: str
    error: str

    @classmethod
    def from_dict(cls, data: Any) -> FailedEntry:
        if not isinstance(data, dict):
            # a bare message still counts as a rejected row
            return cls(name="", roll_number="", error=str(data))
        return cls(
            name=str(data.get("name") or ""),
            roll_number=str(data.get("rollNumber") or ""),
            error=str(data.get("error") or ""),
        )

    @property
    def label(self) -> str:
        return self.name or self.roll_number


@dataclass(frozen=True)
class UploadResult:
    message: str
    success: list[dict[str, Any]] = field(default_factory=list)
    failed: list[FailedEntry] = field(default_factory=list)

    @classmethod
    def from_response(cls, body: dict[str, Any]) -> UploadResult:
        data = body.get("data")
        if not isinstance(data, dict):
            data = {}
        success = data.get("success")
        failed = data.get("failed")
        return cls(
            message=str(body.get("message") or ""),
            success=list(success) if isinstance(success, list) else [],
            failed=[FailedEntry.from_dict(d) for d in failed] if isinstance(failed, list) else [],
        )

    @property
    def success_count(self) -> int:
        return len(self.success)

    @property
    def failed_count(self) -> int:
        return len(self.failed)
