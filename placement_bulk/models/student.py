from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

"""NormalizedStudent: the canonical student record sent to the college API.

Attribute names are snake_case; ``to_payload()`` produces the camelCase JSON
shape the API expects. Optional scores that are None are left out of the
payload entirely rather than sent as null.
"""

__all__ = [
    "StudentName",
    "Backlogs",
    "Score",
    "Education",
    "NormalizedStudent",
]


@dataclass(frozen=True)
class StudentName:
    first_name: str = ""
    last_name: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class Backlogs:
    active: int = 0
    history: int = 0


@dataclass(frozen=True)
class Score:
    percentage: float | None = None

    def to_payload(self) -> dict[str, Any]:
        if self.percentage is None:
            return {}
        return {"percentage": self.percentage}


@dataclass(frozen=True)
class Education:
    tenth: Score = field(default_factory=Score)
    twelfth: Score = field(default_factory=Score)


@dataclass(frozen=True)
class NormalizedStudent:
    """One student row after normalization, ready for the bulk endpoint."""
    name: StudentName
    email: str
    phone: str
    gender: str  # lowercased
    department: str
    batch: int
    roll_number: str
    cgpa: float | None = None
    backlogs: Backlogs = field(default_factory=Backlogs)
    skills: tuple[str, ...] = ()
    education: Education = field(default_factory=Education)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": {
                "firstName": self.name.first_name,
                "lastName": self.name.last_name,
            },
            "email": self.email,
            "phone": self.phone,
            "gender": self.gender,
            "department": self.department,
            "batch": self.batch,
            "rollNumber": self.roll_number,
        }
        if self.cgpa is not None:
            payload["cgpa"] = self.cgpa
        payload["backlogs"] = {
            "active": self.backlogs.active,
            "history": self.backlogs.history,
        }
        payload["skills"] = list(self.skills)
        payload["education"] = {
            "tenth": self.education.tenth.to_payload(),
            "twelfth": self.education.twelfth.to_payload(),
        }
        return payload
