"""Report cards whose grade may be numeric or alphabetical."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

G = TypeVar("G")


def _format_grade(grade: object) -> str:
    if isinstance(grade, float) and grade.is_integer():
        return str(int(grade))
    return str(grade)


@dataclass
class ReportCard(Generic[G]):
    """A student's grade, name and age."""

    grade: G
    student_name: str
    student_age: int

    def render(self) -> str:
        """One-line summary of the report card."""
        return (
            f"{self.student_name} ({self.student_age}) - achieved a grade of "
            f"{_format_grade(self.grade)}"
        )