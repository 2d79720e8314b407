"""Value types consumed and produced by the grading engine."""

from dataclasses import dataclass
from enum import Enum

from ..config import GRADING_SCALE


class Grade(str, Enum):
    """Letter grade on the 5-point scale."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    F = "F"

    def __str__(self) -> str:
        return self.value


class DegreeClass(str, Enum):
    """Class of degree awarded for a CGPA."""

    FIRST_CLASS = "First Class Honours"
    SECOND_CLASS_UPPER = "Second Class Upper"
    SECOND_CLASS_LOWER = "Second Class Lower"
    THIRD_CLASS = "Third Class"
    PASS = "Pass"
    FAIL = "Fail"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class GradeBand:
    """A score sub-range mapped to one letter grade and point value."""

    min_score: int
    max_score: int
    grade: Grade
    point: int

    def contains(self, score: int) -> bool:
        return self.min_score <= score <= self.max_score


@dataclass(frozen=True)
class ScoredCourse:
    """One completed course's contribution to a GPA."""

    grade_point: int
    course_unit: int


@dataclass(frozen=True)
class SemesterAggregate:
    """Pre-summed totals of one semester, folded into a CGPA."""

    total_units: int
    total_points: int


@dataclass(frozen=True)
class GPAResult:
    gpa: float
    total_units: int
    total_points: int

    def to_aggregate(self) -> SemesterAggregate:
        return SemesterAggregate(total_units=self.total_units, total_points=self.total_points)


@dataclass(frozen=True)
class CGPAResult:
    cgpa: float
    total_units: int
    total_points: int


GRADE_BANDS: tuple[GradeBand, ...] = tuple(
    GradeBand(
        min_score=band["min_score"],
        max_score=band["max_score"],
        grade=Grade(band["grade"]),
        point=band["point"],
    )
    for band in GRADING_SCALE
)
