"""Grade, GPA and CGPA calculation logic."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from ..config import (
    DEGREE_CLASS_THRESHOLDS,
    FAILING_DEGREE_CLASS,
    GPA_DECIMAL_PLACES,
    MAX_SCORE,
    MIN_SCORE,
)
from ..exceptions import ScoreRangeError
from .models import (
    CGPAResult,
    DegreeClass,
    GPAResult,
    GRADE_BANDS,
    Grade,
    ScoredCourse,
    SemesterAggregate,
)

_QUANTUM = Decimal(1).scaleb(-GPA_DECIMAL_PLACES)


def score_to_grade(score: int) -> Grade:
    """
    Convert a score to its letter grade.

    Args:
        score: Score between 0 and 100 inclusive.

    Returns:
        Grade of the first band containing the score.

    Raises:
        ScoreRangeError: If score is outside 0-100.
    """
    if score < MIN_SCORE or score > MAX_SCORE:
        raise ScoreRangeError(
            f"Score must be between {MIN_SCORE} and {MAX_SCORE} (got {score})",
            error_code="score_out_of_range",
            details={"score": score},
        )

    for band in GRADE_BANDS:
        if band.contains(score):
            return band.grade
    return Grade.F  # Unreachable while the bands cover 0-100


def grade_to_point(grade: Grade | str) -> int:
    """Get grade point for a grade letter. Unknown letters are worth 0."""
    if isinstance(grade, Grade):
        letter = grade.value
    elif isinstance(grade, str):
        letter = grade.strip().upper()
    else:
        return 0

    for band in GRADE_BANDS:
        if band.grade.value == letter:
            return band.point
    return 0


def score_to_point(score: int) -> int:
    """Convert a score directly to its grade point."""
    return grade_to_point(score_to_grade(score))


def calculate_pxu(grade_point: int, course_unit: int) -> int:
    """Point x Unit: a course's weighted contribution."""
    return grade_point * course_unit


def calculate_gpa(courses: Iterable[ScoredCourse]) -> GPAResult:
    """
    Calculate the unit-weighted GPA of a set of courses.

    GPA = sum(point x unit) / sum(unit), rounded half-up to 2 places.
    No courses (or zero total units) gives a zero result rather than an error.
    """
    total_units = 0
    total_points = 0
    for course in courses:
        total_units += course.course_unit
        total_points += calculate_pxu(course.grade_point, course.course_unit)

    if total_units == 0:
        return GPAResult(gpa=0.0, total_units=0, total_points=0)

    return GPAResult(
        gpa=_weighted_average(total_points, total_units),
        total_units=total_units,
        total_points=total_points,
    )


def calculate_cgpa(semesters: Iterable[SemesterAggregate]) -> CGPAResult:
    """
    Calculate CGPA by folding per-semester totals.

    Semesters can be added incrementally without revisiting their courses.
    """
    total_units = 0
    total_points = 0
    for semester in semesters:
        total_units += semester.total_units
        total_points += semester.total_points

    if total_units == 0:
        return CGPAResult(cgpa=0.0, total_units=0, total_points=0)

    return CGPAResult(
        cgpa=_weighted_average(total_points, total_units),
        total_units=total_units,
        total_points=total_points,
    )


def get_class_of_degree(cgpa: float) -> DegreeClass:
    """Get class of degree from CGPA."""
    for threshold, label in DEGREE_CLASS_THRESHOLDS:
        if cgpa >= threshold:
            return DegreeClass(label)
    return DegreeClass(FAILING_DEGREE_CLASS)


def _weighted_average(total_points: int, total_units: int) -> float:
    average = Decimal(total_points) / Decimal(total_units)
    return float(average.quantize(_QUANTUM, rounding=ROUND_HALF_UP))
