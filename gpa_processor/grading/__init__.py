"""Grading engine: grades, points, GPA, CGPA and class of degree."""

from .calculator import (
    calculate_cgpa,
    calculate_gpa,
    calculate_pxu,
    get_class_of_degree,
    grade_to_point,
    score_to_grade,
    score_to_point,
)
from .models import (
    CGPAResult,
    DegreeClass,
    GPAResult,
    GRADE_BANDS,
    Grade,
    GradeBand,
    ScoredCourse,
    SemesterAggregate,
)

__all__ = [
    "score_to_grade",
    "grade_to_point",
    "score_to_point",
    "calculate_pxu",
    "calculate_gpa",
    "calculate_cgpa",
    "get_class_of_degree",
    "Grade",
    "GradeBand",
    "GRADE_BANDS",
    "DegreeClass",
    "ScoredCourse",
    "SemesterAggregate",
    "GPAResult",
    "CGPAResult",
]
