"""Pytest configuration and fixtures."""

import pytest

from gpa_processor.records import RecordService
from gpa_processor.utils import RecordStore


@pytest.fixture
def data_dir(tmp_path):
    """Return a temporary data directory."""
    return tmp_path / "gpa_data"


@pytest.fixture
def store(data_dir):
    """Create a RecordStore in a temporary directory."""
    return RecordStore(str(data_dir))


@pytest.fixture
def service(store):
    """Create a RecordService over an empty store."""
    return RecordService(store)


@pytest.fixture
def seeded(service):
    """
    Service with one department, student and two semesters of results.

    100/1: ITH101 (3 units, 75 -> A) and ITH103 (2 units, 62 -> B), GPA 4.60
    100/2: ITH102 (2 units, 55 -> C) and GST101 (2 units, 48 -> D), GPA 2.50
    CGPA 33/9 = 3.67
    """
    department = service.create_department("ITH", "Information Technology")
    student = service.create_student("2025/1111", "John Adebayo", department["id"])
    service.save_results([
        _entry(student, 100, 1, "ITH101", 3, 75),
        _entry(student, 100, 1, "ITH103", 2, 62),
        _entry(student, 100, 2, "ITH102", 2, 55),
        _entry(student, 100, 2, "GST101", 2, 48),
    ])
    return {"service": service, "department": department, "student": student}


def _entry(student, level, semester, course_code, course_unit, score):
    return {
        "student_id": student["id"],
        "level": level,
        "semester": semester,
        "course_code": course_code,
        "course_unit": course_unit,
        "score": score,
    }
