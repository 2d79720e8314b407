"""Academic records: departments, courses, curriculum, students and results."""

import logging
import uuid
from typing import Any, Iterable

from ..config import MAX_SCORE, MIN_SCORE, STORAGE_KEYS, VALID_LEVELS, VALID_SEMESTERS
from ..exceptions import DuplicateRecordError, RecordNotFoundError, ScoreRangeError, ValidationError
from ..grading import (
    ScoredCourse,
    SemesterAggregate,
    calculate_cgpa,
    calculate_gpa,
    calculate_pxu,
    get_class_of_degree,
    score_to_grade,
    score_to_point,
)
from ..utils import RecordStore

logger = logging.getLogger(__name__)


def generate_id() -> str:
    """Generate a short unique record id."""
    return uuid.uuid4().hex[:12]


class RecordService:
    """
    Stores academic records and derives GPA figures from them.

    All persistence goes through a RecordStore; every figure is computed
    by the grading engine on demand and never cached.

    Usage:
        service = RecordService(RecordStore(".gpa_data"))
        dept = service.create_department("ITH", "Information Technology")
        student = service.create_student("2025/1111", "John Adebayo", dept["id"])
        service.save_results([...])
        transcript = service.get_student_cgpa(student["id"])
    """

    def __init__(self, store: RecordStore):
        self.store = store

    def _load(self, name: str) -> list[dict]:
        return self.store.get(STORAGE_KEYS[name], [])

    def _save(self, name: str, records: list[dict]) -> None:
        self.store.set(STORAGE_KEYS[name], records)

    # Departments

    def get_departments(self) -> list[dict]:
        return self._load("departments")

    def get_department(self, ref: str) -> dict | None:
        """Find a department by id or (case-insensitive) code."""
        for department in self.get_departments():
            if department["id"] == ref or department["code"].upper() == ref.upper():
                return department
        return None

    def create_department(self, code: str, name: str) -> dict:
        code = code.strip().upper()
        name = name.strip()
        if not code or not name:
            raise ValidationError("Department code and name are required")

        departments = self.get_departments()
        if any(d["code"].upper() == code for d in departments):
            raise DuplicateRecordError(
                f"Department with code {code} already exists",
                error_code="duplicate_department",
                details={"code": code},
            )

        department = {"id": generate_id(), "code": code, "name": name}
        departments.append(department)
        self._save("departments", departments)
        logger.info("Created department %s", code)
        return department

    # Courses

    def get_courses(self) -> list[dict]:
        return self._load("courses")

    def get_course(self, ref: str) -> dict | None:
        """Find a course by id or (case-insensitive) course code."""
        for course in self.get_courses():
            if course["id"] == ref or course["course_code"].upper() == ref.upper():
                return course
        return None

    def create_course(self, course_code: str, course_title: str, course_unit: int) -> dict:
        course_code = course_code.strip().upper()
        if not course_code:
            raise ValidationError("Course code is required")
        _validate_unit(course_unit, course_code)

        courses = self.get_courses()
        if any(c["course_code"].upper() == course_code for c in courses):
            raise DuplicateRecordError(
                f"Course {course_code} already exists",
                error_code="duplicate_course",
                details={"course_code": course_code},
            )

        course = {
            "id": generate_id(),
            "course_code": course_code,
            "course_title": course_title.strip(),
            "course_unit": course_unit,
        }
        courses.append(course)
        self._save("courses", courses)
        logger.info("Created course %s (%d units)", course_code, course_unit)
        return course

    # Curriculum

    def add_to_curriculum(self, department_id: str, level: int, semester: int, course_id: str) -> dict:
        """Map a course to a department, level and semester. Both accept an id or a code."""
        _validate_term(level, semester)
        department = self.get_department(department_id)
        if department is None:
            raise RecordNotFoundError(f"Department not found: {department_id}")
        course = self.get_course(course_id)
        if course is None:
            raise RecordNotFoundError(f"Course not found: {course_id}")
        department_id = department["id"]
        course_id = course["id"]

        curriculum = self._load("curriculum")
        for entry in curriculum:
            if (
                entry["department_id"] == department_id
                and entry["level"] == level
                and entry["semester"] == semester
                and entry["course_id"] == course_id
            ):
                return entry

        entry = {
            "id": generate_id(),
            "department_id": department_id,
            "level": level,
            "semester": semester,
            "course_id": course_id,
        }
        curriculum.append(entry)
        self._save("curriculum", curriculum)
        logger.info(
            "Added %s to %s curriculum (%d level, semester %d)",
            course["course_code"], department["code"], level, semester,
        )
        return entry

    def get_curriculum(self, department_id: str, level: int, semester: int) -> list[dict]:
        """Curriculum entries for a term, each joined with its course."""
        department = self.get_department(department_id)
        if department is None:
            return []

        courses = {c["id"]: c for c in self.get_courses()}
        entries = []
        for entry in self._load("curriculum"):
            if (
                entry["department_id"] != department["id"]
                or entry["level"] != level
                or entry["semester"] != semester
            ):
                continue
            course = courses.get(entry["course_id"])
            if course is None:
                logger.debug("Skipping curriculum entry %s with unknown course", entry["id"])
                continue
            entries.append({**entry, "course": course})
        return entries

    # Students

    def get_students(self, department_id: str | None = None) -> list[dict]:
        """Students (optionally of one department) joined with their department."""
        departments = {d["id"]: d for d in self.get_departments()}
        students = self._load("students")
        if department_id:
            department = self.get_department(department_id)
            wanted = department["id"] if department else department_id
            students = [s for s in students if s["department_id"] == wanted]
        return [{**s, "department": departments.get(s["department_id"])} for s in students]

    def get_student(self, ref: str) -> dict | None:
        """Find a student by id or matric number."""
        for student in self.get_students():
            if student["id"] == ref or student["matric_no"] == ref:
                return student
        return None

    def create_student(self, matric_no: str, full_name: str, department_id: str) -> dict:
        matric_no = matric_no.strip()
        full_name = full_name.strip()
        if not matric_no or not full_name:
            raise ValidationError("Matric number and full name are required")
        department = self.get_department(department_id)
        if department is None:
            raise RecordNotFoundError(f"Department not found: {department_id}")

        students = self._load("students")
        if any(s["matric_no"] == matric_no for s in students):
            raise DuplicateRecordError(
                "Student with this matric number already exists",
                error_code="duplicate_student",
                details={"matric_no": matric_no},
            )

        student = {
            "id": generate_id(),
            "matric_no": matric_no,
            "full_name": full_name,
            "department_id": department["id"],
        }
        students.append(student)
        self._save("students", students)
        logger.info("Created student %s", matric_no)
        return student

    # Results

    def save_results(self, entries: Iterable[dict]) -> list[dict]:
        """
        Save course results, deriving grade, grade point and PXU.

        Args:
            entries: Dicts with student_id, level, semester, course_code,
                course_unit and score.

        Returns:
            The saved result records.

        Raises:
            ScoreRangeError: If any score is outside 0-100. Nothing is saved.
        """
        entries = list(entries)
        for entry in entries:
            score = entry["score"]
            if score < MIN_SCORE or score > MAX_SCORE:
                raise ScoreRangeError(
                    f"Invalid score {score} for course {entry['course_code']}",
                    error_code="score_out_of_range",
                    details={"score": score, "course_code": entry["course_code"]},
                )
            _validate_unit(entry["course_unit"], entry["course_code"])
            _validate_term(entry["level"], entry["semester"])

        results = self._load("results")
        saved = []

        for entry in entries:
            grade_point = score_to_point(entry["score"])
            existing_index = _find_result(results, entry)

            result = {
                "id": results[existing_index]["id"] if existing_index is not None else generate_id(),
                "student_id": entry["student_id"],
                "level": entry["level"],
                "semester": entry["semester"],
                "course_code": entry["course_code"],
                "course_unit": entry["course_unit"],
                "score": entry["score"],
                "grade": score_to_grade(entry["score"]).value,
                "grade_point": grade_point,
                "pxu": calculate_pxu(grade_point, entry["course_unit"]),
            }

            if existing_index is not None:
                results[existing_index] = result
                logger.debug("Replaced result %s for %s", result["course_code"], result["student_id"])
            else:
                results.append(result)

            saved.append(result)

        self._save("results", results)
        logger.info("Saved %d results", len(saved))
        return saved

    def enter_scores(self, student_id: str, level: int, semester: int, scores: Iterable[dict]) -> list[dict]:
        """
        Save a term's scores for a student against their department's curriculum.

        Course units come from the course records. A course outside the
        curriculum, or a given course_unit that disagrees with the course
        record, rejects the whole batch.

        Args:
            student_id: Student id or matric number.
            level: Level, e.g. 100.
            semester: Semester (1 or 2).
            scores: Dicts with course_code, score and optionally course_unit.

        Returns:
            The saved result records.
        """
        _validate_term(level, semester)
        student = self.get_student(student_id)
        if student is None:
            raise RecordNotFoundError(f"Student not found: {student_id}")

        offered = {
            entry["course"]["course_code"].upper(): entry["course"]
            for entry in self.get_curriculum(student["department_id"], level, semester)
        }

        entries = []
        for row in scores:
            course_code = row["course_code"].strip().upper()
            course = offered.get(course_code)
            if course is None:
                raise ValidationError(
                    f"Course {course_code} is not in the curriculum for {level} level, semester {semester}",
                    error_code="course_not_in_curriculum",
                    details={"course_code": course_code, "level": level, "semester": semester},
                )

            course_unit = row.get("course_unit")
            if course_unit is not None and course_unit != course["course_unit"]:
                raise ValidationError(
                    f"Course {course_code} has {course['course_unit']} units (got {course_unit})",
                    error_code="course_unit_mismatch",
                    details={"course_code": course_code, "course_unit": course_unit},
                )

            entries.append({
                "student_id": student["id"],
                "level": level,
                "semester": semester,
                "course_code": course["course_code"],
                "course_unit": course["course_unit"],
                "score": row["score"],
            })

        return self.save_results(entries)

    def get_results(self, student_id: str, level: int, semester: int) -> list[dict]:
        return [
            r for r in self._load("results")
            if r["student_id"] == student_id and r["level"] == level and r["semester"] == semester
        ]

    # GPA / CGPA

    def get_student_gpa(
        self,
        student_id: str,
        level: int | None = None,
        semester: int | None = None,
    ) -> dict | None:
        """GPA over a student's results, optionally limited to a level and semester."""
        results = [r for r in self._load("results") if r["student_id"] == student_id]
        if level is not None:
            results = [r for r in results if r["level"] == level]
        if semester is not None:
            results = [r for r in results if r["semester"] == semester]

        if not results:
            return None

        gpa = calculate_gpa(_scored_courses(results))
        return {
            "student_id": student_id,
            "level": level or 0,
            "semester": semester or 0,
            "results": results,
            "total_units": gpa.total_units,
            "total_points": gpa.total_points,
            "gpa": gpa.gpa,
        }

    def get_student_cgpa(self, student_id: str) -> dict | None:
        """Per-semester GPAs folded into a CGPA, with class of degree."""
        student = self.get_student(student_id)
        if student is None:
            return None

        results = [r for r in self._load("results") if r["student_id"] == student["id"]]
        if not results:
            return None

        semester_gpas = []
        for (level, semester), semester_results in _group_by_term(results).items():
            gpa = calculate_gpa(_scored_courses(semester_results))
            semester_gpas.append({
                "student_id": student["id"],
                "level": level,
                "semester": semester,
                "results": semester_results,
                "total_units": gpa.total_units,
                "total_points": gpa.total_points,
                "gpa": gpa.gpa,
            })
        semester_gpas.sort(key=lambda s: (s["level"], s["semester"]))

        cgpa = calculate_cgpa(_semester_aggregates(semester_gpas))
        return {
            "student_id": student["id"],
            "student": student,
            "semester_gpas": semester_gpas,
            "total_units": cgpa.total_units,
            "total_points": cgpa.total_points,
            "cgpa": cgpa.cgpa,
            "class_of_degree": get_class_of_degree(cgpa.cgpa).value,
        }

    def get_department_report(self, department_id: str, level: int, semester: int) -> dict | None:
        """Semester GPA and overall CGPA of each student in a department."""
        department = self.get_department(department_id)
        if department is None:
            return None

        all_results = self._load("results")
        rows = []

        for student in self.get_students(department["id"]):
            student_results = [r for r in all_results if r["student_id"] == student["id"]]
            semester_results = [
                r for r in student_results if r["level"] == level and r["semester"] == semester
            ]
            if not semester_results:
                continue

            gpa = calculate_gpa(_scored_courses(semester_results))
            terms = _group_by_term(student_results).values()
            cgpa = calculate_cgpa(
                calculate_gpa(_scored_courses(term)).to_aggregate() for term in terms
            )
            rows.append({
                "student": student,
                "total_units": gpa.total_units,
                "total_points": gpa.total_points,
                "gpa": gpa.gpa,
                "cgpa": cgpa.cgpa,
                "class_of_degree": get_class_of_degree(cgpa.cgpa).value,
                "results": semester_results,
            })

        return {
            "department": department,
            "level": level,
            "semester": semester,
            "students": rows,
        }

    def clear_all_data(self) -> None:
        for key in STORAGE_KEYS.values():
            self.store.delete(key)
        logger.info("Cleared all academic records")


def _validate_unit(course_unit: Any, course_code: str) -> None:
    if isinstance(course_unit, bool) or not isinstance(course_unit, int) or course_unit <= 0:
        raise ValidationError(
            f"Course unit must be a positive integer for {course_code} (got {course_unit})",
            error_code="invalid_course_unit",
            details={"course_code": course_code, "course_unit": course_unit},
        )


def _validate_term(level: int, semester: int) -> None:
    if level not in VALID_LEVELS:
        raise ValidationError(f"Invalid level {level}. Expected one of {list(VALID_LEVELS)}")
    if semester not in VALID_SEMESTERS:
        raise ValidationError(f"Invalid semester {semester}. Expected one of {list(VALID_SEMESTERS)}")


def _find_result(results: list[dict], entry: dict) -> int | None:
    """Index of the stored result for the same student, term and course."""
    for index, result in enumerate(results):
        if (
            result["student_id"] == entry["student_id"]
            and result["level"] == entry["level"]
            and result["semester"] == entry["semester"]
            and result["course_code"] == entry["course_code"]
        ):
            return index
    return None


def _scored_courses(results: list[dict]) -> list[ScoredCourse]:
    return [ScoredCourse(grade_point=r["grade_point"], course_unit=r["course_unit"]) for r in results]


def _semester_aggregates(semester_gpas: list[dict]) -> list[SemesterAggregate]:
    return [
        SemesterAggregate(total_units=s["total_units"], total_points=s["total_points"])
        for s in semester_gpas
    ]


def _group_by_term(results: list[dict]) -> dict[tuple[int, int], list[dict]]:
    groups: dict[tuple[int, int], list[dict]] = {}
    for result in results:
        groups.setdefault((result["level"], result["semester"]), []).append(result)
    return groups
