"""CLI entry point for GPA Processor."""

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from .config import DATA_DIR, VALID_LEVELS, VALID_SEMESTERS
from .exceptions import GPAProcessorError
from .grading import (
    ScoredCourse,
    SemesterAggregate,
    calculate_cgpa,
    calculate_gpa,
    get_class_of_degree,
    score_to_grade,
    score_to_point,
)
from .output import (
    export_report_to_csv,
    export_results_to_csv,
    format_curriculum,
    format_department_report,
    format_gpa,
    format_grade,
    format_json,
    format_transcript,
    read_score_entries,
)
from .records import RecordService
from .utils import RecordStore

app = typer.Typer(
    name="gpa-processor",
    help="Compute grades, GPA, CGPA and class of degree from course scores.",
    add_completion=False,
)
console = Console()

OUTPUT_FORMATS = ("table", "json")

DATA_DIR_OPTION = typer.Option(
    DATA_DIR,
    "--data-dir",
    "-d",
    help="Directory holding the record files",
)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging",
    ),
) -> None:
    """Compute grades, GPA, CGPA and class of degree from course scores."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def parse_pair(value: str, names: tuple[str, str]) -> tuple[int, int]:
    """Parse 'X:Y' into two integers. Raises typer.BadParameter when malformed."""
    parts = value.split(":")
    if len(parts) != 2:
        raise typer.BadParameter(f"Expected {names[0]}:{names[1]}, got {value!r}")
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        raise typer.BadParameter(f"Expected whole numbers in {value!r}") from None


def _service(data_dir: str) -> RecordService:
    return RecordService(RecordStore(data_dir))


def _fail(message: str) -> None:
    console.print(f"[red]{message}[/red]")
    raise typer.Exit(1)


def _check_format(output_format: str) -> None:
    if output_format not in OUTPUT_FORMATS:
        _fail(f"Invalid format: {output_format}. Use one of: {', '.join(OUTPUT_FORMATS)}")


def _check_term(level: Optional[int], semester: Optional[int]) -> None:
    if level is not None and level not in VALID_LEVELS:
        _fail(f"Invalid level {level}. Expected one of: {', '.join(map(str, VALID_LEVELS))}")
    if semester is not None and semester not in VALID_SEMESTERS:
        _fail(f"Invalid semester {semester}. Expected one of: {', '.join(map(str, VALID_SEMESTERS))}")


@app.command()
def grade(
    score: int = typer.Argument(..., help="Score between 0 and 100"),
) -> None:
    """Show the grade and grade point for a score."""
    try:
        letter = score_to_grade(score)
    except GPAProcessorError as e:
        _fail(e.message)
    format_grade(score, letter.value, score_to_point(score), console)


@app.command()
def gpa(
    courses: List[str] = typer.Option(
        ...,
        "--course",
        "-c",
        help="Course as POINT:UNIT, e.g. 5:3 (repeatable)",
    ),
) -> None:
    """Calculate GPA over ad-hoc courses."""
    scored = []
    for value in courses:
        point, unit = parse_pair(value, ("POINT", "UNIT"))
        scored.append(ScoredCourse(grade_point=point, course_unit=unit))

    result = calculate_gpa(scored)
    format_gpa(
        {"total_units": result.total_units, "total_points": result.total_points, "gpa": result.gpa},
        console,
    )


@app.command()
def cgpa(
    semesters: List[str] = typer.Option(
        ...,
        "--semester",
        "-s",
        help="Semester totals as UNITS:POINTS, e.g. 18:72 (repeatable)",
    ),
) -> None:
    """Calculate CGPA over per-semester totals."""
    aggregates = []
    for value in semesters:
        units, points = parse_pair(value, ("UNITS", "POINTS"))
        aggregates.append(SemesterAggregate(total_units=units, total_points=points))

    result = calculate_cgpa(aggregates)
    format_gpa(
        {
            "total_units": result.total_units,
            "total_points": result.total_points,
            "cgpa": result.cgpa,
            "class_of_degree": get_class_of_degree(result.cgpa).value,
        },
        console,
        title="CGPA Summary",
    )


@app.command()
def classify(
    value: float = typer.Argument(..., help="CGPA value"),
) -> None:
    """Show the class of degree for a CGPA."""
    console.print(f"{value:.2f}: [bold]{get_class_of_degree(value).value}[/bold]")


@app.command("add-department")
def add_department(
    code: str = typer.Argument(..., help="Department code, e.g. ITH"),
    name: str = typer.Argument(..., help="Department name"),
    data_dir: str = DATA_DIR_OPTION,
) -> None:
    """Create a department."""
    try:
        department = _service(data_dir).create_department(code, name)
    except GPAProcessorError as e:
        _fail(e.message)
    console.print(f"[green]Created department {department['code']}: {department['name']}[/green]")


@app.command("add-course")
def add_course(
    code: str = typer.Argument(..., help="Course code, e.g. ITH101"),
    title: str = typer.Argument(..., help="Course title"),
    unit: int = typer.Argument(..., help="Course unit"),
    data_dir: str = DATA_DIR_OPTION,
) -> None:
    """Create a course."""
    try:
        course = _service(data_dir).create_course(code, title, unit)
    except GPAProcessorError as e:
        _fail(e.message)
    console.print(f"[green]Created course {course['course_code']} ({course['course_unit']} units)[/green]")


@app.command("add-curriculum")
def add_curriculum(
    department: str = typer.Argument(..., help="Department code or id"),
    course: str = typer.Argument(..., help="Course code or id"),
    level: int = typer.Option(..., "--level", "-l", help="Level, e.g. 100"),
    semester: int = typer.Option(..., "--semester", "-s", help="Semester (1 or 2)"),
    data_dir: str = DATA_DIR_OPTION,
) -> None:
    """Add a course to a department's curriculum for a level and semester."""
    _check_term(level, semester)
    service = _service(data_dir)

    dept = service.get_department(department)
    if dept is None:
        _fail(f"Department not found: {department}")
    found = service.get_course(course)
    if found is None:
        _fail(f"Course not found: {course}")

    try:
        service.add_to_curriculum(dept["id"], level, semester, found["id"])
    except GPAProcessorError as e:
        _fail(e.message)
    console.print(
        f"[green]{found['course_code']} added to {dept['code']} {level} level, semester {semester}[/green]"
    )


@app.command()
def curriculum(
    department: str = typer.Argument(..., help="Department code or id"),
    level: int = typer.Option(..., "--level", "-l", help="Level, e.g. 100"),
    semester: int = typer.Option(..., "--semester", "-s", help="Semester (1 or 2)"),
    output_format: str = typer.Option("table", "--format", "-f", help="Output format: table or json"),
    data_dir: str = DATA_DIR_OPTION,
) -> None:
    """List the courses of a department for a level and semester."""
    _check_format(output_format)
    _check_term(level, semester)
    service = _service(data_dir)
    dept = service.get_department(department)
    if dept is None:
        _fail(f"Department not found: {department}")

    entries = service.get_curriculum(dept["id"], level, semester)
    if output_format == "json":
        format_json({"department": dept, "level": level, "semester": semester, "courses": entries}, console)
    else:
        format_curriculum(dept, level, semester, entries, console)


@app.command("add-student")
def add_student(
    matric_no: str = typer.Argument(..., help="Matric number"),
    full_name: str = typer.Argument(..., help="Student's full name"),
    department: str = typer.Option(..., "--department", help="Department code or id"),
    data_dir: str = DATA_DIR_OPTION,
) -> None:
    """Register a student in a department."""
    service = _service(data_dir)
    dept = service.get_department(department)
    if dept is None:
        _fail(f"Department not found: {department}")

    try:
        student = service.create_student(matric_no, full_name, dept["id"])
    except GPAProcessorError as e:
        _fail(e.message)
    console.print(f"[green]Registered {student['full_name']} ({student['matric_no']})[/green]")


@app.command("enter-scores")
def enter_scores(
    matric_no: str = typer.Argument(..., help="Student matric number or id"),
    input_file: str = typer.Argument(..., help="CSV file with course_code, score and optional course_unit columns"),
    level: int = typer.Option(..., "--level", "-l", help="Level, e.g. 100"),
    semester: int = typer.Option(..., "--semester", "-s", help="Semester (1 or 2)"),
    data_dir: str = DATA_DIR_OPTION,
) -> None:
    """Save a semester's scores for a student from a CSV file, checked against the curriculum."""
    _check_term(level, semester)
    input_path = Path(input_file)
    if not input_path.exists():
        _fail(f"File not found: {input_file}")

    service = _service(data_dir)
    student = service.get_student(matric_no)
    if student is None:
        _fail(f"Student not found: {matric_no}")

    try:
        entries = read_score_entries(input_path)
        if not entries:
            _fail("No scores found in file")
        saved = service.enter_scores(student["id"], level, semester, entries)
    except GPAProcessorError as e:
        _fail(e.message)

    console.print(f"[green]Saved {len(saved)} results for {student['matric_no']}[/green]")
    format_gpa(service.get_student_gpa(student["id"], level, semester), console)


@app.command("student-gpa")
def student_gpa(
    matric_no: str = typer.Argument(..., help="Student matric number or id"),
    level: Optional[int] = typer.Option(None, "--level", "-l", help="Limit to a level"),
    semester: Optional[int] = typer.Option(None, "--semester", "-s", help="Limit to a semester"),
    output_format: str = typer.Option("table", "--format", "-f", help="Output format: table or json"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write the course results to a CSV file"),
    data_dir: str = DATA_DIR_OPTION,
) -> None:
    """Show a student's GPA, optionally for one level and semester."""
    _check_format(output_format)
    _check_term(level, semester)
    service = _service(data_dir)
    student = service.get_student(matric_no)
    if student is None:
        _fail(f"Student not found: {matric_no}")

    summary = service.get_student_gpa(student["id"], level, semester)
    if summary is None:
        _fail(f"No results recorded for {student['matric_no']}")

    if output:
        export_results_to_csv(summary["results"], output)
        console.print(f"[green]Results saved to {output}[/green]")
    elif output_format == "json":
        format_json(summary, console)
    else:
        format_gpa(summary, console)


@app.command()
def transcript(
    matric_no: str = typer.Argument(..., help="Student matric number or id"),
    output_format: str = typer.Option("table", "--format", "-f", help="Output format: table or json"),
    data_dir: str = DATA_DIR_OPTION,
) -> None:
    """Show every semester GPA of a student, the CGPA and class of degree."""
    _check_format(output_format)
    result = _service(data_dir).get_student_cgpa(matric_no)
    if result is None:
        _fail(f"No results recorded for {matric_no}")

    if output_format == "json":
        format_json(result, console)
    else:
        format_transcript(result, console)


@app.command()
def report(
    department: str = typer.Argument(..., help="Department code or id"),
    level: int = typer.Option(..., "--level", "-l", help="Level, e.g. 100"),
    semester: int = typer.Option(..., "--semester", "-s", help="Semester (1 or 2)"),
    output_format: str = typer.Option("table", "--format", "-f", help="Output format: table or json"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output file path (CSV format)"),
    data_dir: str = DATA_DIR_OPTION,
) -> None:
    """Show semester GPA and CGPA for every student of a department."""
    _check_format(output_format)
    _check_term(level, semester)
    result = _service(data_dir).get_department_report(department, level, semester)
    if result is None:
        _fail(f"Department not found: {department}")

    if output:
        if not result["students"]:
            _fail("No results to export")
        export_report_to_csv(result, output)
        console.print(f"[green]Report saved to {output}[/green]")
    elif output_format == "json":
        format_json(result, console)
    else:
        format_department_report(result, console)


@app.command()
def version() -> None:
    """Show version information."""
    from . import __version__
    console.print(f"gpa-processor version {__version__}")


if __name__ == "__main__":
    app()
