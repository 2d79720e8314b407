"""Output formatters for grades, GPA summaries and reports."""

import json

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..config import DEGREE_CLASS_COLORS, GRADE_COLORS


def format_grade(score: int, grade: str, point: int, console: Console) -> None:
    """Print the grade and point for a single score."""
    color = GRADE_COLORS.get(grade, "white")
    text = Text()
    text.append(f"Score: {score}  |  Grade: ")
    text.append(grade, style=color)
    text.append(f"  |  Point: {point}")
    console.print(Panel(text, title="[bold]Grade[/bold]", border_style="cyan"))


def format_gpa(summary: dict, console: Console, title: str = "GPA Summary") -> None:
    """
    Print a GPA summary, with its course results when present.

    Args:
        summary: Dict with total_units, total_points and gpa (or cgpa),
            optionally level, semester and results.
        console: Rich console to print to.
        title: Panel title.
    """
    results = summary.get("results", [])
    if results:
        console.print(_results_table(results))
        console.print()

    header = Text()
    if summary.get("level"):
        header.append(f"{summary['level']} Level", style="bold cyan")
        if summary.get("semester"):
            header.append(f"  |  Semester {summary['semester']}", style="bold cyan")
        header.append("\n")

    value = summary.get("gpa", summary.get("cgpa", 0))
    label = "GPA" if "gpa" in summary else "CGPA"
    header.append(
        f"Total Units: {summary['total_units']}  |  "
        f"Total Points: {summary['total_points']}  |  "
        f"{label}: {value:.2f}"
    )
    class_of_degree = summary.get("class_of_degree")
    if class_of_degree:
        color = DEGREE_CLASS_COLORS.get(class_of_degree, "white")
        header.append("\nClass of Degree: ")
        header.append(class_of_degree, style=color)

    console.print(Panel(header, title=f"[bold]{title}[/bold]", border_style="cyan"))


def format_transcript(transcript: dict, console: Console) -> None:
    """Print every semester of a student followed by the CGPA."""
    student = transcript["student"]
    department = student.get("department") or {}

    header = Text()
    header.append(f"{student['full_name']}\n", style="bold cyan")
    header.append(f"Matric No: {student['matric_no']}")
    if department:
        header.append(f"  |  Department: {department.get('name', '')}")
    console.print(Panel(header, title="[bold]Transcript[/bold]", border_style="cyan"))
    console.print()

    for semester in transcript["semester_gpas"]:
        console.print(f"[bold]{semester['level']} Level - Semester {semester['semester']}[/bold]")
        console.print(_results_table(semester["results"]))
        console.print(
            f"Units: {semester['total_units']}  |  Points: {semester['total_points']}  |  "
            f"GPA: [bold]{semester['gpa']:.2f}[/bold]"
        )
        console.print()

    format_gpa(
        {
            "total_units": transcript["total_units"],
            "total_points": transcript["total_points"],
            "cgpa": transcript["cgpa"],
            "class_of_degree": transcript["class_of_degree"],
        },
        console,
        title="Cumulative",
    )


def format_curriculum(department: dict, level: int, semester: int, entries: list[dict], console: Console) -> None:
    """Print the courses a department offers in one term."""
    title = f"{department['code']} - {level} Level, Semester {semester}"
    if not entries:
        console.print(f"[yellow]No courses in the curriculum for {title}[/yellow]")
        return

    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Code", style="cyan")
    table.add_column("Title")
    table.add_column("Unit", justify="right")

    for entry in entries:
        course = entry["course"]
        table.add_row(course["course_code"], course["course_title"], str(course["course_unit"]))

    console.print(table)
    console.print(f"[dim]{len(entries)} courses, {sum(e['course']['course_unit'] for e in entries)} units[/dim]")


def format_department_report(report: dict, console: Console) -> None:
    """Print semester GPA and CGPA for every student of a department."""
    department = report["department"]
    title = (
        f"{department['name']} ({department['code']}) - "
        f"{report['level']} Level, Semester {report['semester']}"
    )

    rows = report.get("students", [])
    if not rows:
        console.print(f"[yellow]No results recorded for {title}[/yellow]")
        return

    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Matric No", style="cyan")
    table.add_column("Name")
    table.add_column("Units", justify="right")
    table.add_column("Points", justify="right")
    table.add_column("GPA", justify="right")
    table.add_column("CGPA", justify="right")
    table.add_column("Class of Degree")

    for row in rows:
        student = row["student"]
        color = DEGREE_CLASS_COLORS.get(row["class_of_degree"], "white")
        table.add_row(
            student["matric_no"],
            student["full_name"],
            str(row["total_units"]),
            str(row["total_points"]),
            f"{row['gpa']:.2f}",
            f"{row['cgpa']:.2f}",
            f"[{color}]{row['class_of_degree']}[/{color}]",
        )

    console.print(table)

    average = sum(r["gpa"] for r in rows) / len(rows)
    console.print(f"[dim]{len(rows)} students, average GPA {average:.2f}[/dim]")


def format_json(results: dict, console: Console) -> None:
    """Format and print results as JSON."""
    console.print_json(json.dumps(results, indent=2, default=str))


def _results_table(results: list[dict]) -> Table:
    table = Table(show_header=True, header_style="bold")
    table.add_column("Course", style="cyan")
    table.add_column("Unit", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("Grade", justify="center")
    table.add_column("Point", justify="right")
    table.add_column("PXU", justify="right")

    for result in results:
        grade = result["grade"]
        color = GRADE_COLORS.get(grade, "white")
        table.add_row(
            result["course_code"],
            str(result["course_unit"]),
            str(result["score"]),
            f"[{color}]{grade}[/{color}]",
            str(result["grade_point"]),
            str(result["pxu"]),
        )
    return table
