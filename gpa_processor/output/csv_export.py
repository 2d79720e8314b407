"""CSV export for department reports and course results."""

import csv
from datetime import datetime
from pathlib import Path

REPORT_FIELDNAMES = [
    "matric_no",
    "full_name",
    "department",
    "level",
    "semester",
    "total_units",
    "total_points",
    "gpa",
    "cgpa",
    "class_of_degree",
    "exported_at",
]

RESULT_FIELDNAMES = [
    "student_id",
    "level",
    "semester",
    "course_code",
    "course_unit",
    "score",
    "grade",
    "grade_point",
    "pxu",
]


def export_report_to_csv(report: dict, output_path: str) -> None:
    """
    Export a department report to CSV, one row per student.

    Args:
        report: Report dict from RecordService.get_department_report
        output_path: Path to output CSV file
    """
    if not report or not report.get("students"):
        return

    department = report["department"]
    exported_at = datetime.now().isoformat()

    rows = []
    for row in report["students"]:
        student = row["student"]
        rows.append({
            "matric_no": student["matric_no"],
            "full_name": student["full_name"],
            "department": department["code"],
            "level": report["level"],
            "semester": report["semester"],
            "total_units": row["total_units"],
            "total_points": row["total_points"],
            "gpa": f"{row['gpa']:.2f}",
            "cgpa": f"{row['cgpa']:.2f}",
            "class_of_degree": row["class_of_degree"],
            "exported_at": exported_at,
        })

    _write_rows(Path(output_path), REPORT_FIELDNAMES, rows)


def export_results_to_csv(results: list[dict], output_path: str) -> None:
    """Export saved course results to CSV."""
    if not results:
        return

    rows = [{field: result.get(field, "") for field in RESULT_FIELDNAMES} for result in results]
    _write_rows(Path(output_path), RESULT_FIELDNAMES, rows)


def _write_rows(path: Path, fieldnames: list[str], rows: list[dict]) -> None:
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(rows)
