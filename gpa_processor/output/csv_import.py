"""Read course scores from CSV files."""

import csv
import logging
from pathlib import Path

from ..exceptions import ValidationError

logger = logging.getLogger(__name__)

COLUMN_ALIASES = {
    "course_code": "course_code",
    "course": "course_code",
    "code": "course_code",
    "course_unit": "course_unit",
    "unit": "course_unit",
    "units": "course_unit",
    "credits": "course_unit",
    "score": "score",
}

REQUIRED_COLUMNS = ("course_code", "score")
OPTIONAL_COLUMNS = ("course_unit",)


def read_score_entries(path: Path) -> list[dict]:
    """
    Read course_code, score and optional course_unit rows from a CSV file.

    Header names are matched case-insensitively and unit/credits are
    accepted for course_unit. Blank rows are skipped. A missing column or
    empty cell for course_unit reads as None.

    Args:
        path: CSV file with a header row.

    Returns:
        List of dicts with course_code (upper case), course_unit and score.

    Raises:
        ValidationError: If a required column is missing or a number is malformed.
    """
    entries = []

    with Path(path).open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        columns = {}
        for name in reader.fieldnames or []:
            canonical = COLUMN_ALIASES.get(name.strip().lower())
            if canonical and canonical not in columns:
                columns[canonical] = name

        missing = [c for c in REQUIRED_COLUMNS if c not in columns]
        if missing:
            raise ValidationError(
                f"Missing columns in {path}: {', '.join(missing)}",
                error_code="missing_columns",
                details={"missing": missing},
            )

        for row in reader:
            values = {
                c: (row.get(columns[c]) or "").strip()
                for c in REQUIRED_COLUMNS + OPTIONAL_COLUMNS
                if c in columns
            }
            if not any(values.values()):
                continue

            line = reader.line_num
            if not values["course_code"]:
                raise ValidationError(f"Line {line}: course code is required")

            entries.append({
                "course_code": values["course_code"].upper(),
                "course_unit": (
                    _parse_int(values["course_unit"], "course unit", line)
                    if values.get("course_unit") else None
                ),
                "score": _parse_int(values["score"], "score", line),
            })

    logger.debug("Read %d score entries from %s", len(entries), path)
    return entries


def _parse_int(value: str, field: str, line: int) -> int:
    try:
        return int(value)
    except ValueError:
        raise ValidationError(
            f"Line {line}: invalid {field} {value!r}",
            error_code="invalid_number",
            details={"line": line, "field": field, "value": value},
        ) from None
