"""Tests for reading scores from CSV."""

import pytest

from gpa_processor.exceptions import ValidationError
from gpa_processor.output.csv_import import read_score_entries


def write_csv(tmp_path, content):
    path = tmp_path / "scores.csv"
    path.write_text(content, encoding="utf-8")
    return path


class TestReadScoreEntries:
    """Tests for read_score_entries function."""

    def test_reads_rows(self, tmp_path):
        path = write_csv(tmp_path, "course_code,course_unit,score\nith101,3,75\nITH103,2,62\n")

        assert read_score_entries(path) == [
            {"course_code": "ITH101", "course_unit": 3, "score": 75},
            {"course_code": "ITH103", "course_unit": 2, "score": 62},
        ]

    def test_header_aliases(self, tmp_path):
        """Headers are case-insensitive and unit/credits are accepted."""
        path = write_csv(tmp_path, "Course_Code,Credits,SCORE\nGST101,2,48\n")
        assert read_score_entries(path) == [{"course_code": "GST101", "course_unit": 2, "score": 48}]

        path = write_csv(tmp_path, "course_code,unit,score\nGST101,2,48\n")
        assert read_score_entries(path)[0]["course_unit"] == 2

    def test_blank_rows_skipped(self, tmp_path):
        path = write_csv(tmp_path, "course_code,course_unit,score\nITH101,3,75\n,,\n\nITH103,2,62\n")
        assert len(read_score_entries(path)) == 2

    def test_out_of_range_scores_pass_through(self, tmp_path):
        """Range checks belong to the record service, not the reader."""
        path = write_csv(tmp_path, "course_code,course_unit,score\nITH101,3,120\n")
        assert read_score_entries(path)[0]["score"] == 120

    def test_malformed_number_names_line(self, tmp_path):
        path = write_csv(tmp_path, "course_code,course_unit,score\nITH101,3,75\nITH103,two,62\n")
        with pytest.raises(ValidationError) as exc_info:
            read_score_entries(path)
        assert "Line 3" in exc_info.value.message
        assert exc_info.value.details["field"] == "course unit"

    def test_missing_column_raises(self, tmp_path):
        path = write_csv(tmp_path, "course_code,course_unit\nITH101,3\n")
        with pytest.raises(ValidationError) as exc_info:
            read_score_entries(path)
        assert exc_info.value.details["missing"] == ["score"]

    def test_unit_column_optional(self, tmp_path):
        """Without a unit column, or with an empty cell, course_unit is None."""
        path = write_csv(tmp_path, "course_code,score\nITH101,75\n")
        assert read_score_entries(path) == [{"course_code": "ITH101", "course_unit": None, "score": 75}]

        path = write_csv(tmp_path, "course_code,course_unit,score\nITH101,,75\n")
        assert read_score_entries(path)[0]["course_unit"] is None
