"""Tests for the grading engine."""

import pytest

from gpa_processor.exceptions import GPAProcessorError, ScoreRangeError
from gpa_processor.grading import (
    CGPAResult,
    DegreeClass,
    GPAResult,
    GRADE_BANDS,
    Grade,
    ScoredCourse,
    SemesterAggregate,
    calculate_cgpa,
    calculate_gpa,
    calculate_pxu,
    get_class_of_degree,
    grade_to_point,
    score_to_grade,
    score_to_point,
)


class TestScoreToGrade:
    """Tests for score_to_grade function."""

    @pytest.mark.parametrize(
        "below,above,grade_below,grade_above",
        [
            (39, 40, Grade.F, Grade.E),
            (44, 45, Grade.E, Grade.D),
            (49, 50, Grade.D, Grade.C),
            (59, 60, Grade.C, Grade.B),
            (69, 70, Grade.B, Grade.A),
        ],
    )
    def test_band_boundaries(self, below, above, grade_below, grade_above):
        """Adjacent scores at each boundary fall in different bands."""
        assert score_to_grade(below) == grade_below
        assert score_to_grade(above) == grade_above

    def test_extremes(self):
        """0 is F and 100 is A."""
        assert score_to_grade(0) == Grade.F
        assert score_to_grade(100) == Grade.A

    @pytest.mark.parametrize("score", [-1, 101, -50, 150])
    def test_out_of_range_raises(self, score):
        """Scores outside 0-100 raise ScoreRangeError."""
        with pytest.raises(ScoreRangeError):
            score_to_grade(score)

    def test_range_error_is_value_error(self):
        """ScoreRangeError can be caught as ValueError or the base error."""
        with pytest.raises(ValueError):
            score_to_grade(101)
        with pytest.raises(GPAProcessorError) as exc_info:
            score_to_grade(-1)
        assert exc_info.value.error_code == "score_out_of_range"
        assert exc_info.value.details == {"score": -1}

    def test_every_score_matches_exactly_one_band(self):
        """Bands cover 0-100 with no gaps or overlaps."""
        for score in range(0, 101):
            matches = [band for band in GRADE_BANDS if band.contains(score)]
            assert len(matches) == 1, score


class TestGradeToPoint:
    """Tests for grade_to_point function."""

    def test_points_per_grade(self):
        """Each grade maps to its point on the 5-point scale."""
        assert [grade_to_point(g) for g in "ABCDEF"] == [5, 4, 3, 2, 1, 0]

    def test_case_insensitive(self):
        """Lower case letters are accepted."""
        assert grade_to_point("a") == 5
        assert grade_to_point(" b ") == 4

    def test_accepts_enum(self):
        """Grade enum members are accepted."""
        assert grade_to_point(Grade.C) == 3

    def test_unknown_grade_is_zero(self):
        """Unknown letters return 0 instead of raising."""
        assert grade_to_point("Z") == 0
        assert grade_to_point("") == 0
        assert grade_to_point(None) == 0

    def test_band_minimum_round_trip(self):
        """Each band's minimum score maps back to the band's point through its letter."""
        for band in GRADE_BANDS:
            assert grade_to_point(score_to_grade(band.min_score).value) == band.point


class TestScoreToPoint:
    """Tests for score_to_point function."""

    def test_monotonic_and_bounded(self):
        """Points never decrease with score and stay within 0-5."""
        points = [score_to_point(score) for score in range(0, 101)]
        assert points == sorted(points)
        assert set(points) <= {0, 1, 2, 3, 4, 5}

    def test_known_points(self):
        """Spot checks across the scale."""
        assert score_to_point(70) == 5
        assert score_to_point(45) == 2
        assert score_to_point(39) == 0

    def test_out_of_range_raises(self):
        """Inherits the range check of score_to_grade."""
        with pytest.raises(ScoreRangeError):
            score_to_point(101)


class TestCalculatePxu:
    """Tests for calculate_pxu function."""

    def test_product(self):
        assert calculate_pxu(5, 3) == 15

    def test_zero_point(self):
        assert calculate_pxu(0, 4) == 0


class TestCalculateGpa:
    """Tests for calculate_gpa function."""

    def test_empty_is_zero(self):
        """No courses gives a zero result, not an error."""
        assert calculate_gpa([]) == GPAResult(gpa=0, total_units=0, total_points=0)

    def test_zero_units_is_zero(self):
        """Zero total units gives the zero result."""
        result = calculate_gpa([ScoredCourse(grade_point=5, course_unit=0)])
        assert result == GPAResult(gpa=0, total_units=0, total_points=0)

    def test_weighted_average(self):
        """GPA is weighted by course units."""
        result = calculate_gpa([
            ScoredCourse(grade_point=5, course_unit=3),
            ScoredCourse(grade_point=3, course_unit=2),
        ])
        assert result.total_units == 5
        assert result.total_points == 21
        assert result.gpa == 4.20

    def test_rounds_half_up(self):
        """Exact .xx5 quotients round up."""
        # 1 / 8 = 0.125
        result = calculate_gpa([
            ScoredCourse(grade_point=1, course_unit=1),
            ScoredCourse(grade_point=0, course_unit=7),
        ])
        assert result.gpa == 0.13

    def test_rounds_half_up_without_float_error(self):
        """107 / 40 = 2.675 rounds to 2.68."""
        result = calculate_gpa([
            ScoredCourse(grade_point=5, course_unit=15),
            ScoredCourse(grade_point=4, course_unit=8),
            ScoredCourse(grade_point=0, course_unit=17),
        ])
        assert result.total_points == 107
        assert result.total_units == 40
        assert result.gpa == 2.68

    def test_accepts_generator(self):
        """Any iterable of courses is accepted."""
        result = calculate_gpa(ScoredCourse(grade_point=4, course_unit=u) for u in (1, 2))
        assert result.gpa == 4.0

    def test_to_aggregate(self):
        """A GPA result folds into a semester aggregate."""
        result = calculate_gpa([ScoredCourse(grade_point=5, course_unit=3)])
        assert result.to_aggregate() == SemesterAggregate(total_units=3, total_points=15)


class TestCalculateCgpa:
    """Tests for calculate_cgpa function."""

    def test_folds_semesters(self):
        """Semester totals are summed before dividing."""
        result = calculate_cgpa([
            SemesterAggregate(total_units=5, total_points=21),
            SemesterAggregate(total_units=4, total_points=12),
        ])
        assert result == CGPAResult(cgpa=3.67, total_units=9, total_points=33)

    def test_empty_is_zero(self):
        assert calculate_cgpa([]) == CGPAResult(cgpa=0, total_units=0, total_points=0)

    def test_zero_unit_semesters(self):
        result = calculate_cgpa([SemesterAggregate(total_units=0, total_points=0)])
        assert result.cgpa == 0
        assert result.total_units == 0

    def test_incremental_fold(self):
        """Folding a running total with a new semester matches folding all semesters."""
        first = SemesterAggregate(total_units=5, total_points=21)
        second = SemesterAggregate(total_units=4, total_points=12)
        third = SemesterAggregate(total_units=6, total_points=18)

        running = calculate_cgpa([first, second])
        folded = calculate_cgpa([
            SemesterAggregate(total_units=running.total_units, total_points=running.total_points),
            third,
        ])
        assert folded == calculate_cgpa([first, second, third])


class TestGetClassOfDegree:
    """Tests for get_class_of_degree function."""

    @pytest.mark.parametrize(
        "cgpa,expected",
        [
            (5.00, DegreeClass.FIRST_CLASS),
            (4.50, DegreeClass.FIRST_CLASS),
            (4.49, DegreeClass.SECOND_CLASS_UPPER),
            (3.50, DegreeClass.SECOND_CLASS_UPPER),
            (3.49, DegreeClass.SECOND_CLASS_LOWER),
            (2.50, DegreeClass.SECOND_CLASS_LOWER),
            (2.49, DegreeClass.THIRD_CLASS),
            (1.50, DegreeClass.THIRD_CLASS),
            (1.49, DegreeClass.PASS),
            (1.00, DegreeClass.PASS),
            (0.99, DegreeClass.FAIL),
            (0.0, DegreeClass.FAIL),
        ],
    )
    def test_ladder(self, cgpa, expected):
        """Lower bounds are inclusive."""
        assert get_class_of_degree(cgpa) == expected

    def test_labels(self):
        """Enum values are the display labels."""
        assert get_class_of_degree(4.5).value == "First Class Honours"
        assert str(get_class_of_degree(0)) == "Fail"
