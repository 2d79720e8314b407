"""Configuration constants for GPA Processor."""

import os

# Storage
DATA_DIR = os.environ.get("GPA_PROCESSOR_DATA_DIR", ".gpa_data")

STORAGE_KEYS = {
    "departments": "departments",
    "courses": "courses",
    "curriculum": "curriculum",
    "students": "students",
    "results": "results",
}

# Academic calendar
VALID_LEVELS = (100, 200, 300, 400, 500)
VALID_SEMESTERS = (1, 2)

# Score range accepted by the grading engine
MIN_SCORE = 0
MAX_SCORE = 100

# 5-point grading scale, checked in order
GRADING_SCALE = [
    {"min_score": 70, "max_score": 100, "grade": "A", "point": 5},
    {"min_score": 60, "max_score": 69, "grade": "B", "point": 4},
    {"min_score": 50, "max_score": 59, "grade": "C", "point": 3},
    {"min_score": 45, "max_score": 49, "grade": "D", "point": 2},
    {"min_score": 40, "max_score": 44, "grade": "E", "point": 1},
    {"min_score": 0, "max_score": 39, "grade": "F", "point": 0},
]

# Class of degree ladder (inclusive lower bound, highest first)
DEGREE_CLASS_THRESHOLDS = [
    (4.50, "First Class Honours"),
    (3.50, "Second Class Upper"),
    (2.50, "Second Class Lower"),
    (1.50, "Third Class"),
    (1.00, "Pass"),
]
FAILING_DEGREE_CLASS = "Fail"

# GPA/CGPA precision (decimal places)
GPA_DECIMAL_PLACES = 2

# Console colours
GRADE_COLORS = {
    "A": "bold green",
    "B": "blue",
    "C": "yellow",
    "D": "dark_orange",
    "E": "red",
    "F": "bold red",
}

DEGREE_CLASS_COLORS = {
    "First Class Honours": "bold green",
    "Second Class Upper": "green",
    "Second Class Lower": "yellow",
    "Third Class": "dark_orange",
    "Pass": "red",
    "Fail": "bold red",
}
