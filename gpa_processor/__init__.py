"""GPA Processor - grades, GPA, CGPA and class of degree from course scores."""

__version__ = "1.0.0"
