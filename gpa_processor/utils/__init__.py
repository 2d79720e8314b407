"""Utility modules for GPA Processor."""

from .store import RecordStore

__all__ = ["RecordStore"]
