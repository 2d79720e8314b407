"""Academic record keeping on top of the grading engine."""

from .service import RecordService, generate_id

__all__ = ["RecordService", "generate_id"]
