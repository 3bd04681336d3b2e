from __future__ import annotations

from ...core.enums import AttendanceType
from .base import AttendanceStrategy, Evaluation


class FullDayStrategy(AttendanceStrategy):
    """Window covers the entire office day."""

    def classify(self, *, start: int, end: int, is_late: bool) -> Evaluation:
        return Evaluation.accept(AttendanceType.FULL_DAY, late=False)
