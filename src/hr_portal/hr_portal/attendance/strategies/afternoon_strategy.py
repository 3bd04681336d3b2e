from __future__ import annotations

from ...core.enums import AttendanceType
from .base import AttendanceStrategy, Evaluation


class AfternoonHalfStrategy(AttendanceStrategy):
    """Window starts at or after the half-day split. Never late."""

    def classify(self, *, start: int, end: int, is_late: bool) -> Evaluation:
        return Evaluation.accept(AttendanceType.HALF_DAY, late=False)
