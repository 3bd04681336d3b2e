from __future__ import annotations

from ...core.enums import AttendanceType
from .base import AttendanceStrategy, Evaluation


class MorningHalfStrategy(AttendanceStrategy):
    """Window ends by the half-day split."""

    def classify(self, *, start: int, end: int, is_late: bool) -> Evaluation:
        return Evaluation.accept(AttendanceType.HALF_DAY, late=is_late)
