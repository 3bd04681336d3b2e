from __future__ import annotations

from ...core.enums import AttendanceType
from .base import AttendanceStrategy, Evaluation


class PartialDayStrategy(AttendanceStrategy):
    """Catch-all: window crosses the split without spanning the whole day."""

    def classify(self, *, start: int, end: int, is_late: bool) -> Evaluation:
        return Evaluation.accept(AttendanceType.HALF_DAY, late=is_late)
