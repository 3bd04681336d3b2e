from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import HALF_DAY_SPLIT_MINUTES, OFFICE_END_MINUTES, OFFICE_START_MINUTES
from .strategies.afternoon_strategy import AfternoonHalfStrategy
from .strategies.base import AttendanceStrategy
from .strategies.full_day_strategy import FullDayStrategy
from .strategies.morning_strategy import MorningHalfStrategy
from .strategies.partial_day_strategy import PartialDayStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose the classification for a window already inside office hours.

    Checked in order; the first match wins.
    """

    office_start: int = OFFICE_START_MINUTES
    office_end: int = OFFICE_END_MINUTES
    split: int = HALF_DAY_SPLIT_MINUTES

    def for_window(self, *, start: int, end: int) -> AttendanceStrategy:
        if start >= self.office_start and end <= self.split:
            return MorningHalfStrategy()
        if start >= self.split and end <= self.office_end:
            return AfternoonHalfStrategy()
        if start <= self.office_start and end >= self.office_end:
            return FullDayStrategy()
        return PartialDayStrategy()
