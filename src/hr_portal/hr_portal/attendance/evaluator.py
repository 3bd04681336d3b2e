from __future__ import annotations

from ..common.datetime_utils import hhmm_to_minutes
from ..core.constants import LATE_AFTER_MINUTES, OFFICE_END_MINUTES, OFFICE_START_MINUTES
from .factory import AttendanceStrategyFactory
from .strategies.base import Evaluation

INVALID_RANGE = "Invalid time range"
CHECK_IN_TOO_EARLY = "Check-in cannot be before 09:30 AM"
CHECK_OUT_TOO_LATE = "Check-out cannot be after 06:30 PM"

_default_factory = AttendanceStrategyFactory()


def evaluate_minutes(start: int, end: int) -> Evaluation:
    """Classify a check-in/check-out pair given as minutes since midnight.

    Pure: the same pair always yields the same result.
    """
    if start >= end:
        return Evaluation.reject(INVALID_RANGE)
    if start < OFFICE_START_MINUTES:
        return Evaluation.reject(CHECK_IN_TOO_EARLY)
    if end > OFFICE_END_MINUTES:
        return Evaluation.reject(CHECK_OUT_TOO_LATE)

    is_late = start > LATE_AFTER_MINUTES
    strategy = _default_factory.for_window(start=start, end=end)
    return strategy.classify(start=start, end=end, is_late=is_late)


def evaluate_attendance(start_time: str, end_time: str) -> Evaluation:
    """Evaluate two ``HH:MM`` strings.

    Raises ValidationError if either string is not a valid ``HH:MM`` time;
    policy violations are returned as rejected evaluations, not raised.
    """
    return evaluate_minutes(hhmm_to_minutes(start_time), hhmm_to_minutes(end_time))
