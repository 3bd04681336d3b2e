from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import AttendanceType


@dataclass(frozen=True)
class Evaluation:
    """Outcome of evaluating a check-in/check-out pair.

    ``allowed`` records carry ``attendance_type`` and ``late``; rejected ones
    carry a human-readable ``reason``.
    """

    allowed: bool
    attendance_type: Optional[AttendanceType] = None
    late: bool = False
    reason: Optional[str] = None

    @classmethod
    def accept(cls, attendance_type: AttendanceType, *, late: bool) -> "Evaluation":
        return cls(allowed=True, attendance_type=attendance_type, late=late)

    @classmethod
    def reject(cls, reason: str) -> "Evaluation":
        return cls(allowed=False, reason=reason)


class AttendanceStrategy(ABC):
    """Strategy Pattern: how a window inside office hours is classified."""

    @abstractmethod
    def classify(self, *, start: int, end: int, is_late: bool) -> Evaluation:
        raise NotImplementedError
