from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus, AttendanceType
from .model import AttendanceRecord, AttendanceUpsert


class AttendanceRepository(Protocol):
    def upsert_for_user_and_date(self, values: AttendanceUpsert) -> None:
        """Atomic insert-or-replace keyed on (user_id, work_date)."""

        raise NotImplementedError

    def get_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def set_status(self, attendance_id: str, *, status: AttendanceStatus, approved_by: str) -> bool:
        raise NotImplementedError

    def list_for_user(self, user_id: str) -> Sequence[AttendanceRecord]:
        """Oldest day first."""

        raise NotImplementedError

    def list_for_users(
        self,
        user_ids: Iterable[str],
        *,
        status: Optional[AttendanceStatus] = None,
        work_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        """Newest day first."""

        raise NotImplementedError

    def count_present_on(self, work_date: date, *, types: Iterable[AttendanceType]) -> int:
        raise NotImplementedError

    def count_by_status(self, status: AttendanceStatus) -> int:
        raise NotImplementedError

    def monthly_status_counts(self, year: int) -> dict[int, dict[str, int]]:
        """Month number (1-12) -> {status value: count} for records dated in ``year``."""

        raise NotImplementedError
