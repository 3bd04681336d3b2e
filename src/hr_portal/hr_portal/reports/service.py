from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..core.enums import AttendanceStatus, AttendanceType
from ..users.repository import UserRepository

MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


@dataclass(frozen=True)
class DashboardStats:
    total_users: int
    active_today: int
    pending_requests: int

    def to_dict(self) -> dict:
        return {
            "totalUsers": self.total_users,
            "activeToday": self.active_today,
            "pendingRequests": self.pending_requests,
        }


class DashboardService:
    """Headline counters and yearly analytics for the dashboards."""

    def __init__(self, users: UserRepository, attendance: AttendanceRepository):
        self._users = users
        self._attendance = attendance

    def stats(self, *, today: date) -> DashboardStats:
        return DashboardStats(
            total_users=self._users.count_active(),
            active_today=self._attendance.count_present_on(
                today, types=(AttendanceType.FULL_DAY, AttendanceType.HALF_DAY)
            ),
            pending_requests=self._attendance.count_by_status(AttendanceStatus.PENDING),
        )

    def analytics(self, *, year: int, include_users: bool = True) -> dict:
        signups = self._users.monthly_signups(year)
        by_status = self._attendance.monthly_status_counts(year)

        monthly_signups = [{"month": m, "users": signups.get(i, 0)} for i, m in enumerate(MONTHS, start=1)]

        monthly_attendance = []
        for i, m in enumerate(MONTHS, start=1):
            counts = by_status.get(i, {})
            row: dict = {"month": m}
            for s in AttendanceStatus:
                row[s.value] = counts.get(s.value, 0)
            monthly_attendance.append(row)

        out: dict = {
            "year": year,
            "totalUsers": self._users.count_active(),
            "roleWise": [{"role": role, "count": count} for role, count in self._users.count_by_role()],
            "monthlySignups": monthly_signups,
            "monthlyAttendance": monthly_attendance,
        }
        if include_users:
            out["users"] = [
                {
                    "id": u.user_id,
                    "firstName": u.first_name,
                    "lastName": u.last_name,
                    "email": u.email,
                    "role": u.role.value,
                    "employeeId": u.employee_id,
                }
                for u in self._users.list_all()
            ]
        return out


def parse_year(value: Optional[str], *, default: int) -> int:
    try:
        year = int(value) if value else default
    except ValueError:
        return default
    return year if 1970 <= year <= 9999 else default
