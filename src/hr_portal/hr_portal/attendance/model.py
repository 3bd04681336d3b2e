from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, AttendanceType, Role


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance record per user per calendar day."""

    attendance_id: str
    user_id: str
    work_date: date
    start_time: Optional[str]
    end_time: Optional[str]
    attendance_type: AttendanceType
    late: bool
    status: AttendanceStatus
    approved_by: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class AttendanceUpsert:
    """Values written by a submission; the day's previous values are replaced."""

    user_id: str
    work_date: date
    start_time: Optional[str]
    end_time: Optional[str]
    attendance_type: AttendanceType
    late: bool
    status: AttendanceStatus = AttendanceStatus.PENDING
    approved_by: Optional[str] = None


@dataclass(frozen=True)
class PersonRef:
    user_id: str
    first_name: str
    last_name: str
    role: Role
    employee_id: Optional[str]

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class AttendanceListRow:
    """Read-model for lists and exports: a record with its subject and approver."""

    record: AttendanceRecord
    subject: Optional[PersonRef]
    approver: Optional[PersonRef] = None

    def to_dict(self) -> dict:
        r = self.record
        return {
            "id": r.attendance_id,
            "date": r.work_date.isoformat(),
            "startTime": r.start_time,
            "endTime": r.end_time,
            "attendanceType": r.attendance_type.value,
            "late": r.late,
            "status": r.status.value,
            "user": _person(self.subject),
            "approvedBy": _person(self.approver),
        }


def _person(p: Optional[PersonRef]) -> Optional[dict]:
    if p is None:
        return None
    return {
        "id": p.user_id,
        "firstName": p.first_name,
        "lastName": p.last_name,
        "role": p.role.value,
        "employeeId": p.employee_id,
    }
