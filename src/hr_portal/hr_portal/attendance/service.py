from __future__ import annotations

import csv
import io
import logging
from datetime import date
from typing import Callable, Iterable, Optional, Sequence

from ..common.datetime_utils import is_hhmm, now_local
from ..core.enums import AttendanceStatus, AttendanceType, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..core.hierarchy import OVERRIDE_ROLES, can_view, viewable_roles
from ..users.model import User
from ..users.repository import UserRepository
from ..users.tokens import Identity
from .evaluator import evaluate_attendance
from .model import AttendanceListRow, AttendanceRecord, AttendanceUpsert, PersonRef
from .repository import AttendanceRepository
from .strategies.base import Evaluation

logger = logging.getLogger(__name__)

# Roles that only ever see their own attendance in the main list.
_SELF_ONLY_ROLES = (Role.EMPLOYEE, Role.INTERN)

EXPORT_HEADER = ("Name", "Employee ID", "Role", "Date", "Day", "Status")


def _person(user: Optional[User]) -> Optional[PersonRef]:
    if user is None:
        return None
    return PersonRef(
        user_id=user.user_id,
        first_name=user.first_name,
        last_name=user.last_name,
        role=user.role,
        employee_id=user.employee_id,
    )


def _parse_filter_status(value: Optional[str]) -> Optional[AttendanceStatus]:
    if not value or value == "all":
        return None
    try:
        return AttendanceStatus(value)
    except ValueError:
        raise ValidationError("Invalid status filter")


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        *,
        clock: Callable = now_local,
    ):
        self._attendance = attendance
        self._users = users
        self._clock = clock

    def _check_day(self, work_date: Optional[date]) -> date:
        if work_date is None:
            raise ValidationError("Date is required")
        if work_date > self._clock().date():
            raise ValidationError("Future date attendance not allowed")
        return work_date

    @staticmethod
    def _evaluate(start_time: Optional[str], end_time: Optional[str]) -> Evaluation:
        if not start_time or not end_time:
            raise ValidationError("Start and End time required")
        if not is_hhmm(start_time) or not is_hhmm(end_time):
            raise ValidationError("Times must be HH:MM (24-hour)")

        evaluation = evaluate_attendance(start_time, end_time)
        if not evaluation.allowed:
            raise ValidationError(evaluation.reason or "Attendance not allowed")
        return evaluation

    def mark(
        self,
        user_id: str,
        *,
        work_date: Optional[date],
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
        leave: bool = False,
    ) -> Evaluation:
        """Submit (or re-submit) the caller's attendance for a day. Always resets status to pending."""

        day = self._check_day(work_date)

        if leave:
            self._attendance.upsert_for_user_and_date(
                AttendanceUpsert(
                    user_id=user_id,
                    work_date=day,
                    start_time=None,
                    end_time=None,
                    attendance_type=AttendanceType.ABSENT,
                    late=False,
                )
            )
            logger.info("Leave marked for user %s on %s", user_id, day)
            return Evaluation.accept(AttendanceType.ABSENT, late=False)

        evaluation = self._evaluate(start_time, end_time)
        self._attendance.upsert_for_user_and_date(
            AttendanceUpsert(
                user_id=user_id,
                work_date=day,
                start_time=start_time,
                end_time=end_time,
                attendance_type=evaluation.attendance_type,
                late=evaluation.late,
            )
        )
        logger.info(
            "Attendance marked for user %s on %s: %s late=%s",
            user_id,
            day,
            evaluation.attendance_type.value,
            evaluation.late,
        )
        return evaluation

    def admin_mark(
        self,
        *,
        actor: Identity,
        user_id: str,
        work_date: Optional[date],
        start_time: Optional[str],
        end_time: Optional[str],
    ) -> Evaluation:
        """Mark attendance on behalf of a subordinate. The actor is stored as approver."""

        if actor.role not in OVERRIDE_ROLES:
            raise AuthorizationError("Forbidden")
        if not user_id:
            raise ValidationError("Missing required fields")

        target = self._users.get_by_id(user_id)
        if not target or target.is_deleted:
            raise NotFoundError("User not found")
        if not can_view(actor.role, target.role):
            raise AuthorizationError("Not allowed to mark attendance for this role")

        day = self._check_day(work_date)
        evaluation = self._evaluate(start_time, end_time)
        self._attendance.upsert_for_user_and_date(
            AttendanceUpsert(
                user_id=target.user_id,
                work_date=day,
                start_time=start_time,
                end_time=end_time,
                attendance_type=evaluation.attendance_type,
                late=evaluation.late,
                approved_by=actor.user_id,
            )
        )
        logger.info("Attendance for user %s on %s overridden by %s", target.user_id, day, actor.user_id)
        return evaluation

    def decide(self, *, actor: Identity, attendance_id: str, status: str) -> None:
        if not viewable_roles(actor.role):
            raise AuthorizationError("Forbidden")

        if not attendance_id or status not in (AttendanceStatus.APPROVED.value, AttendanceStatus.REJECTED.value):
            raise ValidationError("Invalid request")

        record = self._attendance.get_by_id(attendance_id)
        subject = self._users.get_by_id(record.user_id) if record else None
        if not record or not subject:
            raise NotFoundError("Attendance not found")

        if not can_view(actor.role, subject.role):
            raise AuthorizationError("Not allowed to approve this role")

        self._attendance.set_status(record.attendance_id, status=AttendanceStatus(status), approved_by=actor.user_id)
        logger.info("Attendance %s %s by %s", record.attendance_id, status, actor.user_id)

    def _rows(self, records: Sequence[AttendanceRecord]) -> list[AttendanceListRow]:
        ids = {r.user_id for r in records} | {r.approved_by for r in records if r.approved_by}
        people = {u.user_id: u for u in self._users.list_by_ids(ids)} if ids else {}
        return [
            AttendanceListRow(
                record=r,
                subject=_person(people.get(r.user_id)),
                approver=_person(people.get(r.approved_by)) if r.approved_by else None,
            )
            for r in records
        ]

    def _records_for_roles(
        self,
        roles: Iterable[Role],
        *,
        first_name: Optional[str] = None,
        status: Optional[AttendanceStatus] = None,
        work_date: Optional[date] = None,
    ) -> list[AttendanceListRow]:
        roles = list(roles)
        if not roles:
            return []
        users = self._users.list_by_roles(roles, first_name=first_name)
        records = self._attendance.list_for_users([u.user_id for u in users], status=status, work_date=work_date)
        return self._rows(records)

    def list_visible(self, actor: Identity) -> list[AttendanceListRow]:
        if actor.role in _SELF_ONLY_ROLES:
            return self._rows(self._attendance.list_for_users([actor.user_id]))
        return self._records_for_roles(viewable_roles(actor.role))

    def list_for_approval(
        self,
        *,
        actor: Identity,
        name: Optional[str] = None,
        role: Optional[str] = None,
        status: Optional[str] = None,
        work_date: Optional[date] = None,
    ) -> list[AttendanceListRow]:
        """Records of subordinates filtered by first name, role, status and day."""

        allowed = viewable_roles(actor.role)
        if not allowed:
            raise AuthorizationError("Forbidden")

        roles: Iterable[Role] = allowed
        if role and role != "all":
            try:
                wanted = Role(role)
            except ValueError:
                raise ValidationError("Invalid role filter")
            roles = [wanted] if wanted in allowed else []

        return self._records_for_roles(
            roles,
            first_name=(name or "").strip() or None,
            status=_parse_filter_status(status),
            work_date=work_date,
        )

    def export_rows(
        self,
        *,
        actor: Identity,
        name: Optional[str] = None,
        role: Optional[str] = None,
        status: Optional[str] = None,
        work_date: Optional[date] = None,
    ) -> list[AttendanceListRow]:
        if actor.role == Role.INTERN:
            raise AuthorizationError("Forbidden")
        return self.list_for_approval(actor=actor, name=name, role=role, status=status, work_date=work_date)

    def export_csv(self, *, actor: Identity, **filters) -> str:
        buf = io.StringIO()
        writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow(EXPORT_HEADER)
        for row in self.export_rows(actor=actor, **filters):
            subject = row.subject
            day = row.record.work_date
            writer.writerow(
                [
                    subject.full_name if subject else "",
                    (subject.employee_id or "") if subject else "",
                    subject.role.value if subject else "",
                    day.isoformat(),
                    day.strftime("%A"),
                    row.record.status.value,
                ]
            )
        return buf.getvalue()

    def my_calendar(self, user_id: str) -> list[dict]:
        return [
            {
                "date": r.work_date.isoformat(),
                "startTime": r.start_time,
                "endTime": r.end_time,
                "attendanceType": r.attendance_type.value,
                "status": r.status.value,
            }
            for r in self._attendance.list_for_user(user_id)
        ]
