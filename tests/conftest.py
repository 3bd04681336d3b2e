from __future__ import annotations

import dataclasses
from datetime import date, datetime

import mongomock
import pytest
from werkzeug.security import generate_password_hash

from src.hr_portal.hr_portal.attendance.model import AttendanceRecord
from src.hr_portal.hr_portal.attendance.service import AttendanceService
from src.hr_portal.hr_portal.core.enums import Role
from src.hr_portal.hr_portal.database.bootstrap import ensure_indexes
from src.hr_portal.hr_portal.database.connection import DBConfig, DatabaseConnection
from src.hr_portal.hr_portal.users.model import User
from src.hr_portal.hr_portal.users.tokens import Identity

FIXED_NOW = datetime(2025, 6, 18, 12, 0, 0)


class FakeUsersRepo:
    def __init__(self):
        self._next_id = 1
        self.users: dict[str, User] = {}

    def add(self, *, role: Role, first_name: str = "Test", last_name: str = "User", email=None,
            employee_id=None, password: str = "secret", manager_id=None, dob=date(1995, 4, 2),
            created_at=None, is_deleted: bool = False) -> User:
        uid = f"u{self._next_id}"
        self._next_id += 1
        user = User(
            user_id=uid,
            first_name=first_name,
            last_name=last_name,
            email=email or f"{uid}@example.com",
            password_hash=generate_password_hash(password),
            role=role,
            employee_id=employee_id or f"EMP{900 + self._next_id}",
            dob=dob,
            manager_id=manager_id,
            is_deleted=is_deleted,
            created_at=created_at or FIXED_NOW,
        )
        self.users[uid] = user
        return user

    def _active(self):
        return [u for u in self.users.values() if not u.is_deleted]

    def get_by_id(self, user_id):
        return self.users.get(user_id)

    def get_by_email(self, email):
        return next((u for u in self.users.values() if u.email == email), None)

    def get_by_employee_id(self, employee_id):
        return next((u for u in self._active() if u.employee_id == employee_id), None)

    def get_by_reset_token(self, token, *, now):
        for u in self._active():
            if u.reset_token == token and u.reset_token_expiry and u.reset_token_expiry > now:
                return u
        return None

    def create_user(self, new_user):
        uid = f"u{self._next_id}"
        self._next_id += 1
        self.users[uid] = User(
            user_id=uid,
            first_name=new_user.first_name,
            last_name=new_user.last_name,
            email=new_user.email,
            password_hash=new_user.password_hash,
            role=new_user.role,
            employee_id=new_user.employee_id,
            dob=new_user.dob,
            manager_id=new_user.manager_id,
            created_by=new_user.created_by,
            resume=new_user.resume,
            photo_id=new_user.photo_id,
            created_at=FIXED_NOW,
        )
        return uid

    def update_fields(self, user_id, fields):
        user = self.users.get(user_id)
        if not user:
            return None
        self.users[user_id] = dataclasses.replace(user, **fields)
        return self.users[user_id]

    def soft_delete(self, user_id):
        user = self.users.get(user_id)
        if not user or user.is_deleted:
            return False
        self.users[user_id] = dataclasses.replace(user, is_deleted=True)
        return True

    def set_reset_token(self, user_id, *, token, expires_at):
        self.users[user_id] = dataclasses.replace(self.users[user_id], reset_token=token, reset_token_expiry=expires_at)

    def update_password(self, user_id, *, password_hash):
        self.users[user_id] = dataclasses.replace(
            self.users[user_id], password_hash=password_hash, reset_token=None, reset_token_expiry=None
        )

    def list_all(self, *, exclude_user_id=None, exclude_roles=()):
        excluded = set(exclude_roles)
        return [u for u in self._active() if u.user_id != exclude_user_id and u.role not in excluded]

    def list_by_roles(self, roles, *, first_name=None):
        wanted = set(roles)
        out = [u for u in self._active() if u.role in wanted]
        if first_name:
            out = [u for u in out if first_name.lower() in u.first_name.lower()]
        return out

    def list_by_employee_ids(self, employee_ids):
        wanted = set(employee_ids)
        return [u for u in self._active() if u.employee_id in wanted]

    def list_by_ids(self, user_ids):
        wanted = set(user_ids)
        return [u for u in self.users.values() if u.user_id in wanted]

    def count_active(self):
        return len(self._active())

    def count_by_role(self):
        counts: dict[str, int] = {}
        for u in self._active():
            counts[u.role.value] = counts.get(u.role.value, 0) + 1
        return sorted(counts.items(), key=lambda kv: kv[1], reverse=True)

    def monthly_signups(self, year):
        out: dict[int, int] = {}
        for u in self._active():
            if u.created_at and u.created_at.year == year:
                out[u.created_at.month] = out.get(u.created_at.month, 0) + 1
        return out


class FakeMappingsRepo:
    def __init__(self):
        self.mappings = []

    def create(self, mapping):
        self.mappings.append(mapping)

    def list_for_manager(self, manager_emp_id):
        return [m for m in self.mappings if m.manager_emp_id == manager_emp_id]


class FakeCounterRepo:
    def __init__(self):
        self.values: dict[str, int] = {}

    def next_value(self, name, *, start):
        self.values[name] = self.values.get(name, start) + 1
        return self.values[name]


class FakeRolesRepo:
    def __init__(self):
        self.roles = {}

    def list_all(self):
        return list(self.roles.values())

    def ensure(self, role):
        self.roles.setdefault(role.code, role)


class FakeAttendanceRepo:
    def __init__(self):
        self._next_id = 1
        self.records: dict[tuple[str, date], AttendanceRecord] = {}

    def upsert_for_user_and_date(self, values):
        key = (values.user_id, values.work_date)
        existing = self.records.get(key)
        if existing:
            rid, created = existing.attendance_id, existing.created_at
        else:
            rid, created = f"a{self._next_id}", FIXED_NOW
            self._next_id += 1
        self.records[key] = AttendanceRecord(
            attendance_id=rid,
            user_id=values.user_id,
            work_date=values.work_date,
            start_time=values.start_time,
            end_time=values.end_time,
            attendance_type=values.attendance_type,
            late=values.late,
            status=values.status,
            approved_by=values.approved_by,
            created_at=created,
        )

    def get_by_id(self, attendance_id):
        return next((r for r in self.records.values() if r.attendance_id == attendance_id), None)

    def get_for_user_and_date(self, user_id, work_date):
        return self.records.get((user_id, work_date))

    def set_status(self, attendance_id, *, status, approved_by):
        record = self.get_by_id(attendance_id)
        if not record:
            return False
        self.records[(record.user_id, record.work_date)] = dataclasses.replace(
            record, status=status, approved_by=approved_by
        )
        return True

    def list_for_user(self, user_id):
        return sorted((r for r in self.records.values() if r.user_id == user_id), key=lambda r: r.work_date)

    def list_for_users(self, user_ids, *, status=None, work_date=None):
        wanted = set(user_ids)
        out = [r for r in self.records.values() if r.user_id in wanted]
        if status is not None:
            out = [r for r in out if r.status == status]
        if work_date is not None:
            out = [r for r in out if r.work_date == work_date]
        return sorted(out, key=lambda r: r.work_date, reverse=True)

    def count_present_on(self, work_date, *, types):
        wanted = set(types)
        return sum(1 for r in self.records.values() if r.work_date == work_date and r.attendance_type in wanted)

    def count_by_status(self, status):
        return sum(1 for r in self.records.values() if r.status == status)

    def monthly_status_counts(self, year):
        out: dict[int, dict[str, int]] = {}
        for r in self.records.values():
            if r.work_date.year == year:
                bucket = out.setdefault(r.work_date.month, {})
                bucket[r.status.value] = bucket.get(r.status.value, 0) + 1
        return out


class RecordingMailer:
    def __init__(self):
        self.sent = []

    def send(self, *, to, subject, html):
        self.sent.append({"to": to, "subject": subject, "html": html})


def identity_for(user: User) -> Identity:
    return Identity(
        user_id=user.user_id,
        role=user.role,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
    )


@pytest.fixture
def users_repo():
    return FakeUsersRepo()


@pytest.fixture
def mappings_repo():
    return FakeMappingsRepo()


@pytest.fixture
def counters_repo():
    return FakeCounterRepo()


@pytest.fixture
def roles_repo():
    return FakeRolesRepo()


@pytest.fixture
def attendance_repo():
    return FakeAttendanceRepo()


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
def attendance_service(attendance_repo, users_repo):
    return AttendanceService(attendance_repo, users_repo, clock=lambda: FIXED_NOW)


@pytest.fixture
def as_identity():
    return identity_for


@pytest.fixture
def mongo_conn():
    conn = DatabaseConnection(
        DBConfig(uri="mongodb://localhost:27017", database="hr_portal_test"),
        client=mongomock.MongoClient(),
    )
    ensure_indexes(conn)
    yield conn
    conn.close()
