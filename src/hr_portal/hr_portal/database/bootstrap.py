from __future__ import annotations

import logging
from datetime import date, datetime

from pymongo import ASCENDING, DESCENDING
from werkzeug.security import generate_password_hash

from ..common.datetime_utils import utc_now
from ..core.constants import EMPLOYEE_ID_COUNTER, EMPLOYEE_ID_PREFIX, EMPLOYEE_ID_SEED
from ..core.enums import Role
from ..users.mongo_counter_repository import MongoCounterRepository
from ..users.mongo_role_repository import MongoRoleRepository
from ..users.role_model import DEFAULT_ROLES
from .connection import DatabaseConnection
from .mongo_base import ATTENDANCES, MAPPINGS, ROLES, USERS

logger = logging.getLogger(__name__)


def ensure_indexes(conn: DatabaseConnection) -> None:
    """Create indexes (idempotent). The (userId, date) index backs the one-record-per-day rule."""

    db = conn.db
    db[ATTENDANCES].create_index([("userId", ASCENDING), ("date", ASCENDING)], unique=True, name="user_day_unique")
    db[ATTENDANCES].create_index([("status", ASCENDING), ("date", DESCENDING)], name="status_date")
    db[USERS].create_index([("email", ASCENDING)], unique=True, name="email_unique")
    db[USERS].create_index([("employeeId", ASCENDING)], unique=True, sparse=True, name="employee_id_unique")
    db[USERS].create_index([("role", ASCENDING)], name="role")
    db[MAPPINGS].create_index([("managerEmpId", ASCENDING)], name="manager_emp_id")
    db[ROLES].create_index([("code", ASCENDING)], unique=True, name="code_unique")
    logger.info("Indexes ensured on %s", db.name)


def seed_roles(conn: DatabaseConnection) -> None:
    repo = MongoRoleRepository(conn)
    for role in DEFAULT_ROLES:
        repo.ensure(role)


def ensure_super_admin(
    conn: DatabaseConnection,
    *,
    email: str,
    password: str,
    first_name: str = "Super",
    last_name: str = "Admin",
    dob: date = date(1990, 1, 1),
) -> bool:
    """Create the first superAdmin account if none exists. Returns True when created."""

    users = conn.db[USERS]
    if users.find_one({"role": Role.SUPER_ADMIN.value}):
        return False

    seq = MongoCounterRepository(conn).next_value(EMPLOYEE_ID_COUNTER, start=EMPLOYEE_ID_SEED)
    now = utc_now()
    users.insert_one(
        {
            "firstName": first_name,
            "lastName": last_name,
            "email": email.strip().lower(),
            "password": generate_password_hash(password),
            "role": Role.SUPER_ADMIN.value,
            "employeeId": f"{EMPLOYEE_ID_PREFIX}{seq}",
            "dob": datetime(dob.year, dob.month, dob.day),
            "managerId": None,
            "resume": "",
            "photoId": "",
            "isDeleted": False,
            "createdAt": now,
            "updatedAt": now,
        }
    )
    logger.info("Seed superAdmin %s created", email)
    return True
