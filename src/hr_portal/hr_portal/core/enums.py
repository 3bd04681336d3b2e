from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles, most senior first."""

    SUPER_ADMIN = "superAdmin"
    CXO_HR = "CXO/HR"
    TECH_MANAGER = "techManager"
    EMPLOYEE = "employee"
    INTERN = "intern"


class AttendanceType(str, Enum):
    FULL_DAY = "Full Day"
    HALF_DAY = "Half Day"
    ABSENT = "Absent"


class AttendanceStatus(str, Enum):
    """Approval workflow state of an attendance record."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
