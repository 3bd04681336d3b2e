from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Plain data object, no database access. ``user_id`` is the string form of
    the Mongo ObjectId.
    """

    user_id: str
    first_name: str
    last_name: str
    email: str
    password_hash: str
    role: Role
    employee_id: Optional[str]
    dob: Optional[date]
    manager_id: Optional[str] = None
    created_by: Optional[str] = None
    address: Optional[str] = None
    mobile: Optional[str] = None
    emergency_contact: Optional[str] = None
    resume: str = ""
    photo_id: str = ""
    is_deleted: bool = False
    reset_token: Optional[str] = None
    reset_token_expiry: Optional[datetime] = None
    created_at: Optional[datetime] = None

    def public_view(self) -> dict:
        """JSON-safe view without secrets."""
        return {
            "id": self.user_id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "role": self.role.value,
            "employeeId": self.employee_id,
            "dob": self.dob.isoformat() if self.dob else None,
            "managerId": self.manager_id,
            "createdBy": self.created_by,
            "address": self.address,
            "mobile": self.mobile,
            "emergencyContact": self.emergency_contact,
            "resume": self.resume,
            "photoId": self.photo_id,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class ManagerMapping:
    """Links a subordinate's employee id to their manager's employee id."""

    employee_emp_id: str
    manager_emp_id: str
    role: Role


@dataclass(frozen=True)
class NewUser:
    first_name: str
    last_name: str
    email: str
    password_hash: str
    role: Role
    employee_id: str
    dob: date
    manager_id: Optional[str]
    created_by: Optional[str]
    resume: str = ""
    photo_id: str = ""
