from __future__ import annotations

import re
from datetime import datetime
from typing import Iterable, Optional, Sequence

from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from ..common.datetime_utils import utc_now
from ..core.enums import Role
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mongo_base import USERS, as_date, id_str, not_deleted, to_object_id, to_object_ids
from .model import NewUser, User
from .repository import UserRepository

# Document field for each updatable User attribute.
_FIELD_MAP = {
    "first_name": "firstName",
    "last_name": "lastName",
    "email": "email",
    "role": "role",
    "mobile": "mobile",
    "address": "address",
    "emergency_contact": "emergencyContact",
    "manager_id": "managerId",
    "resume": "resume",
    "photo_id": "photoId",
}


def _to_user(doc: dict) -> User:
    return User(
        user_id=str(doc["_id"]),
        first_name=doc.get("firstName", ""),
        last_name=doc.get("lastName", ""),
        email=doc.get("email", ""),
        password_hash=doc.get("password", ""),
        role=Role(doc["role"]),
        employee_id=doc.get("employeeId"),
        dob=as_date(doc.get("dob")),
        manager_id=id_str(doc.get("managerId")),
        created_by=id_str(doc.get("createdBy")),
        address=doc.get("address"),
        mobile=doc.get("mobile"),
        emergency_contact=doc.get("emergencyContact"),
        resume=doc.get("resume") or "",
        photo_id=doc.get("photoId") or "",
        is_deleted=bool(doc.get("isDeleted", False)),
        reset_token=doc.get("resetToken"),
        reset_token_expiry=doc.get("resetTokenExpiry"),
        created_at=doc.get("createdAt"),
    )


def _conflict(error: DuplicateKeyError) -> ConflictError:
    if "employeeId" in str(error):
        return ConflictError("Employee ID already exists")
    return ConflictError("Email already exists")


class MongoUserRepository(UserRepository):
    def __init__(self, conn: DatabaseConnection):
        self._conn = conn

    @property
    def _users(self):
        return self._conn.db[USERS]

    def get_by_id(self, user_id: str) -> Optional[User]:
        oid = to_object_id(user_id)
        if oid is None:
            return None
        doc = self._users.find_one({"_id": oid})
        return _to_user(doc) if doc else None

    def get_by_email(self, email: str) -> Optional[User]:
        doc = self._users.find_one({"email": email})
        return _to_user(doc) if doc else None

    def get_by_employee_id(self, employee_id: str) -> Optional[User]:
        doc = self._users.find_one({"employeeId": employee_id, **not_deleted()})
        return _to_user(doc) if doc else None

    def get_by_reset_token(self, token: str, *, now: datetime) -> Optional[User]:
        doc = self._users.find_one({"resetToken": token, "resetTokenExpiry": {"$gt": now}})
        return _to_user(doc) if doc else None

    def create_user(self, new_user: NewUser) -> str:
        now = utc_now()
        dob = new_user.dob
        doc = {
            "firstName": new_user.first_name,
            "lastName": new_user.last_name,
            "email": new_user.email,
            "password": new_user.password_hash,
            "role": new_user.role.value,
            "employeeId": new_user.employee_id,
            "dob": datetime(dob.year, dob.month, dob.day),
            "managerId": to_object_id(new_user.manager_id),
            "createdBy": to_object_id(new_user.created_by),
            "resume": new_user.resume,
            "photoId": new_user.photo_id,
            "isDeleted": False,
            "createdAt": now,
            "updatedAt": now,
        }
        try:
            result = self._users.insert_one(doc)
        except DuplicateKeyError as e:
            raise _conflict(e)
        return str(result.inserted_id)

    def update_fields(self, user_id: str, fields: dict) -> Optional[User]:
        oid = to_object_id(user_id)
        if oid is None:
            return None

        to_set: dict = {"updatedAt": utc_now()}
        for key, value in fields.items():
            doc_key = _FIELD_MAP.get(key)
            if doc_key is None:
                raise KeyError(f"Unsupported user field: {key}")
            if key == "role":
                value = Role(value).value
            elif key == "manager_id":
                value = to_object_id(value)
            to_set[doc_key] = value

        try:
            doc = self._users.find_one_and_update(
                {"_id": oid},
                {"$set": to_set},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as e:
            raise _conflict(e)
        return _to_user(doc) if doc else None

    def soft_delete(self, user_id: str) -> bool:
        oid = to_object_id(user_id)
        if oid is None:
            return False
        result = self._users.update_one({"_id": oid}, {"$set": {"isDeleted": True, "updatedAt": utc_now()}})
        return result.matched_count > 0

    def set_reset_token(self, user_id: str, *, token: str, expires_at: datetime) -> None:
        self._users.update_one(
            {"_id": to_object_id(user_id)},
            {"$set": {"resetToken": token, "resetTokenExpiry": expires_at}},
        )

    def update_password(self, user_id: str, *, password_hash: str) -> None:
        self._users.update_one(
            {"_id": to_object_id(user_id)},
            {
                "$set": {"password": password_hash, "updatedAt": utc_now()},
                "$unset": {"resetToken": "", "resetTokenExpiry": ""},
            },
        )

    def list_all(self, *, exclude_user_id: Optional[str] = None, exclude_roles: Iterable[Role] = ()) -> Sequence[User]:
        query: dict = not_deleted()
        oid = to_object_id(exclude_user_id)
        if oid is not None:
            query["_id"] = {"$ne": oid}
        roles = [Role(r).value for r in exclude_roles]
        if roles:
            query["role"] = {"$nin": roles}
        return [_to_user(d) for d in self._users.find(query).sort("createdAt", DESCENDING)]

    def list_by_roles(self, roles: Iterable[Role], *, first_name: Optional[str] = None) -> Sequence[User]:
        query: dict = {"role": {"$in": [Role(r).value for r in roles]}, **not_deleted()}
        if first_name:
            query["firstName"] = {"$regex": re.escape(first_name), "$options": "i"}
        return [_to_user(d) for d in self._users.find(query)]

    def list_by_employee_ids(self, employee_ids: Iterable[str]) -> Sequence[User]:
        ids = list(employee_ids)
        if not ids:
            return []
        query = {"employeeId": {"$in": ids}, **not_deleted()}
        return [_to_user(d) for d in self._users.find(query).sort("createdAt", DESCENDING)]

    def list_by_ids(self, user_ids: Iterable[str]) -> Sequence[User]:
        oids = to_object_ids(user_ids)
        if not oids:
            return []
        return [_to_user(d) for d in self._users.find({"_id": {"$in": oids}})]

    def count_active(self) -> int:
        return int(self._users.count_documents(not_deleted()))

    def count_by_role(self) -> Sequence[tuple[str, int]]:
        rows = self._users.aggregate(
            [
                {"$match": not_deleted()},
                {"$group": {"_id": "$role", "count": {"$sum": 1}}},
                {"$sort": {"count": -1}},
            ]
        )
        return [(r["_id"], int(r["count"])) for r in rows]

    def monthly_signups(self, year: int) -> dict[int, int]:
        rows = self._users.aggregate(
            [
                {"$match": {"createdAt": {"$gte": datetime(year, 1, 1), "$lt": datetime(year + 1, 1, 1)}}},
                {"$group": {"_id": {"$month": "$createdAt"}, "users": {"$sum": 1}}},
            ]
        )
        return {int(r["_id"]): int(r["users"]) for r in rows}
