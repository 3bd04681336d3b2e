from __future__ import annotations

from datetime import date, datetime
from typing import Any, Iterable, Optional

from bson import ObjectId
from bson.errors import InvalidId

USERS = "users"
ATTENDANCES = "attendances"
MAPPINGS = "employeemanagermappings"
COUNTERS = "counters"
ROLES = "roles"


def to_object_id(value: Any) -> Optional[ObjectId]:
    """ObjectId for ``value`` or None when it is not a valid id."""

    if value is None:
        return None
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


def to_object_ids(values: Iterable[Any]) -> list[ObjectId]:
    out = []
    for v in values:
        oid = to_object_id(v)
        if oid is not None:
            out.append(oid)
    return out


def id_str(value: Any) -> Optional[str]:
    return str(value) if value is not None else None


def as_date(value: Any) -> Optional[date]:
    """Normalize stored day values (datetime at midnight) to date."""

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.fromisoformat(str(value)).date()


def not_deleted() -> dict:
    return {"isDeleted": {"$ne": True}}
