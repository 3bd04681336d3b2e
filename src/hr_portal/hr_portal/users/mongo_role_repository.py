from __future__ import annotations

from typing import Sequence

from ..common.datetime_utils import utc_now
from ..database.connection import DatabaseConnection
from ..database.mongo_base import ROLES
from .role_model import RoleDefinition
from .role_repository import RoleRepository


class MongoRoleRepository(RoleRepository):
    def __init__(self, conn: DatabaseConnection):
        self._conn = conn

    def list_all(self) -> Sequence[RoleDefinition]:
        rows = self._conn.db[ROLES].find({}, {"code": 1, "name": 1}).sort("createdAt", 1)
        return [RoleDefinition(code=r["code"], name=r["name"]) for r in rows]

    def ensure(self, role: RoleDefinition) -> None:
        now = utc_now()
        self._conn.db[ROLES].update_one(
            {"code": role.code},
            {"$setOnInsert": {"code": role.code, "name": role.name, "createdAt": now, "updatedAt": now}},
            upsert=True,
        )
