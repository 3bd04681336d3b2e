from __future__ import annotations

from typing import Sequence

from ..common.datetime_utils import utc_now
from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mongo_base import MAPPINGS
from .model import ManagerMapping
from .repository import ManagerMappingRepository


class MongoManagerMappingRepository(ManagerMappingRepository):
    def __init__(self, conn: DatabaseConnection):
        self._conn = conn

    def create(self, mapping: ManagerMapping) -> None:
        now = utc_now()
        self._conn.db[MAPPINGS].insert_one(
            {
                "employeeEmpId": mapping.employee_emp_id,
                "managerEmpId": mapping.manager_emp_id,
                "role": mapping.role.value,
                "createdAt": now,
                "updatedAt": now,
            }
        )

    def list_for_manager(self, manager_emp_id: str) -> Sequence[ManagerMapping]:
        rows = self._conn.db[MAPPINGS].find({"managerEmpId": manager_emp_id})
        return [
            ManagerMapping(
                employee_emp_id=r["employeeEmpId"],
                manager_emp_id=r["managerEmpId"],
                role=Role(r["role"]),
            )
            for r in rows
        ]
