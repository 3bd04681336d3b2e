from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from pymongo import ASCENDING, DESCENDING

from ..common.datetime_utils import to_midnight, utc_now
from ..core.enums import AttendanceStatus, AttendanceType
from ..database.connection import DatabaseConnection
from ..database.mongo_base import ATTENDANCES, as_date, id_str, to_object_id, to_object_ids
from .model import AttendanceRecord, AttendanceUpsert
from .repository import AttendanceRepository


def _to_record(doc: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=str(doc["_id"]),
        user_id=str(doc["userId"]),
        work_date=as_date(doc["date"]),
        start_time=doc.get("startTime"),
        end_time=doc.get("endTime"),
        attendance_type=AttendanceType(doc.get("attendanceType") or AttendanceType.ABSENT.value),
        late=bool(doc.get("late", False)),
        status=AttendanceStatus(doc.get("status") or AttendanceStatus.PENDING.value),
        approved_by=id_str(doc.get("approvedBy")),
        created_at=doc.get("createdAt"),
    )


class MongoAttendanceRepository(AttendanceRepository):
    def __init__(self, conn: DatabaseConnection):
        self._conn = conn

    @property
    def _col(self):
        return self._conn.db[ATTENDANCES]

    def upsert_for_user_and_date(self, values: AttendanceUpsert) -> None:
        now = utc_now()
        key = {"userId": to_object_id(values.user_id), "date": to_midnight(values.work_date)}
        self._col.update_one(
            key,
            {
                "$set": {
                    "startTime": values.start_time,
                    "endTime": values.end_time,
                    "attendanceType": values.attendance_type.value,
                    "late": bool(values.late),
                    "status": values.status.value,
                    "approvedBy": to_object_id(values.approved_by),
                    "updatedAt": now,
                },
                "$setOnInsert": {"createdAt": now},
            },
            upsert=True,
        )

    def get_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        oid = to_object_id(attendance_id)
        if oid is None:
            return None
        doc = self._col.find_one({"_id": oid})
        return _to_record(doc) if doc else None

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        doc = self._col.find_one({"userId": to_object_id(user_id), "date": to_midnight(work_date)})
        return _to_record(doc) if doc else None

    def set_status(self, attendance_id: str, *, status: AttendanceStatus, approved_by: str) -> bool:
        result = self._col.update_one(
            {"_id": to_object_id(attendance_id)},
            {
                "$set": {
                    "status": status.value,
                    "approvedBy": to_object_id(approved_by),
                    "updatedAt": utc_now(),
                }
            },
        )
        return result.matched_count > 0

    def list_for_user(self, user_id: str) -> Sequence[AttendanceRecord]:
        rows = self._col.find({"userId": to_object_id(user_id)}).sort("date", ASCENDING)
        return [_to_record(r) for r in rows]

    def list_for_users(
        self,
        user_ids: Iterable[str],
        *,
        status: Optional[AttendanceStatus] = None,
        work_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        oids = to_object_ids(user_ids)
        if not oids:
            return []
        query: dict = {"userId": {"$in": oids}}
        if status is not None:
            query["status"] = status.value
        if work_date is not None:
            query["date"] = to_midnight(work_date)
        rows = self._col.find(query).sort([("date", DESCENDING), ("createdAt", DESCENDING)])
        return [_to_record(r) for r in rows]

    def count_present_on(self, work_date: date, *, types: Iterable[AttendanceType]) -> int:
        return int(
            self._col.count_documents(
                {"date": to_midnight(work_date), "attendanceType": {"$in": [t.value for t in types]}}
            )
        )

    def count_by_status(self, status: AttendanceStatus) -> int:
        return int(self._col.count_documents({"status": status.value}))

    def monthly_status_counts(self, year: int) -> dict[int, dict[str, int]]:
        rows = self._col.aggregate(
            [
                {"$match": {"date": {"$gte": datetime(year, 1, 1), "$lt": datetime(year + 1, 1, 1)}}},
                {"$group": {"_id": {"month": {"$month": "$date"}, "status": "$status"}, "count": {"$sum": 1}}},
            ]
        )
        out: dict[int, dict[str, int]] = {}
        for r in rows:
            month = int(r["_id"]["month"])
            out.setdefault(month, {})[str(r["_id"]["status"])] = int(r["count"])
        return out
