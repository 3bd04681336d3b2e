from __future__ import annotations

from datetime import date, datetime

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from src.hr_portal.hr_portal.attendance.model import AttendanceUpsert
from src.hr_portal.hr_portal.attendance.mongo_attendance_repository import MongoAttendanceRepository
from src.hr_portal.hr_portal.core.enums import AttendanceStatus, AttendanceType


def _upsert(user_id, work_date=date(2025, 6, 17), **kw):
    values = dict(
        user_id=user_id,
        work_date=work_date,
        start_time="09:30",
        end_time="18:30",
        attendance_type=AttendanceType.FULL_DAY,
        late=False,
    )
    values.update(kw)
    return AttendanceUpsert(**values)


def test_second_submission_replaces_the_day(mongo_conn):
    repo = MongoAttendanceRepository(mongo_conn)
    user_id = str(ObjectId())
    approver_id = str(ObjectId())

    repo.upsert_for_user_and_date(_upsert(user_id))
    first = repo.get_for_user_and_date(user_id, date(2025, 6, 17))
    assert repo.set_status(first.attendance_id, status=AttendanceStatus.APPROVED, approved_by=approver_id)

    repo.upsert_for_user_and_date(
        _upsert(user_id, start_time="09:40", attendance_type=AttendanceType.HALF_DAY, late=True)
    )

    assert mongo_conn.db["attendances"].count_documents({}) == 1
    again = repo.get_for_user_and_date(user_id, date(2025, 6, 17))
    assert again.attendance_id == first.attendance_id
    assert again.status == AttendanceStatus.PENDING
    assert again.approved_by is None
    assert again.attendance_type == AttendanceType.HALF_DAY
    assert again.late is True
    assert again.created_at == first.created_at


def test_user_day_index_rejects_raw_duplicates(mongo_conn):
    user_oid = ObjectId()
    col = mongo_conn.db["attendances"]
    col.insert_one({"userId": user_oid, "date": datetime(2025, 6, 17), "status": "pending"})

    with pytest.raises(DuplicateKeyError):
        col.insert_one({"userId": user_oid, "date": datetime(2025, 6, 17), "status": "pending"})


def test_list_for_users_filters_and_orders(mongo_conn):
    repo = MongoAttendanceRepository(mongo_conn)
    ravi, anu, other = str(ObjectId()), str(ObjectId()), str(ObjectId())
    repo.upsert_for_user_and_date(_upsert(ravi, date(2025, 6, 16)))
    repo.upsert_for_user_and_date(_upsert(ravi, date(2025, 6, 17)))
    repo.upsert_for_user_and_date(_upsert(anu, date(2025, 6, 17), attendance_type=AttendanceType.ABSENT))
    repo.upsert_for_user_and_date(_upsert(other, date(2025, 6, 17)))

    rows = repo.list_for_users([ravi, anu])
    assert rows[0].work_date == date(2025, 6, 17)
    assert rows[-1].work_date == date(2025, 6, 16)
    assert {r.user_id for r in rows} == {ravi, anu}
    assert len(rows) == 3

    on_day = repo.list_for_users([ravi, anu], work_date=date(2025, 6, 16))
    assert [r.user_id for r in on_day] == [ravi]

    assert repo.list_for_users([]) == []
    assert [r.work_date for r in repo.list_for_user(ravi)] == [date(2025, 6, 16), date(2025, 6, 17)]


def test_counts_and_monthly_aggregation(mongo_conn):
    repo = MongoAttendanceRepository(mongo_conn)
    a, b, c = str(ObjectId()), str(ObjectId()), str(ObjectId())
    repo.upsert_for_user_and_date(_upsert(a, date(2025, 6, 17)))
    repo.upsert_for_user_and_date(_upsert(b, date(2025, 6, 17), attendance_type=AttendanceType.ABSENT))
    repo.upsert_for_user_and_date(_upsert(c, date(2025, 3, 3)))
    repo.upsert_for_user_and_date(_upsert(c, date(2024, 12, 31)))
    march = repo.get_for_user_and_date(c, date(2025, 3, 3))
    repo.set_status(march.attendance_id, status=AttendanceStatus.REJECTED, approved_by=a)

    present = repo.count_present_on(
        date(2025, 6, 17), types=[AttendanceType.FULL_DAY, AttendanceType.HALF_DAY]
    )
    assert present == 1
    assert repo.count_by_status(AttendanceStatus.PENDING) == 3

    assert repo.monthly_status_counts(2025) == {6: {"pending": 2}, 3: {"rejected": 1}}
