from __future__ import annotations

from datetime import date, datetime

import pytest
from bson import ObjectId

from src.hr_portal.hr_portal.core.enums import Role
from src.hr_portal.hr_portal.core.exceptions import ConflictError
from src.hr_portal.hr_portal.users.model import NewUser
from src.hr_portal.hr_portal.users.mongo_counter_repository import MongoCounterRepository
from src.hr_portal.hr_portal.users.mongo_user_repository import MongoUserRepository


def _new_user(email="ravi@example.com", employee_id="EMP1001", role=Role.EMPLOYEE, first_name="Ravi"):
    return NewUser(
        first_name=first_name,
        last_name="Kumar",
        email=email,
        password_hash="hashed",
        role=role,
        employee_id=employee_id,
        dob=date(1998, 3, 14),
        manager_id=None,
        created_by=None,
    )


def test_counter_starts_after_seed(mongo_conn):
    counters = MongoCounterRepository(mongo_conn)

    assert counters.next_value("employeeId", start=1000) == 1001
    assert counters.next_value("employeeId", start=1000) == 1002
    assert counters.next_value("other", start=5) == 6


def test_create_and_read_back(mongo_conn):
    repo = MongoUserRepository(mongo_conn)

    user_id = repo.create_user(_new_user())

    user = repo.get_by_id(user_id)
    assert user.email == "ravi@example.com"
    assert user.dob == date(1998, 3, 14)
    assert user.role == Role.EMPLOYEE
    assert repo.get_by_email("ravi@example.com").user_id == user_id
    assert repo.get_by_employee_id("EMP1001").user_id == user_id
    assert repo.get_by_id("not-an-object-id") is None


def test_duplicate_email_is_conflict(mongo_conn):
    repo = MongoUserRepository(mongo_conn)
    repo.create_user(_new_user())

    with pytest.raises(ConflictError) as exc:
        repo.create_user(_new_user(employee_id="EMP1002"))

    assert exc.value.status_code == 409
    assert mongo_conn.db["users"].count_documents({}) == 1


def test_update_to_taken_email_is_conflict(mongo_conn):
    repo = MongoUserRepository(mongo_conn)
    repo.create_user(_new_user())
    other_id = repo.create_user(_new_user(email="anu@example.com", employee_id="EMP1002"))

    with pytest.raises(ConflictError):
        repo.update_fields(other_id, {"email": "ravi@example.com"})

    assert repo.get_by_id(other_id).email == "anu@example.com"
    assert repo.update_fields(other_id, {"mobile": "12345"}).mobile == "12345"


def test_soft_deleted_users_are_hidden(mongo_conn):
    repo = MongoUserRepository(mongo_conn)
    keep = repo.create_user(_new_user())
    gone = repo.create_user(_new_user(email="anu@example.com", employee_id="EMP1002", role=Role.INTERN, first_name="Anu"))

    assert repo.soft_delete(gone)

    assert [u.user_id for u in repo.list_all()] == [keep]
    assert repo.count_active() == 1
    assert repo.get_by_employee_id("EMP1002") is None
    assert repo.list_by_roles([Role.INTERN]) == []
    assert repo.count_by_role() == [("employee", 1)]


def test_list_by_roles_matches_first_name_case_insensitively(mongo_conn):
    repo = MongoUserRepository(mongo_conn)
    repo.create_user(_new_user())
    repo.create_user(_new_user(email="anu@example.com", employee_id="EMP1002", first_name="Anu"))

    names = [u.first_name for u in repo.list_by_roles([Role.EMPLOYEE], first_name="rav")]

    assert names == ["Ravi"]


def test_monthly_signups_groups_by_month(mongo_conn):
    repo = MongoUserRepository(mongo_conn)
    first = repo.create_user(_new_user())
    second = repo.create_user(_new_user(email="anu@example.com", employee_id="EMP1002"))
    third = repo.create_user(_new_user(email="maya@example.com", employee_id="EMP1003"))
    col = mongo_conn.db["users"]
    for user_id, created in ((first, datetime(2025, 3, 5)), (second, datetime(2025, 3, 20)), (third, datetime(2024, 7, 1))):
        col.update_one({"_id": ObjectId(user_id)}, {"$set": {"createdAt": created}})

    assert repo.monthly_signups(2025) == {3: 2}
