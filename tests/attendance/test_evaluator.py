import pytest

from src.hr_portal.hr_portal.attendance.evaluator import (
    CHECK_IN_TOO_EARLY,
    CHECK_OUT_TOO_LATE,
    INVALID_RANGE,
    evaluate_attendance,
    evaluate_minutes,
)
from src.hr_portal.hr_portal.core.enums import AttendanceType
from src.hr_portal.hr_portal.core.exceptions import ValidationError


def test_full_office_window_is_full_day_on_time():
    result = evaluate_attendance("09:30", "18:30")

    assert result.allowed
    assert result.attendance_type == AttendanceType.FULL_DAY
    assert result.late is False


def test_late_arrival_staying_till_close_is_late_half_day():
    result = evaluate_attendance("09:40", "18:30")

    assert result.attendance_type == AttendanceType.HALF_DAY
    assert result.late is True


def test_morning_half():
    result = evaluate_attendance("09:30", "14:00")

    assert result.attendance_type == AttendanceType.HALF_DAY
    assert result.late is False


def test_afternoon_half_is_never_late():
    result = evaluate_attendance("14:30", "18:30")

    assert result.attendance_type == AttendanceType.HALF_DAY
    assert result.late is False


def test_short_late_morning_window():
    result = evaluate_attendance("10:00", "13:00")

    assert result.attendance_type == AttendanceType.HALF_DAY
    assert result.late is True


def test_arrival_at_grace_limit_is_not_late():
    result = evaluate_attendance("09:35", "18:30")

    # misses the full window by five minutes but is not late
    assert result.attendance_type == AttendanceType.HALF_DAY
    assert result.late is False


def test_window_crossing_split_uses_catch_all():
    result = evaluate_attendance("11:00", "17:00")

    assert result.attendance_type == AttendanceType.HALF_DAY
    assert result.late is True


def test_window_wider_than_office_hours_is_rejected_for_early_checkin():
    result = evaluate_attendance("09:00", "19:00")

    assert not result.allowed
    assert result.reason == CHECK_IN_TOO_EARLY
    assert result.attendance_type is None


@pytest.mark.parametrize("end", ["09:45", "14:00", "18:30", "19:30"])
def test_checkin_before_office_start_is_always_rejected(end):
    result = evaluate_attendance("09:29", end)

    assert result.reason == CHECK_IN_TOO_EARLY


@pytest.mark.parametrize("start", ["09:30", "12:00", "18:00"])
def test_checkout_after_office_end_is_rejected(start):
    result = evaluate_attendance(start, "18:31")

    assert result.reason == CHECK_OUT_TOO_LATE


@pytest.mark.parametrize("start,end", [("10:00", "10:00"), ("12:00", "09:45"), ("08:00", "07:00")])
def test_non_increasing_range_is_rejected_first(start, end):
    result = evaluate_attendance(start, end)

    assert result.reason == INVALID_RANGE


def test_evaluation_is_idempotent():
    first = evaluate_minutes(600, 900)
    second = evaluate_minutes(600, 900)

    assert first == second


def test_malformed_time_raises_validation_error():
    with pytest.raises(ValidationError):
        evaluate_attendance("9:30", "18:30")
