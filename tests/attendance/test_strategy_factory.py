from src.hr_portal.hr_portal.attendance.factory import AttendanceStrategyFactory
from src.hr_portal.hr_portal.attendance.strategies.afternoon_strategy import AfternoonHalfStrategy
from src.hr_portal.hr_portal.attendance.strategies.full_day_strategy import FullDayStrategy
from src.hr_portal.hr_portal.attendance.strategies.morning_strategy import MorningHalfStrategy
from src.hr_portal.hr_portal.attendance.strategies.partial_day_strategy import PartialDayStrategy
from src.hr_portal.hr_portal.core.enums import AttendanceType


def test_factory_morning_window():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_window(start=9 * 60 + 30, end=14 * 60 + 30)

    assert isinstance(strategy, MorningHalfStrategy)


def test_factory_afternoon_window():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_window(start=14 * 60 + 30, end=18 * 60)

    assert isinstance(strategy, AfternoonHalfStrategy)


def test_factory_full_window():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_window(start=9 * 60 + 30, end=18 * 60 + 30)

    assert isinstance(strategy, FullDayStrategy)


def test_factory_falls_back_to_partial_day():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_window(start=10 * 60, end=16 * 60)

    assert isinstance(strategy, PartialDayStrategy)


def test_afternoon_strategy_ignores_lateness():
    result = AfternoonHalfStrategy().classify(start=15 * 60, end=18 * 60, is_late=True)

    assert result.attendance_type == AttendanceType.HALF_DAY
    assert result.late is False


def test_full_day_strategy_is_never_late():
    result = FullDayStrategy().classify(start=9 * 60 + 30, end=18 * 60 + 30, is_late=True)

    assert result.attendance_type == AttendanceType.FULL_DAY
    assert result.late is False
