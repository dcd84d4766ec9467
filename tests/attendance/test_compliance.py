from datetime import date, datetime, time, timedelta

import pytest

from timeclock.attendance.compliance import ComplianceScorer
from timeclock.attendance.model import DayAttendance
from timeclock.attendance.service import AttendanceService
from timeclock.core.enums import ComplianceTier


def _day(d: date, worked: float, expected: float = 8.0) -> DayAttendance:
    return DayAttendance(
        work_date=d,
        employee_id=1,
        first_in=time(8, 0) if worked else None,
        last_out=None,
        worked_hours=worked,
        expected_hours=expected,
    )


def _days(today: date, met: int, missed: int) -> list[DayAttendance]:
    worked = [9.0] * met + [4.0] * missed
    return [_day(today - timedelta(days=i), hours) for i, hours in enumerate(worked)]


@pytest.mark.parametrize(
    "met, missed, percentage, tier",
    [
        (9, 1, 90, ComplianceTier.EXCELLENT),
        (7, 3, 70, ComplianceTier.GOOD),
        (6, 4, 60, ComplianceTier.LOW),
    ],
)
def test_score_tiers(met, missed, percentage, tier):
    today = date(2026, 2, 4)
    scorer = ComplianceScorer()

    result = scorer.score(1, _days(today, met, missed))

    assert result.to_dict()["percentage"] == percentage
    assert result.tier == tier
    assert result.counted_days == 10
    assert result.met_days == met


def test_nothing_counted_scores_zero():
    today = date(2026, 2, 4)
    window = [_day(today, 0.0), _day(today - timedelta(days=1), 0.0)]

    result = ComplianceScorer().score(1, window)

    assert result.percentage == 0.0
    assert result.counted_days == 0
    assert result.tier == ComplianceTier.LOW


def test_days_without_hours_leave_the_denominator():
    today = date(2026, 2, 4)
    window = [_day(today, 9.0), _day(today - timedelta(days=1), 0.0), _day(today - timedelta(days=2), 4.0)]

    result = ComplianceScorer().score(1, window)

    assert result.counted_days == 2
    assert result.percentage == 50.0


def test_tier_uses_unrounded_percentage():
    # 89.6 would round to 90 for display but is still "good".
    assert ComplianceScorer.tier_for(89.6) == ComplianceTier.GOOD
    assert ComplianceScorer.tier_for(90.0) == ComplianceTier.EXCELLENT


def test_select_window_is_recent_first_and_capped():
    today = date(2026, 2, 4)
    scorer = ComplianceScorer()
    days = [_day(today - timedelta(days=i), 8.0) for i in range(11)] + [_day(today - timedelta(days=20), 8.0)]

    window = scorer.select_window(days, today)

    assert len(window) == 10
    assert window[0].work_date == today
    assert window[-1].work_date == today - timedelta(days=9)


def test_compliance_from_store(employees_repo, punches_repo):
    today = date(2026, 2, 4)
    for offset, out_hour in [(0, 17), (1, 17), (2, 12)]:
        d = today - timedelta(days=offset)
        punches_repo.add(1, "in", datetime.combine(d, time(8, 0)))
        punches_repo.add(1, "out", datetime.combine(d, time(out_hour, 0)))
    # Outside the lookback horizon.
    punches_repo.add(1, "in", datetime(2026, 1, 1, 8, 0))
    punches_repo.add(1, "out", datetime(2026, 1, 1, 10, 0))

    svc = AttendanceService(punches_repo, employees_repo)
    result = svc.compliance(employees_repo.get_by_id(1), today=today)

    assert result.counted_days == 3
    assert result.met_days == 2
    assert result.to_dict() == {
        "employee_id": 1,
        "percentage": 67,
        "days_worked": 3,
        "days_met": 2,
        "tier": "low",
    }


def test_compliance_all_lists_every_active_employee(employees_repo, punches_repo):
    today = date(2026, 2, 4)
    punches_repo.add(2, "in", datetime(2026, 2, 3, 9, 0))
    punches_repo.add(2, "out", datetime(2026, 2, 3, 18, 0))

    svc = AttendanceService(punches_repo, employees_repo)
    results = {r.employee_id: r for r in svc.compliance_all(today=today)}

    assert set(results) == {1, 2, 3}
    assert results[2].percentage == 100.0
    assert results[1].counted_days == 0
    assert punches_repo.range_calls == 1


@pytest.mark.parametrize("met, missed, shown", [(5, 3, 63), (1, 7, 13), (3, 5, 38), (7, 1, 88)])
def test_exposed_percentage_rounds_half_up(met, missed, shown):
    result = ComplianceScorer().score(1, _days(date(2026, 2, 4), met, missed))

    assert result.to_dict()["percentage"] == shown


def test_five_of_eight_from_store_shows_63(employees_repo, punches_repo):
    today = date(2026, 2, 4)
    for offset in range(8):
        d = today - timedelta(days=offset)
        punches_repo.add(1, "in", datetime.combine(d, time(8, 0)))
        punches_repo.add(1, "out", datetime.combine(d, time(17 if offset < 5 else 12, 0)))

    result = AttendanceService(punches_repo, employees_repo).compliance(employees_repo.get_by_id(1), today=today)

    assert result.percentage == 62.5
    assert result.to_dict()["percentage"] == 63
    assert result.tier == ComplianceTier.LOW
