from datetime import time

import pytest

from timeclock.attendance.calculator.daily_hours import DailyHoursCalculator
from timeclock.core.exceptions import ComputationAnomaly


@pytest.mark.parametrize(
    "first_in, last_out, expected",
    [
        (time(8, 0), time(17, 0), 9.0),
        (time(9, 0), time(17, 0), 8.0),
        (time(9, 0), time(16, 30), 7.5),
        (time(9, 0), None, 0.0),
        (None, time(17, 0), 0.0),
        (None, None, 0.0),
    ],
)
def test_worked_hours(first_in, last_out, expected):
    assert DailyHoursCalculator().worked_hours(first_in, last_out) == expected


def test_worked_hours_ignores_seconds_and_rounds():
    calc = DailyHoursCalculator()

    assert calc.worked_hours(time(8, 0, 59), time(8, 20, 1)) == 0.33


def test_out_before_in_is_returned_negative():
    calc = DailyHoursCalculator()

    assert calc.worked_hours(time(17, 0), time(8, 0)) == -9.0


def test_ensure_plausible_flags_negative_hours():
    with pytest.raises(ComputationAnomaly) as exc:
        DailyHoursCalculator.ensure_plausible(-9.0)

    assert exc.value.hours == -9.0


def test_ensure_plausible_passes_normal_day():
    assert DailyHoursCalculator.ensure_plausible(8.5) == 8.5


def test_ensure_plausible_flags_more_than_a_day():
    with pytest.raises(ComputationAnomaly):
        DailyHoursCalculator.ensure_plausible(24.5)

    assert DailyHoursCalculator.ensure_plausible(23.98) == 23.98
