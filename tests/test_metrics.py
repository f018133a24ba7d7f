from datetime import date, datetime, time

import numpy as np
import pytest

from ordination.dosing import as_needed_with_history, from_explicit_schedule
from ordination.errors import InvalidArgument
from ordination.helpers import count_by_day, day_range, days_inclusive
from ordination.metrics import cumulative_dose, days_with_dose, dose_timeline, peak_daily_dose
from ordination.prescriptions import AsNeeded, FixedDaily
from ordination.types import Administration


def test_days_inclusive_counts_both_endpoints():
    assert days_inclusive(date(2025, 12, 2), date(2025, 12, 4)) == 3
    assert days_inclusive(date(2025, 12, 2), date(2025, 12, 2)) == 1
    # leap year
    assert days_inclusive(date(2024, 2, 28), date(2024, 3, 1)) == 3


def test_day_range_matches_days_inclusive():
    days = day_range(date(2025, 12, 30), date(2026, 1, 2))
    assert days.dtype == np.dtype("datetime64[D]")
    assert len(days) == days_inclusive(date(2025, 12, 30), date(2026, 1, 2)) == 4
    assert days[0].item() == date(2025, 12, 30)
    assert days[-1].item() == date(2026, 1, 2)


def test_count_by_day_groups_by_calendar_date():
    entries = [
        Administration(datetime(2025, 12, 3, 8)),
        Administration(date(2025, 12, 2)),
        Administration(datetime(2025, 12, 3, 20)),
    ]
    assert count_by_day(entries) == {date(2025, 12, 2): 1, date(2025, 12, 3): 2}


def test_fixed_daily_timeline_sums_to_total(paracetamol):
    """A fixed prescription gives the same amount every day; the running total ends at total_dose()."""
    df = FixedDaily(date(2025, 12, 2), date(2025, 12, 8), paracetamol, 2, 0, 1, 0)
    days, amounts = dose_timeline(df)
    assert len(days) == 7
    assert np.allclose(amounts, 3.0)

    _, running = cumulative_dose(df)
    assert running[-1] == pytest.approx(df.total_dose())
    assert np.all(np.diff(running) >= 0)


def test_as_needed_timeline_follows_administrations(paracetamol):
    pn = AsNeeded(date(2025, 12, 2), date(2025, 12, 6), 3, 2.5, paracetamol)
    pn.add_dose(datetime(2025, 12, 3, 8))
    pn.add_dose(datetime(2025, 12, 3, 16))
    pn.add_dose(date(2025, 12, 5))

    _, amounts = dose_timeline(pn)
    assert amounts.tolist() == [0.0, 5.0, 0.0, 2.5, 0.0]
    assert peak_daily_dose(pn) == 5.0
    assert days_with_dose(pn) == 2
    _, running = cumulative_dose(pn)
    assert running[-1] == pytest.approx(pn.total_dose())


def test_from_explicit_schedule_sorts_by_clock_time(paracetamol):
    ds = from_explicit_schedule(date(2025, 12, 2), date(2025, 12, 4), paracetamol,
                                [(time(20), 1), (datetime(2025, 12, 2, 8), 2), (time(14), 3)])
    assert [d.time_of_day for d in ds.doses()] == [time(8), time(14), time(20)]
    assert ds.daily_dose() == 6
    assert ds.total_dose() == 18


def test_as_needed_with_history_replays_the_checks(paracetamol):
    pn = as_needed_with_history(date(2025, 12, 2), date(2025, 12, 4), 1, 5, paracetamol,
                                given=[date(2025, 12, 4), datetime(2025, 12, 2, 9), date(2025, 12, 3)])
    assert [a.day for a in pn.administrations] == [date(2025, 12, 2), date(2025, 12, 3), date(2025, 12, 4)]
    assert pn.total_dose() == 15

    with pytest.raises(InvalidArgument):
        as_needed_with_history(date(2025, 12, 2), date(2025, 12, 4), 1, 5, paracetamol,
                               given=[date(2025, 12, 2), datetime(2025, 12, 2, 18)])
