# src/ordination/dosing.py
from __future__ import annotations

from datetime import datetime, time
from typing import Iterable, Sequence, Tuple, Union

from .prescriptions import AsNeeded, UnevenDaily
from .types import DateLike, Dose, Medication, as_day


def from_explicit_schedule(start: DateLike, end: DateLike, medication: Medication,
                           entries: Sequence[Tuple[Union[datetime, time], float]]) -> UnevenDaily:
    """
    Build an uneven daily prescription from manual (time, amount) entries.
    Example: entries=[(time(8), 2), (time(14), 3), (time(20), 1)]  -> 6 per day

    Entries are sorted by clock time so the pattern reads in the order it is taken.
    """
    doses = [Dose(time=t, amount=amount) for t, amount in entries]
    doses.sort(key=lambda d: d.time_of_day)
    return UnevenDaily(start, end, medication, doses)


def as_needed_with_history(start: DateLike, end: DateLike, max_doses_per_day: int,
                           dose_amount: float, medication: Medication,
                           given: Iterable[DateLike] = ()) -> AsNeeded:
    """
    An as-needed prescription with administrations already recorded, e.g. when
    reloading one from storage. Each entry goes through add_dose(), so the
    period and the per-day cap are checked exactly as for a live call.
    """
    pn = AsNeeded(start, end, max_doses_per_day, dose_amount, medication)
    for when in sorted(given, key=as_day):
        pn.add_dose(when)
    return pn
