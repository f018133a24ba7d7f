from collections import Counter
from datetime import date
from typing import Iterable

import numpy as np

from .config import DAY_UNIT
from .types import Administration


def days_inclusive(start: date, end: date) -> int:
    """
    Number of calendar days in [start, end], both endpoints counted.
    Dec 2 -> Dec 4 gives 3.
    """
    span = np.datetime64(end, DAY_UNIT) - np.datetime64(start, DAY_UNIT)
    return int(span.astype(int)) + 1


def day_range(start: date, end: date) -> np.ndarray:
    """Every day in [start, end] as a datetime64[D] array."""
    return np.arange(np.datetime64(start, DAY_UNIT),
                     np.datetime64(end, DAY_UNIT) + np.timedelta64(1, DAY_UNIT),
                     dtype=f"datetime64[{DAY_UNIT}]")


def count_by_day(administrations: Iterable[Administration]) -> dict[date, int]:
    """
    Group administrations by calendar day and count them.
    """
    buckets: Counter[date] = Counter(a.day for a in administrations)
    return dict(sorted(buckets.items()))
