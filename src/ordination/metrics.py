import numpy as np
from typing import Tuple

from .helpers import day_range
from .prescriptions import Prescription


def dose_timeline(p: Prescription) -> Tuple[np.ndarray, np.ndarray]:
    """
    Per-day dose over the whole prescription period.

    Returns:
      days    : datetime64[D] array, one entry per day in [start, end]
      amounts : float array, the dose given on each of those days
    """
    days = day_range(p.start, p.end)
    amounts = np.array([p.dose_on(d.item()) for d in days], dtype=float)
    return days, amounts

def cumulative_dose(p: Prescription) -> Tuple[np.ndarray, np.ndarray]:
    """Running total per day. The last value equals p.total_dose()."""
    days, amounts = dose_timeline(p)
    return days, np.cumsum(amounts)

def peak_daily_dose(p: Prescription) -> float:
    """Largest amount given on any single day (0 for an empty timeline)."""
    _, amounts = dose_timeline(p)
    return float(np.max(amounts)) if amounts.size else 0.0

def days_with_dose(p: Prescription) -> int:
    """Number of days on which anything was given."""
    _, amounts = dose_timeline(p)
    return int(np.count_nonzero(amounts))
