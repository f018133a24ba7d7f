# src/ordination/prescriptions.py
from __future__ import annotations

import logging
import math
import threading
from abc import ABC, abstractmethod
from datetime import date, datetime, time
from numbers import Real
from typing import Iterable, Tuple, Union

import numpy as np

from .errors import InvalidArgument
from .helpers import count_by_day, days_inclusive
from .types import Administration, DateLike, Dose, Medication, as_day

logger = logging.getLogger(__name__)


class Prescription(ABC):
    """
    Shared contract for every prescription (Ordination) variant.

    start      : first day of the prescription
    end        : last day, inclusive
    medication : the Medication being prescribed (shared, never copied)

    Subclasses store their own parameters first and then call
    Prescription.__init__, which validates everything in one go. A failed
    check raises InvalidArgument before the caller ever sees the instance.
    """
    kind = "prescription"

    def __init__(self, start: DateLike, end: DateLike, medication: Medication):
        _validate_day("start", start)
        _validate_day("end", end)
        self.start = as_day(start)
        self.end = as_day(end)
        self.medication = medication
        self._validate()

    def _validate(self) -> None:
        if not isinstance(self.medication, Medication):
            raise InvalidArgument(f"medication must be a Medication (got {type(self.medication).__name__}).")
        if self.start > self.end:
            raise InvalidArgument(f"start must be on or before end (got {self.start} > {self.end}).")

    def days(self) -> int:
        """Days in the prescription period, both endpoints counted."""
        return days_inclusive(self.start, self.end)

    def covers(self, day: DateLike) -> bool:
        return self.start <= as_day(day) <= self.end

    @abstractmethod
    def daily_dose(self) -> float:
        """Dose per day (doegnDosis)."""

    @abstractmethod
    def total_dose(self) -> float:
        """Dose over the whole period (samletDosis)."""

    @abstractmethod
    def dose_on(self, day: DateLike) -> float:
        """Amount given on one calendar day; 0 outside the period."""

    # Danish names kept for callers written against the glossary
    def doegn_dosis(self) -> float:
        return self.daily_dose()

    def samlet_dosis(self) -> float:
        return self.total_dose()

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(start={self.start}, end={self.end}, "
                f"medication={self.medication.name!r})")


class FixedDaily(Prescription):
    """
    Same four dose slots every day (DagligFast).
    Example: 2 morning + 1 noon + 3 evening + 1 night = 7 per day.
    """
    kind = "fixed_daily"

    def __init__(self, start: DateLike, end: DateLike, medication: Medication,
                 morning: float, noon: float, evening: float, night: float):
        self.morning = morning
        self.noon = noon
        self.evening = evening
        self.night = night
        super().__init__(start, end, medication)

    def _validate(self) -> None:
        super()._validate()
        _validate_non_negative("morning", self.morning)
        _validate_non_negative("noon", self.noon)
        _validate_non_negative("evening", self.evening)
        _validate_non_negative("night", self.night)

    def doses(self) -> Tuple[float, float, float, float]:
        """The four slots in (morning, noon, evening, night) order."""
        return (self.morning, self.noon, self.evening, self.night)

    def daily_dose(self) -> float:
        return float(sum(self.doses()))

    def total_dose(self) -> float:
        return self.daily_dose() * self.days()

    def dose_on(self, day: DateLike) -> float:
        return self.daily_dose() if self.covers(day) else 0.0


class UnevenDaily(Prescription):
    """
    An arbitrary list of timed doses repeated every day (DagligSkæv).

    Only the clock time of each Dose matters; the pattern is the same on
    every day of the period, so the daily dose is the plain sum of amounts.
    """
    kind = "uneven_daily"

    def __init__(self, start: DateLike, end: DateLike, medication: Medication,
                 doses: Iterable[Dose] = ()):
        self._lock = threading.Lock()
        self._doses: Tuple[Dose, ...] = tuple(doses)
        super().__init__(start, end, medication)

    def _validate(self) -> None:
        super()._validate()
        for i, d in enumerate(self._doses):
            _validate_dose(f"doses[{i}]", d)

    def doses(self) -> Tuple[Dose, ...]:
        return self._doses

    def add_dose(self, at: Union[datetime, time], amount: float) -> None:
        """Append one entry to the daily pattern."""
        dose = Dose(time=at, amount=amount)
        _validate_dose("dose", dose)
        with self._lock:
            self._doses = self._doses + (dose,)
        logger.debug("uneven daily %s: added %s at %s", self.medication.name, amount, dose.time_of_day)

    def daily_dose(self) -> float:
        doses = self._doses
        if not doses:
            return 0.0
        return float(np.sum([d.amount for d in doses]))

    def total_dose(self) -> float:
        return self.daily_dose() * self.days()

    def dose_on(self, day: DateLike) -> float:
        return self.daily_dose() if self.covers(day) else 0.0


class AsNeeded(Prescription):
    """
    Given only when needed (PN), at most max_doses_per_day times a day.

    max_doses_per_day : cap on administrations per calendar day
    dose_amount       : quantity given per administration

    Administrations are recorded with add_dose(); both the daily and the
    total figure are derived from what was actually given, not from the
    length of the period.
    """
    kind = "as_needed"

    def __init__(self, start: DateLike, end: DateLike, max_doses_per_day: int,
                 dose_amount: float, medication: Medication):
        self.max_doses_per_day = max_doses_per_day
        self.dose_amount = dose_amount
        self._lock = threading.Lock()
        self._administrations: Tuple[Administration, ...] = ()
        super().__init__(start, end, medication)

    def _validate(self) -> None:
        super()._validate()
        _validate_positive_int("max_doses_per_day", self.max_doses_per_day)
        _validate_non_negative("dose_amount", self.dose_amount)

    @property
    def administrations(self) -> Tuple[Administration, ...]:
        return self._administrations

    def add_dose(self, when: DateLike) -> None:
        """
        Record one administration.

        Raises InvalidArgument when `when` falls outside the period or the
        day already holds max_doses_per_day administrations.
        """
        _validate_day("when", when)
        entry = Administration(at=when)
        day = entry.day
        if not self.covers(day):
            logger.warning("as-needed %s: rejected dose on %s, outside %s..%s",
                           self.medication.name, day, self.start, self.end)
            raise InvalidArgument(f"when must be within {self.start}..{self.end} (got {day}).")

        with self._lock:
            given = sum(1 for a in self._administrations if a.day == day)
            if given >= self.max_doses_per_day:
                logger.warning("as-needed %s: rejected dose on %s, already given %d of %d",
                               self.medication.name, day, given, self.max_doses_per_day)
                raise InvalidArgument(
                    f"at most {self.max_doses_per_day} doses per day (already {given} on {day}).")
            self._administrations = self._administrations + (entry,)
        logger.debug("as-needed %s: dose recorded on %s", self.medication.name, day)

    def times_given(self) -> int:
        return len(self._administrations)

    def doses_by_day(self) -> dict[date, int]:
        return count_by_day(self._administrations)

    def daily_dose(self) -> float:
        """
        Average given per day between the first and the last administration day.
        Dec 2 and Dec 4 at 6 each: 12 / 3 = 4.
        Fewer than two distinct days leaves no span to average over, so 0.
        """
        administrations = self._administrations
        days = {a.day for a in administrations}
        if len(days) < 2:
            return 0.0
        span = days_inclusive(min(days), max(days))
        return len(administrations) * float(self.dose_amount) / span

    def total_dose(self) -> float:
        return len(self._administrations) * float(self.dose_amount)

    def dose_on(self, day: DateLike) -> float:
        d = as_day(day)
        given = sum(1 for a in self._administrations if a.day == d)
        return given * float(self.dose_amount)


# Glossary names
Ordination = Prescription
DagligFast = FixedDaily
DagligSkaev = UnevenDaily
PN = AsNeeded


# --------------------------
# Small input validators
# --------------------------
def _validate_day(name: str, x) -> None:
    if not isinstance(x, date):
        raise InvalidArgument(f"{name} must be a date or datetime (got {type(x).__name__}).")

def _validate_non_negative(name: str, x: float) -> None:
    if isinstance(x, bool) or not isinstance(x, Real):
        raise InvalidArgument(f"{name} must be a number (got {x!r}).")
    if not (x >= 0) or math.isinf(x):
        raise InvalidArgument(f"{name} must be >= 0 (got {x}).")

def _validate_positive_int(name: str, x: int) -> None:
    if isinstance(x, bool) or not (isinstance(x, int) and x > 0):
        raise InvalidArgument(f"{name} must be a positive integer (got {x}).")

def _validate_dose(name: str, d: Dose) -> None:
    if not isinstance(d, Dose):
        raise InvalidArgument(f"{name} must be a Dose (got {type(d).__name__}).")
    if not isinstance(d.time, (datetime, time)):
        raise InvalidArgument(f"{name}.time must be a datetime or time (got {type(d.time).__name__}).")
    _validate_non_negative(f"{name}.amount", d.amount)

