# src/ordination/types.py
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional, Union

# Calendar days are plain dates internally. datetimes are accepted at the edges.
DateLike = Union[date, datetime]


def as_day(value: DateLike) -> date:
    """Drop the time-of-day part (if any) and return the calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"expected a date or datetime (got {type(value).__name__}).")


@dataclass(frozen=True)
class Medication:
    """
    A medication (Laegemiddel) as handed to us by the catalogue.

    name                : display name, e.g. "Paracetamol"
    unit                : dispensing unit, e.g. "Ml" or "Stk"
    units_per_kg_light  : units per kg body weight per day, patients below the light limit
    units_per_kg_normal : same, for patients between the limits
    units_per_kg_heavy  : same, for patients above the heavy limit
    medication_id       : catalogue identity, None until persisted
    """
    name: str
    units_per_kg_light: float
    units_per_kg_normal: float
    units_per_kg_heavy: float
    unit: str
    medication_id: Optional[int] = None


@dataclass(frozen=True)
class Patient:
    """
    The patient record the recommendation helpers consume.

    cpr       : civil registration number
    name      : full name
    weight_kg : body weight in kilograms
    """
    cpr: str
    name: str
    weight_kg: float
    patient_id: Optional[int] = None


@dataclass(frozen=True)
class Dose:
    """
    One entry of an uneven daily pattern (Dosis).

    time   : when in the day it is taken; a datetime is accepted and only its clock time counts
    amount : quantity in the medication's unit
    """
    time: Union[datetime, time]
    amount: float

    @property
    def time_of_day(self) -> time:
        return self.time.time() if isinstance(self.time, datetime) else self.time


@dataclass(frozen=True)
class Administration:
    """
    One recorded as-needed administration (Dato).

    at : when it was given (date or datetime)
    """
    at: DateLike

    @property
    def day(self) -> date:
        return as_day(self.at)
