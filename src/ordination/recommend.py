"""Weight-banded recommended daily dose."""
import logging

from .config import HEAVY_WEIGHT_LIMIT_KG, LIGHT_WEIGHT_LIMIT_KG
from .errors import InvalidArgument
from .prescriptions import Prescription
from .types import Medication, Patient

logger = logging.getLogger(__name__)


def units_per_kg(patient: Patient, medication: Medication) -> float:
    """Pick the medication's per-kg factor for the patient's weight band.

    Args:
        patient: Patient with weight_kg > 0
        medication: Medication carrying the light/normal/heavy factors

    Returns:
        Units per kg body weight per day
    """
    weight = patient.weight_kg
    if not (weight > 0):
        raise InvalidArgument(f"weight_kg must be > 0 (got {weight}).")
    if weight < LIGHT_WEIGHT_LIMIT_KG:
        return float(medication.units_per_kg_light)
    if weight > HEAVY_WEIGHT_LIMIT_KG:
        return float(medication.units_per_kg_heavy)
    return float(medication.units_per_kg_normal)


def recommended_daily_dose(patient: Patient, medication: Medication) -> float:
    """Recommended dose per day: body weight times the banded factor."""
    return patient.weight_kg * units_per_kg(patient, medication)


def exceeds_recommendation(patient: Patient, prescription: Prescription) -> bool:
    """True when the prescription's daily dose is above the recommended one."""
    recommended = recommended_daily_dose(patient, prescription.medication)
    daily = prescription.daily_dose()
    if daily > recommended:
        logger.info("%s for %s: daily dose %.2f %s above recommended %.2f",
                    prescription.medication.name, patient.name, daily,
                    prescription.medication.unit, recommended)
        return True
    return False
