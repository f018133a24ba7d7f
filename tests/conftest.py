import pytest

from ordination.types import Medication, Patient


@pytest.fixture
def paracetamol():
    return Medication("Paracetamol", 1.0, 1.5, 2.0, "Ml", medication_id=1)


@pytest.fixture
def patient():
    return Patient(cpr="121256-0512", name="Jane Jensen", weight_kg=63.4, patient_id=1)
