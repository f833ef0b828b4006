"""Patient data models and the line codec used by the patients file."""

import random
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

BLOOD_GROUPS: tuple[str, ...] = ("A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-")

FIELD_SEPARATOR = ","
FIELD_COUNT = 4


class PatientFormatError(ValueError):
    """Raised when a stored line cannot be decoded into a patient."""


def random_blood_group() -> str:
    """Pick one of the known blood groups uniformly at random."""
    return random.choice(BLOOD_GROUPS)


@dataclass
class Patient:
    """Patient business model."""

    name: str
    last_name: str
    ci: str
    blood_group: str

    @classmethod
    def new(cls, name: str, last_name: str, ci: str) -> "Patient":
        """Create a patient with a randomly assigned blood group."""
        return cls(name=name, last_name=last_name, ci=ci, blood_group=random_blood_group())


def encode_patient(patient: Patient) -> str:
    """Encode a patient as a single ``Name,LastName,CI,BloodGroup`` line.

    Field values are written as-is; a comma inside a value produces a line
    that will not decode again.
    """
    return FIELD_SEPARATOR.join((patient.name, patient.last_name, patient.ci, patient.blood_group))


def decode_patient(line: str) -> Patient:
    """Decode a stored line into a patient.

    Raises:
        PatientFormatError: If the line does not hold exactly four fields
    """
    parts = line.split(FIELD_SEPARATOR)
    if len(parts) != FIELD_COUNT:
        raise PatientFormatError(f"Invalid patient line: expected {FIELD_COUNT} fields, got {len(parts)}")

    name, last_name, ci, blood_group = (part.strip() for part in parts)
    return Patient(name=name, last_name=last_name, ci=ci, blood_group=blood_group)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreatePatientRequest(_CamelModel):
    """Request body for creating a patient."""

    name: str | None = None
    last_name: str | None = None
    ci: str | None = None


class UpdatePatientRequest(_CamelModel):
    """Request body for updating a patient's mutable fields."""

    name: str | None = None
    last_name: str | None = None


class PatientResponse(_CamelModel):
    """Patient as returned by the API."""

    name: str
    last_name: str
    ci: str
    blood_group: str

    @classmethod
    def from_patient(cls, patient: Patient) -> "PatientResponse":
        return cls(
            name=patient.name,
            last_name=patient.last_name,
            ci=patient.ci,
            blood_group=patient.blood_group,
        )
