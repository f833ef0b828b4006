"""Patient service: input validation and existence checks over a patient store."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from clinic.models.patient import CreatePatientRequest, Patient, UpdatePatientRequest
from clinic.services.patient_store import PatientAlreadyExistsError, PatientStore
from clinic.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

PATIENT_NOT_FOUND = "Patient not found"


class ErrorKind(Enum):
    """Failure categories reported by the patient service."""

    VALIDATION = "validation"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"


@dataclass
class ServiceResult(Generic[T]):
    """Outcome of a patient service call."""

    value: T | None = None
    error: ErrorKind | None = None
    message: str | None = None

    @property
    def success(self) -> bool:
        return self.error is None

    @classmethod
    def ok(cls, value: T) -> "ServiceResult[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, error: ErrorKind, message: str) -> "ServiceResult[T]":
        return cls(error=error, message=message)


def _first_blank(fields: list[tuple[str, str | None]]) -> str | None:
    """Return the label of the first field that is missing or blank."""
    for label, value in fields:
        if value is None or not value.strip():
            return label
    return None


class PatientService:
    """Patient operations exposed to the HTTP layer."""

    def __init__(self, store: PatientStore):
        """Initialize with the backing patient store."""
        self.store = store

    def list_all(self) -> list[Patient]:
        """Return all patients."""
        logger.info("Getting all patients")
        return self.store.list_all()

    def get_by_ci(self, ci: str) -> ServiceResult[Patient]:
        """Return the patient with the given CI."""
        logger.info(f"Getting patient by CI: {ci}")
        patient = self.store.get_by_ci(ci)
        if patient is None:
            logger.warning(f"Patient with CI {ci} not found")
            return ServiceResult.fail(ErrorKind.NOT_FOUND, PATIENT_NOT_FOUND)
        return ServiceResult.ok(patient)

    def create(self, request: CreatePatientRequest) -> ServiceResult[Patient]:
        """Validate the request and store a new patient with a random blood group.

        Args:
            request: Name, last name and CI of the new patient

        Returns:
            The stored patient, a VALIDATION failure naming the first missing
            field, or a CONFLICT failure when the CI is already registered
        """
        logger.info(f"Creating patient with CI: {request.ci}")

        missing = _first_blank([("Name", request.name), ("Last name", request.last_name), ("CI", request.ci)])
        if missing:
            logger.warning(f"Invalid input for patient creation: {missing} is required")
            return ServiceResult.fail(ErrorKind.VALIDATION, f"{missing} is required")

        patient = Patient.new(name=request.name.strip(), last_name=request.last_name.strip(), ci=request.ci.strip())
        try:
            created = self.store.create(patient)
        except PatientAlreadyExistsError as e:
            return ServiceResult.fail(ErrorKind.CONFLICT, str(e))

        logger.info(f"Created patient {created.ci} with blood group {created.blood_group}")
        return ServiceResult.ok(created)

    def update(self, ci: str, request: UpdatePatientRequest) -> ServiceResult[Patient]:
        """Validate the request and overwrite the patient's name and last name.

        CI and blood group are never changed.
        """
        logger.info(f"Updating patient with CI: {ci}")

        missing = _first_blank([("Name", request.name), ("Last name", request.last_name)])
        if missing:
            logger.warning(f"Invalid input for patient update: {missing} is required")
            return ServiceResult.fail(ErrorKind.VALIDATION, f"{missing} is required")

        existing = self.store.get_by_ci(ci)
        if existing is None:
            logger.warning(f"Patient with CI {ci} not found for update")
            return ServiceResult.fail(ErrorKind.NOT_FOUND, PATIENT_NOT_FOUND)

        existing.name = request.name.strip()
        existing.last_name = request.last_name.strip()

        # The record can disappear between the lookup and the locked rewrite
        updated = self.store.update(ci, existing)
        if updated is None:
            return ServiceResult.fail(ErrorKind.NOT_FOUND, PATIENT_NOT_FOUND)
        return ServiceResult.ok(updated)

    def delete(self, ci: str) -> ServiceResult[bool]:
        """Delete the patient with the given CI."""
        logger.info(f"Deleting patient with CI: {ci}")
        if not self.store.delete(ci):
            return ServiceResult.fail(ErrorKind.NOT_FOUND, PATIENT_NOT_FOUND)
        return ServiceResult.ok(True)
