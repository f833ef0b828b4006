"""File-backed patient storage."""

import os
import tempfile
import threading
from dataclasses import replace
from pathlib import Path
from typing import Protocol

from clinic.models.patient import Patient, PatientFormatError, decode_patient, encode_patient
from clinic.utils.logging import get_logger

logger = get_logger(__name__)


class PatientAlreadyExistsError(Exception):
    """Raised when creating a patient whose CI is already stored."""

    def __init__(self, ci: str):
        super().__init__(f"Patient with CI {ci} already exists")
        self.ci = ci


class PatientStore(Protocol):
    """Interface for patient storage backends."""

    def list_all(self) -> list[Patient]:
        """Return every stored patient."""
        ...

    def get_by_ci(self, ci: str) -> Patient | None:
        """Return the patient with the given CI, or None."""
        ...

    def create(self, patient: Patient) -> Patient:
        """Store a new patient.

        Raises:
            PatientAlreadyExistsError: If the CI is already stored
        """
        ...

    def update(self, ci: str, patient: Patient) -> Patient | None:
        """Overwrite the mutable fields of a stored patient, or return None."""
        ...

    def delete(self, ci: str) -> bool:
        """Remove a stored patient; return whether one was removed."""
        ...


class FilePatientStore:
    """Patient store over a text file holding one encoded patient per line.

    Every operation re-reads the whole file. Mutations hold the store lock for
    their read-modify-write sequence and replace the file in one step, so
    unlocked readers see either the previous or the next content.
    """

    def __init__(self, file_path: str | Path):
        """Initialize the store, creating the file and its directory if missing.

        Args:
            file_path: Path to the patients file
        """
        self.file_path = Path(file_path)
        self._lock = threading.Lock()

        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        if not self.file_path.exists():
            logger.info(f"Creating empty patients file at {self.file_path}")
            self.file_path.touch()

    def list_all(self) -> list[Patient]:
        """Read all patients, skipping lines that fail to decode."""
        try:
            raw_lines = self.file_path.read_bytes().splitlines()
        except OSError as e:
            logger.error(f"Error reading patients from {self.file_path}: {e}", exc_info=True)
            raise

        patients = []
        for raw_line in raw_lines:
            try:
                line = raw_line.decode("utf-8")
            except UnicodeDecodeError as e:
                logger.error(f"Skipping undecodable patient line {raw_line!r}: {e}")
                continue

            if not line.strip():
                continue
            try:
                patients.append(decode_patient(line))
            except PatientFormatError as e:
                logger.error(f"Skipping malformed patient line {line!r}: {e}")

        return patients

    def get_by_ci(self, ci: str) -> Patient | None:
        """Find a patient by CI."""
        return _find(self.list_all(), ci)

    def create(self, patient: Patient) -> Patient:
        """Append a new patient and rewrite the file.

        Fields are stored stripped, the way they read back from the file.
        """
        stored = _stripped(patient)
        with self._lock:
            patients = self.list_all()
            if _find(patients, stored.ci) is not None:
                logger.warning(f"Patient with CI {stored.ci} already exists")
                raise PatientAlreadyExistsError(stored.ci)

            patients.append(stored)
            self._save_all(patients)

        return replace(stored)

    def update(self, ci: str, patient: Patient) -> Patient | None:
        """Copy name and last name onto the stored patient and rewrite the file."""
        with self._lock:
            patients = self.list_all()
            existing = _find(patients, ci)
            if existing is None:
                logger.warning(f"Patient with CI {ci} not found for update")
                return None

            existing.name = patient.name.strip()
            existing.last_name = patient.last_name.strip()
            self._save_all(patients)

        return replace(existing)

    def delete(self, ci: str) -> bool:
        """Remove the patient with the given CI and rewrite the file."""
        with self._lock:
            patients = self.list_all()
            existing = _find(patients, ci)
            if existing is None:
                logger.warning(f"Patient with CI {ci} not found for deletion")
                return False

            patients.remove(existing)
            self._save_all(patients)

        return True

    def _save_all(self, patients: list[Patient]) -> None:
        """Replace the file content with the encoded patients.

        Must be called with the store lock held.
        """
        content = "\n".join(encode_patient(p) for p in patients)
        if content:
            content += "\n"

        fd, tmp_name = tempfile.mkstemp(dir=self.file_path.parent, prefix=f".{self.file_path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_name, self.file_path)
        except OSError as e:
            logger.error(f"Error saving patients to {self.file_path}: {e}", exc_info=True)
            Path(tmp_name).unlink(missing_ok=True)
            raise


def _stripped(patient: Patient) -> Patient:
    return Patient(
        name=patient.name.strip(),
        last_name=patient.last_name.strip(),
        ci=patient.ci.strip(),
        blood_group=patient.blood_group.strip(),
    )


def _find(patients: list[Patient], ci: str) -> Patient | None:
    """Return the patient whose CI matches ``ci`` once surrounding whitespace is ignored."""
    ci = ci.strip()
    return next((p for p in patients if p.ci == ci), None)
