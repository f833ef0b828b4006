"""FastAPI dependency providers."""

from functools import lru_cache
from pathlib import Path

from fastapi import Depends, Request

from clinic.clients.gifts import GiftClient
from clinic.config import Settings, get_settings
from clinic.services.patient_store import FilePatientStore, PatientStore
from clinic.services.patients import PatientService


@lru_cache
def _file_store(file_path: Path) -> FilePatientStore:
    # One store, and therefore one lock, per file
    return FilePatientStore(file_path)


def get_patient_store(settings: Settings = Depends(get_settings)) -> PatientStore:
    """Return the store backing the configured patients file."""
    return _file_store(settings.patients_file.resolve())


def get_patient_service(store: PatientStore = Depends(get_patient_store)) -> PatientService:
    """Return a patient service over the configured store."""
    return PatientService(store)


def get_gift_client(request: Request, settings: Settings = Depends(get_settings)) -> GiftClient:
    """Return a gift client sharing the application's HTTP client."""
    return GiftClient(settings.gifts_api_url, request.app.state.http_client)
