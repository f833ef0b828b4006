"""Patient CRUD endpoints."""

from urllib.parse import quote

from fastapi import APIRouter, Depends, Response, status

from clinic.api.dependencies import get_patient_service
from clinic.api.errors import error_response
from clinic.models.patient import CreatePatientRequest, PatientResponse, UpdatePatientRequest
from clinic.models.responses import MessageResponse
from clinic.services.patients import PatientService

router = APIRouter(prefix="/api/patients", tags=["Patients"])

NOT_FOUND_RESPONSE = {status.HTTP_404_NOT_FOUND: {"model": MessageResponse}}


@router.get("", response_model=list[PatientResponse])
def list_patients(service: PatientService = Depends(get_patient_service)) -> list[PatientResponse]:
    """List all patients."""
    return [PatientResponse.from_patient(p) for p in service.list_all()]


@router.get("/{ci}", response_model=PatientResponse, responses=NOT_FOUND_RESPONSE)
def get_patient(ci: str, service: PatientService = Depends(get_patient_service)):
    """Get a patient by CI."""
    result = service.get_by_ci(ci)
    if not result.success:
        return error_response(result)
    return PatientResponse.from_patient(result.value)


@router.post(
    "",
    response_model=PatientResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": MessageResponse},
        status.HTTP_409_CONFLICT: {"model": MessageResponse},
    },
)
def create_patient(
    request: CreatePatientRequest,
    response: Response,
    service: PatientService = Depends(get_patient_service),
):
    """Create a patient with a randomly assigned blood group."""
    result = service.create(request)
    if not result.success:
        return error_response(result)

    patient = result.value
    response.headers["Location"] = f"{router.prefix}/{quote(patient.ci, safe='')}"
    return PatientResponse.from_patient(patient)


@router.put(
    "/{ci}",
    response_model=PatientResponse,
    responses={status.HTTP_400_BAD_REQUEST: {"model": MessageResponse}, **NOT_FOUND_RESPONSE},
)
def update_patient(
    ci: str,
    request: UpdatePatientRequest,
    service: PatientService = Depends(get_patient_service),
):
    """Update a patient's name and last name."""
    result = service.update(ci, request)
    if not result.success:
        return error_response(result)
    return PatientResponse.from_patient(result.value)


@router.delete("/{ci}", status_code=status.HTTP_204_NO_CONTENT, responses=NOT_FOUND_RESPONSE)
def delete_patient(ci: str, service: PatientService = Depends(get_patient_service)) -> Response:
    """Delete a patient by CI."""
    result = service.delete(ci)
    if not result.success:
        return error_response(result)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
