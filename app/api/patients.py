"""
Patient management endpoints
"""
from typing import List, Optional

from fastapi import APIRouter, Request

from app.database.schemas import (
    Patient,
    ArchivedPatient,
    PatientView,
    PatientIntake,
    PatientUpdate,
    PriorityLevel,
    ReevaluationInput,
    WaitEstimate,
)
from app.api.utils import get_patient_service

router = APIRouter()


@router.post("/patients", response_model=Patient)
def register_patient(intake: PatientIntake, request: Request):
    """
    Register a patient (intake form)

    Priority and wait label are computed from the vitals.
    Returns the created patient; its ID is the lookup code handed to the patient.
    """
    return get_patient_service(request).register(intake)


@router.get("/patients", response_model=List[Patient])
def list_patients(request: Request, priority: Optional[PriorityLevel] = None):
    """
    Active patients, most recently registered first, optionally filtered by priority
    """
    return get_patient_service(request).list_active(priority)


@router.get("/patients/archived", response_model=List[ArchivedPatient])
def list_archived_patients(request: Request):
    return get_patient_service(request).list_archived()


@router.get("/patients/archived/{patient_id}", response_model=ArchivedPatient)
def get_archived_patient(patient_id: str, request: Request):
    return get_patient_service(request).get_archived(patient_id)


@router.get("/patients/reevaluations/pending", response_model=List[Patient])
def list_pending_reevaluations(request: Request):
    """
    Patients waiting for staff to look at their re-evaluation request, oldest first
    """
    return get_patient_service(request).pending_reevaluations()


@router.get("/patients/{patient_id}", response_model=PatientView)
def get_patient(patient_id: str, request: Request):
    """
    Patient status page: record plus remaining-time estimate and progress
    """
    return get_patient_service(request).view(patient_id)


@router.patch("/patients/{patient_id}", response_model=Patient)
def update_patient(patient_id: str, updates: PatientUpdate, request: Request):
    """
    Staff edit of intake data or manual priority override
    """
    return get_patient_service(request).update(patient_id, updates)


@router.get("/patients/{patient_id}/estimate", response_model=WaitEstimate)
def get_wait_estimate(patient_id: str, request: Request):
    return get_patient_service(request).estimate(patient_id)


@router.post("/patients/{patient_id}/stages/{stage_id}/toggle", response_model=Patient)
def toggle_stage(patient_id: str, stage_id: str, request: Request):
    """
    Mark a care stage complete, or undo it if it already is
    """
    return get_patient_service(request).toggle_stage(patient_id, stage_id)


@router.post("/patients/{patient_id}/reevaluation", response_model=Patient)
def request_reevaluation(patient_id: str, body: ReevaluationInput, request: Request):
    """
    Patient asks to be reassessed

    Rejected with 422 for a blank reason and 409 while a previous request is unseen.
    """
    return get_patient_service(request).request_reevaluation(patient_id, body.reason)


@router.post("/patients/{patient_id}/reevaluation/seen", response_model=Patient)
def mark_reevaluation_seen(patient_id: str, request: Request):
    return get_patient_service(request).mark_reevaluation_seen(patient_id)


@router.post("/patients/{patient_id}/archive", response_model=ArchivedPatient)
def archive_patient(patient_id: str, request: Request):
    """
    Discharge a patient: moves the record to the archive
    """
    return get_patient_service(request).archive(patient_id)
