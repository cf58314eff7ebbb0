"""
Login endpoints

Only credential / lookup-code checks; sessions are held by the client.
Handlers are synchronous so password hashing runs in the threadpool.
"""
from fastapi import APIRouter, Request

from app.database.schemas import PatientLookup, StaffLogin, StaffPublic
from app.api.utils import get_patient_service, get_staff_service

router = APIRouter(prefix="/auth")


@router.post("/staff", response_model=StaffPublic)
def login_staff(credentials: StaffLogin, request: Request):
    """
    Verify staff credentials

    401 with a different message for an unknown username and a wrong password.
    """
    staff = get_staff_service(request).authenticate(credentials.username, credentials.password)
    return StaffPublic(id=staff.id, username=staff.username, name=staff.name, role=staff.role)


@router.post("/patient")
def login_patient(lookup: PatientLookup, request: Request):
    """
    Verify a patient lookup code (422 bad format, 404 unknown)
    """
    patient = get_patient_service(request).verify_lookup_code(lookup.patient_id)
    return {"patient_id": patient.id}
