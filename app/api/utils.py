"""
Utility functions for API endpoints
"""
from fastapi import Request

from app.services.patients import PatientService
from app.services.staff import StaffService


def get_patient_service(request: Request) -> PatientService:
    """
    Patient service owned by the application (built in app.main.create_app)
    """
    return request.app.state.patient_service


def get_staff_service(request: Request) -> StaffService:
    """
    Staff service owned by the application (built in app.main.create_app)
    """
    return request.app.state.staff_service
