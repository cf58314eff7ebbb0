"""
Database module

Contains data models (schemas), repository interfaces and their in-memory and JSON implementations.
"""

# Export schemas
from app.database.schemas import (
    Patient,
    ArchivedPatient,
    PatientView,
    PatientIntake,
    PatientUpdate,
    ReevaluationRequest,
    Staff,
    StaffPublic,
    PRIORITIES,
    STAGES,
)

# Export repositories
from app.database.base import PatientRepository, StaffRepository
from app.database.memory import InMemoryPatientRepository, InMemoryStaffRepository
from app.database.storage import JsonPatientRepository, JsonStaffRepository, read_json, write_json
from app.database.locks import KeyedLocks

__all__ = [
    # Schemas
    "Patient",
    "ArchivedPatient",
    "PatientView",
    "PatientIntake",
    "PatientUpdate",
    "ReevaluationRequest",
    "Staff",
    "StaffPublic",
    "PRIORITIES",
    "STAGES",
    # Repositories
    "PatientRepository",
    "StaffRepository",
    "InMemoryPatientRepository",
    "InMemoryStaffRepository",
    "JsonPatientRepository",
    "JsonStaffRepository",
    "read_json",
    "write_json",
    "KeyedLocks",
]
