"""
In-memory repositories

Used by tests and STORAGE_BACKEND=memory. Records are copied in and out so callers
never share state with the store.
"""
from datetime import datetime
from typing import Dict, List, Optional
from threading import Lock

from app.core.errors import DuplicateError, NotFoundError
from app.database.base import PatientRepository, StaffRepository
from app.database.schemas import Patient, ArchivedPatient, Staff


class InMemoryPatientRepository(PatientRepository):
    def __init__(self):
        self._active: Dict[str, Patient] = {}
        self._archived: List[ArchivedPatient] = []
        self._lock = Lock()

    def create(self, patient: Patient) -> None:
        with self._lock:
            if patient.id in self._active:
                raise DuplicateError(f"Patient {patient.id} already exists")
            self._active[patient.id] = patient.model_copy(deep=True)

    def get(self, patient_id: str) -> Optional[Patient]:
        with self._lock:
            patient = self._active.get(patient_id)
            return patient.model_copy(deep=True) if patient else None

    def update(self, patient: Patient) -> None:
        with self._lock:
            if patient.id not in self._active:
                raise NotFoundError(f"Patient {patient.id} not found")
            self._active[patient.id] = patient.model_copy(deep=True)

    def archive(self, patient: Patient) -> ArchivedPatient:
        with self._lock:
            if patient.id not in self._active:
                raise NotFoundError(f"Patient {patient.id} not found")
            archived = ArchivedPatient(**patient.model_dump(), archived_at=datetime.now())
            self._archived.append(archived)
            del self._active[patient.id]
            return archived.model_copy(deep=True)

    def list_active(self) -> List[Patient]:
        with self._lock:
            return [p.model_copy(deep=True) for p in self._active.values()]

    def list_archived(self) -> List[ArchivedPatient]:
        with self._lock:
            return [p.model_copy(deep=True) for p in self._archived]

    def get_archived(self, patient_id: str) -> Optional[ArchivedPatient]:
        with self._lock:
            for archived in self._archived:
                if archived.id == patient_id:
                    return archived.model_copy(deep=True)
            return None


class InMemoryStaffRepository(StaffRepository):
    def __init__(self):
        self._staff: Dict[str, Staff] = {}
        self._lock = Lock()

    def create(self, staff: Staff) -> None:
        with self._lock:
            if staff.id in self._staff:
                raise DuplicateError(f"Staff {staff.id} already exists")
            if any(s.username == staff.username for s in self._staff.values()):
                raise DuplicateError(f"Username '{staff.username}' already exists")
            self._staff[staff.id] = staff.model_copy()

    def get(self, staff_id: str) -> Optional[Staff]:
        with self._lock:
            staff = self._staff.get(staff_id)
            return staff.model_copy() if staff else None

    def get_by_username(self, username: str) -> Optional[Staff]:
        with self._lock:
            for staff in self._staff.values():
                if staff.username == username:
                    return staff.model_copy()
            return None

    def update(self, staff: Staff) -> None:
        with self._lock:
            if staff.id not in self._staff:
                raise NotFoundError(f"Staff {staff.id} not found")
            self._staff[staff.id] = staff.model_copy()

    def delete(self, staff_id: str) -> None:
        with self._lock:
            if staff_id not in self._staff:
                raise NotFoundError(f"Staff {staff_id} not found")
            del self._staff[staff_id]

    def list_all(self) -> List[Staff]:
        with self._lock:
            return sorted((s.model_copy() for s in self._staff.values()), key=lambda s: s.name)
