"""
Simple JSON file storage

- One JSON file per collection under the data directory
- Datetimes stored as ISO strings (pydantic JSON mode)
- Read/write failures raise PersistenceError; nothing falls back to in-memory data
- Easy to migrate to SQL later by implementing the repository interfaces
"""
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional
from threading import RLock

from pydantic import ValidationError as SchemaValidationError

from app.core.errors import DuplicateError, NotFoundError, PersistenceError
from app.database.base import PatientRepository, StaffRepository
from app.database.schemas import Patient, ArchivedPatient, Staff

logger = logging.getLogger(__name__)


def read_json(filepath: Path) -> List[Dict[str, Any]]:
    """
    Read JSON file, return empty list if not found

    Raises PersistenceError if the file cannot be read or is not a JSON list
    """
    path = Path(filepath)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        return []
    except (OSError, json.JSONDecodeError) as e:
        logger.error("Failed to read %s: %s", path, e)
        raise PersistenceError(f"Failed to read {path.name}") from e
    if not isinstance(data, list):
        logger.error("Unexpected content in %s: expected a list", path)
        raise PersistenceError(f"Unexpected content in {path.name}")
    return data


def write_json(filepath: Path, data: List[Dict[str, Any]]):
    """
    Write data to JSON file (written to a temp file, then swapped in)
    """
    path = Path(filepath)
    tmp_path = path.with_name(path.name + '.tmp')
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        tmp_path.replace(path)
    except OSError as e:
        logger.error("Failed to write %s: %s", path, e)
        raise PersistenceError(f"Failed to write {path.name}") from e


class JsonCollection:
    """
    A list of records in a single JSON file, guarded by a lock
    """
    def __init__(self, filepath: Path):
        self.filepath = Path(filepath)
        self.lock = RLock()

    def load(self, model):
        rows = read_json(self.filepath)
        try:
            return [model.model_validate(row) for row in rows]
        except SchemaValidationError as e:
            logger.error("Invalid record in %s: %s", self.filepath, e)
            raise PersistenceError(f"Invalid record in {self.filepath.name}") from e

    def save(self, records):
        write_json(self.filepath, [record.model_dump(mode="json") for record in records])


class JsonPatientRepository(PatientRepository):
    """
    Patients in <data_dir>/patients.json, archived ones in <data_dir>/archived_patients.json
    """
    def __init__(self, data_dir: str = "data"):
        self.data_dir = Path(data_dir)
        self._active = JsonCollection(self.data_dir / "patients.json")
        self._archived = JsonCollection(self.data_dir / "archived_patients.json")

    def create(self, patient: Patient) -> None:
        with self._active.lock:
            patients = self._active.load(Patient)
            if any(p.id == patient.id for p in patients):
                raise DuplicateError(f"Patient {patient.id} already exists")
            patients.append(patient)
            self._active.save(patients)

    def get(self, patient_id: str) -> Optional[Patient]:
        with self._active.lock:
            for patient in self._active.load(Patient):
                if patient.id == patient_id:
                    return patient
        return None

    def update(self, patient: Patient) -> None:
        with self._active.lock:
            patients = self._active.load(Patient)
            for index, existing in enumerate(patients):
                if existing.id == patient.id:
                    patients[index] = patient
                    self._active.save(patients)
                    return
        raise NotFoundError(f"Patient {patient.id} not found")

    def archive(self, patient: Patient) -> ArchivedPatient:
        # Archived copy is written first; it is rolled back if removing the active record fails
        with self._active.lock, self._archived.lock:
            patients = self._active.load(Patient)
            remaining = [p for p in patients if p.id != patient.id]
            if len(remaining) == len(patients):
                raise NotFoundError(f"Patient {patient.id} not found")

            archived = ArchivedPatient(**patient.model_dump(), archived_at=datetime.now())
            previous = self._archived.load(ArchivedPatient)
            self._archived.save(previous + [archived])
            try:
                self._active.save(remaining)
            except PersistenceError:
                logger.error("Archiving %s failed, restoring archived collection", patient.id)
                self._archived.save(previous)
                raise
            return archived

    def list_active(self) -> List[Patient]:
        with self._active.lock:
            return self._active.load(Patient)

    def list_archived(self) -> List[ArchivedPatient]:
        with self._archived.lock:
            return self._archived.load(ArchivedPatient)

    def get_archived(self, patient_id: str) -> Optional[ArchivedPatient]:
        for archived in self.list_archived():
            if archived.id == patient_id:
                return archived
        return None


class JsonStaffRepository(StaffRepository):
    """
    Staff accounts in <data_dir>/staff.json
    """
    def __init__(self, data_dir: str = "data"):
        self.data_dir = Path(data_dir)
        self._staff = JsonCollection(self.data_dir / "staff.json")

    def create(self, staff: Staff) -> None:
        with self._staff.lock:
            members = self._staff.load(Staff)
            if any(s.id == staff.id for s in members):
                raise DuplicateError(f"Staff {staff.id} already exists")
            if any(s.username == staff.username for s in members):
                raise DuplicateError(f"Username '{staff.username}' already exists")
            members.append(staff)
            self._staff.save(members)

    def get(self, staff_id: str) -> Optional[Staff]:
        for staff in self.list_all():
            if staff.id == staff_id:
                return staff
        return None

    def get_by_username(self, username: str) -> Optional[Staff]:
        for staff in self.list_all():
            if staff.username == username:
                return staff
        return None

    def update(self, staff: Staff) -> None:
        with self._staff.lock:
            members = self._staff.load(Staff)
            for index, existing in enumerate(members):
                if existing.id == staff.id:
                    members[index] = staff
                    self._staff.save(members)
                    return
        raise NotFoundError(f"Staff {staff.id} not found")

    def delete(self, staff_id: str) -> None:
        with self._staff.lock:
            members = self._staff.load(Staff)
            remaining = [s for s in members if s.id != staff_id]
            if len(remaining) == len(members):
                raise NotFoundError(f"Staff {staff_id} not found")
            self._staff.save(remaining)

    def list_all(self) -> List[Staff]:
        with self._staff.lock:
            return sorted(self._staff.load(Staff), key=lambda s: s.name)
