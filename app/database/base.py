"""
Repository interfaces

Services depend on these; the composition root (app.main.create_app) decides
which implementation backs them.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from app.database.schemas import Patient, ArchivedPatient, Staff
from app.services.utils import verify_password


class PatientRepository(ABC):
    """
    Active and archived patient records keyed by patient ID
    """

    @abstractmethod
    def create(self, patient: Patient) -> None:
        """Store a new patient (DuplicateError if the ID is taken)"""

    @abstractmethod
    def get(self, patient_id: str) -> Optional[Patient]:
        """Active patient by ID, or None"""

    @abstractmethod
    def update(self, patient: Patient) -> None:
        """Replace an active patient (NotFoundError if absent)"""

    @abstractmethod
    def archive(self, patient: Patient) -> ArchivedPatient:
        """Move a patient from the active to the archived collection"""

    @abstractmethod
    def list_active(self) -> List[Patient]:
        pass

    @abstractmethod
    def list_archived(self) -> List[ArchivedPatient]:
        pass

    @abstractmethod
    def get_archived(self, patient_id: str) -> Optional[ArchivedPatient]:
        pass

    def exists(self, patient_id: str) -> bool:
        return self.get(patient_id) is not None or self.get_archived(patient_id) is not None


class StaffRepository(ABC):
    """
    Staff accounts keyed by staff ID, usernames unique
    """

    @abstractmethod
    def create(self, staff: Staff) -> None:
        pass

    @abstractmethod
    def get(self, staff_id: str) -> Optional[Staff]:
        pass

    @abstractmethod
    def get_by_username(self, username: str) -> Optional[Staff]:
        pass

    @abstractmethod
    def update(self, staff: Staff) -> None:
        pass

    @abstractmethod
    def delete(self, staff_id: str) -> None:
        pass

    @abstractmethod
    def list_all(self) -> List[Staff]:
        pass

    def username_exists(self, username: str, exclude_id: Optional[str] = None) -> bool:
        staff = self.get_by_username(username)
        return staff is not None and staff.id != exclude_id

    def verify_credentials(self, username: str, password: str) -> Optional[Staff]:
        """
        Staff account matching username and password, or None
        """
        staff = self.get_by_username(username)
        if staff is None or not verify_password(password, staff.password_hash):
            return None
        return staff
