"""
Staff accounts service

Registration, login, editing and removal of staff accounts.
Passwords are hashed before they reach the repository.
"""
import logging
from typing import List, Optional

from app.core.errors import (
    AuthenticationError,
    DuplicateError,
    NotFoundError,
    PermissionDeniedError,
)
from app.database.base import StaffRepository
from app.database.schemas import Staff, StaffCreate, StaffUpdate
from app.services.utils import generate_staff_id, hash_password

logger = logging.getLogger(__name__)

PRIMARY_ADMIN_USERNAME = "admin"
MAX_ID_ATTEMPTS = 50


class StaffService:
    def __init__(self, repository: StaffRepository):
        self.repository = repository

    def _new_staff_id(self) -> str:
        for _ in range(MAX_ID_ATTEMPTS):
            staff_id = generate_staff_id()
            if self.repository.get(staff_id) is None:
                return staff_id
        raise DuplicateError("Could not allocate a free staff ID")

    def register(self, data: StaffCreate, staff_id: Optional[str] = None) -> Staff:
        """
        Create a staff account

        Raises:
            DuplicateError: username already taken
        """
        if self.repository.username_exists(data.username):
            raise DuplicateError("Username already exists. Please choose another one.")

        staff = Staff(
            id=staff_id or self._new_staff_id(),
            username=data.username,
            password_hash=hash_password(data.password),
            name=data.name,
            role=data.role,
        )
        self.repository.create(staff)
        logger.info("Registered staff %s (%s, %s)", staff.id, staff.username, staff.role)
        return staff

    def authenticate(self, username: str, password: str) -> Staff:
        """
        Check staff credentials

        Raises:
            AuthenticationError: unknown username or wrong password (distinct messages)
        """
        staff = self.repository.verify_credentials(username, password)
        if staff is not None:
            logger.info("Staff %s logged in", username)
            return staff

        if self.repository.get_by_username(username) is not None:
            logger.info("Failed login for %s: wrong password", username)
            raise AuthenticationError("Incorrect password. Please check your password.")
        logger.info("Failed login for %s: unknown user", username)
        raise AuthenticationError("Invalid credentials. Please check your username and password.")

    def get(self, staff_id: str) -> Staff:
        staff = self.repository.get(staff_id)
        if staff is None:
            raise NotFoundError(f"Staff {staff_id} not found")
        return staff

    def list_all(self) -> List[Staff]:
        return self.repository.list_all()

    def update(self, staff_id: str, updates: StaffUpdate) -> Staff:
        """
        Edit a staff account; a new password is re-hashed

        Raises:
            NotFoundError: unknown staff ID
            DuplicateError: new username belongs to someone else
        """
        staff = self.get(staff_id)
        changes = updates.model_dump(exclude_unset=True, exclude_none=True)

        username = changes.get("username")
        if username and self.repository.username_exists(username, exclude_id=staff_id):
            raise DuplicateError("Username already exists. Please choose another one.")
        if staff.username == PRIMARY_ADMIN_USERNAME and username and username != PRIMARY_ADMIN_USERNAME:
            raise PermissionDeniedError("The primary administrator cannot be renamed")

        password = changes.pop("password", None)
        if password:
            changes["password_hash"] = hash_password(password)

        updated = staff.model_copy(update=changes)
        self.repository.update(updated)
        logger.info("Updated staff %s", staff_id)
        return updated

    def delete(self, staff_id: str):
        """
        Remove a staff account

        Raises:
            PermissionDeniedError: the account is the primary administrator
        """
        staff = self.get(staff_id)
        if staff.username == PRIMARY_ADMIN_USERNAME:
            raise PermissionDeniedError("The primary administrator cannot be deleted")
        self.repository.delete(staff_id)
        logger.info("Deleted staff %s", staff_id)

    def seed_defaults(self, staff_password: str, admin_password: str) -> List[Staff]:
        """
        Create the default nurse, doctor and admin accounts if there are no staff yet
        """
        if self.repository.list_all():
            return []
        defaults = [
            ("STF001", StaffCreate(username="enfermeiro", password=staff_password, name="Ana Enfermeira", role="enfermeiro")),
            ("STF002", StaffCreate(username="medico", password=staff_password, name="Dr. Carlos Silva", role="medico")),
            ("STF003", StaffCreate(username=PRIMARY_ADMIN_USERNAME, password=admin_password, name="Administrador", role="admin")),
        ]
        created = [self.register(data, staff_id=staff_id) for staff_id, data in defaults]
        logger.info("Seeded %d default staff accounts", len(created))
        return created
