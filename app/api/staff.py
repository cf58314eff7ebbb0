"""
Staff management endpoints
"""
from typing import List

from fastapi import APIRouter, Request

from app.database.schemas import StaffCreate, StaffPublic, StaffUpdate
from app.api.utils import get_staff_service

router = APIRouter()


def _public(staff) -> StaffPublic:
    return StaffPublic(id=staff.id, username=staff.username, name=staff.name, role=staff.role)


@router.get("/staff", response_model=List[StaffPublic])
def list_staff(request: Request):
    return [_public(staff) for staff in get_staff_service(request).list_all()]


@router.post("/staff", response_model=StaffPublic)
def register_staff(data: StaffCreate, request: Request):
    """
    Register a staff member

    Returns 409 if the username is already taken.
    """
    return _public(get_staff_service(request).register(data))


@router.get("/staff/{staff_id}", response_model=StaffPublic)
def get_staff(staff_id: str, request: Request):
    return _public(get_staff_service(request).get(staff_id))


@router.patch("/staff/{staff_id}", response_model=StaffPublic)
def update_staff(staff_id: str, updates: StaffUpdate, request: Request):
    return _public(get_staff_service(request).update(staff_id, updates))


@router.delete("/staff/{staff_id}")
def delete_staff(staff_id: str, request: Request):
    """
    Delete a staff member (the primary admin account cannot be deleted)
    """
    get_staff_service(request).delete(staff_id)
    return {"message": "Staff member deleted successfully"}
