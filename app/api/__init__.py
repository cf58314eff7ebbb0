# API routes
from fastapi import APIRouter
from app.api.patients import router as patients_router
from app.api.staff import router as staff_router
from app.api.auth import router as auth_router

# Combine all routers
router = APIRouter()
router.include_router(patients_router)
router.include_router(staff_router)
router.include_router(auth_router)

__all__ = ["router"]
