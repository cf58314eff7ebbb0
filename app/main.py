"""
FastAPI app

- Composition root: builds repositories and services, stores them on app.state
- CORS configured for the web front end
- Domain errors mapped to JSON error responses
- Basic health check
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import router
from app.api.middleware import TimingMiddleware
from app.core import config
from app.core.errors import ProntoSocorroError
from app.core.log_config import configure_logging
from app.database.base import PatientRepository, StaffRepository
from app.database.memory import InMemoryPatientRepository, InMemoryStaffRepository
from app.database.storage import JsonPatientRepository, JsonStaffRepository
from app.services.patients import PatientService
from app.services.staff import StaffService

logger = logging.getLogger(__name__)


def build_repositories(backend: str = config.STORAGE_BACKEND, data_dir: str = config.DATA_DIR):
    """
    Repositories for the configured storage backend ("json" or "memory")
    """
    if backend == "memory":
        return InMemoryPatientRepository(), InMemoryStaffRepository()
    if backend == "json":
        return JsonPatientRepository(data_dir), JsonStaffRepository(data_dir)
    raise ValueError(f"Unknown STORAGE_BACKEND '{backend}' (expected 'json' or 'memory')")


def create_app(
    patient_repository: Optional[PatientRepository] = None,
    staff_repository: Optional[StaffRepository] = None,
    seed_staff: bool = config.SEED_DEFAULT_STAFF,
) -> FastAPI:
    """
    Build the application

    Repositories default to the configured backend; tests pass their own.
    Default staff accounts are seeded on startup when seed_staff is set.
    """
    configure_logging()

    if patient_repository is None or staff_repository is None:
        default_patients, default_staff = build_repositories()
        patient_repository = patient_repository or default_patients
        staff_repository = staff_repository or default_staff

    patient_service = PatientService(patient_repository)
    staff_service = StaffService(staff_repository)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if seed_staff:
            staff_service.seed_defaults(config.DEFAULT_STAFF_PASSWORD, config.DEFAULT_ADMIN_PASSWORD)
        yield

    app = FastAPI(title="Pronto-Socorro Triage", lifespan=lifespan)
    app.state.patient_service = patient_service
    app.state.staff_service = staff_service

    # Add timing middleware for performance monitoring
    app.add_middleware(TimingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ProntoSocorroError)
    async def handle_domain_error(request: Request, exc: ProntoSocorroError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    app.include_router(router, prefix="/api/v1")

    @app.get("/")
    async def root():
        """
        Basic health check
        """
        return {"status": "ok"}

    return app


app = create_app()
