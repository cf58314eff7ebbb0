"""
Shared fixtures: in-memory repositories, services and a test client
"""
import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.database.memory import InMemoryPatientRepository, InMemoryStaffRepository
from app.database.storage import JsonPatientRepository, JsonStaffRepository
from app.database.schemas import PatientIntake
from app.services.patients import PatientService
from app.services.staff import StaffService


@pytest.fixture
def patient_repository():
    return InMemoryPatientRepository()


@pytest.fixture
def staff_repository():
    return InMemoryStaffRepository()


@pytest.fixture
def json_patient_repository(tmp_path):
    """JSON storage in a temporary data directory"""
    return JsonPatientRepository(str(tmp_path))


@pytest.fixture
def json_staff_repository(tmp_path):
    return JsonStaffRepository(str(tmp_path))


@pytest.fixture
def patient_service(patient_repository):
    return PatientService(patient_repository)


@pytest.fixture
def staff_service(staff_repository):
    return StaffService(staff_repository)


@pytest.fixture
def intake():
    """Intake form with unremarkable vitals"""
    return PatientIntake(
        name="João Silva",
        age=45,
        gender="Masculino",
        symptoms="Dor nas costas",
        temperature="36.8",
        blood_pressure="120/80",
        heart_rate="72",
        oxygen_saturation="98",
        pain_level="1",
        allergies="Penicilina",
        medications="Losartana",
    )


@pytest.fixture
def client(patient_repository, staff_repository):
    """Test client over in-memory repositories (no default staff seeded)"""
    app = create_app(patient_repository, staff_repository, seed_staff=False)
    return TestClient(app)
