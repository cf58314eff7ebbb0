"""
Data models

- Patient record (stored and returned as-is), archived copy, staff accounts
- Pydantic provides automatic validation
- Priority labels and stage ids are the stored strings, not just display labels
"""
from typing import Optional, List, Literal, Union
from datetime import datetime
from pydantic import BaseModel, Field, field_validator, ConfigDict

# Urgency levels, most urgent first
VERMELHO = "Vermelho"
LARANJA = "Laranja"
AMARELO = "Amarelo"
VERDE = "Verde"
AZUL = "Azul"
PRIORITIES = (VERMELHO, LARANJA, AMARELO, VERDE, AZUL)
PriorityLevel = Literal["Vermelho", "Laranja", "Amarelo", "Verde", "Azul"]

# Care stages in canonical order
STAGES = ("recepcao", "triagem", "espera", "consulta", "medicacao", "alta")
StageId = Literal["recepcao", "triagem", "espera", "consulta", "medicacao", "alta"]

STAFF_ROLES = ("medico", "enfermeiro", "admin")
StaffRole = Literal["medico", "enfermeiro", "admin"]

# Vitals arrive as free text from the intake form, numbers are accepted and kept as text
VitalValue = Optional[Union[str, int, float]]


def _vital_to_text(value):
    if value is None or isinstance(value, str):
        return value
    return str(value)


class ReevaluationRequest(BaseModel):
    """
    Patient-initiated request for staff to reassess their priority
    """
    requested: bool     = Field(default=True, description="Whether a re-evaluation was requested")
    reason: str         = Field(...,  description="Reason given by the patient")
    timestamp: datetime = Field(...,  description="When the request was made")
    seen: bool          = Field(default=False, description="Whether staff acknowledged the request")


class Patient(BaseModel):
    """
    Patient record (persisted and returned by the API)
    """
    model_config = ConfigDict(extra="ignore")
    id: str                                  = Field(...,  description="Lookup code, 'PS' + 5 digits")
    name: str                                = Field(...,  description="Patient name")
    age: int                                 = Field(...,  description="Age in years")
    gender: str                              = Field(...,  description="Gender as entered at intake")
    symptoms: str                            = Field(...,  description="Main complaint")
    priority: PriorityLevel                  = Field(...,  description="Urgency classification")
    registered_at: datetime                  = Field(...,  description="Registration timestamp (immutable)")
    wait_time: str                           = Field(...,  description="Estimated wait label computed at registration")
    current_step: StageId                    = Field(default="recepcao", description="Current care stage")
    completed_steps: List[StageId]           = Field(default_factory=lambda: ["recepcao"], description="Stages marked as done")
    temperature: Optional[str]               = Field(None, description="Temperature in °C")
    blood_pressure: Optional[str]            = Field(None, description="Blood pressure, 'systolic/diastolic'")
    heart_rate: Optional[str]                = Field(None, description="Heart rate in bpm")
    oxygen_saturation: Optional[str]         = Field(None, description="Oxygen saturation in %")
    pain_level: Optional[str]                = Field(None, description="Pain level 0-10")
    allergies: Optional[str]                 = Field(None, description="Known allergies")
    medications: Optional[str]               = Field(None, description="Medications in use")
    reevaluation_request: Optional[ReevaluationRequest] = Field(None, description="Pending or acknowledged re-evaluation request")


class ArchivedPatient(Patient):
    """
    Discharged patient, read-only copy of the active record
    """
    archived_at: datetime = Field(..., description="When the patient was archived")


class PatientView(Patient):
    """
    Patient as shown on the status page
    """
    estimated_remaining: str = Field(..., description="Remaining time estimate for the rest of the care pathway")
    progress: float          = Field(..., description="Fraction of care stages completed (0-1)")


class PatientIntake(BaseModel):
    """
    Intake form submitted by reception staff
    """
    name: str                         = Field(..., min_length=1, description="Patient name")
    age: int                          = Field(..., ge=0, le=150, description="Age in years")
    gender: str                       = Field(..., description="Gender")
    symptoms: str                     = Field(..., description="Main complaint")
    has_emergency_signs: bool         = Field(default=False, description="Emergency signs observed at intake")
    temperature: VitalValue           = Field(None, description="Temperature in °C")
    blood_pressure: Optional[str]     = Field(None, description="Blood pressure, 'systolic/diastolic'")
    heart_rate: VitalValue            = Field(None, description="Heart rate in bpm")
    oxygen_saturation: VitalValue     = Field(None, description="Oxygen saturation in %")
    pain_level: VitalValue            = Field(None, description="Pain level 0-10")
    allergies: Optional[str]          = Field(None, description="Known allergies")
    medications: Optional[str]        = Field(None, description="Medications in use")

    @field_validator("temperature", "heart_rate", "oxygen_saturation", "pain_level")
    @classmethod
    def vitals_as_text(cls, value):
        return _vital_to_text(value)


class PatientUpdate(BaseModel):
    """
    Staff edit of a patient record (all fields optional)

    Changing priority is a manual override; wait_time is not recomputed.
    """
    name: Optional[str]               = Field(None, min_length=1)
    age: Optional[int]                = Field(None, ge=0, le=150)
    gender: Optional[str]             = None
    symptoms: Optional[str]           = None
    priority: Optional[PriorityLevel] = None
    temperature: VitalValue           = None
    blood_pressure: Optional[str]     = None
    heart_rate: VitalValue            = None
    oxygen_saturation: VitalValue     = None
    pain_level: VitalValue            = None
    allergies: Optional[str]          = None
    medications: Optional[str]        = None

    @field_validator("temperature", "heart_rate", "oxygen_saturation", "pain_level")
    @classmethod
    def vitals_as_text(cls, value):
        return _vital_to_text(value)


class ReevaluationInput(BaseModel):
    reason: str = Field(..., description="Why the patient wants to be reassessed")


class PatientLookup(BaseModel):
    patient_id: str = Field(..., description="Lookup code handed to the patient at registration")


class WaitEstimate(BaseModel):
    """
    Wait-time figures for a patient
    """
    patient_id: str          = Field(..., description="Patient ID")
    priority: PriorityLevel  = Field(..., description="Current priority")
    wait_time: str           = Field(..., description="Label stored at registration")
    current_step: StageId    = Field(..., description="Current care stage")
    current_stage_minutes: int = Field(..., description="Time budget of the current stage in minutes")
    estimated_remaining: str = Field(..., description="Remaining time for the rest of the pathway")


class Staff(BaseModel):
    """
    Staff account (persisted; password is stored hashed)
    """
    model_config = ConfigDict(extra="ignore")
    id: str            = Field(..., description="'STF' + 3 digits")
    username: str      = Field(..., description="Unique login name")
    password_hash: str = Field(..., description="PBKDF2 hash of the password")
    name: str          = Field(..., description="Display name")
    role: StaffRole    = Field(..., description="medico, enfermeiro or admin")


class StaffPublic(BaseModel):
    """
    Staff account as returned by the API (no credentials)
    """
    id: str
    username: str
    name: str
    role: StaffRole


class StaffCreate(BaseModel):
    username: str   = Field(..., min_length=1)
    password: str   = Field(..., min_length=1)
    name: str       = Field(..., min_length=1)
    role: StaffRole = Field(...)


class StaffUpdate(BaseModel):
    username: Optional[str]   = Field(None, min_length=1)
    password: Optional[str]   = Field(None, min_length=1)
    name: Optional[str]       = Field(None, min_length=1)
    role: Optional[StaffRole] = None


class StaffLogin(BaseModel):
    username: str
    password: str
