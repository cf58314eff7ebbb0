"""
Patient service

Registration, care stage progression, re-evaluation requests and discharge.
Every read-modify-write on a patient runs under that patient's lock.
"""
import logging
from datetime import datetime
from typing import List, Optional

from pydantic import ValidationError as SchemaValidationError

from app.core.errors import DuplicateError, NotFoundError, ValidationError
from app.database.base import PatientRepository
from app.database.locks import KeyedLocks
from app.database.schemas import (
    Patient,
    ArchivedPatient,
    PatientView,
    PatientIntake,
    PatientUpdate,
    WaitEstimate,
)
from app.services import reevaluation, stages, triage
from app.services.utils import generate_patient_id, is_patient_id_format

logger = logging.getLogger(__name__)

# Random IDs are re-drawn on collision with an existing record
MAX_ID_ATTEMPTS = 20


class PatientService:
    def __init__(self, repository: PatientRepository, locks: Optional[KeyedLocks] = None):
        self.repository = repository
        self.locks = locks or KeyedLocks()

    def _new_patient_id(self) -> str:
        for _ in range(MAX_ID_ATTEMPTS):
            patient_id = generate_patient_id()
            if not self.repository.exists(patient_id):
                return patient_id
        raise DuplicateError("Could not allocate a free patient ID")

    def register(self, intake: PatientIntake, now: Optional[datetime] = None) -> Patient:
        """
        Register a patient from the intake form

        Priority is classified from the vitals and the wait label derived from it.
        The patient starts at reception with reception already completed.
        """
        priority = triage.classify(intake.model_dump())
        current_step, completed_steps = stages.initial_stage_state()

        patient = Patient(
            id=self._new_patient_id(),
            name=intake.name,
            age=intake.age,
            gender=intake.gender,
            symptoms=intake.symptoms,
            priority=priority,
            registered_at=now or datetime.now(),
            wait_time=triage.estimate_wait(priority),
            current_step=current_step,
            completed_steps=completed_steps,
            temperature=intake.temperature,
            blood_pressure=intake.blood_pressure,
            heart_rate=intake.heart_rate,
            oxygen_saturation=intake.oxygen_saturation,
            pain_level=intake.pain_level,
            allergies=intake.allergies,
            medications=intake.medications,
        )
        self.repository.create(patient)
        logger.info("Registered patient %s with priority %s", patient.id, priority)
        return patient

    def get(self, patient_id: str) -> Patient:
        patient = self.repository.get(patient_id)
        if patient is None:
            raise NotFoundError(f"Patient {patient_id} not found")
        return patient

    def view(self, patient_id: str) -> PatientView:
        """Patient with remaining-time estimate and progress"""
        patient = self.get(patient_id)
        return PatientView(
            **patient.model_dump(),
            estimated_remaining=triage.estimate_remaining(patient),
            progress=stages.progress(patient.completed_steps),
        )

    def estimate(self, patient_id: str) -> WaitEstimate:
        patient = self.get(patient_id)
        return WaitEstimate(
            patient_id=patient.id,
            priority=patient.priority,
            wait_time=patient.wait_time,
            current_step=patient.current_step,
            current_stage_minutes=triage.stage_budget(patient.current_step, patient.priority),
            estimated_remaining=triage.estimate_remaining(patient),
        )

    def list_active(self, priority: Optional[str] = None) -> List[Patient]:
        """Active patients, most recently registered first"""
        patients = self.repository.list_active()
        if priority:
            patients = [p for p in patients if p.priority == priority]
        return sorted(patients, key=lambda p: p.registered_at, reverse=True)

    def list_archived(self) -> List[ArchivedPatient]:
        """Archived patients, most recently archived first"""
        return sorted(self.repository.list_archived(), key=lambda p: p.archived_at, reverse=True)

    def get_archived(self, patient_id: str) -> ArchivedPatient:
        archived = self.repository.get_archived(patient_id)
        if archived is None:
            raise NotFoundError(f"Archived patient {patient_id} not found")
        return archived

    def update(self, patient_id: str, updates: PatientUpdate) -> Patient:
        """
        Apply a staff edit

        A priority change is a manual override; the stored wait_time label is left as is.
        """
        changes = updates.model_dump(exclude_unset=True)
        with self.locks.hold(patient_id):
            patient = self.get(patient_id)
            if "priority" in changes and changes["priority"] != patient.priority:
                logger.info(
                    "Priority override for patient %s: %s -> %s",
                    patient_id, patient.priority, changes["priority"],
                )
            try:
                updated = Patient.model_validate({**patient.model_dump(), **changes})
            except SchemaValidationError as e:
                raise ValidationError(f"Invalid patient update: {e.errors()}") from e
            self.repository.update(updated)
            return updated

    def toggle_stage(self, patient_id: str, stage_id: str) -> Patient:
        """Toggle a care stage's completion and persist the new stage state"""
        stages.validate_stage(stage_id)
        with self.locks.hold(patient_id):
            patient = self.get(patient_id)
            current_step, completed_steps = stages.toggle_stage(
                patient.current_step, patient.completed_steps, stage_id
            )
            patient.current_step = current_step
            patient.completed_steps = completed_steps
            self.repository.update(patient)
            logger.info(
                "Patient %s: toggled %s, current stage %s, completed %s",
                patient_id, stage_id, current_step, completed_steps,
            )
            return patient

    def request_reevaluation(self, patient_id: str, reason: str) -> Patient:
        with self.locks.hold(patient_id):
            patient = self.get(patient_id)
            reevaluation.request_reevaluation(patient, reason)
            self.repository.update(patient)
            logger.info("Patient %s requested re-evaluation", patient_id)
            return patient

    def mark_reevaluation_seen(self, patient_id: str) -> Patient:
        with self.locks.hold(patient_id):
            patient = self.get(patient_id)
            if patient.reevaluation_request is None:
                return patient
            reevaluation.mark_seen(patient)
            self.repository.update(patient)
            logger.info("Re-evaluation request of patient %s marked as seen", patient_id)
            return patient

    def pending_reevaluations(self) -> List[Patient]:
        """Active patients whose request has not been seen, oldest request first"""
        pending = [p for p in self.repository.list_active() if reevaluation.has_pending_request(p)]
        return sorted(pending, key=lambda p: p.reevaluation_request.timestamp)

    def archive(self, patient_id: str) -> ArchivedPatient:
        """Discharge: move the patient to the archived collection"""
        with self.locks.hold(patient_id):
            patient = self.get(patient_id)
            archived = self.repository.archive(patient)
        logger.info("Archived patient %s", patient_id)
        return archived

    def verify_lookup_code(self, patient_id: str) -> Patient:
        """
        Check a lookup code entered by a patient

        Raises:
            ValidationError: code is not 'PS' followed by digits
            NotFoundError: no active patient with that code
        """
        code = (patient_id or "").strip()
        if not is_patient_id_format(code):
            raise ValidationError("Invalid ID format. The ID must start with 'PS' followed by digits.")
        return self.get(code)
