"""
Re-evaluation requests

A patient may ask staff to reassess their priority. A request that staff have
not seen yet blocks a new one; once seen, a new request replaces the old record.
"""
from datetime import datetime
from typing import Optional

from app.core.errors import ValidationError, ReevaluationPendingError
from app.database.schemas import Patient, ReevaluationRequest


def has_pending_request(patient: Patient) -> bool:
    request = patient.reevaluation_request
    return bool(request and request.requested and not request.seen)


def request_reevaluation(patient: Patient, reason: str, now: Optional[datetime] = None) -> Patient:
    """
    Record a re-evaluation request on the patient

    Raises:
        ValidationError: reason is empty or blank
        ReevaluationPendingError: an earlier request has not been seen yet
    """
    if not reason or not reason.strip():
        raise ValidationError("Re-evaluation reason must not be empty")
    if has_pending_request(patient):
        raise ReevaluationPendingError("A re-evaluation request is already waiting to be seen by staff")

    patient.reevaluation_request = ReevaluationRequest(
        requested=True,
        reason=reason.strip(),
        timestamp=now or datetime.now(),
        seen=False,
    )
    return patient


def mark_seen(patient: Patient) -> Patient:
    """Acknowledge the patient's request; no-op when there is none"""
    if patient.reevaluation_request is not None:
        patient.reevaluation_request.seen = True
    return patient
