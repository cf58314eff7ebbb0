"""
Re-evaluation request workflow tests
"""
from datetime import datetime

import pytest

from app.core.errors import ValidationError, ReevaluationPendingError
from app.database.schemas import Patient
from app.services.reevaluation import request_reevaluation, mark_seen, has_pending_request


@pytest.fixture
def patient():
    return Patient(
        id="PS12345",
        name="Maria Oliveira",
        age=32,
        gender="Feminino",
        symptoms="Febre alta",
        priority="Laranja",
        registered_at=datetime(2024, 5, 1, 10, 0),
        wait_time="10 minutos",
    )


@pytest.mark.parametrize("reason", ["", "   ", None])
def test_blank_reason_rejected(patient, reason):
    with pytest.raises(ValidationError):
        request_reevaluation(patient, reason)
    assert patient.reevaluation_request is None


def test_request_records_unseen_request(patient):
    now = datetime(2024, 5, 1, 10, 30)
    request_reevaluation(patient, "  worse pain ", now=now)
    request = patient.reevaluation_request
    assert request.requested is True
    assert request.reason == "worse pain"
    assert request.timestamp == now
    assert request.seen is False
    assert has_pending_request(patient)


def test_second_request_before_seen_rejected(patient):
    request_reevaluation(patient, "worse pain")
    with pytest.raises(ReevaluationPendingError):
        request_reevaluation(patient, "still worse")
    assert patient.reevaluation_request.reason == "worse pain"


def test_pending_error_is_a_validation_error():
    assert issubclass(ReevaluationPendingError, ValidationError)


def test_new_request_after_seen_overwrites(patient):
    request_reevaluation(patient, "worse pain", now=datetime(2024, 5, 1, 10, 30))
    mark_seen(patient)
    assert patient.reevaluation_request.seen is True
    assert not has_pending_request(patient)

    later = datetime(2024, 5, 1, 11, 0)
    request_reevaluation(patient, "nausea", now=later)
    assert patient.reevaluation_request.reason == "nausea"
    assert patient.reevaluation_request.timestamp == later
    assert patient.reevaluation_request.seen is False


def test_mark_seen_without_request_is_noop(patient):
    mark_seen(patient)
    assert patient.reevaluation_request is None
