"""
Care stage progression tests
"""
import pytest

from app.core.errors import ValidationError
from app.database.schemas import STAGES
from app.services.stages import initial_stage_state, toggle_stage, progress


def test_initial_state_is_reception_completed():
    current, completed = initial_stage_state()
    assert current == "recepcao"
    assert completed == ["recepcao"]


def test_completing_current_stage_advances():
    current, completed = toggle_stage("triagem", ["recepcao"], "triagem")
    assert current == "espera"
    assert set(completed) == {"recepcao", "triagem"}


def test_advance_goes_to_next_stage_even_if_already_completed():
    current, completed = toggle_stage("triagem", ["recepcao", "espera"], "triagem")
    assert current == "espera"
    assert set(completed) == {"recepcao", "triagem", "espera"}


def test_walking_through_every_stage_ends_at_alta():
    current, completed = "recepcao", []
    for _ in STAGES:
        current, completed = toggle_stage(current, completed, current)
    assert current == "alta"
    assert set(completed) == set(STAGES)


def test_undoing_reception_on_fresh_patient_keeps_current():
    current, completed = initial_stage_state()
    current, completed = toggle_stage(current, completed, "recepcao")
    assert current == "recepcao"
    assert completed == []


def test_completing_last_stage_keeps_current():
    current, completed = toggle_stage("alta", ["recepcao", "triagem", "espera", "consulta", "medicacao"], "alta")
    assert current == "alta"
    assert "alta" in completed


def test_uncompleting_current_stage_walks_back_to_nearest_incomplete():
    current, completed = toggle_stage("consulta", ["recepcao", "consulta"], "consulta")
    assert current == "espera"
    assert completed == ["recepcao"]


def test_uncompleting_current_stage_skips_completed_predecessors():
    current, completed = toggle_stage("espera", ["triagem", "espera"], "espera")
    # triagem is still completed, recepcao is not
    assert current == "recepcao"
    assert completed == ["triagem"]


def test_uncompleting_current_stage_with_all_predecessors_done_stays():
    current, completed = toggle_stage("espera", ["recepcao", "triagem", "espera"], "espera")
    assert current == "espera"
    assert completed == ["recepcao", "triagem"]


def test_toggling_other_stage_only_changes_membership():
    current, completed = toggle_stage("espera", ["recepcao", "triagem"], "medicacao")
    assert current == "espera"
    assert set(completed) == {"recepcao", "triagem", "medicacao"}

    current, completed = toggle_stage(current, completed, "triagem")
    assert current == "espera"
    assert set(completed) == {"recepcao", "medicacao"}


def test_on_then_off_restores_membership_but_not_current():
    before_current, before_completed = "triagem", ["recepcao"]
    current, completed = toggle_stage(before_current, before_completed, "triagem")
    current, completed = toggle_stage(current, completed, "triagem")
    assert set(completed) == set(before_completed)
    # current advanced to espera and triagem was not current anymore when undone
    assert current == "espera"


def test_unknown_stage_rejected():
    with pytest.raises(ValidationError):
        toggle_stage("recepcao", ["recepcao"], "raio-x")


def test_input_is_not_mutated():
    completed = ["recepcao"]
    toggle_stage("triagem", completed, "triagem")
    assert completed == ["recepcao"]


def test_progress_fraction():
    assert progress([]) == 0
    assert progress(["recepcao", "triagem", "espera"]) == 0.5
    assert progress(STAGES) == 1
