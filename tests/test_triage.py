"""
Priority classification and wait-time estimation tests
"""
from types import SimpleNamespace

import pytest

from app.services.triage import (
    classify,
    estimate_wait,
    estimate_remaining,
    stage_budget,
    parse_float,
    parse_int,
    parse_systolic,
)


def test_emergency_signs_override_everything():
    assert classify({"has_emergency_signs": True, "pain_level": "0", "temperature": "36"}) == "Vermelho"
    assert classify({"has_emergency_signs": True, "oxygen_saturation": "99", "heart_rate": "70"}) == "Vermelho"


def test_all_defaults_is_verde():
    assert classify({}) == "Verde"


@pytest.mark.parametrize("temperature", ["40", "34", 39.6, "34.9"])
def test_temperature_out_of_range_is_laranja(temperature):
    assert classify({"temperature": temperature}) == "Laranja"


@pytest.mark.parametrize("temperature", ["39.5", "35", "37.2"])
def test_temperature_at_bounds_is_not_flagged(temperature):
    assert classify({"temperature": temperature}) == "Verde"


@pytest.mark.parametrize("blood_pressure", ["190/100", "85/60"])
def test_systolic_out_of_range_is_laranja(blood_pressure):
    assert classify({"blood_pressure": blood_pressure}) == "Laranja"


def test_pain_levels():
    assert classify({"pain_level": "9"}) == "Laranja"
    assert classify({"pain_level": "8"}) == "Laranja"
    assert classify({"pain_level": "6"}) == "Amarelo"
    assert classify({"pain_level": "3"}) == "Verde"
    assert classify({"pain_level": "2"}) == "Verde"


def test_oxygen_saturation():
    assert classify({"oxygen_saturation": "90"}) == "Laranja"
    assert classify({"oxygen_saturation": "93"}) == "Amarelo"
    assert classify({"oxygen_saturation": "95"}) == "Verde"


def test_heart_rate():
    assert classify({"heart_rate": "130"}) == "Amarelo"
    assert classify({"heart_rate": "45"}) == "Amarelo"
    assert classify({"heart_rate": "120"}) == "Verde"


def test_low_pain_lets_oxygen_check_fire():
    assert classify({"pain_level": "2", "oxygen_saturation": "90"}) == "Laranja"


def test_moderate_pain_short_circuits_oxygen_check():
    # Pain >= 3 returns before oxygen is looked at
    assert classify({"pain_level": "3", "oxygen_saturation": "85"}) == "Verde"
    assert classify({"pain_level": "5", "heart_rate": "150"}) == "Amarelo"


def test_temperature_checked_before_pain():
    assert classify({"temperature": "40", "pain_level": "6"}) == "Laranja"


def test_classifier_never_returns_azul():
    samples = [{}, {"pain_level": "0"}, {"heart_rate": "60"}, {"temperature": "36"}]
    assert all(classify(sample) != "Azul" for sample in samples)


def test_malformed_values_fall_back_to_defaults():
    assert classify({"temperature": "abc", "blood_pressure": "n/a", "pain_level": "", "oxygen_saturation": None}) == "Verde"


def test_permissive_numeric_parsing():
    assert parse_float("38.2C", 36.5) == 38.2
    assert parse_float("febre", 36.5) == 36.5
    assert parse_float(40, 36.5) == 40.0
    assert parse_int("7.9", 0) == 7
    assert parse_int("90bpm", 70) == 90
    assert parse_int("  ", 70) == 70
    assert parse_systolic("150/90") == 150
    assert parse_systolic("") == 120
    assert parse_systolic("x/80") == 120


def test_out_of_range_numbers_fall_back_to_defaults():
    assert parse_int("9" * 5000, 0) == 0
    assert parse_int(float("inf"), 70) == 70
    assert parse_int(float("nan"), 70) == 70
    assert classify({"pain_level": "9" * 5000}) == "Verde"
    assert classify({"heart_rate": "1" * 5000}) == "Verde"
    assert classify({"pain_level": float("inf"), "heart_rate": float("-inf")}) == "Verde"


def test_wait_time_labels():
    assert estimate_wait("Vermelho") == "Imediato"
    assert estimate_wait("Laranja") == "10 minutos"
    assert estimate_wait("Amarelo") == "30 minutos"
    assert estimate_wait("Verde") == "1 hora"
    assert estimate_wait("Azul") == "2 horas"
    assert estimate_wait("unknown") == "1 hora"


def test_stage_budget_lookup():
    assert stage_budget("espera", "Azul") == 120
    assert stage_budget("consulta", "Vermelho") == 30
    assert stage_budget("medicacao", "Amarelo") == 20
    assert stage_budget("espera", "unknown") == 0
    assert stage_budget("unknown", "Verde") == 0


def _patient(current_step, priority):
    return SimpleNamespace(current_step=current_step, priority=priority)


def test_remaining_time_sums_current_and_later_stages():
    # espera 60 + consulta 30 + medicacao 15 + alta 0
    assert estimate_remaining(_patient("espera", "Verde")) == "1 hora(s) e 45 minutos"
    # consulta 30 + medicacao 20
    assert estimate_remaining(_patient("consulta", "Amarelo")) == "50 minutos"
    # recepcao 20 + triagem 20 + espera 120 + consulta 30 + medicacao 10
    assert estimate_remaining(_patient("recepcao", "Azul")) == "3 hora(s) e 20 minutos"


def test_remaining_time_edge_cases():
    assert estimate_remaining(_patient("alta", "Vermelho")) == "Concluído"
    assert estimate_remaining(_patient("medicacao", "unknown")) == "Imediato"
    assert estimate_remaining(_patient("corredor", "Verde")) == "Indeterminado"
