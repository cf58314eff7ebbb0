"""
Triage classification and wait-time estimation

Rule-based priority assignment from intake vitals, plus the wait-time labels
and per-stage time budgets of the Manchester-like protocol.
All functions are pure and never raise on malformed vitals.
"""
import re
from typing import Any, Dict, Mapping, Optional

from app.database.schemas import (
    VERMELHO,
    LARANJA,
    AMARELO,
    VERDE,
    AZUL,
    STAGES,
)

_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+))")
_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
# Longer digit runs are not a plausible vital sign
_MAX_INT_DIGITS = 9

WAIT_TIME_LABELS = {
    VERMELHO: "Imediato",
    LARANJA: "10 minutos",
    AMARELO: "30 minutos",
    VERDE: "1 hora",
    AZUL: "2 horas",
}
DEFAULT_WAIT_TIME = "1 hora"

# Minutes budgeted per stage, by priority
_RECEPTION_BUDGET = {VERMELHO: 0, LARANJA: 5, AMARELO: 10, VERDE: 15, AZUL: 20}
STAGE_BUDGETS: Dict[str, Dict[str, int]] = {
    "recepcao": dict(_RECEPTION_BUDGET),
    "triagem": dict(_RECEPTION_BUDGET),
    "espera": {VERMELHO: 5, LARANJA: 15, AMARELO: 30, VERDE: 60, AZUL: 120},
    "consulta": {VERMELHO: 30, LARANJA: 30, AMARELO: 30, VERDE: 30, AZUL: 30},
    "medicacao": {VERMELHO: 30, LARANJA: 30, AMARELO: 20, VERDE: 15, AZUL: 10},
    "alta": {VERMELHO: 0, LARANJA: 0, AMARELO: 0, VERDE: 0, AZUL: 0},
}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_float(value: Any, default: float) -> float:
    """
    Parse a decimal from free text, reading only its leading number ("38.2C" -> 38.2)

    Missing or non-numeric input yields the default.
    """
    if _is_blank(value) or isinstance(value, bool):
        return default
    try:
        if isinstance(value, (int, float)):
            return float(value)
        match = _FLOAT_PREFIX.match(str(value))
        return float(match.group(1)) if match else default
    except (ValueError, OverflowError):
        return default


def parse_int(value: Any, default: int) -> int:
    """
    Parse an integer from free text, truncating at the first non-digit ("7.9" -> 7)
    """
    if _is_blank(value) or isinstance(value, bool):
        return default
    try:
        if isinstance(value, (int, float)):
            return int(value)
        match = _INT_PREFIX.match(str(value))
        if not match or len(match.group(1).lstrip("+-")) > _MAX_INT_DIGITS:
            return default
        return int(match.group(1))
    except (ValueError, OverflowError):
        # Infinity and NaN
        return default


def parse_systolic(blood_pressure: Any, default: int = 120) -> int:
    """
    Systolic value is the integer before the '/'
    """
    if _is_blank(blood_pressure):
        blood_pressure = "120/80"
    return parse_int(str(blood_pressure).split("/")[0], default)


def classify(intake: Mapping[str, Any]) -> str:
    """
    Assign an urgency level from intake data

    Rules are checked in a fixed order and the first match wins:
    emergency signs, temperature, blood pressure, pain, oxygen, heart rate.
    Falls back to Verde; Azul is only ever set manually by staff.

    Args:
        intake: Intake fields (has_emergency_signs, temperature, blood_pressure,
                pain_level, oxygen_saturation, heart_rate), all optional

    Returns:
        Priority label
    """
    if intake.get("has_emergency_signs"):
        return VERMELHO

    temperature = parse_float(intake.get("temperature"), 36.5)
    if temperature > 39.5 or temperature < 35:
        return LARANJA

    systolic = parse_systolic(intake.get("blood_pressure"))
    if systolic > 180 or systolic < 90:
        return LARANJA

    pain = parse_int(intake.get("pain_level"), 0)
    if pain >= 8:
        return LARANJA
    elif pain >= 5:
        return AMARELO
    elif pain >= 3:
        return VERDE

    oxygen = parse_int(intake.get("oxygen_saturation"), 98)
    if oxygen < 92:
        return LARANJA
    elif oxygen < 95:
        return AMARELO

    heart_rate = parse_int(intake.get("heart_rate"), 70)
    if heart_rate > 120 or heart_rate < 50:
        return AMARELO

    return VERDE


def estimate_wait(priority: Optional[str]) -> str:
    """Human-facing wait label for a priority ("1 hora" when unknown)"""
    return WAIT_TIME_LABELS.get(priority, DEFAULT_WAIT_TIME)


def stage_budget(stage: str, priority: Optional[str]) -> int:
    """Minutes budgeted for a stage at a priority, 0 when either is unknown"""
    return STAGE_BUDGETS.get(stage, {}).get(priority, 0)


def format_minutes(minutes: int) -> str:
    if minutes <= 0:
        return "Imediato"
    if minutes < 60:
        return f"{minutes} minutos"
    return f"{minutes // 60} hora(s) e {minutes % 60} minutos"


def estimate_remaining(patient) -> str:
    """
    Remaining time for the rest of the care pathway

    Sums the budget of the current stage and every stage after it.

    Args:
        patient: Anything with current_step and priority attributes

    Returns:
        "Concluído" at the final stage, "Indeterminado" for an unknown stage,
        otherwise a label from format_minutes
    """
    if patient.current_step not in STAGES:
        return "Indeterminado"

    index = STAGES.index(patient.current_step)
    if index == len(STAGES) - 1:
        return "Concluído"

    remaining = sum(stage_budget(stage, patient.priority) for stage in STAGES[index:])
    return format_minutes(remaining)
