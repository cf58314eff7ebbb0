"""
Care stage progression

Patients move through recepcao -> triagem -> espera -> consulta -> medicacao -> alta.
Staff toggle stages complete/incomplete; toggling can also rewind, so data-entry
mistakes on a later stage can be undone.
"""
from typing import Iterable, List, Tuple

from app.core.errors import ValidationError
from app.database.schemas import STAGES

FIRST_STAGE = STAGES[0]
LAST_STAGE = STAGES[-1]


def initial_stage_state() -> Tuple[str, List[str]]:
    """
    Stage state for a freshly registered patient

    Returns:
        (current_step, completed_steps) with reception already done
    """
    return FIRST_STAGE, [FIRST_STAGE]


def validate_stage(stage_id: str) -> str:
    if stage_id not in STAGES:
        raise ValidationError(f"Unknown stage '{stage_id}'. Valid stages: {', '.join(STAGES)}")
    return stage_id


def toggle_stage(
    current_step: str,
    completed_steps: Iterable[str],
    stage_id: str,
) -> Tuple[str, List[str]]:
    """
    Toggle a stage's completion and work out the new current stage

    Toggling off the current stage moves back to the nearest earlier stage that is
    not completed (stays put if there is none). Toggling on the current stage
    advances to the next stage in order, whether or not that one is completed.
    Any other stage only changes membership.

    Args:
        current_step: Patient's current stage
        completed_steps: Stages marked as done
        stage_id: Stage being toggled

    Returns:
        (new_current_step, new_completed_steps)

    Raises:
        ValidationError: stage_id is not a known stage
    """
    validate_stage(stage_id)
    completed = list(completed_steps)
    new_current = current_step
    position = STAGES.index(stage_id)

    if stage_id in completed:
        completed = [step for step in completed if step != stage_id]
        if stage_id == current_step:
            for earlier in reversed(STAGES[:position]):
                if earlier not in completed:
                    new_current = earlier
                    break
    else:
        completed.append(stage_id)
        if stage_id == current_step and stage_id != LAST_STAGE:
            new_current = STAGES[position + 1]

    return new_current, completed


def progress(completed_steps: Iterable[str]) -> float:
    """Fraction of canonical stages marked done"""
    done = set(completed_steps) & set(STAGES)
    return len(done) / len(STAGES)
