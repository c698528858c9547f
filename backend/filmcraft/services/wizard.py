"""Wizard steps and the presence checks that gate them.

Each phase of a project is a short, linear list of steps. A step is complete
when all of its designated fields hold something: a non-blank string, or a
non-empty list/map for the planning collections. Phases only move forward,
one at a time, and only once every step of the current phase is complete.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Tuple

from filmcraft.models.project import PHASES


@dataclass(frozen=True)
class WizardStep:
    id: str
    title: str
    description: str
    required_fields: Tuple[str, ...] = ()


IDEATION_STEPS: Tuple[WizardStep, ...] = (
    WizardStep("basics", "Project Basics", "Define your project fundamentals",
               ("title", "type", "duration")),
    WizardStep("concept", "Concept Development", "Develop your creative concept",
               ("concept", "key_message")),
    WizardStep("audience", "Audience & Tone", "Define your target audience and tone",
               ("target_audience", "tone")),
)

# shots and schedule may stay empty
PLANNING_STEPS: Tuple[WizardStep, ...] = (
    WizardStep("story-script", "Story & Script",
               "Develop your story structure, script, and locations", ("story_structure",)),
    WizardStep("shots", "Shot List", "Plan your shots and camera angles by scene"),
    WizardStep("schedule", "Production Schedule", "Create your shooting schedule"),
    WizardStep("resources", "Resources & Team",
               "Identify needed resources and team members", ("resources",)),
)

WIZARD_STEPS = {
    "ideation": IDEATION_STEPS,
    "planning": PLANNING_STEPS,
}

SCENE_CHECKLIST_ITEMS: Tuple[Tuple[str, str], ...] = (
    ("lighting_setup", "Lighting setup complete"),
    ("audio_check", "Audio equipment tested"),
    ("location_ready", "Location prepared"),
    ("props_ready", "Props and costumes ready"),
    ("equipment_check", "All equipment present"),
    ("team_ready", "Team briefed and ready"),
)
SCENE_CHECKLIST_KEYS = tuple(key for key, _ in SCENE_CHECKLIST_ITEMS)


class PhaseTransitionError(Exception):
    pass


def is_filled(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) > 0
    return True


def _get(data: Any, name: str) -> Any:
    if isinstance(data, Mapping):
        return data.get(name)
    return getattr(data, name, None)


def is_step_complete(phase: str, step_index: int, data: Any) -> bool:
    steps = WIZARD_STEPS.get(phase, ())
    if not 0 <= step_index < len(steps):
        return False
    return all(is_filled(_get(data, f)) for f in steps[step_index].required_fields)


def missing_fields(phase: str, step_index: int, data: Any) -> List[str]:
    steps = WIZARD_STEPS.get(phase, ())
    if not 0 <= step_index < len(steps):
        return []
    return [f for f in steps[step_index].required_fields if not is_filled(_get(data, f))]


def is_phase_complete(phase: str, data: Any) -> bool:
    return all(is_step_complete(phase, i, data) for i in range(len(WIZARD_STEPS.get(phase, ()))))


def next_phase(phase: str) -> Optional[str]:
    if phase not in PHASES:
        return None
    index = PHASES.index(phase)
    return PHASES[index + 1] if index + 1 < len(PHASES) else None


def check_advance(phase: str, data: Any) -> str:
    """Return the phase a project may advance to, or raise PhaseTransitionError."""
    target = next_phase(phase)
    if target is None:
        raise PhaseTransitionError(f"Project in phase '{phase}' cannot advance")

    for i, step in enumerate(WIZARD_STEPS.get(phase, ())):
        missing = missing_fields(phase, i, data)
        if missing:
            raise PhaseTransitionError(
                f"Step '{step.id}' is incomplete: missing {', '.join(missing)}"
            )
    return target


def is_phase_accessible(current_phase: str, phase: str) -> bool:
    """Earlier phases and the current one are reachable; later ones are not."""
    if current_phase not in PHASES or phase not in PHASES:
        return False
    return PHASES.index(phase) <= PHASES.index(current_phase)


def phase_status(current_phase: str, phase: str) -> str:
    if current_phase not in PHASES or phase not in PHASES:
        return "upcoming"
    current, index = PHASES.index(current_phase), PHASES.index(phase)
    if index < current:
        return "completed"
    if index == current:
        return "current"
    return "upcoming"


def is_scene_checklist_complete(checklist: Optional[Mapping[str, bool]]) -> bool:
    checklist = checklist or {}
    return all(checklist.get(key) for key in SCENE_CHECKLIST_KEYS)
