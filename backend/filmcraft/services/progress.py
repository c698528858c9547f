from typing import Iterable, List, Mapping, Optional

from filmcraft.services.wizard import SCENE_CHECKLIST_KEYS

SHOT_FILTERS = ("all", "pending", "completed", "High", "Medium", "Low")


def _percent(done: int, total: int) -> float:
    return (done / total) * 100 if total > 0 else 0.0


def scene_progress(shots: Iterable, scene_number: int) -> float:
    scene_shots = [s for s in shots if s.scene_number == scene_number]
    completed = [s for s in scene_shots if s.status == "completed"]
    return _percent(len(completed), len(scene_shots))


def overall_progress(shots: Iterable) -> float:
    shots = list(shots)
    completed = [s for s in shots if s.status == "completed"]
    return _percent(len(completed), len(shots))


def checklist_progress(checklist: Optional[Mapping[str, bool]]) -> float:
    checklist = checklist or {}
    done = len([key for key in SCENE_CHECKLIST_KEYS if checklist.get(key)])
    return _percent(done, len(SCENE_CHECKLIST_KEYS))


def completed_scene_count(shots: Iterable, scene_numbers: Iterable[int]) -> int:
    shots = list(shots)
    return len([n for n in scene_numbers if scene_progress(shots, n) == 100])


def filter_shots(shots: Iterable, filter_by: str = "all") -> List:
    """Filter by status (pending/completed) or priority (High/Medium/Low)."""
    shots = list(shots)
    if filter_by in ("pending", "completed"):
        return [s for s in shots if s.status == filter_by]
    if filter_by in ("High", "Medium", "Low"):
        return [s for s in shots if s.priority == filter_by]
    return shots
