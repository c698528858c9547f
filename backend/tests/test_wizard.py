from types import SimpleNamespace

import pytest

from filmcraft.services import wizard

IDEATION_DONE = {
    "title": "Night Market",
    "type": "Documentary",
    "duration": "5 minutes",
    "concept": "Vendors at dusk",
    "key_message": "Small trades keep cities alive",
    "target_audience": "Urban millennials",
    "tone": "Warm",
}


def test_basics_step_needs_title_type_and_duration():
    assert wizard.is_step_complete("ideation", 0, IDEATION_DONE)
    assert not wizard.is_step_complete("ideation", 0, {**IDEATION_DONE, "type": "   "})
    assert not wizard.is_step_complete("ideation", 0, {"title": "X", "duration": "1m"})


def test_step_checks_work_on_objects():
    project = SimpleNamespace(**IDEATION_DONE)
    assert wizard.is_step_complete("ideation", 2, project)


def test_out_of_range_step_is_incomplete():
    assert not wizard.is_step_complete("ideation", 3, IDEATION_DONE)
    assert not wizard.is_step_complete("ideation", -1, IDEATION_DONE)
    assert not wizard.is_step_complete("shooting", 0, IDEATION_DONE)


def test_planning_steps():
    data = {"story_structure": [], "resources": {}}
    assert not wizard.is_step_complete("planning", 0, data)
    assert wizard.is_step_complete("planning", 1, data)
    assert wizard.is_step_complete("planning", 2, data)
    assert not wizard.is_step_complete("planning", 3, data)

    data = {"story_structure": [{"title": "Opening"}], "resources": {"Equipment": ["Tripod"]}}
    assert wizard.is_phase_complete("planning", data)


def test_missing_fields():
    assert wizard.missing_fields("ideation", 1, {"concept": "x"}) == ["key_message"]
    assert wizard.missing_fields("ideation", 9, {}) == []


def test_check_advance():
    assert wizard.check_advance("ideation", IDEATION_DONE) == "planning"
    assert wizard.check_advance("shooting", {}) == "completed"

    with pytest.raises(wizard.PhaseTransitionError) as exc:
        wizard.check_advance("ideation", {**IDEATION_DONE, "tone": ""})
    assert "audience" in str(exc.value)
    assert "tone" in str(exc.value)

    with pytest.raises(wizard.PhaseTransitionError):
        wizard.check_advance("completed", IDEATION_DONE)


def test_phase_accessibility_and_status():
    assert wizard.is_phase_accessible("planning", "ideation")
    assert wizard.is_phase_accessible("planning", "planning")
    assert not wizard.is_phase_accessible("planning", "shooting")
    assert not wizard.is_phase_accessible("planning", "editing")

    assert wizard.phase_status("shooting", "ideation") == "completed"
    assert wizard.phase_status("shooting", "shooting") == "current"
    assert wizard.phase_status("shooting", "completed") == "upcoming"


def test_scene_checklist_complete():
    assert not wizard.is_scene_checklist_complete(None)
    partial = {key: True for key in wizard.SCENE_CHECKLIST_KEYS[:-1]}
    assert not wizard.is_scene_checklist_complete(partial)
    full = {key: True for key in wizard.SCENE_CHECKLIST_KEYS}
    assert wizard.is_scene_checklist_complete(full)
    assert len(wizard.SCENE_CHECKLIST_KEYS) == 6
