from types import SimpleNamespace

from filmcraft.services import chat, progress, schedule
from filmcraft.services.wizard import SCENE_CHECKLIST_KEYS


def shot(scene_number, status="pending", priority="Medium"):
    return SimpleNamespace(scene_number=scene_number, status=status, priority=priority)


SHOTS = [
    shot(1, "completed", "High"),
    shot(1, "pending", "Low"),
    shot(2, "completed"),
    shot(2, "completed"),
]


def test_scene_and_overall_progress():
    assert progress.scene_progress(SHOTS, 1) == 50
    assert progress.scene_progress(SHOTS, 2) == 100
    assert progress.scene_progress(SHOTS, 3) == 0
    assert progress.overall_progress(SHOTS) == 75
    assert progress.overall_progress([]) == 0


def test_completed_scene_count():
    assert progress.completed_scene_count(SHOTS, [1, 2, 3]) == 1


def test_checklist_progress():
    assert progress.checklist_progress({}) == 0
    half = {key: True for key in SCENE_CHECKLIST_KEYS[:3]}
    assert progress.checklist_progress(half) == 50
    assert progress.checklist_progress({key: True for key in SCENE_CHECKLIST_KEYS}) == 100


def test_filter_shots():
    assert len(progress.filter_shots(SHOTS, "all")) == 4
    assert len(progress.filter_shots(SHOTS, "completed")) == 3
    assert len(progress.filter_shots(SHOTS, "pending")) == 1
    assert len(progress.filter_shots(SHOTS, "High")) == 1
    assert len(progress.filter_shots(SHOTS, "Medium")) == 2


def test_group_by_date_sorts_days_and_times():
    items = [
        {"title": "Wrap", "date": "2024-05-02", "start_time": "14:00"},
        {"title": "Call", "date": "2024-05-02", "start_time": "08:00"},
        {"title": "Prep", "date": "2024-05-01", "start_time": "10:00"},
    ]
    grouped = schedule.group_by_date(items)

    assert list(grouped) == ["2024-05-01", "2024-05-02"]
    assert [i["title"] for i in grouped["2024-05-02"]] == ["Call", "Wrap"]


def test_format_duration():
    assert schedule.format_duration("09:00", "17:00") == "8h"
    assert schedule.format_duration("09:00", "10:30") == "1.5h"
    assert schedule.format_duration("09:00", "09:45") == "45min"


def test_schedule_type_label():
    assert schedule.schedule_type_label("prep") == "Pre-production"
    assert schedule.schedule_type_label("review") == "Review/Editing"
    assert schedule.schedule_type_label("party") == "Shooting"


def message(id, user_id, content="", message_type="general", author="a@filmcraft.io"):
    return SimpleNamespace(
        id=id, user_id=user_id, content=content, message_type=message_type,
        meta={"author_email": author},
    )


def test_filter_messages():
    messages = [
        message(1, 1, "Call time moved", "announcement"),
        message(2, 2, "Which lens?", "question", author="dp@filmcraft.io"),
        message(3, 1, "Thanks all"),
    ]
    assert [m.id for m in chat.filter_messages(messages, "question")] == [2]
    assert [m.id for m in chat.filter_messages(messages, "all", "CALL")] == [1]
    assert [m.id for m in chat.filter_messages(messages, "all", "dp@")] == [2]


def test_unread_count():
    messages = [message(1, 2), message(2, 1), message(3, 2), message(4, 2)]
    assert chat.unread_count(messages, None, user_id=1) == 3
    assert chat.unread_count(messages, 2, user_id=1) == 2
    assert chat.unread_count(messages, 4, user_id=1) == 0
    # unknown last-read id counts everything
    assert chat.unread_count(messages, 99, user_id=1) == 3


def test_format_duration_unparseable_times():
    assert schedule.format_duration("25:00", "26:00") == "?h"
    assert schedule.format_duration(None, "17:00") == "?h"
