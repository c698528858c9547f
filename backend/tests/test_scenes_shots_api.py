import os

from conftest import API, png_bytes
from filmcraft.core import files
from filmcraft.services.wizard import SCENE_CHECKLIST_KEYS
from filmcraft.workers.tasks import extract_shot_palette_task

SCRIPT = "SCENE 1 - INT. ROOM\nHello there.\nEXT. PARK\nWide shot."


def generate_scenes(client, headers, project_id, script=SCRIPT):
    client.put(f"{API}/scripts/project/{project_id}", json={"script": script}, headers=headers)
    return client.post(f"{API}/scripts/project/{project_id}/scenes", json={}, headers=headers)


def add_shot(client, headers, project_id, **fields):
    res = client.post(f"{API}/shots/", json={"project_id": project_id, **fields}, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()


def test_generate_scenes_from_script(client, headers, project):
    res = generate_scenes(client, headers, project["id"])
    assert res.status_code == 200
    assert res.json()["scenes_created"] == 2

    scenes = client.get(f"{API}/scenes/project/{project['id']}", headers=headers).json()
    assert [s["title"] for s in scenes] == ["SCENE 1 - INT. ROOM", "EXT. PARK"]
    assert "Hello there." in scenes[0]["content"]
    assert "Wide shot." in scenes[1]["content"]
    assert all(s["persisted"] for s in scenes)


def test_regenerate_overwrites_or_appends(client, headers, project):
    generate_scenes(client, headers, project["id"])
    generate_scenes(client, headers, project["id"], "INT. ATTIC\nDust everywhere.")
    scenes = client.get(f"{API}/scenes/project/{project['id']}", headers=headers).json()
    assert [s["scene_number"] for s in scenes] == [1]

    client.post(f"{API}/scripts/project/{project['id']}/scenes",
                json={"overwrite_existing": False}, headers=headers)
    scenes = client.get(f"{API}/scenes/project/{project['id']}", headers=headers).json()
    assert [s["scene_number"] for s in scenes] == [1, 2]


def test_generate_without_script(client, headers, project):
    res = client.post(f"{API}/scripts/project/{project['id']}/scenes", json={}, headers=headers)
    assert res.status_code == 400


def test_script_upload_and_download(client, headers, project):
    res = client.post(
        f"{API}/scripts/project/{project['id']}/upload",
        files={"file": ("draft.txt", SCRIPT.encode("utf-8"), "text/plain")},
        headers=headers,
    )
    assert res.status_code == 200
    assert res.json()["script"] == SCRIPT

    res = client.get(f"{API}/scripts/project/{project['id']}/download", headers=headers)
    assert res.status_code == 200
    assert res.text == SCRIPT
    assert 'filename="Night Market_script.txt"' in res.headers["content-disposition"]


def test_scenes_derived_from_story_until_saved(client, headers, project):
    url = f"{API}/scenes/project/{project['id']}"
    derived = client.get(url, headers=headers).json()
    assert len(derived) == 1
    assert derived[0]["title"] == "Scene 1"
    assert derived[0]["persisted"] is False

    client.post(f"{API}/projects/{project['id']}/story-structure", json={"title": "Opening"}, headers=headers)
    client.post(f"{API}/projects/{project['id']}/story-structure", json={"title": "Closing"}, headers=headers)

    saved = client.post(f"{url}/from-story", headers=headers)
    assert saved.status_code == 200
    assert [s["title"] for s in saved.json()] == ["Opening", "Closing"]
    assert all(s["persisted"] for s in saved.json())

    assert client.post(f"{url}/from-story", headers=headers).status_code == 409


def test_checklist_toggle(client, headers, project):
    generate_scenes(client, headers, project["id"])
    url = f"{API}/scenes/project/{project['id']}/1/checklist"

    scene = client.post(f"{url}/lighting_setup", headers=headers).json()
    assert scene["checklist"]["lighting_setup"] is True
    assert round(scene["checklist_progress"], 2) == 16.67

    scene = client.post(f"{url}/lighting_setup", headers=headers).json()
    assert scene["checklist"]["lighting_setup"] is False

    assert client.post(f"{url}/catering", headers=headers).status_code == 400
    missing = f"{API}/scenes/project/{project['id']}/9/checklist/lighting_setup"
    assert client.post(missing, headers=headers).status_code == 404


def test_scene_resources(client, headers, project):
    generate_scenes(client, headers, project["id"])
    res = client.put(f"{API}/scenes/project/{project['id']}/2/resources/Props",
                     json={"items": ["Kite"]}, headers=headers)
    assert res.status_code == 200
    assert res.json()["resources"] == {"Props": ["Kite"]}


def test_shot_defaults_and_titles(client, headers, project):
    generate_scenes(client, headers, project["id"])

    first = add_shot(client, headers, project["id"], scene_number=2)
    second = add_shot(client, headers, project["id"], scene_number=2, title="Close on kite")

    assert first["title"] == "EXT. PARK - Shot 1"
    assert first["status"] == "pending"
    assert first["status_label"] == "Pending"
    assert first["priority"] == "Medium"
    assert first["priority_color"] == "yellow"
    assert first["order_index"] == 1
    assert second["title"] == "Close on kite"
    assert second["order_index"] == 2


def test_completion_waits_for_checklist(client, headers, project):
    generate_scenes(client, headers, project["id"])
    shot = add_shot(client, headers, project["id"], scene_number=1)

    blocked = client.post(f"{API}/shots/{shot['id']}/complete", headers=headers)
    assert blocked.status_code == 409
    assert blocked.json()["detail"] == "Complete scene setup checklist first"

    for key in SCENE_CHECKLIST_KEYS:
        client.post(f"{API}/scenes/project/{project['id']}/1/checklist/{key}", headers=headers)

    done = client.post(f"{API}/shots/{shot['id']}/complete", headers=headers).json()
    assert done["status"] == "completed"
    assert done["status_color"] == "green"

    progress = client.get(f"{API}/shots/project/{project['id']}/progress", headers=headers).json()
    assert progress["overall_progress"] == 100
    assert progress["completed_scenes"] == 1
    assert progress["scenes"][0]["checklist_progress"] == 100

    retake = client.post(f"{API}/shots/{shot['id']}/retake", headers=headers).json()
    assert retake["status"] == "pending"


def test_completion_without_saved_scene(client, headers, project):
    shot = add_shot(client, headers, project["id"])
    res = client.post(f"{API}/shots/{shot['id']}/complete", headers=headers)
    assert res.status_code == 200


def test_duplicate_shot(client, headers, project):
    shot = add_shot(client, headers, project["id"], title="Wide", priority="High")
    client.post(f"{API}/shots/{shot['id']}/complete", headers=headers)

    copy = client.post(f"{API}/shots/{shot['id']}/duplicate", headers=headers)
    assert copy.status_code == 201
    copy = copy.json()
    assert copy["title"] == "Wide (Copy)"
    assert copy["order_index"] == 1.5
    assert copy["status"] == "pending"
    assert copy["priority"] == "High"
    assert copy["image_url"] is None


def test_list_and_filter_shots(client, headers, project):
    a = add_shot(client, headers, project["id"], priority="High")
    add_shot(client, headers, project["id"], priority="Low")
    client.post(f"{API}/shots/{a['id']}/complete", headers=headers)

    url = f"{API}/shots/project/{project['id']}"
    assert len(client.get(url, headers=headers).json()) == 2
    assert [s["id"] for s in client.get(f"{url}?filter_by=completed", headers=headers).json()] == [a["id"]]
    assert len(client.get(f"{url}?filter_by=Low", headers=headers).json()) == 1
    assert client.get(f"{url}?filter_by=bogus", headers=headers).status_code == 422


def test_update_and_delete_shot(client, headers, project):
    shot = add_shot(client, headers, project["id"])
    res = client.patch(f"{API}/shots/{shot['id']}", json={"status": "in-progress", "notes": "Golden hour"},
                       headers=headers)
    assert res.json()["status_label"] == "In Progress"
    assert res.json()["notes"] == "Golden hour"

    assert client.delete(f"{API}/shots/{shot['id']}", headers=headers).status_code == 204
    assert client.patch(f"{API}/shots/{shot['id']}", json={}, headers=headers).status_code == 404


def test_image_upload_enqueues_palette(client, headers, project, palette_queue):
    shot = add_shot(client, headers, project["id"])

    res = client.post(
        f"{API}/shots/{shot['id']}/image",
        files={"file": ("frame.png", png_bytes(), "image/png")},
        headers=headers,
    )
    assert res.status_code == 200
    url = res.json()["image_url"]
    assert url == f"/storage/shot-images/shots/{shot['id']}.png"
    palette_queue.enqueue.assert_called_once_with(extract_shot_palette_task, shot["id"])

    served = client.get(url)
    assert served.status_code == 200
    assert served.content == png_bytes()

    # the worker fills in the palette later
    assert extract_shot_palette_task(shot["id"]).startswith("Palette extracted")
    refreshed = client.get(f"{API}/shots/project/{project['id']}", headers=headers).json()[0]
    assert refreshed["palette"][0] == [200, 30, 30]

    removed = client.delete(f"{API}/shots/{shot['id']}/image", headers=headers).json()
    assert removed["image_url"] is None
    assert removed["palette"] is None
    assert not os.path.exists(files.object_path(files.SHOT_IMAGES_BUCKET, f"shots/{shot['id']}.png"))


def test_image_upload_validation(client, headers, project, palette_queue):
    shot = add_shot(client, headers, project["id"])
    url = f"{API}/shots/{shot['id']}/image"

    res = client.post(url, files={"file": ("notes.txt", b"hello", "text/plain")}, headers=headers)
    assert res.status_code == 400
    assert res.json()["detail"] == "Please select an image file (JPEG, PNG, etc.)"

    res = client.post(url, files={"file": ("fake.png", b"not really a png", "image/png")}, headers=headers)
    assert res.status_code == 400

    big = b"\x00" * (5 * 1024 * 1024 + 1)
    res = client.post(url, files={"file": ("big.png", big, "image/png")}, headers=headers)
    assert res.status_code == 400
    assert res.json()["detail"] == "Image size must be less than 5MB"

    palette_queue.enqueue.assert_not_called()


def test_palette_task_without_image(client, headers, project):
    shot = add_shot(client, headers, project["id"])
    assert "not found or image missing" in extract_shot_palette_task(shot["id"])
    assert "not found or image missing" in extract_shot_palette_task(9999)


def test_shot_update_rejects_null_for_required_fields(client, headers, project):
    shot = add_shot(client, headers, project["id"], title="Wide")
    url = f"{API}/shots/{shot['id']}"

    for field in ("priority", "title", "scene_number", "status", "order_index"):
        assert client.patch(url, json={field: None}, headers=headers).status_code == 422

    # optional text fields can still be cleared
    res = client.patch(url, json={"notes": None, "description": None}, headers=headers)
    assert res.status_code == 200
    assert res.json()["priority"] == "Medium"
    assert res.json()["title"] == "Wide"


def test_status_update_to_completed_waits_for_checklist(client, headers, project):
    generate_scenes(client, headers, project["id"])
    shot = add_shot(client, headers, project["id"], scene_number=1)
    url = f"{API}/shots/{shot['id']}"

    blocked = client.patch(url, json={"status": "completed"}, headers=headers)
    assert blocked.status_code == 409
    assert blocked.json()["detail"] == "Complete scene setup checklist first"

    # scene 2's checklist does not matter for a shot staying in scene 1
    assert client.patch(url, json={"status": "in-progress"}, headers=headers).status_code == 200

    client.put(f"{API}/scenes/project/{project['id']}/1/checklist", json={"checked": True}, headers=headers)
    done = client.patch(url, json={"status": "completed"}, headers=headers)
    assert done.status_code == 200
    assert done.json()["status"] == "completed"


def test_check_and_uncheck_all_checklist_items(client, headers, project):
    generate_scenes(client, headers, project["id"])
    url = f"{API}/scenes/project/{project['id']}/1/checklist"

    scene = client.put(url, json={"checked": True}, headers=headers).json()
    assert scene["checklist"] == {key: True for key in SCENE_CHECKLIST_KEYS}
    assert scene["checklist_complete"] is True
    assert scene["checklist_progress"] == 100

    scene = client.put(url, json={"checked": False}, headers=headers).json()
    assert scene["checklist"] == {key: False for key in SCENE_CHECKLIST_KEYS}
    assert scene["checklist_complete"] is False
    assert scene["checklist_progress"] == 0

    missing = f"{API}/scenes/project/{project['id']}/9/checklist"
    assert client.put(missing, json={"checked": True}, headers=headers).status_code == 404
