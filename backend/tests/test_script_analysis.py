from filmcraft.services.script_analysis import ScriptAnalysisService, is_scene_heading

service = ScriptAnalysisService()


def test_two_scenes_split_on_headings():
    script = "SCENE 1 - INT. ROOM\nHello there.\nEXT. PARK\nWide shot."
    scenes = service.analyze_script(script).scenes

    assert [s.scene_number for s in scenes] == [1, 2]
    assert scenes[0].title == "SCENE 1 - INT. ROOM"
    assert "Hello there." in scenes[0].content
    assert scenes[1].title == "EXT. PARK"
    assert "Wide shot." in scenes[1].content
    assert "Wide shot." not in scenes[0].content


def test_content_starts_with_heading_and_skips_blank_lines():
    scenes = service.analyze_script("INT. KITCHEN - DAY\n\nShe pours coffee.\n   \n").scenes

    assert len(scenes) == 1
    assert scenes[0].content == "INT. KITCHEN - DAY\nShe pours coffee."


def test_lines_before_first_heading_are_dropped():
    scenes = service.analyze_script("Title page\nBy someone\nINT. OFFICE\nPhones ring.").scenes

    assert len(scenes) == 1
    assert "Title page" not in scenes[0].content


def test_description_from_first_long_line():
    long_line = "A" * 150
    scenes = service.analyze_script(f"INT. HALL\nHi.\n{long_line}\nAnother long line here.").scenes

    assert scenes[0].description == "A" * 100 + "..."


def test_short_lines_leave_description_empty():
    scenes = service.analyze_script("EXT. ROOF\nWind.\nQuiet.").scenes
    assert scenes[0].description == ""


def test_heading_detection_markers():
    assert is_scene_heading("int. kitchen - night")
    assert is_scene_heading("   EXT. STREET")
    assert is_scene_heading("FADE IN:")
    assert is_scene_heading("Smash CUT TO black")
    assert not is_scene_heading("She walks into the scene.")
    assert not is_scene_heading("")


def test_empty_script_has_no_scenes():
    assert service.analyze_script("").scenes == []
    assert service.analyze_script("Just some notes\nwith no headings").scenes == []


def test_scenes_from_empty_story_structure():
    scenes = service.scenes_from_story_structure([]).scenes

    assert len(scenes) == 1
    assert scenes[0].scene_number == 1
    assert scenes[0].title == "Scene 1"
    assert scenes[0].description == "Main scene"


def test_scenes_from_story_segments():
    structure = [
        {"title": "Opening", "description": "Market wakes up", "location": "Alley", "location_type": "Outdoor"},
        {"title": "", "description": ""},
    ]
    scenes = service.scenes_from_story_structure(structure, {"Equipment": ["Tripod"]}).scenes

    assert [s.title for s in scenes] == ["Opening", "Scene 2"]
    assert scenes[0].location_type == "Outdoor"
    assert scenes[1].location_type == "Indoor"
    assert scenes[1].resources == {"Equipment": ["Tripod"]}


def test_numbered_scene_headings():
    script = "SCENE 1 - INT. ROOM\nHello there.\nSCENE 2 - EXT. PARK\nWide shot."
    scenes = service.analyze_script(script).scenes

    assert len(scenes) == 2
    assert scenes[0].title == "SCENE 1 - INT. ROOM"
    assert scenes[1].title == "SCENE 2 - EXT. PARK"
    assert "Hello there." in scenes[0].content
    assert "Wide shot." in scenes[1].content
