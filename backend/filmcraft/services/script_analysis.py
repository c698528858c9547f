# filmcraft/services/script_analysis.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

SCENE_PREFIXES = ("SCENE", "INT.", "EXT.")
SCENE_MARKERS = ("FADE IN", "CUT TO")

DESCRIPTION_MIN_LENGTH = 10
DESCRIPTION_MAX_LENGTH = 100


@dataclass
class SceneSpec:
    scene_number: int
    title: str
    description: str = ""
    content: str = ""
    location: str = ""
    location_type: str = "Indoor"
    resources: Dict[str, List[str]] = field(default_factory=dict)


@dataclass
class ScriptStructure:
    scenes: List[SceneSpec]


def is_scene_heading(line: str) -> bool:
    """True when a script line opens a new scene."""
    marker = line.strip().upper()
    return marker.startswith(SCENE_PREFIXES) or any(m in marker for m in SCENE_MARKERS)


class ScriptAnalysisService:
    """
    Turn raw script text into scenes by scanning for scene headings.

    There is no grammar here: any line that starts with SCENE / INT. / EXT.,
    or mentions FADE IN / CUT TO, begins a new scene. Everything else that is
    not blank is appended to the scene currently open.
    """

    def analyze_script(self, script_text: str) -> ScriptStructure:
        scenes: List[SceneSpec] = []
        current: Optional[SceneSpec] = None

        for line in script_text.split("\n"):
            stripped = line.strip()

            if is_scene_heading(line):
                if current:
                    scenes.append(current)
                number = len(scenes) + 1
                current = SceneSpec(
                    scene_number=number,
                    title=stripped or f"Scene {number}",
                    content=stripped,
                )
            elif current and stripped:
                current.content += "\n" + line
                if not current.description and len(stripped) > DESCRIPTION_MIN_LENGTH:
                    current.description = stripped[:DESCRIPTION_MAX_LENGTH] + "..."

        if current:
            scenes.append(current)

        return ScriptStructure(scenes=scenes)

    def scenes_from_story_structure(
        self,
        story_structure: Optional[List[dict]],
        project_resources: Optional[Dict[str, List[str]]] = None,
    ) -> ScriptStructure:
        """One scene per story segment, or a single default scene."""
        if not story_structure:
            return ScriptStructure(
                scenes=[SceneSpec(scene_number=1, title="Scene 1", description="Main scene")]
            )

        scenes = []
        for i, segment in enumerate(story_structure, start=1):
            scenes.append(
                SceneSpec(
                    scene_number=i,
                    title=segment.get("title") or f"Scene {i}",
                    description=segment.get("description") or "",
                    location=segment.get("location") or "",
                    location_type=segment.get("location_type") or "Indoor",
                    resources=dict(segment.get("resources") or project_resources or {}),
                )
            )
        return ScriptStructure(scenes=scenes)
