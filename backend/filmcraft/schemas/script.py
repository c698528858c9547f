# filmcraft/schemas/script.py

from pydantic import BaseModel


class ScriptUpdate(BaseModel):
    script: str


class SceneGenerationRequest(BaseModel):
    overwrite_existing: bool = True


class SceneGenerationResponse(BaseModel):
    project_id: int
    scenes_created: int
