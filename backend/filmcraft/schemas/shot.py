from datetime import datetime
from pydantic import BaseModel, field_validator
from typing import Optional, List, Literal

Priority = Literal["High", "Medium", "Low"]
Status = Literal["pending", "in-progress", "completed"]


class ShotBase(BaseModel):
    scene_number: int = 1
    title: Optional[str] = None
    shot_type: Optional[str] = "Medium Shot"
    camera_movement: Optional[str] = "Static"
    description: Optional[str] = None
    duration: Optional[str] = "30 seconds"
    priority: Priority = "Medium"
    notes: Optional[str] = None


class ShotCreate(ShotBase):
    project_id: int


class ShotUpdate(BaseModel):
    scene_number: Optional[int] = None
    title: Optional[str] = None
    shot_type: Optional[str] = None
    camera_movement: Optional[str] = None
    description: Optional[str] = None
    duration: Optional[str] = None
    priority: Optional[Priority] = None
    status: Optional[Status] = None
    notes: Optional[str] = None
    order_index: Optional[float] = None

    @field_validator("scene_number", "title", "priority", "status", "order_index")
    @classmethod
    def not_null(cls, v):
        # omit the field to leave it unchanged; these columns cannot be cleared
        if v is None:
            raise ValueError("may not be null")
        return v


class Shot(ShotBase):
    id: int
    project_id: int
    title: str
    status: str
    image_url: Optional[str] = None
    palette: Optional[List[List[int]]] = None
    order_index: float
    created_at: datetime

    priority_color: str
    status_label: str
    status_color: str


class SceneProgress(BaseModel):
    scene_number: int
    title: str
    shots: int
    completed: int
    progress: float
    checklist_progress: float


class ProjectProgress(BaseModel):
    project_id: int
    total_shots: int
    completed_shots: int
    overall_progress: float
    completed_scenes: int
    scenes: List[SceneProgress]
