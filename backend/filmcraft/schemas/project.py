from datetime import datetime
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Dict, Any

from .planning import clock_time


class ProjectBase(BaseModel):
    title: str = Field(..., min_length=1)
    type: Optional[str] = None
    duration: Optional[str] = None
    concept: Optional[str] = None
    key_message: Optional[str] = None
    unique_angle: Optional[str] = None
    target_audience: Optional[str] = None
    tone: Optional[str] = None
    inspiration: Optional[str] = None


class ProjectCreate(ProjectBase):
    script: Optional[str] = None


class ProjectUpdate(BaseModel):
    title: Optional[str] = None
    type: Optional[str] = None
    duration: Optional[str] = None
    concept: Optional[str] = None
    key_message: Optional[str] = None
    unique_angle: Optional[str] = None
    target_audience: Optional[str] = None
    tone: Optional[str] = None
    inspiration: Optional[str] = None
    script: Optional[str] = None
    story_structure: Optional[List[Dict[str, Any]]] = None
    locations: Optional[List[Dict[str, Any]]] = None
    resources: Optional[Dict[str, List[str]]] = None
    production_schedule: Optional[List[Dict[str, Any]]] = None

    @field_validator("story_structure", "locations", "resources", "production_schedule")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("may not be null; send an empty collection to clear it")
        return v

    @field_validator("production_schedule")
    @classmethod
    def schedule_times(cls, v):
        for item in v or []:
            for key in ("start_time", "end_time"):
                if item.get(key) is not None:
                    clock_time(str(item[key]))
        return v


class Project(ProjectBase):
    id: int
    owner_id: int
    phase: str
    story_structure: List[Dict[str, Any]] = []
    locations: List[Dict[str, Any]] = []
    resources: Dict[str, List[str]] = {}
    production_schedule: List[Dict[str, Any]] = []
    script: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    class Config:
        from_attributes = True
