from datetime import datetime
from pydantic import BaseModel
from typing import Optional, Dict, List


class Scene(BaseModel):
    # None for scenes derived on the fly and not saved yet
    id: Optional[int] = None
    project_id: int
    scene_number: int
    title: str
    description: Optional[str] = None
    content: Optional[str] = None
    location: Optional[str] = None
    location_type: Optional[str] = None
    checklist: Dict[str, bool] = {}
    resources: Dict[str, List[str]] = {}
    created_at: Optional[datetime] = None

    persisted: bool = True
    checklist_progress: float = 0.0
    checklist_complete: bool = False


class ResourceItems(BaseModel):
    items: List[str]


class ChecklistFill(BaseModel):
    # true checks every setup item, false clears them all
    checked: bool
