from datetime import datetime
from pydantic import BaseModel, EmailStr
from typing import Optional, Dict, Literal

Role = Literal["viewer", "editor", "admin"]
FilmRole = Literal[
    "director", "cinematographer", "editor", "producer", "writer",
    "sound", "gaffer", "assistant", "crew",
]


class CollaboratorCreate(BaseModel):
    email: EmailStr
    role: Role = "viewer"
    film_role: FilmRole = "crew"


class Collaborator(BaseModel):
    id: int
    project_id: int
    email: str
    role: str
    film_role: str
    permissions: Dict[str, bool] = {}
    invited_by: Optional[int] = None
    user_id: Optional[int] = None
    created_at: datetime

    class Config:
        from_attributes = True
