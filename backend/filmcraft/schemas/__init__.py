from .auth import Credentials, RefreshRequest, SessionOut, User
from .project import Project, ProjectCreate, ProjectUpdate
from .planning import (
    StorySegmentCreate,
    StorySegmentUpdate,
    LocationCreate,
    LocationUpdate,
    ScheduleItemCreate,
    ScheduleItemUpdate,
    ScheduleDay,
)
from .wizard import WizardStatus, WizardStepStatus
from .scene import Scene, ResourceItems, ChecklistFill
from .shot import Shot, ShotCreate, ShotUpdate, SceneProgress, ProjectProgress
from .comment import Message, MessageCreate, MessageUpdate, UnreadCount
from .collaborator import Collaborator, CollaboratorCreate
from .script import ScriptUpdate, SceneGenerationRequest, SceneGenerationResponse

__all__ = [
    "Credentials",
    "RefreshRequest",
    "SessionOut",
    "User",
    "Project",
    "ProjectCreate",
    "ProjectUpdate",
    "StorySegmentCreate",
    "StorySegmentUpdate",
    "LocationCreate",
    "LocationUpdate",
    "ScheduleItemCreate",
    "ScheduleItemUpdate",
    "ScheduleDay",
    "WizardStatus",
    "WizardStepStatus",
    "Scene",
    "ResourceItems",
    "ChecklistFill",
    "Shot",
    "ShotCreate",
    "ShotUpdate",
    "SceneProgress",
    "ProjectProgress",
    "Message",
    "MessageCreate",
    "MessageUpdate",
    "UnreadCount",
    "Collaborator",
    "CollaboratorCreate",
    "ScriptUpdate",
    "SceneGenerationRequest",
    "SceneGenerationResponse",
]
