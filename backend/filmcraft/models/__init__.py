from filmcraft.db.base import Base
from .user import User, AuthSession
from .project import Project, PHASES
from .scene import Scene
from .shot import Shot
from .comment import Comment, ChatReadStatus
from .collaborator import Collaborator

__all__ = [
    "Base",
    "User",
    "AuthSession",
    "Project",
    "PHASES",
    "Scene",
    "Shot",
    "Comment",
    "ChatReadStatus",
    "Collaborator",
]
