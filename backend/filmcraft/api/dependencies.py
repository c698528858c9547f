from dataclasses import dataclass
from typing import List, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from redis import Redis
from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from filmcraft import models
from filmcraft.core.redis import get_redis
from filmcraft.db.session import SessionLocal
from filmcraft.services import auth
from filmcraft.services.realtime import ChangeNotifier

security = HTTPBearer(auto_error=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_notifier(redis: Redis = Depends(get_redis)) -> ChangeNotifier:
    return ChangeNotifier(redis)


@dataclass
class SessionContext:
    """The signed-in user and the database session serving the request."""

    db: Session
    user: models.User
    access_token: str

    def projects(self) -> List[models.Project]:
        """Projects the user owns or was invited to, newest first."""
        shared = (
            select(models.Collaborator.project_id)
            .where(
                or_(
                    models.Collaborator.user_id == self.user.id,
                    models.Collaborator.email == self.user.email,
                )
            )
        )
        return (
            self.db.query(models.Project)
            .filter(or_(models.Project.owner_id == self.user.id, models.Project.id.in_(shared)))
            .order_by(models.Project.created_at.desc(), models.Project.id.desc())
            .all()
        )

    def membership(self, project: models.Project) -> Optional[models.Collaborator]:
        return (
            self.db.query(models.Collaborator)
            .filter(
                models.Collaborator.project_id == project.id,
                or_(
                    models.Collaborator.user_id == self.user.id,
                    models.Collaborator.email == self.user.email,
                ),
            )
            .first()
        )

    def can_view(self, project: models.Project) -> bool:
        return project.owner_id == self.user.id or self.membership(project) is not None

    def can_edit(self, project: models.Project) -> bool:
        if project.owner_id == self.user.id:
            return True
        member = self.membership(project)
        return bool(member and (member.permissions or {}).get("edit"))

    def can_admin(self, project: models.Project) -> bool:
        if project.owner_id == self.user.id:
            return True
        member = self.membership(project)
        return bool(member and (member.permissions or {}).get("admin"))


def context_for_token(db: Session, token: Optional[str]) -> SessionContext:
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")

    user = auth.user_for_token(db, token)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")

    return SessionContext(db=db, user=user, access_token=token)


def get_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> SessionContext:
    """Dependency that requires a signed-in user."""
    return context_for_token(db, credentials.credentials if credentials else None)


def load_project(ctx: SessionContext, project_id: int, *, write: bool = False) -> models.Project:
    project = ctx.db.query(models.Project).filter(models.Project.id == project_id).first()
    if not project or not ctx.can_view(project):
        raise HTTPException(status_code=404, detail="Project not found")
    if write and not ctx.can_edit(project):
        raise HTTPException(status_code=403, detail="You do not have edit access to this project")
    return project
