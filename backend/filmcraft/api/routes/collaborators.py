import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status

from filmcraft.api.dependencies import SessionContext, get_context, get_notifier, load_project
from filmcraft import models, schemas
from filmcraft.services.realtime import ChangeNotifier

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/collaborators", tags=["collaborators"])


def permissions_for_role(role: str) -> dict:
    return {
        "view": True,
        "edit": role in ("editor", "admin"),
        "admin": role == "admin",
    }


@router.get("/project/{project_id}", response_model=List[schemas.Collaborator])
def list_collaborators(project_id: int, ctx: SessionContext = Depends(get_context)):
    load_project(ctx, project_id)
    return (
        ctx.db.query(models.Collaborator)
        .filter(models.Collaborator.project_id == project_id)
        .order_by(models.Collaborator.created_at)
        .all()
    )


@router.post("/project/{project_id}", response_model=schemas.Collaborator, status_code=status.HTTP_201_CREATED)
def invite_collaborator(
    project_id: int,
    invite_in: schemas.CollaboratorCreate,
    ctx: SessionContext = Depends(get_context),
    notifier: ChangeNotifier = Depends(get_notifier),
):
    project = load_project(ctx, project_id)
    if not ctx.can_admin(project):
        raise HTTPException(status_code=403, detail="Only project admins can invite collaborators")

    email = invite_in.email.lower()
    existing = (
        ctx.db.query(models.Collaborator)
        .filter(models.Collaborator.project_id == project_id, models.Collaborator.email == email)
        .first()
    )
    if existing:
        raise HTTPException(status_code=409, detail=f"{email} is already a collaborator")

    invitee = ctx.db.query(models.User).filter(models.User.email == email).first()
    collaborator = models.Collaborator(
        project_id=project_id,
        email=email,
        role=invite_in.role,
        film_role=invite_in.film_role,
        permissions=permissions_for_role(invite_in.role),
        invited_by=ctx.user.id,
        user_id=invitee.id if invitee else None,
    )
    ctx.db.add(collaborator)
    ctx.db.commit()
    ctx.db.refresh(collaborator)

    # TODO: send the invitation email once an outbound mail provider is configured
    logger.info(f"[Collaborators] Invited {email} to project {project_id} as {invite_in.film_role}")
    notifier.publish(project_id, "collaborators", "INSERT", collaborator.id)
    return collaborator


@router.delete("/{collaborator_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_collaborator(
    collaborator_id: int,
    ctx: SessionContext = Depends(get_context),
    notifier: ChangeNotifier = Depends(get_notifier),
):
    collaborator = (
        ctx.db.query(models.Collaborator)
        .filter(models.Collaborator.id == collaborator_id)
        .first()
    )
    if not collaborator:
        raise HTTPException(status_code=404, detail="Collaborator not found")

    project = load_project(ctx, collaborator.project_id)
    if not ctx.can_admin(project):
        raise HTTPException(status_code=403, detail="Only project admins can remove collaborators")

    project_id = collaborator.project_id
    ctx.db.delete(collaborator)
    ctx.db.commit()
    notifier.publish(project_id, "collaborators", "DELETE", collaborator_id)
