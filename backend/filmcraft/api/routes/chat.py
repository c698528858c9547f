from datetime import datetime
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from filmcraft.api.dependencies import SessionContext, get_context, get_notifier, load_project
from filmcraft import models, schemas
from filmcraft.services import chat, labels
from filmcraft.services.realtime import ChangeNotifier

router = APIRouter(prefix="/chat", tags=["chat"])

SEARCH_LIMIT = 20


def load_messages(db: Session, project_id: int) -> List[models.Comment]:
    """Project-level chat: comments not attached to a shot, oldest first."""
    return (
        db.query(models.Comment)
        .filter(models.Comment.project_id == project_id, models.Comment.shot_id.is_(None))
        .order_by(models.Comment.created_at.asc(), models.Comment.id.asc())
        .all()
    )


@router.get("/project/{project_id}/messages", response_model=List[schemas.Message])
def list_messages(
    project_id: int,
    message_type: str = Query("all", pattern="^(all|general|announcement|question)$"),
    q: str = "",
    ctx: SessionContext = Depends(get_context),
):
    load_project(ctx, project_id)
    messages = chat.filter_messages(load_messages(ctx.db, project_id), message_type, q)
    return [to_schema_message(m) for m in messages]


@router.post("/project/{project_id}/messages", response_model=schemas.Message, status_code=status.HTTP_201_CREATED)
def send_message(
    project_id: int,
    message_in: schemas.MessageCreate,
    ctx: SessionContext = Depends(get_context),
    notifier: ChangeNotifier = Depends(get_notifier),
):
    load_project(ctx, project_id)
    content = message_in.content.strip()
    if not content:
        raise HTTPException(status_code=400, detail="Message is empty")

    message = models.Comment(
        project_id=project_id,
        user_id=ctx.user.id,
        content=content,
        message_type=message_in.message_type,
        meta={
            "author_email": ctx.user.email,
            "timestamp": datetime.utcnow().isoformat(),
        },
    )
    ctx.db.add(message)
    ctx.db.commit()
    ctx.db.refresh(message)

    notifier.publish(project_id, "comments", "INSERT", message.id)
    return to_schema_message(message)


@router.get("/project/{project_id}/search", response_model=List[schemas.Message])
def search_messages(project_id: int, q: str, ctx: SessionContext = Depends(get_context)):
    load_project(ctx, project_id)
    if not q.strip():
        return []

    messages = (
        ctx.db.query(models.Comment)
        .filter(
            models.Comment.project_id == project_id,
            models.Comment.shot_id.is_(None),
            models.Comment.content.ilike(f"%{q.strip()}%"),
        )
        .order_by(models.Comment.created_at.desc(), models.Comment.id.desc())
        .limit(SEARCH_LIMIT)
        .all()
    )
    return [to_schema_message(m) for m in messages]


@router.patch("/messages/{message_id}", response_model=schemas.Message)
def edit_message(
    message_id: int,
    message_in: schemas.MessageUpdate,
    ctx: SessionContext = Depends(get_context),
    notifier: ChangeNotifier = Depends(get_notifier),
):
    message = _get_own_message(ctx, message_id)
    content = message_in.content.strip()
    if not content:
        raise HTTPException(status_code=400, detail="Message is empty")

    message.content = content
    message.meta = {
        **(message.meta or {}),
        "edited": True,
        "edited_at": datetime.utcnow().isoformat(),
    }
    ctx.db.add(message)
    ctx.db.commit()
    ctx.db.refresh(message)

    notifier.publish(message.project_id, "comments", "UPDATE", message.id)
    return to_schema_message(message)


@router.delete("/messages/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_message(
    message_id: int,
    ctx: SessionContext = Depends(get_context),
    notifier: ChangeNotifier = Depends(get_notifier),
):
    message = _get_own_message(ctx, message_id)
    project_id = message.project_id
    ctx.db.delete(message)
    ctx.db.commit()
    notifier.publish(project_id, "comments", "DELETE", message_id)


@router.get("/project/{project_id}/unread", response_model=schemas.UnreadCount)
def unread_count(project_id: int, ctx: SessionContext = Depends(get_context)):
    load_project(ctx, project_id)
    read_status = _read_status(ctx, project_id)
    last_read = read_status.last_read_message_id if read_status else None

    return schemas.UnreadCount(
        project_id=project_id,
        last_read_message_id=last_read,
        unread=chat.unread_count(load_messages(ctx.db, project_id), last_read, ctx.user.id),
    )


@router.post("/project/{project_id}/read", response_model=schemas.UnreadCount)
def mark_read(project_id: int, ctx: SessionContext = Depends(get_context)):
    load_project(ctx, project_id)
    messages = load_messages(ctx.db, project_id)
    if not messages:
        return schemas.UnreadCount(project_id=project_id, unread=0)

    # upsert
    read_status = _read_status(ctx, project_id)
    if not read_status:
        read_status = models.ChatReadStatus(project_id=project_id, user_id=ctx.user.id)
    read_status.last_read_message_id = messages[-1].id
    read_status.updated_at = datetime.utcnow()
    ctx.db.add(read_status)
    ctx.db.commit()

    return schemas.UnreadCount(
        project_id=project_id,
        last_read_message_id=messages[-1].id,
        unread=0,
    )


def _read_status(ctx: SessionContext, project_id: int):
    return (
        ctx.db.query(models.ChatReadStatus)
        .filter(
            models.ChatReadStatus.project_id == project_id,
            models.ChatReadStatus.user_id == ctx.user.id,
        )
        .first()
    )


def _get_own_message(ctx: SessionContext, message_id: int) -> models.Comment:
    # Only the author may edit or delete a message
    message = (
        ctx.db.query(models.Comment)
        .filter(models.Comment.id == message_id, models.Comment.user_id == ctx.user.id)
        .first()
    )
    if not message:
        raise HTTPException(status_code=404, detail="Message not found")
    return message


def to_schema_message(m: models.Comment) -> schemas.Message:
    return schemas.Message(
        id=m.id,
        project_id=m.project_id,
        shot_id=m.shot_id,
        user_id=m.user_id,
        content=m.content,
        message_type=m.message_type or "general",
        metadata=m.meta or {},
        created_at=m.created_at,
        color=labels.message_type_color(m.message_type),
    )
