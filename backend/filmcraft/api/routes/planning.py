"""
Planning sub-editors: story structure, locations, production schedule and
resources. Each edit rebuilds the whole collection and writes it back, so the
last writer wins.
"""

import uuid
from datetime import datetime
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from filmcraft.api.dependencies import SessionContext, get_context, get_notifier, load_project
from filmcraft import models, schemas
from filmcraft.services import schedule as schedule_service
from filmcraft.services.realtime import ChangeNotifier

router = APIRouter(prefix="/projects", tags=["planning"])


def _save_field(ctx: SessionContext, notifier: ChangeNotifier, project: models.Project, field: str, value):
    setattr(project, field, value)
    ctx.db.add(project)
    ctx.db.commit()
    ctx.db.refresh(project)
    notifier.publish(project.id, "projects", "UPDATE", project.id)
    return project


def _add_item(ctx, notifier, project, field: str, item_in: BaseModel, **extra) -> dict:
    item = {"id": uuid.uuid4().hex, **item_in.model_dump(), **extra}
    _save_field(ctx, notifier, project, field, list(getattr(project, field) or []) + [item])
    return item


def _update_item(ctx, notifier, project, field: str, item_id: str, item_in: BaseModel) -> dict:
    items = list(getattr(project, field) or [])
    updates = item_in.model_dump(exclude_unset=True)

    for i, item in enumerate(items):
        if str(item.get("id")) == item_id:
            items[i] = {**item, **updates}
            _save_field(ctx, notifier, project, field, items)
            return items[i]
    raise HTTPException(status_code=404, detail="Item not found")


def _remove_item(ctx, notifier, project, field: str, item_id: str) -> None:
    items = list(getattr(project, field) or [])
    remaining = [item for item in items if str(item.get("id")) != item_id]
    if len(remaining) == len(items):
        raise HTTPException(status_code=404, detail="Item not found")
    _save_field(ctx, notifier, project, field, remaining)


# --- Story structure ---

@router.post("/{project_id}/story-structure", status_code=status.HTTP_201_CREATED)
def add_story_segment(
    project_id: int,
    segment_in: schemas.StorySegmentCreate,
    ctx: SessionContext = Depends(get_context),
    notifier: ChangeNotifier = Depends(get_notifier),
):
    project = load_project(ctx, project_id, write=True)
    return _add_item(ctx, notifier, project, "story_structure", segment_in)


@router.patch("/{project_id}/story-structure/{item_id}")
def update_story_segment(
    project_id: int,
    item_id: str,
    segment_in: schemas.StorySegmentUpdate,
    ctx: SessionContext = Depends(get_context),
    notifier: ChangeNotifier = Depends(get_notifier),
):
    project = load_project(ctx, project_id, write=True)
    return _update_item(ctx, notifier, project, "story_structure", item_id, segment_in)


@router.delete("/{project_id}/story-structure/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_story_segment(
    project_id: int,
    item_id: str,
    ctx: SessionContext = Depends(get_context),
    notifier: ChangeNotifier = Depends(get_notifier),
):
    project = load_project(ctx, project_id, write=True)
    _remove_item(ctx, notifier, project, "story_structure", item_id)


# --- Locations ---

@router.post("/{project_id}/locations", status_code=status.HTTP_201_CREATED)
def add_location(
    project_id: int,
    location_in: schemas.LocationCreate,
    ctx: SessionContext = Depends(get_context),
    notifier: ChangeNotifier = Depends(get_notifier),
):
    project = load_project(ctx, project_id, write=True)
    return _add_item(ctx, notifier, project, "locations", location_in)


@router.patch("/{project_id}/locations/{item_id}")
def update_location(
    project_id: int,
    item_id: str,
    location_in: schemas.LocationUpdate,
    ctx: SessionContext = Depends(get_context),
    notifier: ChangeNotifier = Depends(get_notifier),
):
    project = load_project(ctx, project_id, write=True)
    return _update_item(ctx, notifier, project, "locations", item_id, location_in)


@router.delete("/{project_id}/locations/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_location(
    project_id: int,
    item_id: str,
    ctx: SessionContext = Depends(get_context),
    notifier: ChangeNotifier = Depends(get_notifier),
):
    project = load_project(ctx, project_id, write=True)
    _remove_item(ctx, notifier, project, "locations", item_id)


# --- Production schedule ---

@router.post("/{project_id}/schedule", status_code=status.HTTP_201_CREATED)
def add_schedule_item(
    project_id: int,
    item_in: schemas.ScheduleItemCreate,
    ctx: SessionContext = Depends(get_context),
    notifier: ChangeNotifier = Depends(get_notifier),
):
    project = load_project(ctx, project_id, write=True)
    if item_in.type not in schedule_service.SCHEDULE_TYPES:
        item_in.type = schedule_service.DEFAULT_SCHEDULE_TYPE
    return _add_item(
        ctx, notifier, project, "production_schedule", item_in,
        created_at=datetime.utcnow().isoformat(),
    )


@router.patch("/{project_id}/schedule/{item_id}")
def update_schedule_item(
    project_id: int,
    item_id: str,
    item_in: schemas.ScheduleItemUpdate,
    ctx: SessionContext = Depends(get_context),
    notifier: ChangeNotifier = Depends(get_notifier),
):
    project = load_project(ctx, project_id, write=True)
    return _update_item(ctx, notifier, project, "production_schedule", item_id, item_in)


@router.delete("/{project_id}/schedule/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_schedule_item(
    project_id: int,
    item_id: str,
    ctx: SessionContext = Depends(get_context),
    notifier: ChangeNotifier = Depends(get_notifier),
):
    project = load_project(ctx, project_id, write=True)
    _remove_item(ctx, notifier, project, "production_schedule", item_id)


@router.get("/{project_id}/schedule/by-date", response_model=List[schemas.ScheduleDay])
def schedule_by_date(project_id: int, ctx: SessionContext = Depends(get_context)):
    project = load_project(ctx, project_id)
    days = []
    for date, items in schedule_service.group_by_date(project.production_schedule).items():
        enriched = []
        for item in items:
            enriched.append({
                **item,
                "type_label": schedule_service.schedule_type_label(item.get("type")),
                "duration_label": schedule_service.format_duration(
                    item.get("start_time") or "09:00", item.get("end_time") or "17:00"
                ),
            })
        days.append(schemas.ScheduleDay(date=date, items=enriched))
    return days


# --- Resources ---

@router.put("/{project_id}/resources/{category}", response_model=schemas.Project)
def set_resources(
    project_id: int,
    category: str,
    payload: schemas.ResourceItems,
    ctx: SessionContext = Depends(get_context),
    notifier: ChangeNotifier = Depends(get_notifier),
):
    project = load_project(ctx, project_id, write=True)
    resources = {**(project.resources or {}), category: payload.items}
    return _save_field(ctx, notifier, project, "resources", resources)
