import json
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query, UploadFile, File, status
from rq import Queue

from filmcraft.api.dependencies import SessionContext, get_context, get_notifier, load_project
from filmcraft import models, schemas
from filmcraft.core import files
from filmcraft.core.queue import get_palette_queue
from filmcraft.services import labels, progress, wizard
from filmcraft.services.realtime import ChangeNotifier
from filmcraft.services.script_analysis import ScriptAnalysisService
from filmcraft.workers.tasks import extract_shot_palette_task

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/shots", tags=["shots"])

script_analysis_service = ScriptAnalysisService()


@router.post("/", response_model=schemas.Shot, status_code=status.HTTP_201_CREATED)
def create_shot(
    shot_in: schemas.ShotCreate,
    ctx: SessionContext = Depends(get_context),
    notifier: ChangeNotifier = Depends(get_notifier),
):
    project = load_project(ctx, shot_in.project_id, write=True)

    scene_shots = (
        ctx.db.query(models.Shot)
        .filter(
            models.Shot.project_id == project.id,
            models.Shot.scene_number == shot_in.scene_number,
        )
        .count()
    )
    data = shot_in.model_dump()
    if not (data.get("title") or "").strip():
        data["title"] = f"{_scene_title(ctx, project, shot_in.scene_number)} - Shot {scene_shots + 1}"

    shot = models.Shot(**data, status="pending", order_index=scene_shots + 1)
    ctx.db.add(shot)
    ctx.db.commit()
    ctx.db.refresh(shot)
    notifier.publish(project.id, "shots", "INSERT", shot.id)
    return _to_schema_shot(shot)


@router.get("/project/{project_id}", response_model=List[schemas.Shot])
def list_shots(
    project_id: int,
    filter_by: str = Query("all", pattern="^(all|pending|completed|High|Medium|Low)$"),
    ctx: SessionContext = Depends(get_context),
):
    load_project(ctx, project_id)
    return [_to_schema_shot(s) for s in progress.filter_shots(_project_shots(ctx, project_id), filter_by)]


@router.get("/project/{project_id}/progress", response_model=schemas.ProjectProgress)
def project_progress(project_id: int, ctx: SessionContext = Depends(get_context)):
    project = load_project(ctx, project_id)
    shots = _project_shots(ctx, project_id)

    scenes = (
        ctx.db.query(models.Scene)
        .filter(models.Scene.project_id == project_id)
        .order_by(models.Scene.scene_number.asc())
        .all()
    )
    if scenes:
        rows = [(s.scene_number, s.title, s.checklist) for s in scenes]
    else:
        structure = script_analysis_service.scenes_from_story_structure(
            project.story_structure, project.resources
        )
        rows = [(s.scene_number, s.title, {}) for s in structure.scenes]

    scene_progress = []
    for number, title, checklist in rows:
        scene_shots = [s for s in shots if s.scene_number == number]
        scene_progress.append(
            schemas.SceneProgress(
                scene_number=number,
                title=title,
                shots=len(scene_shots),
                completed=len([s for s in scene_shots if s.status == "completed"]),
                progress=progress.scene_progress(shots, number),
                checklist_progress=progress.checklist_progress(checklist),
            )
        )

    return schemas.ProjectProgress(
        project_id=project_id,
        total_shots=len(shots),
        completed_shots=len([s for s in shots if s.status == "completed"]),
        overall_progress=progress.overall_progress(shots),
        completed_scenes=progress.completed_scene_count(shots, [r[0] for r in rows]),
        scenes=scene_progress,
    )


@router.patch("/{shot_id}", response_model=schemas.Shot)
def update_shot(
    shot_id: int,
    shot_in: schemas.ShotUpdate,
    ctx: SessionContext = Depends(get_context),
    notifier: ChangeNotifier = Depends(get_notifier),
):
    shot = _get_shot(ctx, shot_id, write=True)

    data = shot_in.model_dump(exclude_unset=True)
    if data.get("status") == "completed" and shot.status != "completed":
        _require_scene_ready(ctx, shot.project_id, data.get("scene_number", shot.scene_number))

    for field, value in data.items():
        setattr(shot, field, value)

    ctx.db.add(shot)
    ctx.db.commit()
    ctx.db.refresh(shot)
    notifier.publish(shot.project_id, "shots", "UPDATE", shot.id)
    return _to_schema_shot(shot)


@router.delete("/{shot_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_shot(
    shot_id: int,
    ctx: SessionContext = Depends(get_context),
    notifier: ChangeNotifier = Depends(get_notifier),
):
    shot = _get_shot(ctx, shot_id, write=True)
    project_id = shot.project_id
    ctx.db.delete(shot)
    ctx.db.commit()
    notifier.publish(project_id, "shots", "DELETE", shot_id)


@router.post("/{shot_id}/duplicate", response_model=schemas.Shot, status_code=status.HTTP_201_CREATED)
def duplicate_shot(
    shot_id: int,
    ctx: SessionContext = Depends(get_context),
    notifier: ChangeNotifier = Depends(get_notifier),
):
    original = _get_shot(ctx, shot_id, write=True)

    # slots in right after the original
    copy = models.Shot(
        project_id=original.project_id,
        scene_number=original.scene_number,
        title=f"{original.title} (Copy)",
        shot_type=original.shot_type,
        camera_movement=original.camera_movement,
        description=original.description,
        duration=original.duration,
        priority=original.priority,
        notes=original.notes,
        order_index=original.order_index + 0.5,
        image_url=None,
        status="pending",
    )
    ctx.db.add(copy)
    ctx.db.commit()
    ctx.db.refresh(copy)
    notifier.publish(copy.project_id, "shots", "INSERT", copy.id)
    return _to_schema_shot(copy)


@router.post("/{shot_id}/complete", response_model=schemas.Shot)
def complete_shot(
    shot_id: int,
    ctx: SessionContext = Depends(get_context),
    notifier: ChangeNotifier = Depends(get_notifier),
):
    shot = _get_shot(ctx, shot_id, write=True)
    _require_scene_ready(ctx, shot.project_id, shot.scene_number)
    return _set_status(ctx, notifier, shot, "completed")


@router.post("/{shot_id}/retake", response_model=schemas.Shot)
def retake_shot(
    shot_id: int,
    ctx: SessionContext = Depends(get_context),
    notifier: ChangeNotifier = Depends(get_notifier),
):
    shot = _get_shot(ctx, shot_id, write=True)
    return _set_status(ctx, notifier, shot, "pending")


@router.post("/{shot_id}/image", response_model=schemas.Shot)
def upload_shot_image(
    shot_id: int,
    file: UploadFile = File(...),
    ctx: SessionContext = Depends(get_context),
    notifier: ChangeNotifier = Depends(get_notifier),
    queue: Queue = Depends(get_palette_queue),
):
    shot = _get_shot(ctx, shot_id, write=True)

    # Save file
    try:
        url = files.save_shot_image(shot.id, file.filename, file.content_type, file.file.read())
    except files.InvalidImageError as e:
        raise HTTPException(status_code=400, detail=str(e))

    shot.image_url = url
    shot.palette = None
    ctx.db.add(shot)
    ctx.db.commit()
    ctx.db.refresh(shot)

    # Palette extraction runs on the worker
    queue.enqueue(extract_shot_palette_task, shot.id)
    logger.info(f"[Shots] Stored reference image for shot {shot.id} at {url}")

    notifier.publish(shot.project_id, "shots", "UPDATE", shot.id)
    return _to_schema_shot(shot)


@router.delete("/{shot_id}/image", response_model=schemas.Shot)
def remove_shot_image(
    shot_id: int,
    ctx: SessionContext = Depends(get_context),
    notifier: ChangeNotifier = Depends(get_notifier),
):
    shot = _get_shot(ctx, shot_id, write=True)

    if shot.image_url:
        files.remove_object(files.SHOT_IMAGES_BUCKET, files.key_from_public_url(shot.image_url))

    shot.image_url = None
    shot.palette = None
    ctx.db.add(shot)
    ctx.db.commit()
    ctx.db.refresh(shot)
    notifier.publish(shot.project_id, "shots", "UPDATE", shot.id)
    return _to_schema_shot(shot)


def _project_shots(ctx: SessionContext, project_id: int) -> List[models.Shot]:
    return (
        ctx.db.query(models.Shot)
        .filter(models.Shot.project_id == project_id)
        .order_by(models.Shot.scene_number.asc(), models.Shot.order_index.asc())
        .all()
    )


def _get_shot(ctx: SessionContext, shot_id: int, write: bool = False) -> models.Shot:
    shot = ctx.db.query(models.Shot).filter(models.Shot.id == shot_id).first()
    if not shot:
        raise HTTPException(status_code=404, detail="Shot not found")
    load_project(ctx, shot.project_id, write=write)
    return shot


def _require_scene_ready(ctx: SessionContext, project_id: int, scene_number: int) -> None:
    """A saved scene must have its setup checklist done before its shots complete."""
    scene = (
        ctx.db.query(models.Scene)
        .filter(models.Scene.project_id == project_id, models.Scene.scene_number == scene_number)
        .first()
    )
    if scene and not wizard.is_scene_checklist_complete(scene.checklist):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Complete scene setup checklist first",
        )


def _scene_title(ctx: SessionContext, project: models.Project, scene_number: int) -> str:
    scene = (
        ctx.db.query(models.Scene)
        .filter(models.Scene.project_id == project.id, models.Scene.scene_number == scene_number)
        .first()
    )
    if scene:
        return scene.title
    segments = project.story_structure or []
    if 0 < scene_number <= len(segments):
        return segments[scene_number - 1].get("title") or f"Scene {scene_number}"
    return "Scene"


def _set_status(ctx: SessionContext, notifier: ChangeNotifier, shot: models.Shot, value: str) -> schemas.Shot:
    shot.status = value
    ctx.db.add(shot)
    ctx.db.commit()
    ctx.db.refresh(shot)
    notifier.publish(shot.project_id, "shots", "UPDATE", shot.id)
    return _to_schema_shot(shot)


def _to_schema_shot(s: models.Shot) -> schemas.Shot:
    return schemas.Shot(
        id=s.id,
        project_id=s.project_id,
        scene_number=s.scene_number,
        title=s.title,
        shot_type=s.shot_type,
        camera_movement=s.camera_movement,
        description=s.description,
        duration=s.duration,
        priority=s.priority,
        status=s.status,
        notes=s.notes,
        image_url=s.image_url,
        palette=json.loads(s.palette) if s.palette else None,
        order_index=s.order_index,
        created_at=s.created_at,
        priority_color=labels.priority_color(s.priority),
        status_label=labels.status_label(s.status),
        status_color=labels.status_color(s.status),
    )
