from typing import List
from fastapi import APIRouter, Depends, HTTPException

from filmcraft.api.dependencies import SessionContext, get_context, get_notifier, load_project
from filmcraft import models, schemas
from filmcraft.services import progress, wizard
from filmcraft.services.realtime import ChangeNotifier
from filmcraft.services.script_analysis import SceneSpec, ScriptAnalysisService

router = APIRouter(prefix="/scenes", tags=["scenes"])

script_analysis_service = ScriptAnalysisService()


@router.get("/project/{project_id}", response_model=List[schemas.Scene])
def list_scenes_for_project(project_id: int, ctx: SessionContext = Depends(get_context)):
    """Saved scenes, or scenes derived from the story structure when none are saved."""
    project = load_project(ctx, project_id)
    scenes = _saved_scenes(ctx, project_id)
    if scenes:
        return [_to_schema_scene(s) for s in scenes]

    structure = script_analysis_service.scenes_from_story_structure(
        project.story_structure, project.resources
    )
    return [_spec_to_schema_scene(project_id, spec) for spec in structure.scenes]


@router.post("/project/{project_id}/from-story", response_model=List[schemas.Scene])
def create_scenes_from_story(
    project_id: int,
    ctx: SessionContext = Depends(get_context),
    notifier: ChangeNotifier = Depends(get_notifier),
):
    """Save the derived scenes so checklists and resources can be tracked."""
    project = load_project(ctx, project_id, write=True)
    if _saved_scenes(ctx, project_id):
        raise HTTPException(status_code=409, detail="Project already has scenes")

    structure = script_analysis_service.scenes_from_story_structure(
        project.story_structure, project.resources
    )
    for spec in structure.scenes:
        ctx.db.add(
            models.Scene(
                project_id=project_id,
                scene_number=spec.scene_number,
                title=spec.title,
                description=spec.description,
                location=spec.location,
                location_type=spec.location_type,
                resources=spec.resources,
                checklist={},
            )
        )
    ctx.db.commit()
    notifier.publish(project_id, "scenes", "INSERT")

    return [_to_schema_scene(s) for s in _saved_scenes(ctx, project_id)]


@router.post("/project/{project_id}/{scene_number}/checklist/{item}", response_model=schemas.Scene)
def toggle_checklist_item(
    project_id: int,
    scene_number: int,
    item: str,
    ctx: SessionContext = Depends(get_context),
    notifier: ChangeNotifier = Depends(get_notifier),
):
    if item not in wizard.SCENE_CHECKLIST_KEYS:
        raise HTTPException(status_code=400, detail=f"Unknown checklist item '{item}'")

    load_project(ctx, project_id, write=True)
    scene = _get_scene(ctx, project_id, scene_number)

    checklist = dict(scene.checklist or {})
    checklist[item] = not checklist.get(item, False)
    scene.checklist = checklist

    ctx.db.add(scene)
    ctx.db.commit()
    ctx.db.refresh(scene)
    notifier.publish(project_id, "scenes", "UPDATE", scene.id)
    return _to_schema_scene(scene)


@router.put("/project/{project_id}/{scene_number}/checklist", response_model=schemas.Scene)
def set_all_checklist_items(
    project_id: int,
    scene_number: int,
    payload: schemas.ChecklistFill,
    ctx: SessionContext = Depends(get_context),
    notifier: ChangeNotifier = Depends(get_notifier),
):
    """Check or uncheck every setup item of a scene at once."""
    load_project(ctx, project_id, write=True)
    scene = _get_scene(ctx, project_id, scene_number)

    scene.checklist = {key: payload.checked for key in wizard.SCENE_CHECKLIST_KEYS}
    ctx.db.add(scene)
    ctx.db.commit()
    ctx.db.refresh(scene)
    notifier.publish(project_id, "scenes", "UPDATE", scene.id)
    return _to_schema_scene(scene)


@router.put("/project/{project_id}/{scene_number}/resources/{category}", response_model=schemas.Scene)
def set_scene_resources(
    project_id: int,
    scene_number: int,
    category: str,
    payload: schemas.ResourceItems,
    ctx: SessionContext = Depends(get_context),
    notifier: ChangeNotifier = Depends(get_notifier),
):
    load_project(ctx, project_id, write=True)
    scene = _get_scene(ctx, project_id, scene_number)

    scene.resources = {**(scene.resources or {}), category: payload.items}
    ctx.db.add(scene)
    ctx.db.commit()
    ctx.db.refresh(scene)
    notifier.publish(project_id, "scenes", "UPDATE", scene.id)
    return _to_schema_scene(scene)


def _saved_scenes(ctx: SessionContext, project_id: int) -> List[models.Scene]:
    return (
        ctx.db.query(models.Scene)
        .filter(models.Scene.project_id == project_id)
        .order_by(models.Scene.scene_number.asc())
        .all()
    )


def _get_scene(ctx: SessionContext, project_id: int, scene_number: int) -> models.Scene:
    scene = (
        ctx.db.query(models.Scene)
        .filter(models.Scene.project_id == project_id, models.Scene.scene_number == scene_number)
        .first()
    )
    if not scene:
        raise HTTPException(status_code=404, detail="Scene not found")
    return scene


def _to_schema_scene(s: models.Scene) -> schemas.Scene:
    return schemas.Scene(
        id=s.id,
        project_id=s.project_id,
        scene_number=s.scene_number,
        title=s.title,
        description=s.description,
        content=s.content,
        location=s.location,
        location_type=s.location_type,
        checklist=s.checklist or {},
        resources=s.resources or {},
        created_at=s.created_at,
        persisted=True,
        checklist_progress=progress.checklist_progress(s.checklist),
        checklist_complete=wizard.is_scene_checklist_complete(s.checklist),
    )


def _spec_to_schema_scene(project_id: int, spec: SceneSpec) -> schemas.Scene:
    return schemas.Scene(
        project_id=project_id,
        scene_number=spec.scene_number,
        title=spec.title,
        description=spec.description,
        content=spec.content,
        location=spec.location,
        location_type=spec.location_type,
        resources=spec.resources,
        persisted=False,
    )
