import re

from fastapi import APIRouter, Depends, HTTPException, UploadFile, File, status
from fastapi.responses import PlainTextResponse

from filmcraft.api.dependencies import SessionContext, get_context, get_notifier, load_project
from filmcraft import models, schemas
from filmcraft.services.realtime import ChangeNotifier
from filmcraft.services.script_analysis import ScriptAnalysisService

router = APIRouter(prefix="/scripts", tags=["scripts"])

script_analysis_service = ScriptAnalysisService()


@router.put("/project/{project_id}", response_model=schemas.Project)
def save_script(
    project_id: int,
    payload: schemas.ScriptUpdate,
    ctx: SessionContext = Depends(get_context),
    notifier: ChangeNotifier = Depends(get_notifier),
):
    project = load_project(ctx, project_id, write=True)
    project.script = payload.script
    ctx.db.add(project)
    ctx.db.commit()
    ctx.db.refresh(project)
    notifier.publish(project.id, "projects", "UPDATE", project.id)
    return project


@router.post("/project/{project_id}/upload", response_model=schemas.Project)
def upload_script(
    project_id: int,
    file: UploadFile = File(...),
    ctx: SessionContext = Depends(get_context),
    notifier: ChangeNotifier = Depends(get_notifier),
):
    project = load_project(ctx, project_id, write=True)
    try:
        text = file.file.read().decode("utf-8")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="Script file must be UTF-8 text")

    project.script = text
    ctx.db.add(project)
    ctx.db.commit()
    ctx.db.refresh(project)
    notifier.publish(project.id, "projects", "UPDATE", project.id)
    return project


@router.get("/project/{project_id}/download", response_class=PlainTextResponse)
def download_script(project_id: int, ctx: SessionContext = Depends(get_context)):
    project = load_project(ctx, project_id)
    filename = re.sub(r'[\\/"]', "_", project.title) + "_script.txt"
    return PlainTextResponse(
        project.script or "",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/project/{project_id}/scenes", response_model=schemas.SceneGenerationResponse)
def generate_scenes(
    project_id: int,
    payload: schemas.SceneGenerationRequest,
    ctx: SessionContext = Depends(get_context),
    notifier: ChangeNotifier = Depends(get_notifier),
):
    # 1. Validate project & script
    project = load_project(ctx, project_id, write=True)
    if not (project.script or "").strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Project has no script",
        )

    # 2. Scan script -> scenes
    structure = script_analysis_service.analyze_script(project.script)

    # 3. Optionally wipe existing scenes for a clean re-generation
    if payload.overwrite_existing:
        (
            ctx.db.query(models.Scene)
            .filter(models.Scene.project_id == project_id)
            .delete(synchronize_session=False)
        )
        offset = 0
    else:
        last = (
            ctx.db.query(models.Scene.scene_number)
            .filter(models.Scene.project_id == project_id)
            .order_by(models.Scene.scene_number.desc())
            .first()
        )
        offset = last[0] if last else 0

    # 4. Persist scenes
    for scene_spec in structure.scenes:
        ctx.db.add(
            models.Scene(
                project_id=project_id,
                scene_number=scene_spec.scene_number + offset,
                title=scene_spec.title,
                description=scene_spec.description,
                content=scene_spec.content,
                checklist={},
                resources={},
            )
        )
    ctx.db.commit()
    notifier.publish(project_id, "scenes", "INSERT")

    return schemas.SceneGenerationResponse(
        project_id=project_id,
        scenes_created=len(structure.scenes),
    )
