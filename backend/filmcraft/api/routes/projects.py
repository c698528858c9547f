from datetime import datetime
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status

from filmcraft.api.dependencies import SessionContext, get_context, get_notifier, load_project
from filmcraft import models, schemas
from filmcraft.services import wizard
from filmcraft.services.realtime import ChangeNotifier

router = APIRouter(prefix="/projects", tags=["projects"])


@router.post("/", response_model=schemas.Project, status_code=status.HTTP_201_CREATED)
def create_project(
    project_in: schemas.ProjectCreate,
    ctx: SessionContext = Depends(get_context),
):
    project = models.Project(owner_id=ctx.user.id, phase="ideation", **project_in.model_dump())
    ctx.db.add(project)
    ctx.db.commit()
    ctx.db.refresh(project)
    return project


@router.get("/", response_model=List[schemas.Project])
def list_projects(ctx: SessionContext = Depends(get_context)):
    return ctx.projects()


@router.get("/{project_id}", response_model=schemas.Project)
def get_project(project_id: int, ctx: SessionContext = Depends(get_context)):
    return load_project(ctx, project_id)


@router.patch("/{project_id}", response_model=schemas.Project)
def update_project(
    project_id: int,
    project_in: schemas.ProjectUpdate,
    ctx: SessionContext = Depends(get_context),
    notifier: ChangeNotifier = Depends(get_notifier),
):
    project = load_project(ctx, project_id, write=True)

    # fields are replaced wholesale; concurrent edits are last-write-wins
    data = project_in.model_dump(exclude_unset=True)
    if "title" in data and not wizard.is_filled(data["title"]):
        raise HTTPException(status_code=400, detail="Title is required")
    for field, value in data.items():
        setattr(project, field, value)

    ctx.db.add(project)
    ctx.db.commit()
    ctx.db.refresh(project)
    notifier.publish(project.id, "projects", "UPDATE", project.id)
    return project


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_id: int,
    ctx: SessionContext = Depends(get_context),
    notifier: ChangeNotifier = Depends(get_notifier),
):
    project = load_project(ctx, project_id)
    if project.owner_id != ctx.user.id:
        raise HTTPException(status_code=403, detail="Only the owner can delete a project")

    ctx.db.delete(project)
    ctx.db.commit()
    notifier.publish(project_id, "projects", "DELETE", project_id)


@router.get("/{project_id}/wizard/{phase}", response_model=schemas.WizardStatus)
def get_wizard_status(project_id: int, phase: str, ctx: SessionContext = Depends(get_context)):
    if phase not in models.PHASES:
        raise HTTPException(status_code=404, detail=f"Unknown phase '{phase}'")
    project = load_project(ctx, project_id)

    steps = [
        schemas.WizardStepStatus(
            index=i,
            id=step.id,
            title=step.title,
            description=step.description,
            complete=wizard.is_step_complete(phase, i, project),
            missing_fields=wizard.missing_fields(phase, i, project),
        )
        for i, step in enumerate(wizard.WIZARD_STEPS.get(phase, ()))
    ]
    return schemas.WizardStatus(
        project_id=project.id,
        phase=phase,
        current_phase=project.phase,
        accessible=wizard.is_phase_accessible(project.phase, phase),
        status=wizard.phase_status(project.phase, phase),
        steps=steps,
        complete=all(s.complete for s in steps),
    )


@router.post("/{project_id}/advance", response_model=schemas.Project)
def advance_phase(
    project_id: int,
    ctx: SessionContext = Depends(get_context),
    notifier: ChangeNotifier = Depends(get_notifier),
):
    project = load_project(ctx, project_id, write=True)

    try:
        target = wizard.check_advance(project.phase, project)
    except wizard.PhaseTransitionError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    project.phase = target
    if target == "completed":
        project.completed_at = datetime.utcnow()

    ctx.db.add(project)
    ctx.db.commit()
    ctx.db.refresh(project)
    notifier.publish(project.id, "projects", "UPDATE", project.id)
    return project
