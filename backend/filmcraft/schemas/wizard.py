from pydantic import BaseModel
from typing import List


class WizardStepStatus(BaseModel):
    index: int
    id: str
    title: str
    description: str
    complete: bool
    missing_fields: List[str] = []


class WizardStatus(BaseModel):
    project_id: int
    phase: str
    current_phase: str
    accessible: bool
    status: str
    steps: List[WizardStepStatus]
    complete: bool
