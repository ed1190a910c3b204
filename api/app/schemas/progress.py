from pydantic import BaseModel, Field, model_validator

from app.services.candidates import CandidateStatus
from app.services.progress import ProgressStage


class ProgressRequest(BaseModel):
    candidates_completed: int = Field(ge=0)
    total_candidates: int = Field(ge=0)
    previous_stage: ProgressStage | None = None
    project_id: str | None = None

    @model_validator(mode="after")
    def completed_within_total(self) -> "ProgressRequest":
        if self.candidates_completed > self.total_candidates:
            raise ValueError("candidates_completed cannot exceed total_candidates")
        return self


class CandidateProgressRequest(BaseModel):
    statuses: list[CandidateStatus] = Field(default_factory=list)
    previous_stage: ProgressStage | None = None
    project_id: str | None = None


class ProgressOut(BaseModel):
    candidates_completed: int
    total_candidates: int
    completion_percentage: int
    stage_id: ProgressStage
    message: str
    status_counts: dict[str, int] | None = None


class TransitionCheckRequest(BaseModel):
    current: CandidateStatus
    target: CandidateStatus
