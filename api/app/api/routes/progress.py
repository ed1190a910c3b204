from fastapi import APIRouter, Depends

from app.api.deps import get_progress_tracker
from app.schemas.progress import CandidateProgressRequest, ProgressOut, ProgressRequest
from app.services.candidates import status_counts, summarize_statuses
from app.services.progress import ProgressTracker, ProjectProgress

router = APIRouter()


@router.post("/stage", response_model=ProgressOut)
async def evaluate_stage(
    payload: ProgressRequest,
    tracker: ProgressTracker = Depends(get_progress_tracker),
) -> ProgressOut:
    progress = ProjectProgress(
        candidates_completed=payload.candidates_completed,
        total_candidates=payload.total_candidates,
    )
    assessment = tracker.evaluate(progress, previous_stage=payload.previous_stage, project_id=payload.project_id)
    return ProgressOut(
        candidates_completed=progress.candidates_completed,
        total_candidates=progress.total_candidates,
        completion_percentage=progress.completion_percentage,
        stage_id=assessment.stage,
        message=assessment.message,
    )


@router.post("/candidates", response_model=ProgressOut)
async def evaluate_candidate_statuses(
    payload: CandidateProgressRequest,
    tracker: ProgressTracker = Depends(get_progress_tracker),
) -> ProgressOut:
    progress = summarize_statuses(payload.statuses)
    assessment = tracker.evaluate(progress, previous_stage=payload.previous_stage, project_id=payload.project_id)
    return ProgressOut(
        candidates_completed=progress.candidates_completed,
        total_candidates=progress.total_candidates,
        completion_percentage=progress.completion_percentage,
        stage_id=assessment.stage,
        message=assessment.message,
        status_counts=status_counts(payload.statuses),
    )
