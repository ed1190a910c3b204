from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from typing import Callable

logger = logging.getLogger(__name__)


class ProgressStage(str, Enum):
    DEPLOYED_AWAITING = "DEPLOYED_AWAITING"
    COLLECTING = "COLLECTING"
    FINALIZING = "FINALIZING"


STAGE_MESSAGES: dict[ProgressStage, str] = {
    ProgressStage.DEPLOYED_AWAITING: "Tasks have been deployed. We're now awaiting candidate submissions.",
    ProgressStage.COLLECTING: (
        "Excellent! Results are coming in. Our system begins analysis as soon as we have enough data "
        "for a meaningful comparison."
    ),
    ProgressStage.FINALIZING: (
        "We have a strong response! Our team is now performing the final analysis to build your "
        "high-confidence shortlist."
    ),
}

# (inclusive upper bound, stage), checked in order.
STAGE_BANDS: tuple[tuple[float, ProgressStage], ...] = (
    (25, ProgressStage.DEPLOYED_AWAITING),
    (70, ProgressStage.COLLECTING),
    (100, ProgressStage.FINALIZING),
)


def completion_percentage(completed: int, total: int) -> int:
    """Half-up rounded ``100 * completed / total``; zero when there are no candidates."""
    if completed < 0 or total < 0:
        raise ValueError("candidate counts must be non-negative")
    if completed > total:
        raise ValueError("candidates_completed cannot exceed total_candidates")
    if total == 0:
        return 0
    # Integer arithmetic keeps x.5 rounding up instead of to even.
    return (200 * completed + total) // (2 * total)


@dataclass(slots=True, frozen=True)
class ProjectProgress:
    candidates_completed: int
    total_candidates: int

    def __post_init__(self) -> None:
        completion_percentage(self.candidates_completed, self.total_candidates)

    @property
    def completion_percentage(self) -> int:
        return completion_percentage(self.candidates_completed, self.total_candidates)


@dataclass(slots=True, frozen=True)
class StageAssessment:
    stage: ProgressStage
    message: str


@dataclass(slots=True, frozen=True)
class StageTransition:
    project_id: str | None
    previous: ProgressStage | None
    current: ProgressStage
    progress: ProjectProgress


StageChangeCallback = Callable[[StageTransition], None]


def stage_for(percentage: float) -> StageAssessment:
    if not 0 <= percentage <= 100:
        raise ValueError(f"completion percentage must be within [0, 100], got {percentage}")
    for upper, stage in STAGE_BANDS:
        if percentage <= upper:
            return StageAssessment(stage=stage, message=STAGE_MESSAGES[stage])
    raise AssertionError("stage bands must cover [0, 100]")


def noop_stage_change(transition: StageTransition) -> None:
    logger.debug(
        "stage change ignored project_id=%s %s -> %s",
        transition.project_id,
        transition.previous.value if transition.previous else None,
        transition.current.value,
    )


class ProgressTracker:
    def __init__(self, on_stage_change: StageChangeCallback | None = None) -> None:
        self.on_stage_change = on_stage_change or noop_stage_change

    def evaluate(
        self,
        progress: ProjectProgress,
        *,
        previous_stage: ProgressStage | None = None,
        project_id: str | None = None,
    ) -> StageAssessment:
        assessment = stage_for(progress.completion_percentage)
        if assessment.stage != previous_stage:
            logger.info(
                "progress stage change project_id=%s %s -> %s at %s%%",
                project_id,
                previous_stage.value if previous_stage else None,
                assessment.stage.value,
                progress.completion_percentage,
            )
            self.on_stage_change(
                StageTransition(
                    project_id=project_id,
                    previous=previous_stage,
                    current=assessment.stage,
                    progress=progress,
                )
            )
        return assessment
