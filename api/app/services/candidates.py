from __future__ import annotations

from collections import Counter
from enum import Enum
from typing import Iterable

from app.core.errors import StateTransitionError
from app.services.progress import ProjectProgress


class CandidateStatus(str, Enum):
    AWAITING = "awaiting"
    SCORING = "scoring"
    SCORED = "scored"


ALLOWED_TRANSITIONS: dict[CandidateStatus, frozenset[CandidateStatus]] = {
    CandidateStatus.AWAITING: frozenset({CandidateStatus.SCORING}),
    CandidateStatus.SCORING: frozenset({CandidateStatus.SCORED}),
    CandidateStatus.SCORED: frozenset(),
}

# Candidates who have submitted their proof-of-work.
SUBMITTED_STATUSES = frozenset({CandidateStatus.SCORING, CandidateStatus.SCORED})


def can_transition(current: CandidateStatus | str, target: CandidateStatus | str) -> bool:
    return CandidateStatus(target) in ALLOWED_TRANSITIONS[CandidateStatus(current)]


def ensure_transition(current: CandidateStatus | str, target: CandidateStatus | str) -> None:
    if not can_transition(current, target):
        raise StateTransitionError(CandidateStatus(current).value, CandidateStatus(target).value)


def status_counts(statuses: Iterable[CandidateStatus | str]) -> dict[str, int]:
    counts = Counter(CandidateStatus(status) for status in statuses)
    return {status.value: counts.get(status, 0) for status in CandidateStatus}


def summarize_statuses(statuses: Iterable[CandidateStatus | str]) -> ProjectProgress:
    normalized = [CandidateStatus(status) for status in statuses]
    completed = sum(1 for status in normalized if status in SUBMITTED_STATUSES)
    return ProjectProgress(candidates_completed=completed, total_candidates=len(normalized))
