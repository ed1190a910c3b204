from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
import logging
from typing import Callable, Protocol

from app.core.errors import ConfigurationError, GenerationFailure, PersistenceFailure, PipelineError
from app.core.results import Err, Ok, Result
from app.schemas.questions import ProofOfWorkQuestion, ProofOfWorkQuestionSet, QuestionFactoryRequest
from app.services.events import UNKNOWN_ROLE

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class GenerationContext:
    project_id: str
    role_title: str
    brief: str | None
    question_count: int


class QuestionGenerator(Protocol):
    async def generate_questions(self, context: GenerationContext) -> Result[list[ProofOfWorkQuestion]]: ...


class QuestionSetStore(Protocol):
    async def save_question_set(self, question_set: ProofOfWorkQuestionSet) -> Result[None]: ...


class QuestionFactory:
    def __init__(
        self,
        generator: QuestionGenerator,
        store: QuestionSetStore,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.generator = generator
        self.store = store
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def materialize(self, request: QuestionFactoryRequest) -> Result[ProofOfWorkQuestionSet]:
        context = GenerationContext(
            project_id=request.project_id,
            role_title=(request.role_title or "").strip() or UNKNOWN_ROLE,
            brief=request.brief,
            question_count=request.question_count,
        )

        try:
            generated = await self.generator.generate_questions(context)
        except Exception as exc:
            logger.exception("question generation raised for project_id=%s", context.project_id)
            return Err(GenerationFailure(f"question generation failed: {exc}"))
        if isinstance(generated, Err):
            logger.error("question generation failed for project_id=%s: %s", context.project_id, generated.error)
            return generated

        question_set = ProofOfWorkQuestionSet(
            project_id=context.project_id,
            role_title=context.role_title,
            questions=list(generated.value),
            generated_at=self._clock(),
        )

        try:
            saved = await self.store.save_question_set(question_set)
        except Exception as exc:
            logger.exception("question set persistence raised for project_id=%s", context.project_id)
            return Err(PersistenceFailure(f"question set persistence failed: {exc}"))
        if isinstance(saved, Err):
            logger.error("question set persistence failed for project_id=%s: %s", context.project_id, saved.error)
            return Err(_as_persistence_failure(saved.error))

        logger.info(
            "materialized %d questions for project_id=%s role=%s",
            len(question_set.questions),
            context.project_id,
            context.role_title,
        )
        return Ok(question_set)


def _as_persistence_failure(error: PipelineError) -> PipelineError:
    if isinstance(error, (PersistenceFailure, ConfigurationError)):
        return error
    return PersistenceFailure(str(error))
