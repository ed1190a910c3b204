from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class ProofOfWorkQuestion(BaseModel):
    text: str
    question_id: str | None = None
    dimension: str | None = None


class ProofOfWorkQuestionSet(BaseModel):
    project_id: str
    role_title: str
    questions: list[ProofOfWorkQuestion] = Field(default_factory=list)
    generated_at: datetime

    def to_row(self) -> dict[str, Any]:
        return {
            "project_id": self.project_id,
            "role_title": self.role_title,
            "questions": [question.model_dump(exclude_none=True) for question in self.questions],
            "question_count": len(self.questions),
            "status": "READY",
            "generated_at": self.generated_at.isoformat(),
        }


class QuestionFactoryRequest(BaseModel):
    project_id: str = Field(min_length=1)
    role_title: str | None = None
    brief: str | None = None
    question_count: int = Field(default=10, ge=1, le=40)


class QuestionFactoryOut(BaseModel):
    success: bool = True
    project_id: str
    question_count: int
    questions: list[ProofOfWorkQuestion] = Field(default_factory=list)
