from __future__ import annotations

import json
import logging
import re
from typing import Any

import httpx

from app.core.config import Settings
from app.core.errors import ConfigurationError, GenerationFailure
from app.core.results import Err, Ok, Result
from app.schemas.questions import ProofOfWorkQuestion
from app.services.question_factory import GenerationContext

logger = logging.getLogger(__name__)

GENERATION_SYSTEM_PROMPT = """You are an expert assessment designer creating work simulation questions for talent evaluation.

Your task:
- Generate {question_count} realistic, role-specific proof-of-work questions
- Each question should test real-world problem-solving in the given context
- Keep questions concise (2-4 sentences max)
- Make questions actionable (e.g., "What would you do?", "How would you approach?")
- Avoid academic/trivia questions; focus on practical judgment

Role: {role_title}
Brief: {brief}

Respond with JSON only, in the form:
{{"questions": [{{"text": "...", "dimension": "..."}}]}}"""

_CODE_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


class ChatCompletionsQuestionGenerator:
    """Question generation over an OpenAI-compatible chat-completions gateway."""

    def __init__(
        self,
        *,
        api_url: str,
        api_key: str | None,
        model: str,
        temperature: float = 0.8,
        timeout_seconds: float = 60.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.api_url = api_url
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.timeout_seconds = timeout_seconds
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "ChatCompletionsQuestionGenerator":
        return cls(
            api_url=settings.ai_gateway_url,
            api_key=settings.ai_gateway_api_key,
            model=settings.ai_model,
            temperature=settings.ai_temperature,
            timeout_seconds=settings.generation_timeout_seconds,
        )

    async def generate_questions(self, context: GenerationContext) -> Result[list[ProofOfWorkQuestion]]:
        if not self.api_key:
            return Err(ConfigurationError("AI gateway API key is not configured."))

        request_body = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": build_system_prompt(context)},
                {"role": "user", "content": "Generate the questions now."},
            ],
            "temperature": self.temperature,
        }
        headers = {"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"}

        try:
            if self._client is not None:
                response = await self._client.post(
                    self.api_url, json=request_body, headers=headers, timeout=self.timeout_seconds
                )
            else:
                async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                    response = await client.post(self.api_url, json=request_body, headers=headers)
        except httpx.TimeoutException:
            return Err(GenerationFailure(f"AI gateway timed out after {self.timeout_seconds:g}s"))
        except httpx.HTTPError as exc:
            return Err(GenerationFailure(f"AI gateway transport error: {exc}"))

        if response.status_code == 429:
            return Err(GenerationFailure("AI gateway rate limit exceeded"))
        if response.status_code == 402:
            return Err(GenerationFailure("Payment required. Please add credits to the AI gateway workspace."))
        if not response.is_success:
            return Err(GenerationFailure(f"AI gateway error: {response.status_code}"))

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError):
            return Err(GenerationFailure("AI gateway returned an unexpected response shape"))
        if not isinstance(content, str) or not content.strip():
            return Err(GenerationFailure("AI returned empty response"))

        try:
            questions = parse_generated_questions(content)
        except ValueError as exc:
            return Err(GenerationFailure(str(exc)))

        logger.info("AI gateway returned %d questions for project_id=%s", len(questions), context.project_id)
        return Ok(questions)


def build_system_prompt(context: GenerationContext) -> str:
    return GENERATION_SYSTEM_PROMPT.format(
        question_count=context.question_count,
        role_title=context.role_title,
        brief=(context.brief or "").strip() or "Not provided",
    )


def parse_generated_questions(content: str) -> list[ProofOfWorkQuestion]:
    """Parse model output into ordered questions.

    Accepts either ``{"questions": [...]}`` or a bare list. Entries may be
    strings or objects with a ``text`` key; entries without text are dropped.
    Missing ids are assigned ``Q001``, ``Q002``... in output order.
    """
    cleaned = _CODE_FENCE_RE.sub("", content.strip())
    try:
        decoded: Any = json.loads(cleaned)
    except ValueError as exc:
        raise ValueError(f"AI returned unparseable question payload: {exc}") from exc

    if isinstance(decoded, dict):
        decoded = decoded.get("questions")
    if not isinstance(decoded, list):
        raise ValueError("AI question payload has no question list")

    questions: list[ProofOfWorkQuestion] = []
    for item in decoded:
        if isinstance(item, str):
            item = {"text": item}
        if not isinstance(item, dict):
            continue
        text = item.get("text") or item.get("question_text")
        if not isinstance(text, str) or not text.strip():
            continue
        dimension = item.get("dimension")
        question_id = item.get("question_id")
        questions.append(
            ProofOfWorkQuestion(
                text=text.strip(),
                question_id=question_id if isinstance(question_id, str) and question_id else f"Q{len(questions) + 1:03d}",
                dimension=dimension if isinstance(dimension, str) and dimension else None,
            )
        )
    return questions
