from __future__ import annotations

import logging

import httpx

from app.core.config import Settings
from app.core.errors import ConfigurationError, PersistenceFailure
from app.core.results import Err, Ok, Result
from app.schemas.questions import ProofOfWorkQuestionSet

logger = logging.getLogger(__name__)


class SupabaseQuestionStore:
    """Writes a question set as a single PostgREST insert, so a set lands whole or not at all."""

    def __init__(
        self,
        *,
        supabase_url: str | None,
        service_role_key: str | None,
        table: str = "proof_of_work_question_sets",
        timeout_seconds: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.supabase_url = supabase_url
        self.service_role_key = service_role_key
        self.table = table
        self.timeout_seconds = timeout_seconds
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "SupabaseQuestionStore":
        return cls(
            supabase_url=settings.supabase_url,
            service_role_key=settings.supabase_service_role_key,
            table=settings.question_sets_table,
            timeout_seconds=settings.persistence_timeout_seconds,
        )

    async def save_question_set(self, question_set: ProofOfWorkQuestionSet) -> Result[None]:
        if not self.supabase_url or not self.service_role_key:
            return Err(ConfigurationError("Supabase configuration missing"))

        url = f"{self.supabase_url.rstrip('/')}/rest/v1/{self.table}"
        headers = {
            "apikey": self.service_role_key,
            "Authorization": f"Bearer {self.service_role_key}",
            "Content-Type": "application/json",
            "Prefer": "return=minimal",
        }
        row = question_set.to_row()

        try:
            if self._client is not None:
                response = await self._client.post(url, json=row, headers=headers, timeout=self.timeout_seconds)
            else:
                async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                    response = await client.post(url, json=row, headers=headers)
        except httpx.HTTPError as exc:
            return Err(PersistenceFailure(f"Database insert failed: {exc}"))

        if not response.is_success:
            return Err(PersistenceFailure(f"Database insert failed: {response.status_code} {response.text[:500]}"))

        logger.info(
            "saved %d questions to %s for project_id=%s",
            row["question_count"],
            self.table,
            question_set.project_id,
        )
        return Ok(None)
