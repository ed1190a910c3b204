from __future__ import annotations

import asyncio
from datetime import datetime, timezone
import json

import httpx

from app.core.errors import ConfigurationError, PersistenceFailure
from app.core.results import Err, Ok
from app.schemas.questions import ProofOfWorkQuestion, ProofOfWorkQuestionSet
from app.services.question_store import SupabaseQuestionStore

SUPABASE_URL = "https://project.supabase.test/"
QUESTION_SET = ProofOfWorkQuestionSet(
    project_id="proj_42",
    role_title="Backend Engineer",
    questions=[
        ProofOfWorkQuestion(text="First", question_id="Q001", dimension="ownership"),
        ProofOfWorkQuestion(text="Second", question_id="Q002"),
    ],
    generated_at=datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc),
)


def _store(handler, *, supabase_url: str | None = SUPABASE_URL, key: str | None = "service-role") -> SupabaseQuestionStore:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return SupabaseQuestionStore(supabase_url=supabase_url, service_role_key=key, client=client)


def test_save_question_set_inserts_single_row() -> None:
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(status_code=201, request=request)

    result = asyncio.run(_store(handler).save_question_set(QUESTION_SET))

    assert isinstance(result, Ok)
    assert len(captured) == 1
    request = captured[0]
    assert str(request.url) == "https://project.supabase.test/rest/v1/proof_of_work_question_sets"
    assert request.headers["apikey"] == "service-role"
    assert request.headers["authorization"] == "Bearer service-role"
    assert request.headers["prefer"] == "return=minimal"
    row = json.loads(request.content)
    assert row["project_id"] == "proj_42"
    assert row["question_count"] == 2
    assert row["status"] == "READY"
    assert row["questions"][1] == {"text": "Second", "question_id": "Q002"}
    assert row["generated_at"].startswith("2026-03-01T12:00:00")


def test_save_question_set_reports_rejected_insert() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code=409, text="duplicate key", request=request)

    result = asyncio.run(_store(handler).save_question_set(QUESTION_SET))

    assert isinstance(result, Err)
    assert isinstance(result.error, PersistenceFailure)
    assert "409" in str(result.error)
    assert "duplicate key" in str(result.error)


def test_save_question_set_reports_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    result = asyncio.run(_store(handler).save_question_set(QUESTION_SET))

    assert isinstance(result, Err)
    assert isinstance(result.error, PersistenceFailure)


def test_save_question_set_requires_configuration() -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(status_code=201, request=request)

    for kwargs in ({"supabase_url": None}, {"key": ""}):
        result = asyncio.run(_store(handler, **kwargs).save_question_set(QUESTION_SET))
        assert isinstance(result, Err)
        assert isinstance(result.error, ConfigurationError)

    assert calls == []
