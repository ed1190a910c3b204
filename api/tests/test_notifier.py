from __future__ import annotations

import asyncio
import json
from typing import Any

import httpx
import pytest

from app.core.config import NotificationSettings
from app.core.errors import ConfigurationError, DeliveryFailure
from app.core.results import Err, Ok
from app.services.events import SourcingRequest
from app.services.notifier import SourcingNotifier, format_sourcing_message

WEBHOOK_URL = "https://hooks.slack.test/services/T000/B000/XXXX"
REQUEST = SourcingRequest(project_id="proj_42", role_title="Backend Engineer")


def _dispatch(notifier: SourcingNotifier) -> Any:
    return asyncio.run(notifier.dispatch(REQUEST))


def test_format_sourcing_message_embeds_both_fields() -> None:
    text = format_sourcing_message(REQUEST)
    assert text == (
        "🚀 New Sourcing Request!\nProject ID: proj_42\nRole: Backend Engineer\nPlease check the VettedAI dashboard."
    )


def test_dispatch_posts_single_json_message() -> None:
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(status_code=200, text="ok", request=request)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    result = _dispatch(SourcingNotifier(WEBHOOK_URL, client=client))

    assert isinstance(result, Ok)
    assert result.value == "Notification sent."
    assert len(captured) == 1
    sent = captured[0]
    assert sent.method == "POST"
    assert str(sent.url) == WEBHOOK_URL
    assert sent.headers["content-type"] == "application/json"
    body = json.loads(sent.content)
    assert set(body) == {"text"}
    assert "proj_42" in body["text"]
    assert "Backend Engineer" in body["text"]


def test_dispatch_without_webhook_url_makes_no_network_call(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict[str, Any]] = []

    def fake_async_client(*args: Any, **kwargs: Any) -> Any:
        calls.append(kwargs)
        raise AssertionError("no client should be created")

    monkeypatch.setattr(httpx, "AsyncClient", fake_async_client)
    for url in (None, ""):
        result = _dispatch(SourcingNotifier(url))
        assert isinstance(result, Err)
        assert isinstance(result.error, ConfigurationError)

    assert calls == []


def test_dispatch_non_success_status_captures_status_and_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code=404, text="no_service", request=request)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    result = _dispatch(SourcingNotifier(WEBHOOK_URL, client=client))

    assert isinstance(result, Err)
    assert isinstance(result.error, DeliveryFailure)
    assert result.error.status_code == 404
    assert result.error.body == "no_service"
    assert "404" in str(result.error)
    assert "no_service" in str(result.error)


def test_dispatch_timeout_is_a_delivery_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    result = _dispatch(SourcingNotifier(WEBHOOK_URL, timeout_seconds=2.5, client=client))

    assert isinstance(result, Err)
    assert isinstance(result.error, DeliveryFailure)
    assert "timed out after 2.5s" in str(result.error)
    assert result.error.status_code is None


def test_dispatch_transport_error_is_a_delivery_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    result = _dispatch(SourcingNotifier(WEBHOOK_URL, client=client))

    assert isinstance(result, Err)
    assert isinstance(result.error, DeliveryFailure)
    assert "connection refused" in str(result.error)


def test_dispatch_uses_configured_timeout_for_owned_client(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, Any] = {}

    class FakeAsyncClient:
        async def __aenter__(self) -> "FakeAsyncClient":
            return self

        async def __aexit__(self, exc_type, exc, tb) -> None:
            return None

        async def post(self, url: str, **kwargs: Any) -> httpx.Response:
            captured["url"] = url
            captured["json"] = kwargs["json"]
            return httpx.Response(status_code=200, request=httpx.Request("POST", url))

    def fake_async_client(*args: Any, **kwargs: Any) -> FakeAsyncClient:
        captured.update(kwargs)
        return FakeAsyncClient()

    monkeypatch.setattr(httpx, "AsyncClient", fake_async_client)
    result = _dispatch(SourcingNotifier(WEBHOOK_URL, timeout_seconds=3.5, dashboard_name="Hiring"))

    assert isinstance(result, Ok)
    assert captured["timeout"] == 3.5
    assert captured["url"] == WEBHOOK_URL
    assert captured["json"]["text"].endswith("Please check the Hiring dashboard.")


def test_notifier_from_settings_reads_secret(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("VP_SLACK_SOURCING_WEBHOOK_URL", raising=False)
    monkeypatch.setenv("SLACK_SOURCING_WEBHOOK_URL", WEBHOOK_URL)
    monkeypatch.setenv("VP_NOTIFICATION_TIMEOUT_SECONDS", "4")

    notifier = SourcingNotifier.from_settings(NotificationSettings())
    assert notifier.webhook_url == WEBHOOK_URL
    assert notifier.timeout_seconds == 4.0
