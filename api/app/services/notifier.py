from __future__ import annotations

import logging
from typing import Any

import httpx

from app.core.config import NotificationSettings
from app.core.errors import ConfigurationError, DeliveryFailure
from app.core.results import Err, Ok, Result
from app.services.events import SourcingRequest

logger = logging.getLogger(__name__)

NOTIFICATION_SENT_MESSAGE = "Notification sent."
SOURCING_MESSAGE_TEMPLATE = (
    "🚀 New Sourcing Request!\n"
    "Project ID: {project_id}\n"
    "Role: {role_title}\n"
    "Please check the {dashboard_name} dashboard."
)


def format_sourcing_message(request: SourcingRequest, *, dashboard_name: str = "VettedAI") -> str:
    return SOURCING_MESSAGE_TEMPLATE.format(
        project_id=request.project_id,
        role_title=request.role_title,
        dashboard_name=dashboard_name,
    )


class SourcingNotifier:
    """Delivers one sourcing-request message to a Slack incoming webhook.

    A single attempt is made per ``dispatch`` call; retries belong to whoever
    triggered the webhook, since deliveries are not deduplicated.
    """

    def __init__(
        self,
        webhook_url: str | None,
        *,
        timeout_seconds: float = 10.0,
        dashboard_name: str = "VettedAI",
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.webhook_url = webhook_url
        self.timeout_seconds = timeout_seconds
        self.dashboard_name = dashboard_name
        self._client = client

    @classmethod
    def from_settings(cls, settings: NotificationSettings) -> "SourcingNotifier":
        return cls(
            settings.slack_sourcing_webhook_url,
            timeout_seconds=settings.notification_timeout_seconds,
            dashboard_name=settings.dashboard_name,
        )

    async def dispatch(self, request: SourcingRequest) -> Result[str]:
        if not self.webhook_url:
            logger.error("Slack sourcing webhook URL is not configured")
            return Err(ConfigurationError("Slack webhook URL is not configured."))

        payload = {"text": format_sourcing_message(request, dashboard_name=self.dashboard_name)}
        try:
            if self._client is not None:
                response = await self._post(self._client, payload)
            else:
                async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                    response = await self._post(client, payload)
        except httpx.TimeoutException as exc:
            logger.error("Slack notification timed out for project_id=%s: %s", request.project_id, exc)
            return Err(DeliveryFailure(f"Slack notification timed out after {self.timeout_seconds:g}s"))
        except httpx.HTTPError as exc:
            logger.error("Slack notification transport error for project_id=%s: %s", request.project_id, exc)
            return Err(DeliveryFailure(f"Slack notification transport error: {exc}"))

        if not response.is_success:
            body = response.text
            logger.error("Error sending Slack notification: %s %s", response.status_code, body)
            message = f"Failed to send Slack notification: {response.status_code}"
            if body:
                message = f"{message} {body[:500]}"
            return Err(DeliveryFailure(message, status_code=response.status_code, body=body))

        logger.info("Slack notification sent for project_id=%s role=%s", request.project_id, request.role_title)
        return Ok(NOTIFICATION_SENT_MESSAGE)

    async def _post(self, client: httpx.AsyncClient, payload: dict[str, Any]) -> httpx.Response:
        return await client.post(
            self.webhook_url,
            json=payload,
            headers={"Content-Type": "application/json"},
            timeout=self.timeout_seconds,
        )
