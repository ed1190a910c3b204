from __future__ import annotations

from dataclasses import dataclass
import json
import logging
from typing import Any, Literal

from app.core.errors import MalformedInputError

logger = logging.getLogger(__name__)

UNKNOWN_PROJECT_ID = "Unknown Project ID"
UNKNOWN_ROLE = "Unknown Role"

PayloadShape = Literal["record", "flat"]


@dataclass(slots=True, frozen=True)
class SourcingRequest:
    project_id: str
    role_title: str


@dataclass(slots=True, frozen=True)
class EventFields:
    shape: PayloadShape
    project_id: str | None
    role_title: str | None


def parse_event_body(raw: bytes | str | None) -> dict[str, Any] | None:
    """Decode a webhook body, returning ``None`` for anything but a JSON object."""
    if not raw:
        return None
    try:
        decoded = json.loads(raw)
    except (UnicodeDecodeError, ValueError) as exc:
        logger.warning("%s", MalformedInputError(f"event body is not valid JSON: {exc}"))
        return None
    if not isinstance(decoded, dict):
        logger.warning("%s", MalformedInputError(f"event body is {type(decoded).__name__}, expected object"))
        return None
    return decoded


def extract_event_fields(payload: Any) -> list[EventFields]:
    """Return the candidate field sources in precedence order."""
    if not isinstance(payload, dict):
        return []

    sources: list[EventFields] = []
    record = payload.get("record")
    if isinstance(record, dict):
        sources.append(
            EventFields(
                shape="record",
                project_id=_as_identifier(record.get("id")),
                role_title=_as_identifier(record.get("role_title")),
            )
        )
    sources.append(
        EventFields(
            shape="flat",
            project_id=_as_identifier(payload.get("id")),
            role_title=_as_identifier(payload.get("role_title")),
        )
    )
    return sources


def normalize_event(payload: Any) -> SourcingRequest:
    sources = extract_event_fields(payload)
    project_id = next((source.project_id for source in sources if source.project_id), None)
    role_title = next((source.role_title for source in sources if source.role_title), None)
    return SourcingRequest(
        project_id=project_id or UNKNOWN_PROJECT_ID,
        role_title=role_title or UNKNOWN_ROLE,
    )


def _as_identifier(value: Any) -> str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return None
