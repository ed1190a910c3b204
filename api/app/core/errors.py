"""Failure taxonomy shared by the notification, question and progress pipelines.

Services hand these back inside ``Err`` results rather than raising them; route
handlers turn them into structured JSON error responses.
"""

from __future__ import annotations

_MAX_BODY_CHARS = 500


class PipelineError(Exception):
    """Base pipeline error."""

    code = "pipeline_error"


class ConfigurationError(PipelineError):
    """Raised when a required secret or URL is not configured."""

    code = "configuration_error"


class MalformedInputError(PipelineError):
    """Raised when an inbound payload is not a JSON object."""

    code = "malformed_input"


class DeliveryFailure(PipelineError):
    """Raised when the outbound notification was not accepted."""

    code = "delivery_failure"

    def __init__(self, message: str, *, status_code: int | None = None, body: str | None = None) -> None:
        self.status_code = status_code
        self.body = body[:_MAX_BODY_CHARS] if body else body
        super().__init__(message)


class GenerationFailure(PipelineError):
    """Raised when the question generation capability fails."""

    code = "generation_failure"


class PersistenceFailure(PipelineError):
    """Raised when the question set could not be handed to the data store."""

    code = "persistence_failure"


class StateTransitionError(PipelineError):
    """Raised when a candidate status move is not strictly forward."""

    code = "state_transition_error"

    def __init__(self, current: str, target: str) -> None:
        self.current = current
        self.target = target
        super().__init__(f"invalid candidate status transition: {current} -> {target}")
