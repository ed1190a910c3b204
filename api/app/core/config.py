from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "vetted-sourcing-pipeline-api"
    environment: str = "dev"
    supabase_url: str | None = None
    supabase_service_role_key: str | None = None
    question_sets_table: str = "proof_of_work_question_sets"
    persistence_timeout_seconds: float = 10.0
    ai_gateway_url: str = "https://ai.gateway.lovable.dev/v1/chat/completions"
    ai_gateway_api_key: str | None = None
    ai_model: str = "google/gemini-2.5-flash"
    ai_temperature: float = 0.8
    generation_timeout_seconds: float = 60.0
    otel_enabled: bool = True
    otel_service_name: str = "vetted-sourcing-pipeline-api"
    otel_exporter_otlp_endpoint: str | None = None
    otel_exporter_otlp_headers: str | None = None
    otel_trace_sample_ratio: float = 1.0
    otel_log_correlation: bool = True

    model_config = SettingsConfigDict(env_prefix="VP_", extra="ignore")


class NotificationSettings(BaseSettings):
    slack_sourcing_webhook_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("VP_SLACK_SOURCING_WEBHOOK_URL", "SLACK_SOURCING_WEBHOOK_URL"),
    )
    notification_timeout_seconds: float = 10.0
    dashboard_name: str = "VettedAI"

    model_config = SettingsConfigDict(env_prefix="VP_", extra="ignore", populate_by_name=True)


@lru_cache
def get_settings() -> Settings:
    return Settings()


def get_notification_settings() -> NotificationSettings:
    # Not cached: the webhook secret is resolved on every dispatch.
    return NotificationSettings()
