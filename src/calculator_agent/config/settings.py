from __future__ import annotations

from typing import Any, Literal

from pydantic import Field
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from calculator_agent.errors import ConfigurationError
from calculator_agent.schemas.validation import issues_from_pydantic


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    github_token: str = Field(min_length=1, alias="GITHUB_TOKEN")
    app_env: Literal["development", "production", "test"] = Field(
        default="development", alias="APP_ENV"
    )
    log_level: Literal["debug", "info", "warn", "error"] = Field(
        default="info", alias="LOG_LEVEL"
    )

    # Sampling defaults, overridable per chat call.
    ai_temperature: float = Field(default=0.7, ge=0, le=2, alias="AI_TEMPERATURE")
    ai_max_tokens: int = Field(default=300, ge=1, le=8000, alias="AI_MAX_TOKENS")
    ai_timeout_ms: int = Field(default=30000, ge=1000, alias="AI_TIMEOUT_MS")

    default_model: str = Field(
        default="openai/gpt-4o", min_length=1, alias="DEFAULT_MODEL"
    )
    fallback_model: str = Field(
        default="openai/gpt-4o-mini", min_length=1, alias="FALLBACK_MODEL"
    )

    # Provider endpoint
    provider_base_url: str = Field(
        default="https://models.github.ai/inference",
        alias="PROVIDER_BASE_URL",
    )
    llm_backend: Literal["http", "langchain"] = Field(
        default="http", alias="LLM_BACKEND"
    )


def load_settings(env_file: str | None = ".env", **overrides: Any) -> Settings:
    """Build the process configuration once at startup.

    Values come from keyword overrides, then the environment, then ``env_file``.
    Raises ConfigurationError when a required value is missing or out of range.
    """
    try:
        return Settings(_env_file=env_file, **overrides)
    except PydanticValidationError as exc:
        issues = issues_from_pydantic(exc)
        raise ConfigurationError("Invalid configuration", issues) from exc
