"""
Configuration settings for the companion core.
Uses Pydantic Settings for type-safe configuration with validation.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Pydantic validates types and provides clear error messages for misconfigurations.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore extra env vars
    )

    # Language model endpoint (OpenAI-compatible chat completions)
    LLM_API_KEY: str = Field(
        default="",
        description="API key for the language model endpoint. "
                    "Required only when a model call is actually made.",
    )
    LLM_API_BASE: str = Field(
        default="https://api.x.ai/v1",
        description="Base URL of the chat completions endpoint",
    )
    LLM_MAX_RETRIES: int = Field(
        default=3,
        description="Attempts per model call before giving up",
        ge=1,
        le=10,
    )

    # Models - one setting per purpose
    MODEL_CONVERSATION: str = Field(
        default="xai/grok-3-fast",
        description="Model for companion chat replies",
    )
    MODEL_BACKSTORY: str = Field(
        default="xai/grok-3-fast",
        description="Model for backstory evaluation and improvement",
    )

    CONVERSATION_TEMPERATURE: float = Field(default=0.8, ge=0.0, le=2.0)
    CONVERSATION_MAX_TOKENS: int = Field(default=800, ge=1)
    BACKSTORY_EVAL_TEMPERATURE: float = Field(default=0.3, ge=0.0, le=2.0)
    BACKSTORY_IMPROVE_TEMPERATURE: float = Field(default=0.7, ge=0.0, le=2.0)
    BACKSTORY_MAX_TOKENS: int = Field(default=800, ge=1)

    # ==================== Conversation Context Configuration ====================

    CONVERSATION_CONTEXT_LIMIT: int = Field(
        default=20,
        description="Number of recent turns handed to the model with each new message. "
                    "Used in: agents.companion_agent.build_prompt(), agents.orchestrator",
        ge=1,
    )

    # Application
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    LOG_FORMAT: Literal["console", "json"] = Field(
        default="console",
        description="Log renderer",
    )

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment",
    )

    @field_validator("LLM_API_BASE")
    @classmethod
    def validate_api_base(cls, v: str) -> str:
        """Ensure the endpoint URL is http(s) and has no trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("LLM_API_BASE must start with http:// or https://")
        return v.rstrip("/")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.ENVIRONMENT == "development"


# Loaded once from .env / environment
settings = Settings()
