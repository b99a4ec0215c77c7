"""
Workflow Designer - Configuration Settings
Defaults baked into generated AutoGen programs, HTTP server and logging settings.
"""

import logging
from typing import List
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Workflow Designer settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Platform ──────────────────────────────────────────────────────
    environment: str = Field(default="dev", alias="ENVIRONMENT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    cors_allowed_origins: str = Field(default="*", alias="CORS_ALLOWED_ORIGINS")

    # ── Generated Program Defaults ────────────────────────────────────
    default_model: str = Field(default="gpt-4o", alias="WORKFLOW_DEFAULT_MODEL")
    default_agent_name: str = "unnamed_agent"
    default_task: str = "Hello World!"
    termination_token: str = "TERMINATE"

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        allowed = ["dev", "development", "qa", "uit", "prod"]
        if v.lower() not in allowed:
            logger.warning(f"environment '{v}' not in {allowed}")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    def cors_origins(self) -> List[str]:
        raw = self.cors_allowed_origins.strip()
        if raw == "*":
            return ["*"]
        return [o.strip() for o in raw.split(",") if o.strip()]


settings = Settings()
