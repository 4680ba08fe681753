from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # App
    app_name: str = Field(default="promptgate", validation_alias="APP_NAME")
    app_env: str = Field(default="dev", validation_alias="APP_ENV")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # Chat client
    chat_client: str = Field(
        default="anthropic", validation_alias="CHAT_CLIENT")  # options: anthropic, openai, vllm

    # Anthropic
    anthropic_api_key: str = Field(default="", validation_alias="ANTHROPIC_API_KEY")
    anthropic_model: str = Field(default="claude-sonnet-4-20250514",
                                 validation_alias="ANTHROPIC_MODEL")

    # OpenAI
    openai_api_key: str = Field(default="", validation_alias="OPENAI_API_KEY")
    openai_model: str = Field(default="gpt-5-nano-2025-08-07",
                              validation_alias="OPENAI_MODEL")

    # VLLM
    chat_base_url: str = Field(
        default="http://vllm-chat:8003/v1", validation_alias="CHAT_BASE_URL")
    vllm_chat_api_key: str = Field(
        default="chat-abc123", validation_alias="VLLM_CHAT_API_KEY")
    chat_model_id: str = Field(
        default="Qwen/Qwen2.5-3B-Instruct", validation_alias="CHAT_MODEL_ID")

    # Upstream transport
    upstream_timeout: float = Field(
        default=120.0, validation_alias="UPSTREAM_TIMEOUT")

    # Token budgets
    chat_default_max_tokens: int = Field(
        default=1024, gt=0, validation_alias="CHAT_DEFAULT_MAX_TOKENS")
    eval_max_tokens: int = Field(
        default=512, gt=0, validation_alias="EVAL_MAX_TOKENS")

    # Server
    api_host: str = Field(default="0.0.0.0", validation_alias="API_HOST")
    api_port: int = Field(default=8000, validation_alias="API_PORT")

    # CORS
    cors_allow_origins: str = Field(
        default="*", validation_alias="CORS_ALLOW_ORIGINS")

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
