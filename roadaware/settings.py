from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Project-wide configuration loaded from environment variables (.env optional)."""

    # General settings
    PORT: int = Field(8000, description="HTTP port for the relay service")
    LOG_LEVEL: str = Field("INFO", description="Root log level for Loguru")
    LOG_DIR: str = Field("logs", description="Directory for rotating log files")

    # Provider (Azure OpenAI style chat-completions deployment)
    PROVIDER_ENDPOINT: str = Field("", description="Base URL of the chat-completions provider")
    PROVIDER_API_KEY: str = Field("", description="Key sent as bearer token and api-key header")
    PROVIDER_DEPLOYMENT: str = Field("gpt-4o", description="Deployment / model identifier")
    PROVIDER_API_VERSION: str = Field("2024-02-15-preview", description="Value of the api-version query parameter")
    PROVIDER_TIMEOUT: float | None = Field(
        None, description="Seconds to wait on the provider; None waits indefinitely"
    )

    # Token budgets
    MAX_TOKENS: int = Field(512, description="max_tokens for buffered analysis calls", ge=1)
    STREAM_MAX_TOKENS: int = Field(5000, description="max_tokens for streamed analysis calls", ge=1)

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
        "extra": "ignore",
        "env_prefix": "",
    }

    @property
    def chat_completions_url(self) -> str:
        """Full chat-completions URL for the configured deployment."""
        return (
            f"{self.PROVIDER_ENDPOINT.rstrip('/')}/openai/deployments/"
            f"{self.PROVIDER_DEPLOYMENT}/chat/completions?api-version={self.PROVIDER_API_VERSION}"
        )


settings = Settings()
