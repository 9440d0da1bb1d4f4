"""Environment-sourced configuration for the crypto MCP client."""

import os
from typing import Literal, Optional

from dotenv import load_dotenv, find_dotenv
from pydantic import BaseModel, Field, field_validator

from .exceptions import ConfigurationError
from .logger import get_logger

logger = get_logger(__name__)

DEFAULT_SERVER_URL = "http://localhost:8000"
DEFAULT_MODEL = "claude-3-7-sonnet-20250219"
DEFAULT_MAX_TOKENS = 1000


class ClientSettings(BaseModel):
    """
    Settings required to build a CryptoMcpClient.

    Attributes:
        server_url: Base URL of the MCP tool server. The SSE endpoint is ``<server_url>/sse``.
        provider: Which completion backend to use.
        model: Model identifier sent with every completion request.
        max_tokens: Upper bound on generated tokens per completion.
        anthropic_api_key: API key for the Anthropic Messages API.
        openai_api_key: API key for the OpenAI Chat Completions API.
        openai_base_url: Optional base URL for OpenAI-compatible endpoints.
        log_level: Level passed to ``setup_logging`` by applications.
    """

    server_url: str = DEFAULT_SERVER_URL
    provider: Literal["anthropic", "openai"] = "anthropic"
    model: str = DEFAULT_MODEL
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, gt=0)
    anthropic_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None
    log_level: str = "INFO"

    @field_validator("server_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def api_key(self) -> Optional[str]:
        """The API key of the selected provider."""
        if self.provider == "openai":
            return self.openai_api_key
        return self.anthropic_api_key

    def require_api_key(self) -> str:
        """Return the API key of the selected provider.

        Raises:
            ConfigurationError: If the key is not set.
        """
        key = self.api_key
        if not key:
            env_name = "OPENAI_API_KEY" if self.provider == "openai" else "ANTHROPIC_API_KEY"
            msg = f"{env_name} is not set"
            logger.error(msg)
            raise ConfigurationError(msg)
        return key

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "ClientSettings":
        """Build settings from environment variables.

        Args:
            dotenv: Load a ``.env`` file (searched upwards from the working directory) first.

        Returns:
            The populated settings.

        Raises:
            ConfigurationError: If a numeric variable cannot be parsed or the provider is unknown.
        """
        if dotenv:
            env_file = find_dotenv(usecwd=True)
            if env_file:
                logger.debug("Loading .env from: %s", env_file)
                load_dotenv(env_file)

        values: dict[str, object] = {
            "server_url": os.getenv("CRYPTO_MCP_SERVER_URL", DEFAULT_SERVER_URL),
            "provider": os.getenv("CRYPTO_MCP_PROVIDER", "anthropic").lower(),
            "model": os.getenv("CRYPTO_MCP_MODEL", DEFAULT_MODEL),
            # The browser build of the dashboard used the REACT_APP_ prefix.
            "anthropic_api_key": os.getenv("ANTHROPIC_API_KEY") or os.getenv("REACT_APP_ANTHROPIC_API_KEY"),
            "openai_api_key": os.getenv("OPENAI_API_KEY"),
            "openai_base_url": os.getenv("OPENAI_BASE_URL"),
            "log_level": os.getenv("CRYPTO_MCP_LOG_LEVEL", "INFO"),
        }

        raw_max_tokens = os.getenv("CRYPTO_MCP_MAX_TOKENS")
        if raw_max_tokens:
            values["max_tokens"] = raw_max_tokens

        try:
            return cls.model_validate(values)
        except ValueError as exc:
            msg = f"Invalid client configuration: {exc}"
            logger.error(msg)
            raise ConfigurationError(msg) from exc
