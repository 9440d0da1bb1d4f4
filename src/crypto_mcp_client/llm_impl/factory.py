"""Build the completion backend selected in the client settings."""

from anthropic import AsyncAnthropic
from openai import AsyncOpenAI

from crypto_mcp_client.core import ClientSettings, CompletionBackend, get_logger
from .anthropic_api import AnthropicCompletionAdapter
from .openai_api import OpenAICompletionAdapter

logger = get_logger(__name__)


def create_backend(settings: ClientSettings, max_retries: int = 0) -> CompletionBackend:
    """
    Creates the completion backend for ``settings.provider``.

    The SDK clients are built with their own retries disabled, so ``max_retries``
    is the only retry policy in effect.

    Args:
        settings: Client settings holding provider, model and keys.
        max_retries: Retries after a failed completion request.

    Returns:
        A ready-to-use completion backend.

    Raises:
        ConfigurationError: If the selected provider has no API key.
    """
    api_key = settings.require_api_key()
    logger.debug("Using %s backend with model %s.", settings.provider, settings.model)

    if settings.provider == "openai":
        client = AsyncOpenAI(api_key=api_key, base_url=settings.openai_base_url, max_retries=0)
        return OpenAICompletionAdapter(
            client=client, model=settings.model, max_tokens=settings.max_tokens, max_retries=max_retries
        )

    return AnthropicCompletionAdapter(
        client=AsyncAnthropic(api_key=api_key, max_retries=0),
        model=settings.model,
        max_tokens=settings.max_tokens,
        max_retries=max_retries,
    )
