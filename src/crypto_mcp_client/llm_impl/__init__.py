"""Collect concrete completion backends and the factory that picks one from the settings."""

from .anthropic_api import AnthropicCompletionAdapter
from .openai_api import OpenAICompletionAdapter
from .factory import create_backend

__all__ = [
    "AnthropicCompletionAdapter",
    "OpenAICompletionAdapter",
    "create_backend",
]
