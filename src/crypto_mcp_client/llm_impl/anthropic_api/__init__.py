"""Expose the Anthropic completion backend."""

from .adapter import AnthropicCompletionAdapter

__all__ = ["AnthropicCompletionAdapter"]
