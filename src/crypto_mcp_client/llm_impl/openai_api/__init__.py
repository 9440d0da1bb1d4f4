"""Expose the OpenAI-compatible completion backend."""

from .adapter import OpenAICompletionAdapter

__all__ = ["OpenAICompletionAdapter"]
