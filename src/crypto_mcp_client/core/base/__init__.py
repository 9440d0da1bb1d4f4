"""Re-export the completion backend interface shared by all providers."""

from .base import CompletionBackend

__all__ = [
    "CompletionBackend",
]
