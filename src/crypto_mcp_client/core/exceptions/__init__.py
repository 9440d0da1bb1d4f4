"""Export the client exception hierarchy used across connection, tool and completion paths."""

from .exceptions import (
    CryptoClientError,
    ConfigurationError,
    ServerConnectionError,
    ToolCallError,
    ToolResultDecodeError,
    CompletionError,
)

__all__ = [
    "CryptoClientError",
    "ConfigurationError",
    "ServerConnectionError",
    "ToolCallError",
    "ToolResultDecodeError",
    "CompletionError",
]
