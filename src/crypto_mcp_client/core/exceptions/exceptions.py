"""
Custom exception classes for the crypto MCP client.

Errors fall into three categories: connection failure (tool server
unreachable or handshake failed), tool-call failure and completion-API
failure. Each is caught at its call site and turned into an error-shaped
value or an error string for the end user.
"""


class CryptoClientError(Exception):
    """Base exception for all client errors."""

    pass


class ConfigurationError(CryptoClientError):
    """Raised when required configuration (e.g. an API key) is missing or invalid."""

    pass


class ServerConnectionError(CryptoClientError, ConnectionError):
    """Raised when the tool server cannot be reached or the handshake fails."""

    pass


class ToolCallError(CryptoClientError):
    """Raised when a tool invocation on the tool server fails."""

    pass


class ToolResultDecodeError(ToolCallError):
    """Raised when a tool result does not carry the expected JSON payload."""

    pass


class CompletionError(CryptoClientError):
    """Raised when the language-model completion API fails."""

    pass
