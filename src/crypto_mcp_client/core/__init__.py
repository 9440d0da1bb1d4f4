"""Public exports for the core client abstractions and utilities."""

from .base import CompletionBackend
from .config import ClientSettings
from .exceptions import (
    CryptoClientError,
    ConfigurationError,
    ServerConnectionError,
    ToolCallError,
    ToolResultDecodeError,
    CompletionError,
)
from .logger import get_logger, setup_logging
from .messages import (
    TextBlock,
    ToolUseBlock,
    ContentBlock,
    CompletionResponse,
    ConversationMessage,
    UserMessage,
    AssistantMessage,
)
from .tools import ToolDescriptor, ToolCallRequest, ToolCallResult, SchemaValidator, ToolServer
from .driver import ConversationDriver

__all__ = [
    "CompletionBackend",
    "ClientSettings",
    "CryptoClientError",
    "ConfigurationError",
    "ServerConnectionError",
    "ToolCallError",
    "ToolResultDecodeError",
    "CompletionError",
    "get_logger",
    "setup_logging",
    "TextBlock",
    "ToolUseBlock",
    "ContentBlock",
    "CompletionResponse",
    "ConversationMessage",
    "UserMessage",
    "AssistantMessage",
    "ToolDescriptor",
    "ToolCallRequest",
    "ToolCallResult",
    "SchemaValidator",
    "ToolServer",
    "ConversationDriver",
]
