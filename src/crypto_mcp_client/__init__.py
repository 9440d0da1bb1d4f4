"""Crypto MCP Client - answer crypto price questions with an MCP tool server and a language model."""

from .core import (
    ClientSettings,
    CompletionBackend,
    ConversationDriver,
    ToolDescriptor,
    CryptoClientError,
    ConfigurationError,
    ServerConnectionError,
    ToolCallError,
    ToolResultDecodeError,
    CompletionError,
    get_logger,
    setup_logging,
)
from .mcp_wrapper import MCPClientWrapper
from .llm_impl import AnthropicCompletionAdapter, OpenAICompletionAdapter, create_backend
from .client import CryptoMcpClient
from .chat import ChatSession
from .dashboard import DashboardData, load_dashboard

__all__ = [
    "ClientSettings",
    "CompletionBackend",
    "ConversationDriver",
    "ToolDescriptor",
    "CryptoClientError",
    "ConfigurationError",
    "ServerConnectionError",
    "ToolCallError",
    "ToolResultDecodeError",
    "CompletionError",
    "get_logger",
    "setup_logging",
    "MCPClientWrapper",
    "AnthropicCompletionAdapter",
    "OpenAICompletionAdapter",
    "create_backend",
    "CryptoMcpClient",
    "ChatSession",
    "DashboardData",
    "load_dashboard",
]
