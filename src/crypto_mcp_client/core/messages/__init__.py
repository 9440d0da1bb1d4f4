"""Expose provider-agnostic message and content-block types shared by completion backends."""

from .models import (
    TextBlock,
    ToolUseBlock,
    ContentBlock,
    CompletionResponse,
    ConversationMessage,
    UserMessage,
    AssistantMessage,
)

__all__ = [
    "TextBlock",
    "ToolUseBlock",
    "ContentBlock",
    "CompletionResponse",
    "ConversationMessage",
    "UserMessage",
    "AssistantMessage",
]
