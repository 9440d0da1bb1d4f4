"""Data models for tool execution."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class ToolCallRequest:
    """Represents a normalized tool call request from a completion response."""

    name: str
    arguments: Dict[str, Any]
    call_id: Optional[str] = None


@dataclass(frozen=True)
class ToolCallResult:
    """Represents the outcome of executing a tool call on the tool server.

    ``content`` holds the result's content blocks as plain dictionaries
    (``{"type": "text", "text": ...}`` etc.), ready to be embedded verbatim
    into the next outgoing message.
    """

    name: str
    content: List[Dict[str, Any]] = field(default_factory=list)
    is_error: bool = False
    call_id: Optional[str] = None

    @property
    def text(self) -> str:
        """Newline-joined text of all text blocks."""
        return "\n".join(block.get("text", "") for block in self.content if block.get("type") == "text")
