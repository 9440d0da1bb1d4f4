"""Protocol the conversation driver uses to reach a tool server."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .call_protocol import ToolCallRequest, ToolCallResult
from .models import ToolDescriptor


class ToolServer(Protocol):
    """
    Protocol for the connection the driver sends tool invocations through.
    """

    @property
    def tools(self) -> Sequence[ToolDescriptor]:
        """Tool descriptors offered to the model."""
        ...

    async def invoke(self, request: ToolCallRequest) -> ToolCallResult:
        """Runs one tool call and returns its result content."""
        ...

    async def prompt_text(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> str:
        """Fetches the prompt template of the same name, rendered as text."""
        ...
