"""Provider-agnostic message and content-block models for one chat session."""

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class TextBlock(BaseModel):
    """Plain text emitted by the model."""

    type: Literal["text"] = "text"
    text: str


class ToolUseBlock(BaseModel):
    """A request from the model to invoke a named tool.

    Attributes:
        id: Provider-assigned identifier of the request.
        name: Name of the tool to invoke.
        input: Argument object for the tool.
    """

    type: Literal["tool_use"] = "tool_use"
    id: str
    name: str
    input: Dict[str, Any] = Field(default_factory=dict)


ContentBlock = Union[TextBlock, ToolUseBlock]


class CompletionResponse(BaseModel):
    """Normalized completion output returned by every backend.

    Attributes:
        content: Ordered content blocks of the reply.
        stop_reason: Why the model stopped, as reported by the provider.
        model: Model that produced the reply.
        raw: Provider-specific response payload for advanced use cases.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    content: List[ContentBlock] = Field(default_factory=list)
    stop_reason: Optional[str] = None
    model: Optional[str] = None
    raw: Any = None

    @property
    def text_blocks(self) -> List[TextBlock]:
        return [block for block in self.content if isinstance(block, TextBlock)]

    @property
    def tool_use_blocks(self) -> List[ToolUseBlock]:
        return [block for block in self.content if isinstance(block, ToolUseBlock)]


class ConversationMessage(BaseModel):
    """One message of a query-response cycle.

    Attributes:
        role: Author of the message.
        content: Either plain text or a list of structured content blocks
            (e.g. the text blocks of a tool result).
    """

    role: Literal["user", "assistant"]
    content: Union[str, List[Dict[str, Any]]]

    def to_api(self) -> Dict[str, Any]:
        """Render the message in the ``{role, content}`` shape completion APIs accept."""
        return {"role": self.role, "content": self.content}


class UserMessage(ConversationMessage):
    """Message authored by the end user, or a tool result fed back on their behalf."""

    role: Literal["user"] = "user"


class AssistantMessage(ConversationMessage):
    """Message authored by the model."""

    role: Literal["assistant"] = "assistant"
