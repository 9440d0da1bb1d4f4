"""Translate Anthropic Messages API payloads into the client's content-block protocol."""

from typing import Any, Dict, List

from anthropic import AsyncAnthropic
from anthropic.types import Message

from crypto_mcp_client.core import CompletionBackend, CompletionResponse, ContentBlock, TextBlock, ToolUseBlock
from crypto_mcp_client.core import ToolDescriptor, get_logger
from crypto_mcp_client.core.config import DEFAULT_MAX_TOKENS, DEFAULT_MODEL

logger = get_logger(__name__)


class AnthropicCompletionAdapter(CompletionBackend):
    """Completion backend for Anthropic's Messages API."""

    def __init__(
        self,
        client: AsyncAnthropic,
        model: str = DEFAULT_MODEL,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        max_retries: int = 0,
        base_retry_delay: float = 1.0,
    ):
        """Initialize the Anthropic adapter.

        Args:
            client: The initialized AsyncAnthropic client.
            model: The model identifier, e.g. 'claude-3-7-sonnet-20250219'.
            max_tokens: Maximum number of tokens to generate.
            max_retries: Retries after a failed request. Zero disables retrying.
            base_retry_delay: Delay before the first retry, doubled for each further one.
        """
        super().__init__(model=model, max_tokens=max_tokens, max_retries=max_retries, base_retry_delay=base_retry_delay)
        self.client = client

    async def _complete_impl(self, messages: List[Dict[str, Any]], tools: List[ToolDescriptor]) -> CompletionResponse:
        request: Dict[str, Any] = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "messages": messages,
        }
        if tools:
            request["tools"] = [tool.to_api() for tool in tools]

        logger.debug("Sending %d message(s) and %d tool(s) to %s", len(messages), len(tools), self.model)
        response = await self.client.messages.create(**request)
        return self._normalize(response)

    @staticmethod
    def _normalize(response: Message) -> CompletionResponse:
        """Convert an Anthropic message into a CompletionResponse.

        Block types other than ``text`` and ``tool_use`` (e.g. thinking) are dropped.
        """
        blocks: List[ContentBlock] = []
        for block in response.content:
            if block.type == "text":
                blocks.append(TextBlock(text=block.text))
            elif block.type == "tool_use":
                blocks.append(ToolUseBlock(id=block.id, name=block.name, input=dict(block.input or {})))
            else:
                logger.debug("Skipping unsupported content block of type '%s'.", block.type)

        return CompletionResponse(
            content=blocks,
            stop_reason=response.stop_reason,
            model=response.model,
            raw=response,
        )
