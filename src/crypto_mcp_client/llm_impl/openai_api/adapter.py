from openai import AsyncOpenAI
from openai.types.chat import ChatCompletion, ChatCompletionToolParam
from typing import List, Any, Dict, Iterable, cast
import json

from crypto_mcp_client.core import CompletionBackend, CompletionResponse, ContentBlock, TextBlock, ToolUseBlock
from crypto_mcp_client.core import CompletionError, ToolDescriptor, get_logger
from crypto_mcp_client.core.config import DEFAULT_MAX_TOKENS

logger = get_logger(__name__)


class OpenAICompletionAdapter(CompletionBackend):
    """Completion backend for OpenAI's Chat Completions API (and compatible endpoints).

    The chat format has no structured user content, so tool results fed back as
    content blocks are flattened to text. Function calls come back as
    ``tool_use`` blocks.
    """

    def __init__(
        self,
        client: AsyncOpenAI,
        model: str,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = 1.0,
        max_retries: int = 0,
        base_retry_delay: float = 1.0,
    ):
        """Initialize the OpenAI adapter.

        Args:
            client: The OpenAI client instance.
            model: The name of the model to use.
            max_tokens: Maximum number of tokens to generate.
            temperature: Sampling temperature.
            max_retries: Retries after a failed request. Zero disables retrying.
            base_retry_delay: Delay before the first retry, doubled for each further one.
        """
        super().__init__(model=model, max_tokens=max_tokens, max_retries=max_retries, base_retry_delay=base_retry_delay)
        self.client = client
        self.temperature = temperature

    async def _complete_impl(self, messages: List[Dict[str, Any]], tools: List[ToolDescriptor]) -> CompletionResponse:
        openai_messages = [self._convert_message(message) for message in messages]
        tool_params = [self._convert_tool(tool) for tool in tools] or None

        # The library expects a union of typed message params; plain dicts are structurally compatible.
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=cast(Iterable[Any], openai_messages),
            tools=tool_params,  # type: ignore[arg-type]
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        return self._normalize(response)

    @staticmethod
    def _convert_message(message: Dict[str, Any]) -> Dict[str, Any]:
        """Flatten structured content into the plain string the chat format expects."""
        content = message["content"]
        if isinstance(content, list):
            content = "\n".join(str(block.get("text", "")) for block in content if block.get("type") == "text")
        return {"role": message["role"], "content": content}

    @staticmethod
    def _convert_tool(tool: ToolDescriptor) -> ChatCompletionToolParam:
        return cast(
            ChatCompletionToolParam,
            {
                "type": "function",
                "function": {
                    "name": tool.name,
                    "description": tool.description,
                    "parameters": dict(tool.input_schema),
                },
            },
        )

    @staticmethod
    def _normalize(response: ChatCompletion) -> CompletionResponse:
        """Convert a chat completion into a CompletionResponse.

        Raises:
            CompletionError: If function-call arguments are not a JSON object.
        """
        if not response.choices:
            logger.warning("Completion returned no choices.")
            return CompletionResponse(content=[], model=response.model, raw=response)

        choice = response.choices[0]
        blocks: List[ContentBlock] = []
        if choice.message.content:
            blocks.append(TextBlock(text=choice.message.content))

        for tool_call in choice.message.tool_calls or []:
            if tool_call.type != "function":
                continue
            try:
                arguments = json.loads(tool_call.function.arguments or "{}")
            except json.JSONDecodeError as exc:
                raise CompletionError(
                    f"Failed to decode arguments for tool '{tool_call.function.name}': {exc}"
                ) from exc
            if arguments is None:
                arguments = {}
            if not isinstance(arguments, dict):
                raise CompletionError(
                    f"Arguments for tool '{tool_call.function.name}' must decode to a JSON object."
                )
            blocks.append(ToolUseBlock(id=tool_call.id, name=tool_call.function.name, input=arguments))

        return CompletionResponse(
            content=blocks,
            stop_reason=choice.finish_reason,
            model=response.model,
            raw=response,
        )
