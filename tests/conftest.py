import json
from typing import Any, Dict, List, Optional, Sequence

import pytest
from unittest.mock import AsyncMock, MagicMock
from mcp.types import CallToolResult, TextContent

from crypto_mcp_client.core import (
    CompletionBackend,
    CompletionResponse,
    TextBlock,
    ToolCallRequest,
    ToolCallResult,
    ToolDescriptor,
    ToolUseBlock,
)
from crypto_mcp_client.mcp_wrapper import MCPClientWrapper

PRICE_PAYLOAD = {"bitcoin": {"usd": 65432.1, "eur": 60321.5}}

ENV_VARS = [
    "CRYPTO_MCP_SERVER_URL",
    "CRYPTO_MCP_PROVIDER",
    "CRYPTO_MCP_MODEL",
    "CRYPTO_MCP_MAX_TOKENS",
    "CRYPTO_MCP_LOG_LEVEL",
    "ANTHROPIC_API_KEY",
    "REACT_APP_ANTHROPIC_API_KEY",
    "OPENAI_API_KEY",
    "OPENAI_BASE_URL",
]


def text_result(*texts: str, is_error: bool = False) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=t) for t in texts], isError=is_error)


def text_response(text: str) -> CompletionResponse:
    return CompletionResponse(content=[TextBlock(text=text)], stop_reason="end_turn")


def tool_use_response(name: str, arguments: Dict[str, Any], call_id: str = "toolu_1", text: Optional[str] = None) -> CompletionResponse:
    blocks: List[Any] = [TextBlock(text=text)] if text else []
    blocks.append(ToolUseBlock(id=call_id, name=name, input=arguments))
    return CompletionResponse(content=blocks, stop_reason="tool_use")


class ScriptedBackend(CompletionBackend):
    """Completion backend that replays queued responses and records every request."""

    def __init__(self, *responses: Any) -> None:
        super().__init__(model="test-model", max_tokens=100)
        self.responses = list(responses)
        self.calls: List[Dict[str, Any]] = []

    async def _complete_impl(self, messages: List[Dict[str, Any]], tools: List[ToolDescriptor]) -> CompletionResponse:
        self.calls.append({"messages": messages, "tools": tools})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeToolServer:
    """Tool server double holding a fixed catalogue and scripted results."""

    def __init__(self, tools: Sequence[ToolDescriptor] = (), result: Optional[ToolCallResult] = None) -> None:
        self._tools = tuple(tools)
        self.invoke = AsyncMock(
            side_effect=lambda request: result
            or ToolCallResult(
                name=request.name,
                content=[{"type": "text", "text": json.dumps(PRICE_PAYLOAD)}],
                call_id=request.call_id,
            )
        )
        self.prompt_text = AsyncMock(return_value="Answer with the price only.")

    @property
    def tools(self) -> Sequence[ToolDescriptor]:
        return self._tools


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def price_tool() -> ToolDescriptor:
    return ToolDescriptor(
        name="get_price",
        description="Get the current price of coins.",
        input_schema={
            "type": "object",
            "properties": {
                "ids": {"type": "string"},
                "vs_currencies": {"type": "string"},
            },
            "required": ["vs_currencies"],
        },
    )


@pytest.fixture
def tool_server(price_tool: ToolDescriptor) -> FakeToolServer:
    return FakeToolServer(tools=[price_tool])


@pytest.fixture
def mock_session() -> Any:
    session = AsyncMock()
    session.initialize = AsyncMock()
    # Ensure context manager returns the session itself
    session.__aenter__.return_value = session
    return session


@pytest.fixture
def mock_connection() -> Any:
    connection = MagicMock(spec=MCPClientWrapper)
    connection.connected = False
    connection.tools = ()
    connection.connect = AsyncMock()
    connection.close = AsyncMock()
    connection.call_tool = AsyncMock(return_value=text_result(json.dumps(PRICE_PAYLOAD)))
    return connection
