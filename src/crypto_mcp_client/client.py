"""High-level crypto client: one tool server connection plus one conversation driver."""

import json
from types import TracebackType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type

from anthropic import AsyncAnthropic
from mcp.types import CallToolResult

from .core import (
    ClientSettings,
    CompletionBackend,
    ConfigurationError,
    ConversationDriver,
    CryptoClientError,
    ToolCallError,
    ToolDescriptor,
    ToolResultDecodeError,
    get_logger,
)
from .core.config import DEFAULT_MAX_TOKENS, DEFAULT_MODEL
from .llm_impl import AnthropicCompletionAdapter, create_backend
from .mcp_wrapper import MCPClientWrapper, result_blocks, result_text
from .models import CryptoPrice, ErrorResponse, ToolPayload

logger = get_logger(__name__)


def decode_result(result: CallToolResult) -> Any:
    """Decode the JSON carried in the text content of a tool result.

    A single text block holds the whole payload. Several blocks hold one JSON
    document each and decode to a list.

    Raises:
        ToolResultDecodeError: If there is no text content or it is not valid JSON.
    """
    texts = [block["text"] for block in result_blocks(result) if block.get("text")]
    if not texts:
        raise ToolResultDecodeError("Tool result has no text content.")

    try:
        decoded = [json.loads(text) for text in texts]
    except json.JSONDecodeError as e:
        raise ToolResultDecodeError(f"Tool result is not valid JSON: {e}") from e

    return decoded[0] if len(decoded) == 1 else decoded


class CryptoMcpClient:
    """
    Answers crypto questions by combining an MCP tool server with a language model.

    Usage:
        async with CryptoMcpClient("http://localhost:8000", api_key) as client:
            answer = await client.process_query("What is the price of bitcoin in EUR?")
            price = await client.get_price(ids="bitcoin", vs_currencies="usd,eur")
    """

    def __init__(
        self,
        server_url: str,
        api_key: Optional[str] = None,
        *,
        backend: Optional[CompletionBackend] = None,
        connection: Optional[MCPClientWrapper] = None,
        model: str = DEFAULT_MODEL,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        attach_prompts: bool = False,
    ):
        """
        Args:
            server_url: Base URL of the MCP tool server.
            api_key: Anthropic API key. Required unless ``backend`` is given.
            backend: Completion backend to use instead of the default Anthropic one.
            connection: Tool server connection to use instead of a new SSE connection.
            model: Model for the default backend.
            max_tokens: Token limit for the default backend.
            attach_prompts: Pass the server's prompt template along with each model-requested tool call.

        Raises:
            ConfigurationError: If neither ``backend`` nor ``api_key`` is given.
        """
        self.server_url = server_url
        self.connection = connection or MCPClientWrapper(server_url)

        if backend is None:
            if not api_key:
                msg = "ANTHROPIC_API_KEY is not set"
                logger.error(msg)
                raise ConfigurationError(msg)
            backend = AnthropicCompletionAdapter(
                client=AsyncAnthropic(api_key=api_key, max_retries=0), model=model, max_tokens=max_tokens
            )

        self.backend = backend
        self.driver = ConversationDriver(backend=backend, tool_server=self.connection, attach_prompts=attach_prompts)

    @classmethod
    def from_settings(cls, settings: Optional[ClientSettings] = None, **kwargs: Any) -> "CryptoMcpClient":
        """Build a client from ``ClientSettings`` (read from the environment when omitted)."""
        settings = settings or ClientSettings.from_env()
        return cls(settings.server_url, backend=create_backend(settings), **kwargs)

    async def __aenter__(self) -> "CryptoMcpClient":
        await self.connect()
        return self

    async def __aexit__(
        self, exc_type: Optional[Type[BaseException]], exc_val: Optional[BaseException], exc_tb: Optional[TracebackType]
    ) -> None:
        await self.close()

    @property
    def connected(self) -> bool:
        return self.connection.connected

    @property
    def tools(self) -> Tuple[ToolDescriptor, ...]:
        return self.connection.tools

    async def connect(self) -> None:
        """Connects to the MCP server and loads its tools.

        Raises:
            ServerConnectionError: If the server is unreachable. Not retried.
        """
        await self.connection.connect()

    async def close(self) -> None:
        await self.connection.close()

    async def process_query(self, query: str) -> str:
        """Answers a natural-language question, calling tools as the model requests.

        Raises:
            CryptoClientError: If any step of the chain fails.
        """
        return await self.driver.process_query(query)

    async def get_price(
        self, ids: Optional[str] = None, vs_currencies: str = "usd", symbols: Optional[str] = None
    ) -> CryptoPrice | ErrorResponse:
        """
        Get cryptocurrency prices.

        Args:
            ids: Comma-separated coin ids, e.g. "bitcoin,ethereum".
            vs_currencies: Comma-separated target currencies, e.g. "usd,eur".
            symbols: Comma-separated coin symbols, as an alternative to ``ids``.

        Returns:
            Prices per coin and currency, or ``{"error": ...}``.
        """
        arguments = {"vs_currencies": vs_currencies, "ids": ids, "symbols": symbols}
        return await self._fetch("get_price", arguments, "price data")

    async def get_coin_list(self) -> List[Dict[str, Any]] | ErrorResponse:
        """Get the list of available coins (id, symbol, name), or ``{"error": ...}``."""
        return await self._fetch("get_coin_list", {}, "coin list")

    async def get_market_data(
        self,
        vs_currency: str = "usd",
        ids: Optional[str] = None,
        category: Optional[str] = None,
        order: str = "market_cap_desc",
        per_page: int = 100,
        page: int = 1,
        sparkline: bool = False,
    ) -> List[Dict[str, Any]] | ErrorResponse:
        """
        Get market data for cryptocurrencies.

        Args:
            vs_currency: Currency the prices are quoted in.
            ids: Optional comma-separated coin ids to restrict the result to.
            category: Optional coin category filter.
            order: Sort order, e.g. "market_cap_desc".
            per_page: Rows per page.
            page: Page number, starting at 1.
            sparkline: Include 7-day sparkline data.

        Returns:
            One row per coin, or ``{"error": ...}``.
        """
        arguments = {
            "vs_currency": vs_currency,
            "ids": ids,
            "category": category,
            "order": order,
            "per_page": per_page,
            "page": page,
            "sparkline": sparkline,
        }
        return await self._fetch("get_market_data", arguments, "market data")

    async def get_trending(self) -> Dict[str, Any] | ErrorResponse:
        """Get trending cryptocurrencies (``{"coins": [{"item": ...}]}``), or ``{"error": ...}``."""
        return await self._fetch("get_trending", {}, "trending data")

    async def _fetch(self, tool_name: str, arguments: Mapping[str, Any], what: str) -> ToolPayload:
        arguments = {key: value for key, value in arguments.items() if value is not None}
        try:
            result = await self.connection.call_tool(tool_name, arguments)
            if result.isError:
                raise ToolCallError(result_text(result) or f"Tool '{tool_name}' reported an error.")
            return decode_result(result)
        except CryptoClientError as e:
            logger.error("Error fetching %s: %s", what, e)
            return {"error": f"Failed to fetch {what}: {e}"}
