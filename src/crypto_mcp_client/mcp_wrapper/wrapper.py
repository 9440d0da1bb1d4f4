"""Connect to an MCP tool server over SSE and expose its tools as immutable descriptors."""

import logging
from contextlib import AsyncExitStack
from types import TracebackType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type, cast

from mcp import ClientSession
from mcp.client.sse import sse_client
from mcp.types import (
    CallToolResult,
    EmbeddedResource,
    GetPromptResult,
    ImageContent,
    Implementation,
    TextContent,
    Tool as MCPTool,
)

from crypto_mcp_client.core import SchemaValidator, ToolCallRequest, ToolCallResult, ToolDescriptor
from crypto_mcp_client.core.exceptions import CryptoClientError, ServerConnectionError, ToolCallError

logger = logging.getLogger(__name__)

__all__ = ["MCPClientWrapper", "result_blocks", "result_text"]


def result_blocks(result: CallToolResult) -> List[Dict[str, Any]]:
    """Flatten MCP content into text blocks that can be embedded in a user message.

    Args:
        result: The raw tool result.

    Returns:
        One ``{"type": "text", "text": ...}`` block per MCP content item.
    """
    blocks: List[Dict[str, Any]] = []
    for c in result.content or []:
        if c.type == "text":
            text = cast(TextContent, c).text
        elif c.type == "image":
            text = f"[Image: {cast(ImageContent, c).mimeType}]"
        elif c.type == "resource":
            resource = cast(EmbeddedResource, c).resource
            text = getattr(resource, "text", None) or f"[Resource: {resource.uri}]"
        else:
            text = f"[Unknown content type: {c.type}]"
        blocks.append({"type": "text", "text": text})
    return blocks


def result_text(result: CallToolResult) -> str:
    """Newline-joined text of a tool result."""
    return "\n".join(block["text"] for block in result_blocks(result))


class MCPClientWrapper:
    """Streaming (SSE) connection to a remote MCP tool server.

    The tool list is fetched once in ``connect()`` and cached for the lifetime of
    the connection. Nothing is retried: a failed connect or tool call is reported
    to the caller, who decides what to show the user.
    """

    def __init__(
        self,
        server_url: str,
        name: str = "crypto-mcp-client",
        version: str = "1.0.0",
        headers: Optional[Dict[str, str]] = None,
    ):
        """Initializes the wrapper for a tool server.

        Args:
            server_url: Base URL of the server. The SSE endpoint is ``<server_url>/sse``.
            name: Client name announced during the handshake.
            version: Client version announced during the handshake.
            headers: Optional extra HTTP headers for the SSE request.
        """
        self.server_url = server_url.rstrip("/")
        self.client_name = name
        self.client_version = version
        self._headers = headers
        self._session: Optional[ClientSession] = None
        self._exit_stack: Optional[AsyncExitStack] = None
        self._tools: Tuple[ToolDescriptor, ...] = ()

    @property
    def sse_url(self) -> str:
        return f"{self.server_url}/sse"

    @property
    def connected(self) -> bool:
        return self._session is not None

    @property
    def tools(self) -> Tuple[ToolDescriptor, ...]:
        """Tool descriptors fetched during ``connect()``. Empty until connected."""
        return self._tools

    async def __aenter__(self) -> "MCPClientWrapper":
        await self.connect()
        return self

    async def __aexit__(
        self, exc_type: Optional[Type[BaseException]], exc_val: Optional[BaseException], exc_tb: Optional[TracebackType]
    ) -> None:
        await self.close()

    async def connect(self) -> None:
        """Opens the SSE transport, performs the handshake and loads the tool list.

        Calling ``connect()`` on an open connection is a no-op.

        Raises:
            ServerConnectionError: If the endpoint is unreachable, the handshake
                fails or the tool list cannot be retrieved.
        """
        if self._session is not None:
            logger.debug("Already connected to %s.", self.sse_url)
            return

        logger.debug("Opening SSE transport to %s...", self.sse_url)
        exit_stack = AsyncExitStack()
        try:
            read, write = await exit_stack.enter_async_context(sse_client(self.sse_url, headers=self._headers))
            client_info = Implementation(name=self.client_name, version=self.client_version)
            session = await exit_stack.enter_async_context(ClientSession(read, write, client_info=client_info))
            await session.initialize()
            logger.info("Connected using SSE transport.")

            tools = await self._load_tools(session)
        except Exception as e:
            logger.error("Failed to connect to MCP server at %s: %s", self.sse_url, e)
            await self._close_quietly(exit_stack)
            if isinstance(e, ServerConnectionError):
                raise
            raise ServerConnectionError(f"Failed to connect to MCP server at {self.sse_url}: {e}") from e

        self._exit_stack = exit_stack
        self._session = session
        self._tools = tools
        logger.info("Connected to server with tools: %s", [tool.name for tool in tools])

    async def close(self) -> None:
        """Cleanly closes the session and the transport."""
        if self._exit_stack is None:
            return
        logger.debug("Closing MCP client session...")
        exit_stack, self._exit_stack = self._exit_stack, None
        self._session = None
        self._tools = ()
        await exit_stack.aclose()
        logger.info("MCP client session closed.")

    async def call_tool(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> CallToolResult:
        """Invokes a tool on the server and returns the raw result.

        No timeout is applied: a hung remote call blocks until the transport gives up.

        Args:
            name: Name of the tool.
            arguments: Key-value argument mapping.

        Returns:
            The raw MCP tool result. ``isError`` is set when the tool itself reported a failure.

        Raises:
            ServerConnectionError: If called before ``connect()``.
            ToolCallError: If the request fails in transport or protocol.
        """
        session = self._require_session()
        logger.info("Delegating tool '%s' to MCP Server...", name)
        logger.debug("Tool arguments: %s", arguments)

        try:
            result = await session.call_tool(name, arguments=dict(arguments or {}))
        except Exception as e:
            logger.error("Tool '%s' failed: %s", name, e)
            raise ToolCallError(f"Tool '{name}' failed: {e}") from e

        if logger.isEnabledFor(logging.DEBUG):
            text = result_text(result)
            logger.debug("Tool '%s' result: %s", name, text[:200] + "..." if len(text) > 200 else text)
        return result

    async def invoke(self, request: ToolCallRequest) -> ToolCallResult:
        """Runs a normalized tool call request and wraps the outcome."""
        result = await self.call_tool(request.name, request.arguments)
        return ToolCallResult(
            name=request.name,
            content=result_blocks(result),
            is_error=bool(result.isError),
            call_id=request.call_id,
        )

    async def get_prompt(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> GetPromptResult:
        """Fetches a prompt template from the server.

        MCP prompt arguments are strings, so values are stringified.

        Raises:
            ServerConnectionError: If called before ``connect()``.
            ToolCallError: If the server rejects the request.
        """
        session = self._require_session()
        string_args = {key: str(value) for key, value in (arguments or {}).items() if value is not None}
        try:
            prompt = await session.get_prompt(name, arguments=string_args)
        except Exception as e:
            logger.error("Prompt '%s' could not be fetched: %s", name, e)
            raise ToolCallError(f"Prompt '{name}' could not be fetched: {e}") from e
        logger.debug("Prompt template for '%s': %s", name, prompt)
        return prompt

    async def prompt_text(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> str:
        """Fetches a prompt template and renders its text messages, one per line."""
        prompt = await self.get_prompt(name, arguments)
        lines = [message.content.text for message in prompt.messages if isinstance(message.content, TextContent)]
        return "\n".join(lines)

    def _require_session(self) -> ClientSession:
        if self._session is None:
            raise ServerConnectionError("MCP Client is not connected. Call 'connect()' first.")
        return self._session

    @staticmethod
    async def _load_tools(session: ClientSession) -> Tuple[ToolDescriptor, ...]:
        logger.debug("Fetching tools from MCP server...")
        result = await session.list_tools()
        logger.info("Found %d tools from MCP server.", len(result.tools))
        return tuple(MCPClientWrapper._describe(tool) for tool in result.tools)

    @staticmethod
    def _describe(tool: MCPTool) -> ToolDescriptor:
        try:
            schema = SchemaValidator.to_input_schema(tool.inputSchema)
        except CryptoClientError as e:
            raise ServerConnectionError(f"Tool '{tool.name}' has an unusable schema: {e}") from e
        return ToolDescriptor(
            name=tool.name,
            description=tool.description or f"Tool {tool.name} provided by MCP server.",
            input_schema=schema,
        )

    @staticmethod
    async def _close_quietly(exit_stack: AsyncExitStack) -> None:
        try:
            await exit_stack.aclose()
        except Exception as e:
            logger.debug("Error while closing half-open transport: %s", e)
