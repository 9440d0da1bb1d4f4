"""Conversation driver: one user query, one completion, at most one round of tool calls."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Tuple

from .base import CompletionBackend
from .exceptions import CryptoClientError
from .logger import get_logger
from .messages import AssistantMessage, CompletionResponse, ConversationMessage, TextBlock, ToolUseBlock, UserMessage
from .tools import ToolCallRequest, ToolCallResult, ToolServer

logger = get_logger(__name__)

EMPTY_RESULT_TEXT = "Success"


class ConversationDriver:
    """Drives one query-response cycle between the user, a completion backend and a tool server.

    Every query starts a fresh message list. Nothing from an earlier query is
    sent with a later one.
    """

    def __init__(self, backend: CompletionBackend, tool_server: ToolServer, attach_prompts: bool = False):
        """
        Args:
            backend: Completion API used for the initial and the follow-up requests.
            tool_server: Connection that executes tool-use requests.
            attach_prompts: Fetch the tool server's prompt of the same name before each
                tool call and pass it along as an extra ``prompt`` argument.
        """
        self.backend = backend
        self.tool_server = tool_server
        self.attach_prompts = attach_prompts
        self._last_exchange: Tuple[ConversationMessage, ...] = ()

    @property
    def history(self) -> Tuple[ConversationMessage, ...]:
        """Messages of the last successful query, empty if the last query failed."""
        return self._last_exchange

    async def process_query(self, query: str) -> str:
        """
        Answers one user query.

        Sends the query plus the tool catalogue to the backend. Text blocks of the
        reply go straight to the output. Every tool-use block is executed on the
        tool server, its raw result is appended as a user-role message and a follow-up
        completion (without tools) provides the model's answer to it. Tool-use blocks
        in follow-up replies are not executed.

        Args:
            query: Text typed by the user.

        Returns:
            All text fragments produced, newline-joined in emission order.

        Raises:
            CompletionError: If a completion request fails.
            ToolCallError: If a tool invocation fails.
            ServerConnectionError: If the tool server is not connected.
        """
        self._last_exchange = ()
        messages: List[ConversationMessage] = [UserMessage(content=query)]
        try:
            answer = await self._process(messages)
        except CryptoClientError as e:
            logger.error("Query failed: %s", e)
            raise
        self._last_exchange = tuple(messages)
        return answer

    async def _process(self, messages: List[ConversationMessage]) -> str:
        response = await self.backend.complete(list(messages), self.tool_server.tools)
        logger.debug("Initial response: %d block(s), stop_reason=%s", len(response.content), response.stop_reason)

        final_text: List[str] = []
        pending_text: List[str] = []

        for block in response.content:
            if isinstance(block, TextBlock):
                final_text.append(block.text)
                pending_text.append(block.text)
            elif isinstance(block, ToolUseBlock):
                self._record_assistant(messages, pending_text)
                pending_text = []

                result = await self._call_tool(block)
                final_text.append(f"Tool {block.name} called with arguments: {json.dumps(block.input)}")
                messages.append(UserMessage(content=self._result_content(result)))

                follow_up = await self.backend.complete(list(messages))
                follow_up_text = self._collect_follow_up(follow_up)
                if follow_up_text:
                    final_text.append(follow_up_text)
                    self._record_assistant(messages, [follow_up_text])

        self._record_assistant(messages, pending_text)
        return "\n".join(final_text)

    async def _call_tool(self, block: ToolUseBlock) -> ToolCallResult:
        arguments: Dict[str, Any] = dict(block.input)
        if self.attach_prompts:
            arguments["prompt"] = await self.tool_server.prompt_text(block.name, block.input)

        logger.info("Model requested tool '%s'.", block.name)
        result = await self.tool_server.invoke(ToolCallRequest(name=block.name, arguments=arguments, call_id=block.id))
        if result.is_error:
            logger.warning("Tool '%s' reported an error: %s", block.name, result.text)
        return result

    @staticmethod
    def _result_content(result: ToolCallResult) -> List[Dict[str, Any]]:
        # completion APIs reject empty text blocks
        content = [block for block in result.content if not (block.get("type") == "text" and not block.get("text"))]
        return content or [{"type": "text", "text": EMPTY_RESULT_TEXT}]

    @staticmethod
    def _collect_follow_up(response: CompletionResponse) -> str:
        if response.tool_use_blocks:
            logger.warning(
                "Follow-up requested %d more tool call(s); nested tool calls are not executed.",
                len(response.tool_use_blocks),
            )
        return "\n".join(block.text for block in response.text_blocks)

    @staticmethod
    def _record_assistant(messages: List[ConversationMessage], fragments: List[str]) -> None:
        text = "\n".join(fragment for fragment in fragments if fragment)
        if text:
            messages.append(AssistantMessage(content=text))
