"""Core abstractions for completion-API backends."""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Callable, Coroutine, Dict, List, Optional, Sequence

from ..exceptions import CompletionError
from ..logger import get_logger
from ..messages import CompletionResponse, ConversationMessage
from ..tools.models import ToolDescriptor

logger = get_logger(__name__)


class CompletionBackend(ABC):
    """Abstract base class for completion-API backends.

    Implementations translate the conversation messages and tool catalogue into
    a provider request and normalise the reply into ``text`` / ``tool_use``
    content blocks. Every failure surfaces as ``CompletionError``.

    Retries are off by default (``max_retries=0``): a failed request ends the
    current query attempt.
    """

    def __init__(self, model: str, max_tokens: int, max_retries: int = 0, base_retry_delay: float = 1.0):
        self.model = model
        self.max_tokens = max_tokens
        self.max_retries = max(0, max_retries)
        self.base_retry_delay = base_retry_delay

    async def _execute_with_retry(
        self,
        func: Callable[..., Coroutine[Any, Any, CompletionResponse]],
        *args: Any,
        **kwargs: Any,
    ) -> CompletionResponse:
        """
        Executes a request function with optional retry logic.

        Args:
            func: The asynchronous function to execute.
            *args: Positional arguments for the function.
            **kwargs: Keyword arguments for the function.

        Returns:
            The result of the function call.

        Raises:
            CompletionError: The last encountered error once all attempts are used up.
        """
        delay = self.base_retry_delay
        for attempt in range(self.max_retries + 1):
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                if attempt == self.max_retries:
                    logger.error("Completion request failed: %s", e)
                    if isinstance(e, CompletionError):
                        raise
                    raise CompletionError(f"Completion request failed: {e}") from e

                logger.warning(
                    "API Error (Retry: %d/%d): %s. Waiting %ss...", attempt + 1, self.max_retries, e, delay
                )
                await asyncio.sleep(delay)
                delay *= 2  # Exponential backoff

    async def complete(
        self,
        messages: Sequence[ConversationMessage],
        tools: Optional[Sequence[ToolDescriptor]] = None,
    ) -> CompletionResponse:
        """
        Sends the conversation to the provider and returns the normalised reply.

        Args:
            messages: The messages of the current query, oldest first.
            tools: Tool catalogue offered to the model. ``None`` or empty sends no tools.

        Returns:
            The reply as ordered content blocks.

        Raises:
            CompletionError: If the provider call fails or its reply cannot be normalised.
        """
        payload = [message.to_api() for message in messages]
        return await self._execute_with_retry(self._complete_impl, payload, list(tools or []))

    @abstractmethod
    async def _complete_impl(
        self, messages: List[Dict[str, Any]], tools: List[ToolDescriptor]
    ) -> CompletionResponse:
        pass
