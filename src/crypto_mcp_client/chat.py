"""Chat-box contract: send a question, always get text back."""

from .client import CryptoMcpClient
from .core import CryptoClientError, get_logger

logger = get_logger(__name__)


class ChatSession:
    """Front end for a chat box.

    Connects on the first message and reuses the connection afterwards. Failures
    never escape: they come back as ``"Error: <reason>"`` so the UI can show them
    in place of an answer.
    """

    def __init__(self, client: CryptoMcpClient):
        self.client = client
        self.last_response = ""

    async def send(self, query: str) -> str:
        """Answers ``query`` or describes why it could not be answered."""
        if not query.strip():
            self.last_response = "Error: Query must not be empty."
            return self.last_response

        try:
            if not self.client.connected:
                await self.client.connect()
            self.last_response = await self.client.process_query(query)
        except CryptoClientError as e:
            logger.error("Chat query failed: %s", e)
            self.last_response = f"Error: {e}"
        return self.last_response

    async def close(self) -> None:
        await self.client.close()
