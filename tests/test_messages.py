import pytest
from pydantic import ValidationError

from crypto_mcp_client.core import (
    AssistantMessage,
    CompletionResponse,
    ConversationMessage,
    TextBlock,
    ToolCallResult,
    ToolDescriptor,
    ToolUseBlock,
    UserMessage,
)


def test_message_roles_and_api_shape() -> None:
    user = UserMessage(content="What is the price of bitcoin?")
    assistant = AssistantMessage(content="About $65k.")
    tool_result = UserMessage(content=[{"type": "text", "text": '{"bitcoin": {"usd": 65000}}'}])

    assert user.to_api() == {"role": "user", "content": "What is the price of bitcoin?"}
    assert assistant.to_api() == {"role": "assistant", "content": "About $65k."}
    assert tool_result.to_api()["content"][0]["type"] == "text"


def test_unknown_role_is_rejected() -> None:
    with pytest.raises(ValidationError):
        ConversationMessage(role="system", content="be brief")


def test_completion_response_splits_blocks() -> None:
    response = CompletionResponse(
        content=[
            TextBlock(text="Checking."),
            ToolUseBlock(id="toolu_1", name="get_price", input={"ids": "bitcoin"}),
            TextBlock(text="Done."),
        ]
    )

    assert [block.text for block in response.text_blocks] == ["Checking.", "Done."]
    assert [block.name for block in response.tool_use_blocks] == ["get_price"]


def test_tool_descriptor_is_immutable() -> None:
    tool = ToolDescriptor(name="get_trending", description="Trending coins")

    assert tool.input_schema == {"type": "object", "properties": {}}
    assert tool.to_api() == {
        "name": "get_trending",
        "description": "Trending coins",
        "input_schema": {"type": "object", "properties": {}},
    }
    with pytest.raises(ValidationError):
        tool.name = "other"  # type: ignore[misc]


def test_tool_call_result_text() -> None:
    result = ToolCallResult(
        name="get_price",
        content=[{"type": "text", "text": "a"}, {"type": "image"}, {"type": "text", "text": "b"}],
    )

    assert result.text == "a\nb"
