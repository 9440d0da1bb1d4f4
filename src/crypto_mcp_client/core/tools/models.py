from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class ToolDescriptor(BaseModel):
    """
    Describes one callable operation offered by the tool server.

    Descriptors are fetched once per connection and never mutated afterwards.

    Attributes:
        name: The unique name of the tool.
        description: A brief description of what the tool does.
        input_schema: JSON schema (``type: object``) of the tool's arguments.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    input_schema: Dict[str, Any] = Field(default_factory=lambda: {"type": "object", "properties": {}})

    def to_api(self) -> Dict[str, Any]:
        """Render the descriptor as a ``{name, description, input_schema}`` tool definition."""
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": dict(self.input_schema),
        }
