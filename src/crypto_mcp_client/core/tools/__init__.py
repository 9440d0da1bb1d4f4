"""Tool descriptors, the tool-call protocol and schema handling."""

from .models import ToolDescriptor
from .call_protocol import ToolCallRequest, ToolCallResult
from .schema_validator import SchemaValidator
from .adapter import ToolServer

__all__ = ["ToolDescriptor", "ToolCallRequest", "ToolCallResult", "SchemaValidator", "ToolServer"]
