"""MCP tool server connection."""

from .wrapper import MCPClientWrapper, result_blocks, result_text

__all__ = ["MCPClientWrapper", "result_blocks", "result_text"]
