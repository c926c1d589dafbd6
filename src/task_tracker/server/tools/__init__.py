"""MCP Tool definitions."""

from typing import List

from mcp.types import Tool

from task_tracker.server.tools.task_tools import get_task_tools


def get_all_tools() -> List[Tool]:
    """Get all available MCP tools."""
    return get_task_tools()


__all__ = [
    "get_all_tools",
    "get_task_tools",
]
