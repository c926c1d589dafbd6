"""Tests for the MCP server wiring."""

import logging

from task_tracker.server.mcp_server import TaskTrackerMCPServer


def test_server_loads_task_tools():
    server = TaskTrackerMCPServer(owner_id="user-1")
    try:
        assert [tool.name for tool in server._tools] == [
            "task_create",
            "task_list",
            "task_show",
            "task_update",
            "task_delete",
        ]
        assert server._service_executor.owner_id == "user-1"
    finally:
        server.cleanup()


def test_missing_identity_is_logged(caplog):
    with caplog.at_level(logging.WARNING):
        server = TaskTrackerMCPServer()
    server.cleanup()

    assert "No caller identity configured" in caplog.text


def test_cleanup_is_idempotent():
    server = TaskTrackerMCPServer(owner_id="user-1")

    server.cleanup()
    server.cleanup()

    assert server._service_executor is None
