"""
Task Tracker MCP Server Implementation.

Exposes the task service as MCP tools over stdio. The server acts for the
user named by TASKTRACK_USER_ID.
"""

import asyncio
import atexit
import logging
from typing import Any, Dict, List, Optional

from mcp.server import Server
from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, ErrorData, TextContent, Tool

from task_tracker import __version__
from task_tracker.config import configure_logging, is_debug_mode
from task_tracker.database.orm_manager import get_orm_manager, reset_orm_manager
from task_tracker.server.error_sanitizer import sanitize_exception
from task_tracker.server.service_executor import ServiceExecutor
from task_tracker.server.tools import get_all_tools
from task_tracker.services.service_factory import reset_service_factory

logger = logging.getLogger(__name__)

SERVER_INSTRUCTIONS = """Task Tracker - personal task management

Every tool acts for the current user; tasks owned by other users cannot be
read, changed or deleted (forbidden), and unknown IDs report not_found.

Basic Workflow:
1. Create a task: task_create(title="Write report")
2. Find tasks: task_list(status="todo", search="report")
3. Start work: task_update(task_id="...", status="in-progress")
4. Finish: task_update(task_id="...", status="done")
5. Clean up: task_delete(task_id="...")

Statuses: todo, in-progress, done. New tasks cannot start as done.
"""


class TaskTrackerMCPServer:
    """
    MCP server implementation for Task Tracker.

    Wires the MCP protocol handlers to a ServiceExecutor bound to the
    configured caller.
    """

    def __init__(self, owner_id: Optional[str] = None):
        """Initialize the Task Tracker MCP server."""
        self._server = Server(
            name="task-tracker",
            version=__version__,
            instructions=SERVER_INSTRUCTIONS,
        )

        logger.info("Initializing database...")
        try:
            self._orm_manager = get_orm_manager()
            health = self._orm_manager.perform_health_check()
            if health.get("healthy"):
                logger.info("Database initialized: %s tables", health.get("table_count", 0))
            else:
                logger.warning("Database health check failed: %s", health.get("error"))
        except Exception as e:
            logger.error("Failed to initialize database: %s", e, exc_info=True)
            raise RuntimeError(f"Database initialization failed: {e}") from e

        self._service_executor = ServiceExecutor(owner_id=owner_id)
        if self._service_executor.owner_id is None:
            logger.warning("No caller identity configured; every tool call will be rejected")

        self._tools = get_all_tools()
        logger.info("Loaded %d tools", len(self._tools))

        self._register_handlers()
        atexit.register(self.cleanup)

        logger.info("TaskTrackerMCPServer initialized")

    def _register_handlers(self) -> None:
        """Register MCP protocol handlers."""

        @self._server.list_tools()
        async def handle_list_tools() -> List[Tool]:
            """Handle list_tools request."""
            logger.debug("Handling list_tools request")
            return self._tools

        @self._server.call_tool()
        async def handle_call_tool(name: str, arguments: Dict[str, Any]) -> List[TextContent]:
            """Handle call_tool request."""
            logger.debug("Handling call_tool: %s", name)

            try:
                result_text = await self._service_executor.execute_tool(name, arguments)
                if is_debug_mode():
                    preview = result_text[:200] + "..." if len(result_text) > 200 else result_text
                    logger.debug("Tool result preview: %s", preview)
                return [TextContent(type="text", text=result_text)]

            except Exception as e:
                logger.error("Error executing tool '%s': %s", name, e, exc_info=True)
                error_data = ErrorData(
                    code=INTERNAL_ERROR,
                    message=sanitize_exception(e),
                    data={"tool_name": name},
                )
                raise McpError(error_data) from e

        logger.debug("MCP protocol handlers registered")

    async def run(self, read_stream: Any, write_stream: Any, initialization_options: Any) -> None:
        """Run the MCP server with the provided streams."""
        logger.info("Starting MCP server main loop")

        try:
            await self._server.run(read_stream, write_stream, initialization_options)
        except Exception as e:
            logger.error("Error in MCP server main loop: %s", e, exc_info=True)
            raise
        finally:
            logger.info("MCP server main loop ended")
            self.cleanup()

    def create_initialization_options(self) -> Any:
        """Create initialization options for the MCP server."""
        return self._server.create_initialization_options()

    def cleanup(self) -> None:
        """Cleanup resources on shutdown."""
        if getattr(self, "_service_executor", None) is not None:
            self._service_executor.close()
            self._service_executor = None

        if getattr(self, "_orm_manager", None) is not None:
            reset_service_factory()
            reset_orm_manager()
            self._orm_manager = None

        logger.info("Cleanup complete")


async def run_server() -> None:
    """Run the MCP server with stdio transport."""
    from mcp.server.stdio import stdio_server

    server = TaskTrackerMCPServer()

    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def main() -> None:
    """Entry point for the MCP server."""
    configure_logging()
    try:
        asyncio.run(run_server())
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception as e:
        logger.error("Server error: %s", e, exc_info=True)
        raise


if __name__ == "__main__":
    main()
