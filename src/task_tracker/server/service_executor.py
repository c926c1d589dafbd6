"""
Service Executor - Direct service layer execution for MCP tools.

Maps tool names to TaskService calls on behalf of a single caller identity,
checks argument shapes before the service sees them, and renders results
and domain errors as YAML documents with a response status code.
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Optional, Tuple

import yaml
from mcp.types import Tool

from task_tracker.config import get_caller_id
from task_tracker.domain.entities.result_types import DomainErrorType, DomainResult
from task_tracker.server.error_sanitizer import sanitize_error_message
from task_tracker.server.tools import get_all_tools
from task_tracker.services import get_service_factory

logger = logging.getLogger(__name__)

# Domain error kind -> response status code
ERROR_STATUS_CODES = {
    DomainErrorType.VALIDATION_ERROR: 400,
    DomainErrorType.FORBIDDEN: 403,
    DomainErrorType.NOT_FOUND: 404,
    DomainErrorType.CONFLICT: 409,
    DomainErrorType.INTERNAL: 500,
}
UNAUTHENTICATED_STATUS = 401
BAD_REQUEST_STATUS = 400

# field -> (accepted types, required, nullable, allowed values)
FieldSpec = Tuple[Tuple[type, ...], bool, bool, Optional[List[str]]]

JSON_SCHEMA_TYPES: Dict[str, type] = {
    "string": str,
    "boolean": bool,
    "object": dict,
    "array": list,
}


def field_specs(tool: Tool) -> Dict[str, FieldSpec]:
    """Read the accepted argument shapes off a tool's input schema."""
    schema = tool.inputSchema
    required = set(schema.get("required", []))
    specs: Dict[str, FieldSpec] = {}

    for name, prop in schema.get("properties", {}).items():
        declared = prop["type"] if isinstance(prop["type"], list) else [prop["type"]]
        types = tuple(JSON_SCHEMA_TYPES[t] for t in declared if t != "null")
        allowed = None
        if "enum" in prop:
            allowed = [value for value in prop["enum"] if value is not None]
        specs[name] = (types, name in required, "null" in declared, allowed)

    return specs


TOOL_ARGUMENTS: Dict[str, Dict[str, FieldSpec]] = {
    tool.name: field_specs(tool) for tool in get_all_tools()
}


def validate_arguments(tool_name: str, arguments: Dict[str, Any]) -> List[str]:
    """
    Check tool arguments against the declared field shapes.

    Returns:
        List of problems; empty when the arguments are acceptable.
    """
    fields = TOOL_ARGUMENTS[tool_name]
    problems = []

    for name in sorted(set(arguments) - set(fields)):
        problems.append(f"Unexpected argument '{name}'")

    for name, (types, required, nullable, allowed) in fields.items():
        if name not in arguments:
            if required:
                problems.append(f"Missing required argument '{name}'")
            continue

        value = arguments[name]
        if value is None:
            if not nullable:
                problems.append(f"Argument '{name}' cannot be null")
            continue
        if not isinstance(value, types):
            problems.append(f"Argument '{name}' must be a {types[0].__name__}")
            continue
        if allowed is not None and value not in allowed:
            problems.append(f"Argument '{name}' must be one of: {', '.join(allowed)}")

    return problems


class ServiceExecutor:
    """
    Executes MCP tool calls directly via the service layer.

    The executor acts for one caller. The caller is resolved once, from the
    constructor or from TASKTRACK_USER_ID, and is never taken from tool
    arguments.
    """

    def __init__(self, owner_id: Optional[str] = None):
        """Initialize the service executor."""
        self._factory = get_service_factory()
        self._owner_id = owner_id or get_caller_id()
        self._executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="mcp-service-")

        self._tool_handlers: Dict[str, Callable[[str, Dict[str, Any]], str]] = {
            "task_create": self._handle_task_create,
            "task_list": self._handle_task_list,
            "task_show": self._handle_task_show,
            "task_update": self._handle_task_update,
            "task_delete": self._handle_task_delete,
        }

    @property
    def owner_id(self) -> Optional[str]:
        """Caller identity this executor acts for."""
        return self._owner_id

    async def execute_tool(self, tool_name: str, arguments: Optional[Dict[str, Any]]) -> str:
        """
        Execute a tool and return YAML-formatted result.

        Args:
            tool_name: Name of the tool to execute.
            arguments: Tool arguments dictionary.

        Returns:
            YAML-formatted result string.
        """
        handler = self._tool_handlers.get(tool_name)
        if not handler:
            return self._format_error(
                f"Unknown tool: {tool_name}",
                status_code=BAD_REQUEST_STATUS,
                error_type="unknown_tool",
            )

        if not self._owner_id:
            return self._format_error(
                "No caller identity configured",
                status_code=UNAUTHENTICATED_STATUS,
                error_type="unauthenticated",
                suggestions=["Set TASKTRACK_USER_ID to the id of an existing user"],
            )

        arguments = dict(arguments or {})
        problems = validate_arguments(tool_name, arguments)
        if problems:
            return self._format_error(
                "; ".join(problems),
                status_code=BAD_REQUEST_STATUS,
                error_type=DomainErrorType.VALIDATION_ERROR.value,
                reason="invalid_arguments",
            )

        owner_id = self._owner_id
        try:
            # Run handler in thread pool to avoid blocking event loop
            loop = asyncio.get_running_loop()
            return await loop.run_in_executor(
                self._executor, lambda: handler(owner_id, arguments)
            )
        except Exception as e:
            logger.error("Error executing tool %s: %s", tool_name, e, exc_info=True)
            return self._format_error(
                sanitize_error_message(str(e)),
                status_code=ERROR_STATUS_CODES[DomainErrorType.INTERNAL],
                error_type=DomainErrorType.INTERNAL.value,
            )

    def _format_result(self, data: Any) -> str:
        """Format result as YAML."""
        result = {
            "success": True,
            "data": data,
        }
        return yaml.safe_dump(result, default_flow_style=False, allow_unicode=True, sort_keys=False)

    def _format_error(
        self,
        message: str,
        status_code: int,
        error_type: str,
        reason: Optional[str] = None,
        suggestions: Optional[List[str]] = None,
    ) -> str:
        """Format error as YAML."""
        result = {
            "success": False,
            "error": message,
            "error_type": error_type,
            "reason": reason,
            "status_code": status_code,
            "suggestions": suggestions or [],
        }
        return yaml.safe_dump(result, default_flow_style=False, allow_unicode=True, sort_keys=False)

    def _render(self, result: DomainResult[Any]) -> str:
        """Render a domain result, mapping its error kind to a status code."""
        if result.is_success:
            return self._format_result(result.data)

        error_type = result.error_type or DomainErrorType.INTERNAL
        message = result.error_message or "Operation failed"
        if error_type is DomainErrorType.INTERNAL:
            message = sanitize_error_message(message)

        return self._format_error(
            message,
            status_code=ERROR_STATUS_CODES[error_type],
            error_type=error_type.value,
            reason=result.reason,
            suggestions=result.suggestions,
        )

    # --- Task Handlers ---

    def _handle_task_create(self, owner_id: str, args: Dict[str, Any]) -> str:
        """Handle task_create tool."""
        service = self._factory.get_task_service()
        result = service.create_task(
            owner_id,
            title=args["title"],
            description=args.get("description"),
            status=args.get("status"),
        )
        return self._render(result)

    def _handle_task_list(self, owner_id: str, args: Dict[str, Any]) -> str:
        """Handle task_list tool."""
        service = self._factory.get_task_service()
        result = service.list_tasks(
            owner_id,
            status=args.get("status"),
            search=args.get("search"),
        )
        return self._render(result)

    def _handle_task_show(self, owner_id: str, args: Dict[str, Any]) -> str:
        """Handle task_show tool."""
        service = self._factory.get_task_service()
        return self._render(service.get_task(owner_id, args["task_id"]))

    def _handle_task_update(self, owner_id: str, args: Dict[str, Any]) -> str:
        """Handle task_update tool."""
        service = self._factory.get_task_service()
        task_id = args.pop("task_id")
        return self._render(service.update_task(owner_id, task_id, **args))

    def _handle_task_delete(self, owner_id: str, args: Dict[str, Any]) -> str:
        """Handle task_delete tool."""
        service = self._factory.get_task_service()
        return self._render(service.delete_task(owner_id, args["task_id"]))

    def close(self) -> None:
        """Shutdown the executor."""
        self._executor.shutdown(wait=True)
