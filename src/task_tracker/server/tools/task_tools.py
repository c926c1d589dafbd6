"""Task MCP tool definitions."""

from typing import List

from mcp.types import Tool

from task_tracker.domain.entities.task import TaskStatus

STATUS_VALUES = TaskStatus.values()

ERROR_FORMAT = """ERROR FORMAT:
```yaml
success: false
error: Human readable message
error_type: validation_error | not_found | forbidden | conflict | internal
reason: machine_usable_reason
status_code: 400 | 403 | 404 | 409 | 500
```"""


def get_task_tools() -> List[Tool]:
    """Get task management MCP tools."""
    return [
        Tool(
            name="task_create",
            description=f"""Create a new task owned by the current user.

Parameters:
- title (required): Task title, must not be blank
- description (optional): Task description
- status (optional): "todo" (default) or "in-progress".
  A task cannot be created as "done"; create it, then use task_update.

Returns: Created task with ID.

RESPONSE FORMAT:
```yaml
success: true
data:
  id: <task-id>           # ← use for task_show, task_update, task_delete
  owner_id: <user-id>
  title: Task title
  description: null
  status: todo
  created_at: ...
  updated_at: ...
```

{ERROR_FORMAT}""",
            inputSchema={
                "type": "object",
                "properties": {
                    "title": {"type": "string", "description": "Task title"},
                    "description": {
                        "type": ["string", "null"],
                        "description": "Task description",
                    },
                    "status": {
                        "type": "string",
                        "enum": [s for s in STATUS_VALUES if s != TaskStatus.DONE.value],
                        "description": "Initial status",
                    },
                },
                "required": ["title"],
            },
        ),
        Tool(
            name="task_list",
            description="""List the current user's tasks.

Parameters:
- status (optional): Only tasks with exactly this status
- search (optional): Case-insensitive substring of the title

Both filters can be combined. Order is not guaranteed.

Returns: List of tasks.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "status": {
                        "type": ["string", "null"],
                        "enum": [*STATUS_VALUES, None],
                        "description": "Filter by status",
                    },
                    "search": {
                        "type": ["string", "null"],
                        "description": "Case-insensitive title search",
                    },
                },
            },
        ),
        Tool(
            name="task_show",
            description=f"""Show one of the current user's tasks.

Parameters:
- task_id (required): Task ID

Returns not_found for unknown IDs and forbidden for tasks owned by someone else.

{ERROR_FORMAT}""",
            inputSchema={
                "type": "object",
                "properties": {
                    "task_id": {"type": "string", "description": "Task ID"},
                },
                "required": ["task_id"],
            },
        ),
        Tool(
            name="task_update",
            description=f"""Update fields of one of the current user's tasks.

Parameters:
- task_id (required): Task ID
- title (optional): New title
- description (optional): New description (null clears it)
- status (optional): "todo", "in-progress" or "done"

Only the supplied fields change.

Returns: Updated task.

{ERROR_FORMAT}""",
            inputSchema={
                "type": "object",
                "properties": {
                    "task_id": {"type": "string", "description": "Task ID"},
                    "title": {"type": "string", "description": "New title"},
                    "description": {
                        "type": ["string", "null"],
                        "description": "New description",
                    },
                    "status": {
                        "type": "string",
                        "enum": STATUS_VALUES,
                        "description": "New status",
                    },
                },
                "required": ["task_id"],
            },
        ),
        Tool(
            name="task_delete",
            description=f"""Delete one of the current user's tasks.

Parameters:
- task_id (required): Task ID

Returns: Confirmation with the deleted task ID.

{ERROR_FORMAT}""",
            inputSchema={
                "type": "object",
                "properties": {
                    "task_id": {"type": "string", "description": "Task ID"},
                },
                "required": ["task_id"],
            },
        ),
    ]
