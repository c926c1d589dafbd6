"""Tests for error message sanitization."""

from task_tracker.server.error_sanitizer import sanitize_error_message, sanitize_exception


class TestSanitizeErrorMessage:
    """Tests for sanitize_error_message."""

    def test_strips_sql_and_parameters(self):
        message = (
            "(sqlite3.OperationalError) disk I/O error\n"
            "[SQL: SELECT tasks.id FROM tasks WHERE tasks.owner_id = ?]\n"
            "[parameters: ('secret-user',)]\n"
            "(Background on this error at: https://sqlalche.me/e/20/e3q8)"
        )

        sanitized = sanitize_error_message(message)

        assert "[REDACTED_SQL]" in sanitized
        assert "[REDACTED_PARAMETERS]" in sanitized
        assert "secret-user" not in sanitized
        assert "sqlalche.me" not in sanitized

    def test_strips_database_urls(self):
        sanitized = sanitize_error_message(
            "could not connect to postgresql+psycopg2://app:hunter2@db:5432/tasks"
        )

        assert "hunter2" not in sanitized
        assert "[REDACTED_DB_CONNECTION]" in sanitized

    def test_strips_file_paths(self):
        sanitized = sanitize_error_message("unable to open /home/alice/.tasktrack/database.db")
        assert sanitized == "unable to open [REDACTED_PATH]"

    def test_strips_credentials(self):
        sanitized = sanitize_error_message("auth failed: password=swordfish")
        assert "swordfish" not in sanitized

    def test_leaves_plain_messages_alone(self):
        assert sanitize_error_message("Task 'abc' not found") == "Task 'abc' not found"


def test_sanitize_exception_keeps_type_name():
    exc = RuntimeError("cannot read /var/lib/tasktrack/database.db")
    assert sanitize_exception(exc) == "RuntimeError: cannot read [REDACTED_PATH]"
