"""Tests for the tasktrack CLI."""

import json

import pytest
from typer.testing import CliRunner

from task_tracker.cli.app import EXIT_CODES, UNAUTHENTICATED_EXIT_CODE, app
from task_tracker.domain.entities.result_types import DomainErrorType
from task_tracker.services import get_service_factory

runner = CliRunner()


@pytest.fixture
def users():
    repo = get_service_factory().get_user_repository()
    return {name: repo.create(name).data.id for name in ("alice", "bob")}


def invoke_json(user, *args):
    result = runner.invoke(app, ["--user", user, *args, "--format", "json"])
    # Log lines can precede the payload; the JSON document is the last line
    return result, json.loads(result.stdout.strip().splitlines()[-1])


class TestUserCommands:
    """Tests for `tasktrack user`."""

    def test_user_create(self):
        result = runner.invoke(app, ["user", "create", "carol"])

        assert result.exit_code == 0
        assert "User created" in result.stdout

    def test_user_create_json(self):
        result = runner.invoke(app, ["user", "create", "carol", "--format", "json"])

        payload = json.loads(result.stdout.strip().splitlines()[-1])
        assert result.exit_code == 0
        assert payload["data"]["username"] == "carol"
        assert payload["data"]["created_at"].endswith("+00:00")

    def test_duplicate_user_exits_with_conflict(self, users):
        result = runner.invoke(app, ["user", "create", "alice"])
        assert result.exit_code == EXIT_CODES[DomainErrorType.CONFLICT]


class TestTaskCommands:
    """Tests for `tasktrack task`."""

    def test_create_list_show(self, users):
        alice = users["alice"]

        _, created = invoke_json(alice, "task", "create", "Write report", "-d", "Q3")
        task_id = created["data"]["id"]

        _, listed = invoke_json(alice, "task", "list", "--search", "report")
        _, shown = invoke_json(alice, "task", "show", task_id)

        assert created["data"]["status"] == "todo"
        assert [t["id"] for t in listed["data"]] == [task_id]
        assert shown["data"]["description"] == "Q3"

    def test_text_list(self, users):
        alice = users["alice"]
        runner.invoke(app, ["--user", alice, "task", "create", "Buy milk"])

        result = runner.invoke(app, ["--user", alice, "task", "list"])

        assert result.exit_code == 0
        assert "Buy milk" in result.stdout

    def test_user_from_environment(self, users):
        result = runner.invoke(
            app,
            ["task", "create", "From env", "--format", "json"],
            env={"TASKTRACK_USER_ID": users["bob"]},
        )

        assert result.exit_code == 0
        payload = json.loads(result.stdout.strip().splitlines()[-1])
        assert payload["data"]["owner_id"] == users["bob"]

    def test_update_and_delete(self, users):
        alice = users["alice"]
        _, created = invoke_json(alice, "task", "create", "Draft")
        task_id = created["data"]["id"]

        _, updated = invoke_json(alice, "task", "update", task_id, "--status", "done")
        deleted, _ = invoke_json(alice, "task", "delete", task_id)
        again, payload = invoke_json(alice, "task", "delete", task_id)

        assert updated["data"]["status"] == "done"
        assert deleted.exit_code == 0
        assert again.exit_code == EXIT_CODES[DomainErrorType.NOT_FOUND]
        assert payload["error_type"] == "not_found"

    def test_done_on_create_exits_with_validation(self, users):
        result, payload = invoke_json(users["alice"], "task", "create", "Done", "-s", "done")

        assert result.exit_code == EXIT_CODES[DomainErrorType.VALIDATION_ERROR]
        assert payload["reason"] == "done_on_create"

    def test_other_users_task_exits_with_forbidden(self, users):
        _, created = invoke_json(users["alice"], "task", "create", "Private")

        result, payload = invoke_json(users["bob"], "task", "show", created["data"]["id"])

        assert result.exit_code == EXIT_CODES[DomainErrorType.FORBIDDEN]
        assert payload["reason"] == "not_owner"

    def test_missing_user_exits(self):
        result = runner.invoke(app, ["task", "list"])
        assert result.exit_code == UNAUTHENTICATED_EXIT_CODE


def test_db_check():
    result = runner.invoke(app, ["db", "check"])

    assert result.exit_code == 0
    assert "Database OK" in result.stdout
    assert "tasks" in result.stdout
