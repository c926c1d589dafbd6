"""Pytest configuration and fixtures."""

import contextlib
import os
import shutil
import tempfile
from typing import Generator

import pytest

from task_tracker.database.orm_manager import ORMManager, reset_orm_manager
from task_tracker.services.service_factory import reset_service_factory

ENV_VARS = ("TASKTRACK_DB_PATH", "TASKTRACK_DATABASE_URL", "TASKTRACK_USER_ID")


@pytest.fixture(scope="function", autouse=True)
def reset_singletons():
    """Reset singletons and set up test database before each test."""
    # Create a unique temp database for this test
    tmpdir = tempfile.mkdtemp()
    db_path = os.path.join(tmpdir, "test.db")

    old_env = {name: os.environ.get(name) for name in ENV_VARS}

    # Set env var BEFORE resetting singletons
    os.environ["TASKTRACK_DB_PATH"] = db_path
    os.environ.pop("TASKTRACK_DATABASE_URL", None)
    os.environ.pop("TASKTRACK_USER_ID", None)

    reset_orm_manager()
    reset_service_factory()

    yield

    reset_orm_manager()
    reset_service_factory()

    for name, value in old_env.items():
        if value is not None:
            os.environ[name] = value
        else:
            os.environ.pop(name, None)

    with contextlib.suppress(Exception):
        shutil.rmtree(tmpdir)


@pytest.fixture
def temp_db_path() -> Generator[str, None, None]:
    """Get the test database path."""
    yield os.environ["TASKTRACK_DB_PATH"]


@pytest.fixture
def orm_manager(temp_db_path: str) -> Generator[ORMManager, None, None]:
    """Create an ORM manager with a temporary database."""
    manager = ORMManager(temp_db_path)
    yield manager
    manager.close()


@pytest.fixture
def task_repo(orm_manager: ORMManager):
    """Create a task repository."""
    from task_tracker.database.repositories import TaskRepository

    return TaskRepository(orm_manager)


@pytest.fixture
def user_repo(orm_manager: ORMManager):
    """Create a user repository."""
    from task_tracker.database.repositories import UserRepository

    return UserRepository(orm_manager)


@pytest.fixture
def task_service(task_repo):
    """Create a task service."""
    from task_tracker.services import TaskService

    return TaskService(task_repo=task_repo)


@pytest.fixture
def alice(user_repo) -> str:
    """ID of a registered user."""
    return user_repo.create("alice").data.id


@pytest.fixture
def bob(user_repo) -> str:
    """ID of a second registered user."""
    return user_repo.create("bob").data.id
