"""
ORM Manager - Centralized database connection and session management.

Provides singleton access to database connections with proper session lifecycle.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, Generator, Optional

from sqlalchemy import create_engine, event, inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from task_tracker.config import (
    POOL_RECYCLE_SECONDS,
    POOL_SIZE,
    POOL_TIMEOUT_SECONDS,
    get_database_url,
    get_default_db_path,
)
from task_tracker.database.models import Base

logger = logging.getLogger(__name__)

# Module-level singleton
_global_orm_manager: Optional["ORMManager"] = None
_global_lock = threading.Lock()


def get_orm_manager(db_path: Optional[str] = None) -> "ORMManager":
    """
    Get the singleton ORM manager instance.

    Args:
        db_path: Optional database path. Uses configuration if not provided.

    Returns:
        ORMManager singleton instance.
    """
    global _global_orm_manager

    with _global_lock:
        if _global_orm_manager is None:
            _global_orm_manager = ORMManager(db_path)
        return _global_orm_manager


def reset_orm_manager() -> None:
    """Reset the global ORM manager (for testing)."""
    global _global_orm_manager

    with _global_lock:
        if _global_orm_manager is not None:
            _global_orm_manager.close()
            _global_orm_manager = None


class ORMManager:
    """
    Centralized ORM manager for database connections.

    Uses TASKTRACK_DATABASE_URL when configured (pooled server database),
    otherwise a SQLite file with foreign keys enforced.
    """

    def __init__(self, db_path: Optional[str] = None, database_url: Optional[str] = None):
        """
        Initialize the ORM manager.

        Args:
            db_path: Path to SQLite database file.
            database_url: Full SQLAlchemy URL; takes precedence over db_path.
        """
        if database_url is None and db_path is None:
            database_url = get_database_url()

        if database_url:
            self.db_path: Optional[str] = None
            self.database_url = database_url
        else:
            self.db_path = db_path or get_default_db_path()
            self.database_url = f"sqlite:///{self.db_path}"

        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

        self._initialize()

    @property
    def is_sqlite(self) -> bool:
        """Whether the configured backend is SQLite."""
        return self.database_url.startswith("sqlite")

    def _initialize(self) -> None:
        """Initialize the database engine and create tables."""
        if self.is_sqlite:
            self._engine = create_engine(
                self.database_url,
                echo=False,
                pool_pre_ping=True,
                connect_args={"check_same_thread": False},
            )

            @event.listens_for(self._engine, "connect")
            def set_sqlite_pragma(dbapi_connection: Any, connection_record: Any) -> None:
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA journal_mode=WAL")
                cursor.execute("PRAGMA synchronous=NORMAL")
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

        else:
            self._engine = create_engine(
                self.database_url,
                echo=False,
                pool_pre_ping=True,
                pool_size=POOL_SIZE,
                pool_timeout=POOL_TIMEOUT_SECONDS,
                pool_recycle=POOL_RECYCLE_SECONDS,
            )

        self._session_factory = sessionmaker(
            bind=self._engine,
            autocommit=False,
            autoflush=True,
            expire_on_commit=False,
        )

        Base.metadata.create_all(self._engine)
        logger.info("Connected to database (%s)", self._engine.url.get_backend_name())

    @property
    def engine(self) -> Engine:
        """Get the SQLAlchemy engine."""
        if self._engine is None:
            raise RuntimeError("ORM Manager not initialized")
        return self._engine

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """
        Get a database session with automatic commit/rollback.

        Usage:
            with orm_manager.get_session() as session:
                session.add(Task(owner_id=user_id, title="Buy milk"))
                # Auto-commit on successful exit
                # Auto-rollback on exception
        """
        if self._session_factory is None:
            raise RuntimeError("ORM Manager not initialized")

        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def perform_health_check(self) -> Dict[str, Any]:
        """
        Perform a database health check.

        Returns:
            Dictionary with health check results.
        """
        try:
            with self.get_session() as session:
                result = session.execute(text("SELECT 1")).scalar()
                if result != 1:
                    return {"healthy": False, "error": "Basic query failed"}

            table_names = inspect(self.engine).get_table_names()
            return {
                "healthy": True,
                "backend": self.engine.url.get_backend_name(),
                "database_path": self.db_path,
                "tables": table_names,
                "table_count": len(table_names),
            }
        except Exception as e:
            logger.warning("Database health check failed: %s", e)
            return {"healthy": False, "error": str(e)}

    def _dispose(self) -> bool:
        engine = getattr(self, "_engine", None)
        if engine is None:
            return False
        engine.dispose()
        self._engine = None
        self._session_factory = None
        return True

    def close(self) -> None:
        """Close the database engine and release resources."""
        if self._dispose():
            logger.info("Disconnected from database")

    def __del__(self) -> None:
        """Cleanup on deletion."""
        self._dispose()
