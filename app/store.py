import logging
from pathlib import Path
from typing import List, Optional

from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.database import Base, make_engine, make_session_factory
from app.errors import StorageError
from app.models import Task, utcnow

logger = logging.getLogger(__name__)


class TaskStore:
    """
    Persistence for Task rows.

    Every operation runs in its own session, so one instance can be shared by
    concurrently running request handlers. SQLAlchemy errors never leave this
    class; they are logged and re-raised as StorageError.
    """

    def __init__(self, database_url: str):
        self.database_url = database_url
        self._engine = None
        self._session_factory = None

    def initialize(self):
        """Open the database and create the tasks table if it is missing."""
        try:
            self._ensure_parent_dir()
            self._engine = make_engine(self.database_url)
            self._session_factory = make_session_factory(self._engine)
            Base.metadata.create_all(bind=self._engine)
            total = self.count()
        except (SQLAlchemyError, OSError) as exc:
            logger.exception("Failed to initialize task store db=%s", self.database_url)
            raise StorageError(f"cannot initialize task store: {exc}") from exc
        logger.info("TaskStore ready db=%s total=%s", self.database_url, total)

    def close(self):
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None

    def _ensure_parent_dir(self):
        url = make_url(self.database_url)
        if url.get_backend_name() != "sqlite" or not url.database or url.database == ":memory:":
            return
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    def _session(self) -> Session:
        if self._session_factory is None:
            raise StorageError("task store is not initialized")
        return self._session_factory()

    # ---- public API ----

    def count(self) -> int:
        with self._session() as db:
            try:
                return db.query(Task).count()
            except SQLAlchemyError as exc:
                logger.exception("Failed to count tasks")
                raise StorageError("count failed") from exc

    def list_all(self) -> List[Task]:
        with self._session() as db:
            try:
                return db.query(Task).all()
            except SQLAlchemyError as exc:
                logger.exception("Failed to list tasks")
                raise StorageError("list failed") from exc

    def find_by_id(self, task_id: int) -> Optional[Task]:
        with self._session() as db:
            try:
                return db.get(Task, task_id)
            except SQLAlchemyError as exc:
                logger.exception("Failed to load task id=%s", task_id)
                raise StorageError("find failed") from exc

    def insert(self, task: Task) -> Task:
        now = utcnow()
        task.id = None
        task.created_at = now
        task.updated_at = now
        with self._session() as db:
            try:
                db.add(task)
                db.commit()
                db.refresh(task)
            except SQLAlchemyError as exc:
                db.rollback()
                logger.exception("Failed to insert task title=%r", task.title)
                raise StorageError("insert failed") from exc
        logger.info("Task created id=%s status=%s", task.id, task.status)
        return task

    def update(self, task: Task) -> Optional[Task]:
        """Persist the mutable fields; returns None if the row is gone."""
        with self._session() as db:
            try:
                row = db.get(Task, task.id)
                if row is None:
                    return None
                row.title = task.title
                row.description = task.description
                row.status = task.status
                row.updated_at = utcnow()
                db.commit()
                db.refresh(row)
            except SQLAlchemyError as exc:
                db.rollback()
                logger.exception("Failed to update task id=%s", task.id)
                raise StorageError("update failed") from exc
        logger.info("Task updated id=%s status=%s", row.id, row.status)
        return row

    def delete(self, task: Task):
        with self._session() as db:
            try:
                db.query(Task).filter(Task.id == task.id).delete()
                db.commit()
            except SQLAlchemyError as exc:
                db.rollback()
                logger.exception("Failed to delete task id=%s", task.id)
                raise StorageError("delete failed") from exc
        logger.info("Task deleted id=%s", task.id)
