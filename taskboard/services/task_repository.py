"""SQL mirror of the task collection"""

import logging
from typing import List, Tuple

from sqlalchemy.orm import Session, sessionmaker

from taskboard.models.task import IdSequence, TaskRecord
from taskboard.schemas.task import Priority, Task

logger = logging.getLogger(__name__)

SEQUENCE_NAME = "tasks"


class TaskRepository:
    """Write-through persistence for TaskStore.

    Every method opens its own session and commits before returning, so a
    raised exception means nothing was written.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def load(self) -> Tuple[List[Task], int]:
        """Return persisted tasks in id order and the next id to assign."""
        db: Session = self._session_factory()
        try:
            rows = db.query(TaskRecord).order_by(TaskRecord.id).all()
            tasks = [
                Task(
                    id=row.id,
                    title=row.title,
                    description=row.description or "",
                    priority=Priority(row.priority),
                    due_date=row.due_date,
                    created_at=row.created_at,
                    completed=bool(row.completed),
                )
                for row in rows
            ]
            seq = db.get(IdSequence, SEQUENCE_NAME)
        finally:
            db.close()

        next_id = max(seq.next_id if seq else 1, tasks[-1].id + 1 if tasks else 1)
        logger.info("Loaded %d tasks, next id %d", len(tasks), next_id)
        return tasks, next_id

    def insert(self, task: Task, next_id: int) -> None:
        db: Session = self._session_factory()
        try:
            db.add(
                TaskRecord(
                    id=task.id,
                    title=task.title,
                    description=task.description,
                    priority=task.priority.value,
                    due_date=task.due_date,
                    created_at=task.created_at,
                    completed=task.completed,
                )
            )
            seq = db.get(IdSequence, SEQUENCE_NAME)
            if seq is None:
                db.add(IdSequence(name=SEQUENCE_NAME, next_id=next_id))
            else:
                seq.next_id = next_id
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def delete(self, task_id: int) -> None:
        db: Session = self._session_factory()
        try:
            db.query(TaskRecord).filter(TaskRecord.id == task_id).delete()
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def set_completed(self, task_id: int, completed: bool) -> None:
        db: Session = self._session_factory()
        try:
            db.query(TaskRecord).filter(TaskRecord.id == task_id).update(
                {TaskRecord.completed: completed}
            )
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
