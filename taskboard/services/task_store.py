"""In-memory task store.

TaskStore owns the task collection. Mutations are serialized under a lock and,
when a repository is attached, written through to it before memory changes, so
a failed write leaves both sides untouched.
"""

import logging
import threading
from datetime import date, datetime, time
from typing import Callable, Dict, Iterable, List, Optional

from dateutil.parser import isoparse

from taskboard.core.errors import NotFoundError, ValidationError
from taskboard.schemas.task import Priority, Task
from taskboard.services.query_service import get_combined_filtered_tasks
from taskboard.services.task_repository import TaskRepository

logger = logging.getLogger(__name__)


def parse_due_date(value) -> Optional[datetime]:
    """ISO 8601 date or date-time. Empty or non-ISO input means no due date."""
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime.combine(value, time.min)
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            parsed = isoparse(text)
        except (ValueError, OverflowError):
            logger.debug("Ignoring unparseable due date %r", text)
            return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


class TaskStore:
    def __init__(
        self,
        repository: Optional[TaskRepository] = None,
        clock: Callable[[], datetime] = datetime.now,
        tasks: Iterable[Task] = (),
        next_id: int = 1,
    ):
        self._repository = repository
        self._clock = clock
        self._lock = threading.RLock()
        # dict keeps insertion order, and reassigning a key keeps its position
        self._tasks: Dict[int, Task] = {t.id: t for t in tasks}
        self._next_id = max([next_id] + [t.id + 1 for t in self._tasks.values()])

    @classmethod
    def from_repository(cls, repository: TaskRepository, clock: Callable[[], datetime] = datetime.now) -> "TaskStore":
        tasks, next_id = repository.load()
        return cls(repository=repository, clock=clock, tasks=tasks, next_id=next_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    def add_task(self, title: str, description: str = "", priority=None, due_date=None) -> Task:
        title = (title or "").strip()
        if not title:
            logger.warning("Rejected task without title")
            raise ValidationError("Task title is required")

        with self._lock:
            task = Task(
                id=self._next_id,
                title=title,
                description=(description or "").strip(),
                priority=Priority(priority),
                due_date=parse_due_date(due_date),
                created_at=self._clock(),
                completed=False,
            )
            if self._repository is not None:
                self._repository.insert(task, self._next_id + 1)
            self._tasks[task.id] = task
            self._next_id += 1

        logger.info("Added task id=%s priority=%s", task.id, task.priority.value)
        return task

    def delete_task(self, task_id: int) -> None:
        with self._lock:
            if task_id not in self._tasks:
                logger.warning("Delete of unknown task id=%s", task_id)
                raise NotFoundError(task_id)
            if self._repository is not None:
                self._repository.delete(task_id)
            del self._tasks[task_id]
        logger.info("Deleted task id=%s", task_id)

    def toggle_task(self, task_id: int) -> None:
        with self._lock:
            task = self._tasks.get(task_id)
            if task is None:
                logger.warning("Toggle of unknown task id=%s", task_id)
                raise NotFoundError(task_id)
            toggled = task.model_copy(update={"completed": not task.completed})
            if self._repository is not None:
                self._repository.set_completed(task_id, toggled.completed)
            self._tasks[task_id] = toggled
        logger.info("Toggled task id=%s completed=%s", task_id, toggled.completed)

    def get_task(self, task_id: int) -> Task:
        with self._lock:
            task = self._tasks.get(task_id)
        if task is None:
            raise NotFoundError(task_id)
        return task

    def get_tasks(self) -> List[Task]:
        with self._lock:
            return list(self._tasks.values())

    def get_combined_filtered_tasks(self, status_filter="all", date_filter="all", sort_key="", ascending: bool = False) -> List[Task]:
        return get_combined_filtered_tasks(
            self.get_tasks(), status_filter, date_filter, sort_key, ascending, now=self._clock()
        )
