"""Client session: current filter/sort spec plus the last fetched view.

The cached view is never patched. Every spec change and every successful
mutation re-fetches it from the store in one piece.
"""

from typing import List, Optional

from taskboard.schemas.task import Task, TaskStats, ViewSpec
from taskboard.services.query_service import compute_stats
from taskboard.services.task_store import TaskStore


class ClientSession:
    def __init__(self, store: TaskStore, spec: Optional[ViewSpec] = None):
        self._store = store
        self._spec = spec or ViewSpec()
        self._view: List[Task] = []

    @property
    def spec(self) -> ViewSpec:
        return self._spec

    @property
    def view(self) -> List[Task]:
        return list(self._view)

    def refresh(self) -> List[Task]:
        spec = self._spec
        if spec.is_default:
            self._view = self._store.get_tasks()
        else:
            self._view = self._store.get_combined_filtered_tasks(
                spec.status, spec.date, spec.sort, spec.ascending
            )
        return self.view

    def _apply(self, **changes) -> List[Task]:
        self._spec = self._spec.model_copy(update=changes)
        return self.refresh()

    def set_status_filter(self, status) -> List[Task]:
        return self._apply(status=ViewSpec(status=status).status)

    def set_date_filter(self, date_filter) -> List[Task]:
        return self._apply(date=ViewSpec(date=date_filter).date)

    def set_sort(self, sort_key) -> List[Task]:
        return self._apply(sort=ViewSpec(sort=sort_key).sort)

    def set_ascending(self, ascending: bool) -> List[Task]:
        return self._apply(ascending=bool(ascending))

    def toggle_sort_direction(self) -> List[Task]:
        return self._apply(ascending=not self._spec.ascending)

    def add_task(self, title: str, description: str = "", priority=None, due_date=None) -> Task:
        task = self._store.add_task(title, description, priority, due_date)
        self.refresh()
        return task

    def delete_task(self, task_id: int) -> None:
        self._store.delete_task(task_id)
        self.refresh()

    def toggle_task(self, task_id: int) -> None:
        self._store.toggle_task(task_id)
        self.refresh()

    def stats(self) -> TaskStats:
        return compute_stats(self._view)
