"""Task query service: combined status/date filtering and sorting.

Everything here is pure. Functions take a snapshot of tasks and return a new
list; the snapshot itself is never reordered or modified.
"""

from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from taskboard.schemas.task import DateFilter, SortKey, StatusFilter, Task, TaskStats

WEEK_DAYS = 7


def filter_by_status(tasks: Iterable[Task], status_filter) -> List[Task]:
    status_filter = StatusFilter(status_filter)
    if status_filter is StatusFilter.ACTIVE:
        return [t for t in tasks if not t.completed]
    if status_filter is StatusFilter.COMPLETED:
        return [t for t in tasks if t.completed]
    return list(tasks)


def _matches_date(task: Task, date_filter: DateFilter, now: datetime) -> bool:
    if date_filter is DateFilter.NO_DATE:
        return task.due_date is None
    if task.due_date is None:
        return False

    today = now.date()
    due_day = task.due_date.date()

    if date_filter is DateFilter.OVERDUE:
        return task.due_date < now and not task.completed
    if date_filter is DateFilter.TODAY:
        return due_day == today
    if date_filter is DateFilter.WEEK:
        # today plus the six following days
        return today <= due_day < today + timedelta(days=WEEK_DAYS)
    return True


def filter_by_date(tasks: Iterable[Task], date_filter, now: Optional[datetime] = None) -> List[Task]:
    date_filter = DateFilter(date_filter)
    if date_filter is DateFilter.ALL:
        return list(tasks)
    now = now or datetime.now()
    return [t for t in tasks if _matches_date(t, date_filter, now)]


def sort_tasks(tasks: Iterable[Task], sort_key, ascending: bool = False) -> List[Task]:
    """Stable sort. Descending reverses the order but keeps ties in place.

    Tasks without a due date always go last when sorting by due date.
    """
    sort_key = SortKey(sort_key)
    tasks = list(tasks)
    reverse = not ascending

    if sort_key is SortKey.TITLE:
        return sorted(tasks, key=lambda t: t.title.casefold(), reverse=reverse)
    if sort_key is SortKey.PRIORITY:
        return sorted(tasks, key=lambda t: t.priority.rank, reverse=reverse)
    if sort_key is SortKey.CREATED_AT:
        return sorted(tasks, key=lambda t: t.created_at, reverse=reverse)
    if sort_key is SortKey.DUE_DATE:
        dated = [t for t in tasks if t.due_date is not None]
        undated = [t for t in tasks if t.due_date is None]
        return sorted(dated, key=lambda t: t.due_date, reverse=reverse) + undated
    return tasks


def get_combined_filtered_tasks(
    tasks: Iterable[Task],
    status_filter=StatusFilter.ALL,
    date_filter=DateFilter.ALL,
    sort_key=SortKey.NONE,
    ascending: bool = False,
    now: Optional[datetime] = None,
) -> List[Task]:
    """Status filter, then date filter, then sort. The two filters intersect."""
    result = filter_by_status(tasks, status_filter)
    result = filter_by_date(result, date_filter, now)
    return sort_tasks(result, sort_key, ascending)


def compute_stats(tasks: Iterable[Task]) -> TaskStats:
    tasks = list(tasks)
    done = sum(1 for t in tasks if t.completed)
    return TaskStats(total=len(tasks), active=len(tasks) - done, completed=done)
