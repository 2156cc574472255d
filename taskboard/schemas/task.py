"""Task record, filter/sort enums and request/response schemas."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


def _lookup(enum_cls, value, aliases=None):
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        key = value.strip().lower()
        if aliases and key in aliases:
            return enum_cls(aliases[key])
        for member in enum_cls:
            if member.value == key:
                return member
    return None


class Priority(str, Enum):
    """Task priority. Anything unrecognized becomes MEDIUM."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def _missing_(cls, value):
        return _lookup(cls, value) or cls.MEDIUM

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {Priority.LOW: 1, Priority.MEDIUM: 2, Priority.HIGH: 3}


class StatusFilter(str, Enum):
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"

    @classmethod
    def _missing_(cls, value):
        return _lookup(cls, value) or cls.ALL


class DateFilter(str, Enum):
    ALL = "all"
    OVERDUE = "overdue"
    TODAY = "today"
    WEEK = "week"
    NO_DATE = "no_date"

    @classmethod
    def _missing_(cls, value):
        return _lookup(cls, value) or cls.ALL


# Keys sent by the desktop frontend, matched lowercased
_SORT_ALIASES = {"date": "created_at", "duedate": "due_date", "due": "due_date"}


class SortKey(str, Enum):
    NONE = ""
    TITLE = "title"
    PRIORITY = "priority"
    DUE_DATE = "due_date"
    CREATED_AT = "created_at"

    @classmethod
    def _missing_(cls, value):
        return _lookup(cls, value, _SORT_ALIASES) or cls.NONE


class Task(BaseModel):
    """A single to-do record. Frozen: the store replaces records instead of mutating them."""

    id: int
    title: str
    description: str = ""
    priority: Priority = Priority.MEDIUM
    due_date: Optional[datetime] = None
    created_at: datetime
    completed: bool = False

    model_config = ConfigDict(frozen=True, from_attributes=True)


class TaskCreate(BaseModel):
    """Payload for creating a task. Validation of the title happens in the store."""

    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None
    due_date: Optional[str] = None

    @field_validator("title", "priority", "due_date", mode="before")
    @classmethod
    def _non_text_is_absent(cls, value):
        # the store turns None into 400 / medium / no due date
        return value if isinstance(value, str) else None


class ViewSpec(BaseModel):
    """Filter/sort specification applied to the task list."""

    status: StatusFilter = StatusFilter.ALL
    date: DateFilter = DateFilter.ALL
    sort: SortKey = SortKey.NONE
    ascending: bool = False

    model_config = ConfigDict(frozen=True)

    @field_validator("status", "date", "sort", mode="before")
    @classmethod
    def _normalize(cls, value, info):
        enum_cls = cls.model_fields[info.field_name].annotation
        return enum_cls(value)

    @property
    def is_default(self) -> bool:
        return (
            self.status is StatusFilter.ALL
            and self.date is DateFilter.ALL
            and self.sort is SortKey.NONE
        )


class TaskStats(BaseModel):
    total: int
    active: int
    completed: int
