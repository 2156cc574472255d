"""Task tables"""

from sqlalchemy import Column, Integer, String, DateTime, Boolean
from taskboard.core.database import Base


class TaskRecord(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=False)
    title = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    priority = Column(String, nullable=False, default="medium")
    due_date = Column(DateTime, nullable=True, index=True)
    created_at = Column(DateTime, nullable=False)
    completed = Column(Boolean, nullable=False, default=False)


class IdSequence(Base):
    # Single row: next task id, kept so deleted ids are never handed out again
    __tablename__ = "id_sequence"

    name = Column(String, primary_key=True)
    next_id = Column(Integer, nullable=False)
