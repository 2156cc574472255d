"""Errors raised by the task store."""


class TaskError(Exception):
    """Base class for task store errors."""


class ValidationError(TaskError):
    """A required field is missing or empty on create."""


class NotFoundError(TaskError):
    def __init__(self, task_id: int):
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id
