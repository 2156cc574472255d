from fastapi import Request

from taskboard.services.task_store import TaskStore


def get_store(request: Request) -> TaskStore:
    """Dependency: the store owned by the running app"""
    return request.app.state.store
