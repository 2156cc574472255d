from fastapi import APIRouter, Depends, HTTPException, status, Query, Response
from typing import List

from taskboard.core.dependencies import get_store
from taskboard.core.errors import NotFoundError, ValidationError
from taskboard.schemas.task import Task, TaskCreate, TaskStats, ViewSpec
from taskboard.services.query_service import compute_stats
from taskboard.services.task_store import TaskStore

router = APIRouter(prefix="/tasks")


def get_view_spec(
    status_filter: str = Query("all", alias="status"),
    date_filter: str = Query("all", alias="date"),
    sort: str = Query(""),
    ascending: bool = Query(False),
) -> ViewSpec:
    # Unknown values fall back to "all" / no sort instead of a 422
    return ViewSpec(status=status_filter, date=date_filter, sort=sort, ascending=ascending)


def _query(store: TaskStore, spec: ViewSpec) -> List[Task]:
    return store.get_combined_filtered_tasks(spec.status, spec.date, spec.sort, spec.ascending)


@router.post("", response_model=Task, status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    store: TaskStore = Depends(get_store)
):
    try:
        return store.add_task(
            task_data.title,
            task_data.description,
            task_data.priority,
            task_data.due_date,
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("", response_model=List[Task])
def list_tasks(store: TaskStore = Depends(get_store)):
    return store.get_tasks()


@router.get("/filtered", response_model=List[Task])
def filtered_tasks(
    spec: ViewSpec = Depends(get_view_spec),
    store: TaskStore = Depends(get_store)
):
    return _query(store, spec)


@router.get("/stats", response_model=TaskStats)
def task_stats(
    spec: ViewSpec = Depends(get_view_spec),
    store: TaskStore = Depends(get_store)
):
    return compute_stats(_query(store, spec))


@router.get("/{task_id}", response_model=Task)
def get_task(
    task_id: int,
    store: TaskStore = Depends(get_store)
):
    try:
        return store.get_task(task_id)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: int,
    store: TaskStore = Depends(get_store)
):
    try:
        store.delete_task(task_id)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{task_id}/toggle", status_code=status.HTTP_204_NO_CONTENT)
def toggle_task(
    task_id: int,
    store: TaskStore = Depends(get_store)
):
    try:
        store.toggle_task(task_id)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
