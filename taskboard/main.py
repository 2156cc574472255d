import logging

from fastapi import FastAPI
from taskboard.core.config import settings
from taskboard.core.database import engine, Base, SessionLocal
from taskboard.routers import health, tasks
from taskboard.services.task_repository import TaskRepository
from taskboard.services.task_store import TaskStore

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


def create_store() -> TaskStore:
    if not settings.PERSIST:
        return TaskStore()
    # Init DB
    Base.metadata.create_all(bind=engine)
    return TaskStore.from_repository(TaskRepository(SessionLocal))


app = FastAPI(
    title=settings.APP_TITLE,
    version="0.1.0"
)
app.state.store = create_store()

# Routes
app.include_router(health.router, prefix="/health")
app.include_router(tasks.router)
