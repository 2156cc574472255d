from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from taskboard.core.database import get_db
from taskboard.core.dependencies import get_store
from taskboard.services.task_store import TaskStore

router = APIRouter()

@router.get("/z")
def healthz(store: TaskStore = Depends(get_store)):
    # Check si l'API est up
    return {"status": "ok", "tasks": len(store)}

@router.get("/db")
def healthdb(db: Session = Depends(get_db)):
    db.execute(text("SELECT 1"))
    return {"status": "ok"}
