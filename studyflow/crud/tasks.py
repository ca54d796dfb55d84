from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from studyflow.models.entities import FileUpload, PomodoroSession, Task, utcnow


def list_tasks(db: Session, user_id: str) -> List[Task]:
    return list(db.scalars(
        select(Task).where(Task.user_id == user_id).order_by(Task.created_at.desc(), Task.id.desc())
    ).all())


def get_task(db: Session, task_id: int) -> Optional[Task]:
    return db.get(Task, task_id)


def create_task(db: Session, user_id: str, **fields) -> Task:
    task = Task(user_id=user_id, **fields)
    if task.status == "completed":
        task.completed_at = utcnow()
    db.add(task)
    db.commit()
    db.refresh(task)
    return task


def update_task(db: Session, task_id: int, data: Dict[str, Any]) -> Optional[Task]:
    """
    Apply a partial patch. Moving to "completed" stamps completed_at and moving
    away clears it, in the same commit as the patch.
    """
    task = db.get(Task, task_id)
    if task is None:
        return None
    for key, value in data.items():
        setattr(task, key, value)
    if "status" in data:
        task.completed_at = utcnow() if data["status"] == "completed" else None
    db.commit()
    db.refresh(task)
    return task


def delete_task(db: Session, task_id: int) -> bool:
    # sessions and files keep their rows but lose the reference
    db.execute(update(PomodoroSession).where(PomodoroSession.task_id == task_id).values(task_id=None))
    db.execute(update(FileUpload).where(FileUpload.task_id == task_id).values(task_id=None))
    result = db.execute(delete(Task).where(Task.id == task_id))
    db.commit()
    return result.rowcount > 0
