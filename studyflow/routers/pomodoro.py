from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from studyflow import crud
from studyflow.models.db import get_db
from studyflow.models.entities import User
from studyflow.models.schemas import PomodoroCreate, PomodoroSessionOut
from studyflow.routers.deps import get_current_user, require_task_reference

router = APIRouter(prefix="/api/pomodoro", tags=["pomodoro"])


@router.get("", response_model=List[PomodoroSessionOut])
def list_sessions(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return crud.list_sessions(db, user.id)


@router.post("", response_model=PomodoroSessionOut, status_code=status.HTTP_201_CREATED)
def record_session(payload: PomodoroCreate, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Record one finished or aborted session; the timer itself runs client-side."""
    if payload.task_id is not None:
        require_task_reference(db, payload.task_id, user)
    return crud.create_session(
        db,
        user.id,
        duration=payload.duration,
        break_duration=payload.break_duration,
        completed=payload.completed,
        task_id=payload.task_id,
    )
