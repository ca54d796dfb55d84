from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from studyflow import crud
from studyflow.models.db import get_db
from studyflow.models.entities import User
from studyflow.models.schemas import TaskCreate, TaskOut, TaskUpdate
from studyflow.routers.deps import get_current_user, load_owned

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.get("", response_model=List[TaskOut])
def list_tasks(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return crud.list_tasks(db, user.id)


@router.post("", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
def create_task(payload: TaskCreate, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    # owner always comes from the session, never from the body
    return crud.create_task(db, user.id, **payload.model_dump())


@router.get("/{task_id}", response_model=TaskOut)
def get_task(task_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return load_owned(db, crud.get_task, task_id, user, "Task")


@router.patch("/{task_id}", response_model=TaskOut)
def update_task(
    task_id: int,
    payload: TaskUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    load_owned(db, crud.get_task, task_id, user, "Task")
    return crud.update_task(db, task_id, payload.model_dump(exclude_unset=True))


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    load_owned(db, crud.get_task, task_id, user, "Task")
    crud.delete_task(db, task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
