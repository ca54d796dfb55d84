# studyflow/routers/deps.py
from typing import Callable, Optional, TypeVar

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from studyflow import crud
from studyflow.core.config import Settings, get_settings
from studyflow.core.errors import ForbiddenError, NotFoundError, UnauthorizedError
from studyflow.models.db import get_db
from studyflow.models.entities import Task, User

T = TypeVar("T")


def _header(request: Request, name: str) -> Optional[str]:
    val = request.headers.get(name)
    if val is None or not val.strip():
        return None
    return val.strip()


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> User:
    """Resolve the caller from the identity headers set by the auth proxy."""
    user_id = _header(request, settings.AUTH_USER_HEADER)
    if user_id is None:
        raise UnauthorizedError()
    return crud.upsert_user(
        db,
        user_id,
        email=_header(request, settings.AUTH_EMAIL_HEADER),
        name=_header(request, settings.AUTH_NAME_HEADER),
        image=_header(request, settings.AUTH_IMAGE_HEADER),
    )


def load_owned(
    db: Session,
    getter: Callable[[Session, int], Optional[T]],
    resource_id: int,
    user: User,
    label: str = "Resource",
) -> T:
    """Load a record by id: 404 when absent, 403 when it belongs to someone else."""
    item = getter(db, resource_id)
    if item is None:
        raise NotFoundError(f"{label} not found")
    if item.user_id != user.id:
        raise ForbiddenError()
    return item


def require_task_reference(db: Session, task_id: int, user: User) -> Task:
    # a missing and a foreign task are indistinguishable to the caller here
    task = crud.get_task(db, task_id)
    if task is None or task.user_id != user.id:
        raise ForbiddenError("Task not found or access denied")
    return task


def require_admin(db: Session, user: User) -> None:
    profile = crud.get_profile(db, user.id)
    if profile is None or profile.role != "admin":
        raise ForbiddenError()


def get_admin_user(user: User = Depends(get_current_user), db: Session = Depends(get_db)) -> User:
    require_admin(db, user)
    return user
