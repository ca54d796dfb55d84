from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from studyflow import crud
from studyflow.models.db import get_db
from studyflow.models.entities import User
from studyflow.models.schemas import NotificationOut, SuccessOut
from studyflow.routers.deps import get_current_user, load_owned

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("", response_model=List[NotificationOut])
def list_notifications(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return crud.list_notifications(db, user.id)


@router.patch("/read-all", response_model=SuccessOut)
def mark_all_read(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    crud.mark_all_notifications_read(db, user.id)
    return SuccessOut()


@router.patch("/{notification_id}/read", response_model=SuccessOut)
def mark_read(notification_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    load_owned(db, crud.get_notification, notification_id, user, "Notification")
    crud.mark_notification_read(db, notification_id)
    return SuccessOut()
