from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from studyflow.models.entities import NOTIFICATION_TYPES, Notification


def list_notifications(db: Session, user_id: str) -> List[Notification]:
    return list(db.scalars(
        select(Notification)
        .where(Notification.user_id == user_id)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
    ).all())


def get_notification(db: Session, notification_id: int) -> Optional[Notification]:
    return db.get(Notification, notification_id)


def create_notification(db: Session, user_id: str, title: str, message: str, type: str = "info") -> Notification:
    """Entry point for other subsystems (deadline reminders, achievements)."""
    if type not in NOTIFICATION_TYPES:
        raise ValueError(f"unknown notification type: {type!r}")
    notif = Notification(user_id=user_id, title=title, message=message, type=type, read=False)
    db.add(notif)
    db.commit()
    db.refresh(notif)
    return notif


def mark_notification_read(db: Session, notification_id: int) -> Optional[Notification]:
    notif = db.get(Notification, notification_id)
    if notif is None:
        return None
    if not notif.read:
        notif.read = True
        db.commit()
        db.refresh(notif)
    return notif


def mark_all_notifications_read(db: Session, user_id: str) -> int:
    result = db.execute(
        update(Notification)
        .where(Notification.user_id == user_id, Notification.read.is_(False))
        .values(read=True)
    )
    db.commit()
    return result.rowcount
