from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from studyflow.models.entities import PomodoroSession, utcnow


def list_sessions(db: Session, user_id: str) -> List[PomodoroSession]:
    return list(db.scalars(
        select(PomodoroSession)
        .where(PomodoroSession.user_id == user_id)
        .order_by(PomodoroSession.started_at.desc(), PomodoroSession.id.desc())
    ).all())


def create_session(
    db: Session,
    user_id: str,
    duration: int,
    break_duration: int,
    completed: bool,
    task_id: Optional[int] = None,
) -> PomodoroSession:
    """Record a finished or aborted session; only finished ones get ended_at."""
    now = utcnow()
    session = PomodoroSession(
        user_id=user_id,
        task_id=task_id,
        duration=duration,
        break_duration=break_duration,
        completed=completed,
        started_at=now,
        ended_at=now if completed else None,
    )
    db.add(session)
    db.commit()
    db.refresh(session)
    return session
