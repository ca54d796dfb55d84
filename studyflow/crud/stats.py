from typing import Any, Dict, List

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from studyflow.models.entities import PomodoroSession, Task, User


def platform_totals(db: Session) -> Dict[str, int]:
    total_users = db.scalar(select(func.count(User.id))) or 0
    task_row = db.execute(
        select(
            func.count(Task.id),
            func.sum(case((Task.status == "completed", 1), else_=0)),
        )
    ).one()
    session_row = db.execute(
        select(
            func.count(PomodoroSession.id),
            func.coalesce(func.sum(PomodoroSession.duration), 0),
        ).where(PomodoroSession.completed.is_(True))
    ).one()
    return {
        "total_users": int(total_users),
        "total_tasks": int(task_row[0] or 0),
        "completed_tasks": int(task_row[1] or 0),
        "total_sessions": int(session_row[0] or 0),
        "total_study_minutes": int(session_row[1] or 0),
    }


def user_activity(db: Session) -> List[Dict[str, Any]]:
    """Per-user task count and completed-session count, grouped in the database."""
    task_counts = (
        select(Task.user_id.label("user_id"), func.count(Task.id).label("cnt"))
        .group_by(Task.user_id)
        .subquery()
    )
    session_counts = (
        select(PomodoroSession.user_id.label("user_id"), func.count(PomodoroSession.id).label("cnt"))
        .where(PomodoroSession.completed.is_(True))
        .group_by(PomodoroSession.user_id)
        .subquery()
    )
    rows = db.execute(
        select(
            User.id,
            User.email,
            func.coalesce(task_counts.c.cnt, 0),
            func.coalesce(session_counts.c.cnt, 0),
        )
        .outerjoin(task_counts, task_counts.c.user_id == User.id)
        .outerjoin(session_counts, session_counts.c.user_id == User.id)
        .order_by(User.created_at.desc(), User.id)
    ).all()
    return [{
        "user_id": r[0],
        "email": r[1] or r[0][:8],
        "task_count": int(r[2] or 0),
        "session_count": int(r[3] or 0),
    } for r in rows]
