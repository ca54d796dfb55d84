import logging
from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from studyflow.models.entities import User, UserProfile

log = logging.getLogger(__name__)


def get_user(db: Session, user_id: str) -> Optional[User]:
    return db.get(User, user_id)


def _apply_claims(db: Session, user: User, claims: dict) -> User:
    # absent claims keep whatever was stored before
    changed = {k: v for k, v in claims.items() if v is not None and getattr(user, k) != v}
    if not changed:
        return user
    for key, value in changed.items():
        setattr(user, key, value)
    db.commit()
    db.refresh(user)
    return user


def upsert_user(
    db: Session,
    user_id: str,
    email: Optional[str] = None,
    name: Optional[str] = None,
    image: Optional[str] = None,
) -> User:
    """
    Insert the user on first sight, otherwise refresh the identity claims.

    Concurrent first requests race on the primary key; the loser rolls back
    and applies its claims to the winner's row.
    """
    claims = {"email": email, "name": name, "image": image}
    user = get_user(db, user_id)
    if user is not None:
        return _apply_claims(db, user, claims)

    user = User(id=user_id, **claims)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        log.info("user %s created concurrently; re-reading", user_id)
        winner = get_user(db, user_id)
        if winner is None:
            raise
        return _apply_claims(db, winner, claims)
    db.refresh(user)
    return user


def list_users_with_roles(db: Session) -> List[Tuple[User, str]]:
    """Every user paired with their profile role; users without a profile are students."""
    rows = db.execute(
        select(User, func.coalesce(UserProfile.role, "student"))
        .outerjoin(UserProfile, UserProfile.user_id == User.id)
        .order_by(User.created_at.desc(), User.id)
    ).all()
    return [(r[0], r[1]) for r in rows]
