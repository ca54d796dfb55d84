import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from studyflow.models.entities import UserProfile

log = logging.getLogger(__name__)


def get_profile(db: Session, user_id: str) -> Optional[UserProfile]:
    return db.scalar(select(UserProfile).where(UserProfile.user_id == user_id))


def get_or_create_profile(db: Session, user_id: str, role: str = "student") -> UserProfile:
    """
    Return the user's profile, inserting a default one if none exists.

    Two first visits may race on the insert; the unique user_id lets one win
    and the loser re-reads the winner's row.
    """
    profile = get_profile(db, user_id)
    if profile is not None:
        return profile
    profile = UserProfile(user_id=user_id, role=role)
    db.add(profile)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        log.info("profile for %s created concurrently; re-reading", user_id)
        winner = get_profile(db, user_id)
        if winner is None:
            raise
        return winner
    db.refresh(profile)
    return profile


def upsert_profile(db: Session, user_id: str, **fields) -> UserProfile:
    """Create the profile if absent, then merge the supplied fields into it."""
    profile = get_or_create_profile(db, user_id, role=fields.get("role") or "student")
    changed = False
    for key, value in fields.items():
        if getattr(profile, key) != value:
            setattr(profile, key, value)
            changed = True
    if changed:
        db.commit()
        db.refresh(profile)
    return profile

