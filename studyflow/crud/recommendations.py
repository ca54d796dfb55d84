from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from studyflow.models.entities import StudyRecommendation


def list_recommendations(db: Session, user_id: str) -> List[StudyRecommendation]:
    return list(db.scalars(
        select(StudyRecommendation)
        .where(StudyRecommendation.user_id == user_id)
        .order_by(StudyRecommendation.created_at.desc(), StudyRecommendation.id.desc())
    ).all())


def get_recommendation(db: Session, rec_id: int) -> Optional[StudyRecommendation]:
    return db.get(StudyRecommendation, rec_id)


def create_recommendation(db: Session, user_id: str, **fields) -> StudyRecommendation:
    rec = StudyRecommendation(user_id=user_id, dismissed=False, **fields)
    db.add(rec)
    db.commit()
    db.refresh(rec)
    return rec


def dismiss_recommendation(db: Session, rec_id: int) -> Optional[StudyRecommendation]:
    rec = db.get(StudyRecommendation, rec_id)
    if rec is None:
        return None
    if not rec.dismissed:
        rec.dismissed = True
        db.commit()
        db.refresh(rec)
    return rec
