from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from studyflow import crud
from studyflow.models.db import get_db
from studyflow.models.entities import User
from studyflow.models.schemas import ProfileOut, ProfileUpdate
from studyflow.routers.deps import get_current_user

router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.get("", response_model=ProfileOut)
def get_profile(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return crud.get_or_create_profile(db, user.id)


@router.patch("", response_model=ProfileOut)
def update_profile(payload: ProfileUpdate, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return crud.upsert_profile(db, user.id, **payload.model_dump(exclude_unset=True))
