from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from studyflow import crud
from studyflow.core.config import Settings, get_settings
from studyflow.core.errors import ServiceUnavailableError
from studyflow.models.db import get_db
from studyflow.models.entities import User
from studyflow.models.schemas import RecommendationOut, SuccessOut
from studyflow.routers.deps import get_current_user, load_owned
from studyflow.services.recommendations import generate_recommendations, get_llm_client

router = APIRouter(prefix="/api/recommendations", tags=["recommendations"])


@router.get("", response_model=List[RecommendationOut])
def list_recommendations(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return crud.list_recommendations(db, user.id)


@router.post("/generate", response_model=List[RecommendationOut])
def generate(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    client=Depends(get_llm_client),
    settings: Settings = Depends(get_settings),
):
    if client is None:
        raise ServiceUnavailableError("AI service is not configured")
    return generate_recommendations(db, user.id, client, settings.GROQ_MODEL)


@router.patch("/{rec_id}/dismiss", response_model=SuccessOut)
def dismiss(rec_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    load_owned(db, crud.get_recommendation, rec_id, user, "Recommendation")
    crud.dismiss_recommendation(db, rec_id)
    return SuccessOut()
