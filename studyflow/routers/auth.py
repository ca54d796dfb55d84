from fastapi import APIRouter, Depends

from studyflow.models.entities import User
from studyflow.models.schemas import UserOut
from studyflow.routers.deps import get_current_user

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.get("/user", response_model=UserOut)
def current_user(user: User = Depends(get_current_user)):
    return user
