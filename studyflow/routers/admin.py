import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from studyflow import crud
from studyflow.models.db import get_db
from studyflow.models.entities import User
from studyflow.models.schemas import AdminStats, AdminUserOut, ProfileOut, RoleUpdate
from studyflow.routers.deps import get_admin_user

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/stats", response_model=AdminStats)
def stats(admin: User = Depends(get_admin_user), db: Session = Depends(get_db)):
    totals = crud.platform_totals(db)
    return {**totals, "user_activity": crud.user_activity(db)}


@router.get("/users", response_model=List[AdminUserOut])
def list_users(admin: User = Depends(get_admin_user), db: Session = Depends(get_db)):
    out = []
    for u, role in crud.list_users_with_roles(db):
        out.append({
            "id": u.id, "email": u.email, "name": u.name, "image": u.image,
            "created_at": u.created_at, "role": role,
        })
    return out


@router.patch("/users/{user_id}/role", response_model=ProfileOut)
def update_role(
    user_id: str,
    payload: RoleUpdate,
    admin: User = Depends(get_admin_user),
    db: Session = Depends(get_db),
):
    profile = crud.upsert_profile(db, user_id, role=payload.role)
    log.info("role of %s set to %s by %s", user_id, payload.role, admin.id)
    return profile
