import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session

from studyflow import crud
from studyflow.core.config import Settings, get_settings
from studyflow.core.errors import InvalidInputError, NotFoundError
from studyflow.models.db import get_db
from studyflow.models.entities import User
from studyflow.models.schemas import FileUploadOut
from studyflow.routers.deps import get_current_user, load_owned, require_task_reference
from studyflow.services.file_storage import LocalFileStorage, check_mime_type, get_file_storage

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/files", tags=["files"])


def _parse_task_id(raw: Optional[str]) -> Optional[int]:
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        raise InvalidInputError("Invalid task ID")


@router.get("", response_model=List[FileUploadOut])
def list_files(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return crud.list_files(db, user.id)


@router.post("/upload", response_model=FileUploadOut, status_code=status.HTTP_201_CREATED)
def upload_file(
    file: UploadFile = File(...),
    task_id: Optional[str] = Form(None, alias="taskId"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    storage: LocalFileStorage = Depends(get_file_storage),
    settings: Settings = Depends(get_settings),
):
    mime_type = check_mime_type(file.content_type)
    ref = _parse_task_id(task_id)
    if ref is not None:
        require_task_reference(db, ref, user)

    original_name = file.filename or "upload"
    stored = storage.save(file.file, original_name, settings.MAX_UPLOAD_BYTES)
    try:
        row = crud.create_file(
            db,
            user.id,
            filename=stored.filename,
            original_name=original_name,
            mime_type=mime_type,
            size=stored.size,
            task_id=ref,
        )
    except Exception:
        storage.delete(stored.filename)
        raise
    log.info("stored upload %s (%d bytes) for %s", stored.filename, stored.size, user.id)
    return row


@router.get("/{file_id}/download")
def download_file(
    file_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    storage: LocalFileStorage = Depends(get_file_storage),
):
    row = load_owned(db, crud.get_file, file_id, user, "File")
    if not storage.exists(row.filename):
        raise NotFoundError("File not found on disk")
    return FileResponse(
        storage.path_for(row.filename),
        media_type=row.mime_type,
        filename=row.original_name,
    )


@router.delete("/{file_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_file(
    file_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    storage: LocalFileStorage = Depends(get_file_storage),
):
    filename = load_owned(db, crud.get_file, file_id, user, "File").filename
    storage.delete(filename)
    crud.delete_file(db, file_id)
    log.info("deleted file %s for %s", filename, user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
