from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from studyflow.models.entities import FileUpload


def list_files(db: Session, user_id: str) -> List[FileUpload]:
    return list(db.scalars(
        select(FileUpload)
        .where(FileUpload.user_id == user_id)
        .order_by(FileUpload.created_at.desc(), FileUpload.id.desc())
    ).all())


def get_file(db: Session, file_id: int) -> Optional[FileUpload]:
    return db.get(FileUpload, file_id)


def create_file(
    db: Session,
    user_id: str,
    filename: str,
    original_name: str,
    mime_type: str,
    size: int,
    task_id: Optional[int] = None,
) -> FileUpload:
    row = FileUpload(
        user_id=user_id,
        filename=filename,
        original_name=original_name,
        mime_type=mime_type,
        size=size,
        task_id=task_id,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def delete_file(db: Session, file_id: int) -> bool:
    result = db.execute(delete(FileUpload).where(FileUpload.id == file_id))
    db.commit()
    return result.rowcount > 0
