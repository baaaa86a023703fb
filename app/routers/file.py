# app/routers/file.py
import logging
from uuid import uuid4
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.access import get_owned_file, get_owned_project
from app.core.database import get_db
from app.core.file_tree import build_file_tree, collect_descendant_ids
from app.core.security import get_current_user
from app.models.file import File as FileModel, FILE_TYPE, DIRECTORY_TYPE
from app.models.user import User
from app.schemas.file import FileCreate, FileUpdate, FileResponse, FileNode, FileDeleteResponse

logger = logging.getLogger(__name__)

router = APIRouter()

FILE_TYPES = (FILE_TYPE, DIRECTORY_TYPE)


def file_response(file_record: FileModel) -> FileResponse:
    return FileResponse(
        id=file_record.id,
        name=file_record.name,
        path=file_record.path,
        type=file_record.type,
        content=file_record.content,
        project_id=file_record.project_id,
        parent_id=file_record.parent_id,
        created_at=file_record.created_at,
        updated_at=file_record.updated_at,
    )


@router.get("/{project_id}/files", response_model=List[FileNode])
def get_file_tree(
    project_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Return the project's files as a nested tree.

    Root nodes are files without a parent; every node carries its direct
    **children**, ordered by name.
    """
    project = get_owned_project(db, project_id, user)
    files = (
        db.query(FileModel)
        .filter(FileModel.project_id == project.id)
        .order_by(FileModel.name.asc())
        .all()
    )
    return build_file_tree(files)


@router.post("/{project_id}/files", response_model=FileResponse)
def create_file(
    project_id: str,
    payload: FileCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Create a file or directory.

    - **name**: required, trimmed.
    - **type**: "file" (default) or "directory".
    - **parentId**: optional directory in the same project; the path becomes
      "<parent path>/<name>". Without a (known) parent the path is the name.
    - **content**: optional initial content for files.

    Duplicate names in the same directory are accepted.
    """
    project = get_owned_project(db, project_id, user)

    name = (payload.name or "").strip()
    if not name:
        raise HTTPException(status_code=400, detail="Name is required")
    file_type = payload.type or FILE_TYPE
    if file_type not in FILE_TYPES:
        raise HTTPException(status_code=400, detail="Type must be 'file' or 'directory'")

    path = name
    parent_id = None
    if payload.parent_id:
        parent = (
            db.query(FileModel)
            .filter(FileModel.id == payload.parent_id, FileModel.project_id == project.id)
            .first()
        )
        if parent:
            path = f"{parent.path}/{name}"
            parent_id = parent.id
        else:
            logger.warning("Parent %s not found in project %s; creating %s at the root",
                           payload.parent_id, project.id, name)

    new_file = FileModel(
        id=str(uuid4()),
        name=name,
        path=path,
        type=file_type,
        content=None if file_type == DIRECTORY_TYPE else (payload.content or ""),
        project_id=project.id,
        parent_id=parent_id,
    )
    db.add(new_file)
    db.commit()
    db.refresh(new_file)
    return file_response(new_file)


@router.put("/{project_id}/files/{file_id}", response_model=FileResponse)
def update_file(
    project_id: str,
    file_id: str,
    payload: FileUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Replace a file's content wholesale. A missing **content** stores "".
    There is no concurrency token: the last write wins.
    """
    file_record = get_owned_file(db, project_id, file_id, user)
    file_record.content = payload.content or ""
    db.commit()
    db.refresh(file_record)
    return file_response(file_record)


@router.delete("/{project_id}/files/{file_id}", response_model=FileDeleteResponse)
def delete_file(
    project_id: str,
    file_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Delete a file. Deleting a directory also deletes everything beneath it,
    so no record is left pointing at a missing parent.

    Returns the ids of every removed record.
    """
    file_record = get_owned_file(db, project_id, file_id, user)

    deleted_ids = [file_record.id]
    if file_record.type == DIRECTORY_TYPE:
        siblings = db.query(FileModel).filter(FileModel.project_id == file_record.project_id).all()
        descendant_ids = collect_descendant_ids(siblings, file_record.id)
        if descendant_ids:
            db.query(FileModel).filter(FileModel.id.in_(descendant_ids)).delete(synchronize_session=False)
            deleted_ids.extend(descendant_ids)

    db.delete(file_record)
    db.commit()
    logger.info("Deleted %d file record(s) from project %s", len(deleted_ids), project_id)
    return FileDeleteResponse(success=True, deleted_ids=deleted_ids)
