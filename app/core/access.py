# app/core/access.py
"""
Ownership-scoped lookups shared by the routers.

Every query carries the Workspace.owner_id predicate, so a record that exists
but belongs to someone else is indistinguishable from a missing one: both
raise 404.
"""
from fastapi import HTTPException
from sqlalchemy.orm import Session

from app.models.file import File as FileModel
from app.models.project import Project
from app.models.user import User
from app.models.workspace import Workspace


def get_owned_workspace(db: Session, workspace_id: str, user: User) -> Workspace:
    workspace = (
        db.query(Workspace)
        .filter(Workspace.id == workspace_id, Workspace.owner_id == user.id)
        .first()
    )
    if not workspace:
        raise HTTPException(status_code=404, detail="Workspace not found")
    return workspace


def get_owned_project(db: Session, project_id: str, user: User) -> Project:
    project = (
        db.query(Project)
        .join(Workspace, Project.workspace_id == Workspace.id)
        .filter(Project.id == project_id, Workspace.owner_id == user.id)
        .first()
    )
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


def get_owned_file(db: Session, project_id: str, file_id: str, user: User) -> FileModel:
    file_record = (
        db.query(FileModel)
        .join(Project, FileModel.project_id == Project.id)
        .join(Workspace, Project.workspace_id == Workspace.id)
        .filter(
            FileModel.id == file_id,
            FileModel.project_id == project_id,
            Workspace.owner_id == user.id,
        )
        .first()
    )
    if not file_record:
        raise HTTPException(status_code=404, detail="File not found")
    return file_record
