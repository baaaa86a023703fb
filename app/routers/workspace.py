# app/routers/workspace.py
import logging
from uuid import uuid4
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.access import get_owned_workspace
from app.core.database import get_db
from app.core.security import get_current_user
from app.core.slug import slugify
from app.models.file import File as FileModel
from app.models.project import Project
from app.models.user import User
from app.models.workspace import Workspace
from app.schemas.workspace import WorkspaceCreate, WorkspaceResponse, ProjectCreate, ProjectResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def workspace_response(workspace: Workspace, project_count: int = 0) -> WorkspaceResponse:
    return WorkspaceResponse(
        id=workspace.id,
        name=workspace.name,
        slug=workspace.slug,
        owner_id=workspace.owner_id,
        created_at=workspace.created_at,
        updated_at=workspace.updated_at,
        project_count=project_count,
    )


def project_response(project: Project, file_count: int = 0) -> ProjectResponse:
    return ProjectResponse(
        id=project.id,
        name=project.name,
        slug=project.slug,
        workspace_id=project.workspace_id,
        created_at=project.created_at,
        updated_at=project.updated_at,
        file_count=file_count,
    )

def list_user_workspaces(db: Session, user: User) -> List[WorkspaceResponse]:
    """The user's workspaces, most recently updated first, with project counts."""
    rows = (
        db.query(Workspace, func.count(Project.id))
        .outerjoin(Project, Project.workspace_id == Workspace.id)
        .filter(Workspace.owner_id == user.id)
        .group_by(Workspace.id)
        .order_by(Workspace.updated_at.desc())
        .all()
    )
    return [workspace_response(workspace, count) for workspace, count in rows]


@router.get("", response_model=List[WorkspaceResponse])
def list_workspaces(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """
    List the caller's workspaces, newest update first.
    Each entry carries **projectCount**.
    """
    return list_user_workspaces(db, user)


@router.post("", response_model=WorkspaceResponse)
def create_workspace(
    payload: WorkspaceCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Create a workspace owned by the caller.

    - **name**: required, trimmed. The slug is derived from it once and never changes.
    """
    name = (payload.name or "").strip()
    if not name:
        raise HTTPException(status_code=400, detail="Name is required")

    workspace = Workspace(id=str(uuid4()), name=name, slug=slugify(name, fallback="workspace"), owner_id=user.id)
    db.add(workspace)
    db.commit()
    db.refresh(workspace)
    logger.info("User %s created workspace %s", user.id, workspace.id)
    return workspace_response(workspace)


@router.get("/{workspace_id}/projects", response_model=List[ProjectResponse])
def list_projects(
    workspace_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    List the projects of one of the caller's workspaces, newest update first.
    Each entry carries **fileCount**.
    """
    workspace = get_owned_workspace(db, workspace_id, user)
    rows = (
        db.query(Project, func.count(FileModel.id))
        .outerjoin(FileModel, FileModel.project_id == Project.id)
        .filter(Project.workspace_id == workspace.id)
        .group_by(Project.id)
        .order_by(Project.updated_at.desc())
        .all()
    )
    return [project_response(project, count) for project, count in rows]


@router.post("/{workspace_id}/projects", response_model=ProjectResponse)
def create_project(
    workspace_id: str,
    payload: ProjectCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Create a project inside one of the caller's workspaces.

    - **name**: required, trimmed; the URL-safe slug is derived from it.
    """
    workspace = get_owned_workspace(db, workspace_id, user)
    name = (payload.name or "").strip()
    if not name:
        raise HTTPException(status_code=400, detail="Name is required")

    project = Project(id=str(uuid4()), name=name, slug=slugify(name), workspace_id=workspace.id)
    db.add(project)
    db.commit()
    db.refresh(project)
    logger.info("Created project %s (%s) in workspace %s", project.id, project.slug, workspace.id)
    return project_response(project)
