# app/routers/preview.py
from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from app.core.access import get_owned_project
from app.core.database import get_db
from app.core.preview import render_preview
from app.core.security import get_current_user
from app.models.file import File as FileModel
from app.models.user import User

router = APIRouter()

@router.get("/{project_id}", response_class=HTMLResponse)
def preview_project(
    project_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Render the project for the preview iframe (text/html).
    """
    project = get_owned_project(db, project_id, user)
    files = (
        db.query(FileModel)
        .filter(FileModel.project_id == project.id)
        .order_by(FileModel.path.asc())
        .all()
    )
    return HTMLResponse(content=render_preview(project.name, files))
