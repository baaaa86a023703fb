# app/routers/export.py
import logging
from typing import List
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy.orm import Session

from app.core.access import get_owned_project
from app.core.database import get_db
from app.core.exporter import SUPPORTED_FORMATS, build_zip_archive, generate_exports
from app.core.security import get_current_user
from app.models.file import File as FileModel
from app.models.project import Project
from app.models.user import User
from app.schemas.export import MultiExportRequest, MultiExportResponse, ProjectSummary

logger = logging.getLogger(__name__)

router = APIRouter()


def _project_files(db: Session, project: Project) -> List[FileModel]:
    return (
        db.query(FileModel)
        .filter(FileModel.project_id == project.id)
        .order_by(FileModel.path.asc())
        .all()
    )


def content_disposition(project: Project) -> str:
    """
    Attachment header for the zip download. Header values must be latin-1, so
    the plain filename is the ASCII slug and the real name goes in filename*.
    """
    fallback = f"{project.slug or 'project'}.zip"
    encoded = quote(f"{project.name}.zip", safe="")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{encoded}"


@router.api_route("/{project_id}/export", methods=["GET", "POST"])
def export_archive(
    project_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Download the project's files as a zip archive (application/zip).
    Only file records are written; directories are implied by the paths.
    """
    project = get_owned_project(db, project_id, user)
    archive = build_zip_archive(_project_files(db, project), files_only=True)
    return Response(
        content=archive,
        media_type="application/zip",
        headers={"Content-Disposition": content_disposition(project)},
    )


@router.post("/{project_id}/multi-export", response_model=MultiExportResponse)
def multi_export(
    project_id: str,
    payload: MultiExportRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Generate several exports in one call.

    - **formats**: one or more of zip, html, css, js, elementor.
    - **options**: {minify, includeDependencies, inlineAssets}.

    The zip export is base64 encoded. A format that fails to generate is
    left out of **exports**; the others are still returned.
    """
    if not payload.formats:
        raise HTTPException(status_code=400, detail="At least one export format is required")
    unsupported = [fmt for fmt in payload.formats if fmt not in SUPPORTED_FORMATS]
    if unsupported:
        raise HTTPException(status_code=400, detail=f"Unsupported export format: {', '.join(unsupported)}")

    project = get_owned_project(db, project_id, user)
    exports = generate_exports(_project_files(db, project), payload.formats, payload.options)
    logger.info("Exported project %s as %s", project.id, ", ".join(exports))

    return MultiExportResponse(
        success=True,
        project=ProjectSummary(id=project.id, name=project.name, slug=project.slug),
        exports=exports,
        formats=payload.formats,
    )
