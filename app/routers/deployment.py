# app/routers/deployment.py
import json
from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.access import get_owned_project
from app.core.database import get_db
from app.core.deployer import (
    PLATFORMS,
    complete_deployment,
    complete_overdue_deployments,
    deploy_to_platform,
    start_deployment,
)
from app.core.security import get_current_user
from app.models.deployment import Deployment
from app.models.file import File as FileModel
from app.models.user import User
from app.schemas.deployment import (
    DeploymentResponse,
    PlatformDeployRequest,
    PlatformDeployResponse,
    PlatformDeploymentInfo,
)

router = APIRouter()


def deployment_response(deployment: Deployment) -> DeploymentResponse:
    return DeploymentResponse(
        id=deployment.id,
        project_id=deployment.project_id,
        status=deployment.status,
        url=deployment.url,
        logs=deployment.logs or "",
        platform=deployment.platform,
        created_at=deployment.created_at,
        updated_at=deployment.updated_at,
    )


@router.post("/{project_id}/deployments", response_model=DeploymentResponse)
def create_deployment(
    project_id: str,
    background_tasks: BackgroundTasks,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Start a simulated deployment.

    Returns immediately with status "building". A background job marks it
    "success" (with url https://<slug>.<deploy domain>) once the simulated build
    delay has passed. No real build runs.
    """
    project = get_owned_project(db, project_id, user)
    deployment = start_deployment(db, project)
    response = deployment_response(deployment)
    background_tasks.add_task(complete_deployment, deployment.id, project.slug)
    return response


@router.get("/{project_id}/deployments", response_model=List[DeploymentResponse])
def list_deployments(
    project_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    List the project's deployments, newest first. Simulated builds that are
    past their delay are completed before listing.
    """
    project = get_owned_project(db, project_id, user)
    complete_overdue_deployments(db, project)
    deployments = (
        db.query(Deployment)
        .filter(Deployment.project_id == project.id)
        .order_by(Deployment.created_at.desc())
        .all()
    )
    return [deployment_response(d) for d in deployments]


@router.post("/{project_id}/platform-deploy", response_model=PlatformDeployResponse)
def platform_deploy(
    project_id: str,
    payload: PlatformDeployRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Simulated deploy to a hosting platform, decided synchronously.

    - **platform**: vercel, netlify or coolify.
    - **options**: {environment, customDomain, framework, buildCommand, outputDirectory, nodeVersion}.

    Without the platform's token configured the result is status "error" with
    a log line naming the missing variable. No platform API is called.
    """
    if not payload.platform:
        raise HTTPException(status_code=400, detail="Platform is required")
    if payload.platform not in PLATFORMS:
        raise HTTPException(status_code=400, detail="Unsupported platform")

    project = get_owned_project(db, project_id, user)
    files = db.query(FileModel).filter(FileModel.project_id == project.id).all()
    deployment, result = deploy_to_platform(db, project, files, payload.platform, payload.options)

    return PlatformDeployResponse(
        success=True,
        deployment=PlatformDeploymentInfo(
            id=deployment.id,
            platform=payload.platform,
            url=result.url,
            status=result.status,
            logs=json.loads(deployment.logs),
            deployed_at=deployment.created_at,
        ),
    )
