# app/core/deployer.py
"""
Simulated deployments.

Nothing here talks to a hosting provider. Two flows exist:

1. Studio deploys: a Deployment row is created as "building" and a background
   job flips it to "success" after DEPLOY_SIMULATION_DELAY seconds. Reads also
   complete overdue rows, so a lost background job cannot leave a deployment
   stuck in "building".
2. Platform deploys (vercel / netlify / coolify): decided synchronously. No
   platform token configured means an immediate "error"; otherwise a
   fabricated "success" with a platform-style URL.
"""
import json
import logging
import time
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Callable, Dict, List, Optional, Tuple
from uuid import uuid4

from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.base import utcnow
from app.models.deployment import Deployment, STATUS_BUILDING, STATUS_SUCCESS, STATUS_ERROR
from app.models.file import DIRECTORY_TYPE
from app.schemas.deployment import PlatformDeployOptions

logger = logging.getLogger(__name__)

STARTED_LOG = "Deployment started...\n"
COMPLETED_LOG = (
    "Deployment started...\n"
    "Building project...\n"
    "Deploying to production...\n"
    "Deployment successful!\n"
)


def studio_url(slug: str) -> str:
    return f"https://{slug}.{settings.DEPLOY_DOMAIN}"


# ---------------------------------------------------------------------------
# Studio deploys (building -> success)
# ---------------------------------------------------------------------------

def start_deployment(db: Session, project: Any) -> Deployment:
    deployment = Deployment(
        id=str(uuid4()),
        project_id=project.id,
        status=STATUS_BUILDING,
        logs=STARTED_LOG,
    )
    db.add(deployment)
    db.commit()
    db.refresh(deployment)
    logger.info("Deployment %s started for project %s", deployment.id, project.id)
    return deployment


def _mark_success(deployment: Deployment, slug: str) -> None:
    deployment.status = STATUS_SUCCESS
    deployment.url = studio_url(slug)
    deployment.logs = COMPLETED_LOG


def complete_deployment(
    deployment_id: str,
    slug: str,
    delay: Optional[float] = None,
    session_factory: Optional[Callable[[], Session]] = None,
) -> None:
    """
    Background job: wait out the simulated build, then mark the deployment as
    successful. Uses its own session; the request's session is closed by now.
    """
    if session_factory is None:
        from app.core.database import SessionLocal
        session_factory = SessionLocal

    delay = settings.DEPLOY_SIMULATION_DELAY if delay is None else delay
    if delay > 0:
        time.sleep(delay)

    db = session_factory()
    try:
        deployment = db.query(Deployment).filter(Deployment.id == deployment_id).first()
        if deployment is None:
            logger.warning("Deployment %s vanished before the simulated build finished", deployment_id)
            return
        if deployment.status != STATUS_BUILDING:
            return
        _mark_success(deployment, slug)
        db.commit()
        logger.info("Deployment %s finished: %s", deployment_id, deployment.url)
    except Exception:
        db.rollback()
        logger.exception("Error updating deployment %s", deployment_id)
    finally:
        db.close()


def complete_overdue_deployments(db: Session, project: Any, delay: Optional[float] = None) -> int:
    """
    Finish every "building" deployment of the project that is older than the
    simulated build delay. Returns how many rows were updated.
    """
    delay = settings.DEPLOY_SIMULATION_DELAY if delay is None else delay
    cutoff = utcnow() - timedelta(seconds=delay)
    overdue = (
        db.query(Deployment)
        .filter(
            Deployment.project_id == project.id,
            Deployment.status == STATUS_BUILDING,
            Deployment.created_at <= cutoff,
        )
        .all()
    )
    for deployment in overdue:
        _mark_success(deployment, project.slug)
    if overdue:
        db.commit()
        logger.info("Completed %d overdue deployment(s) for project %s", len(overdue), project.id)
    return len(overdue)


# ---------------------------------------------------------------------------
# Platform deploys (simulated)
# ---------------------------------------------------------------------------

@dataclass
class PlatformDeployResult:
    status: str
    url: Optional[str]
    logs: List[str] = field(default_factory=list)


def prepare_files_for_vercel(files: List[Any]) -> List[Dict[str, Any]]:
    return [{"file": f.path, "data": f.content or "", "encoding": "utf8"} for f in files if f.type != DIRECTORY_TYPE]


def prepare_files_for_netlify(files: List[Any]) -> List[Dict[str, Any]]:
    return [{"name": f.path, "data": f.content or "", "encoding": "utf8"} for f in files if f.type != DIRECTORY_TYPE]


def prepare_files_for_coolify(files: List[Any]) -> List[Dict[str, Any]]:
    return [{"path": f.path, "content": f.content or "", "mode": "644"} for f in files if f.type != DIRECTORY_TYPE]


def generate_dockerfile(project: Any) -> str:
    return f"""# Generated Dockerfile for {project.name}
FROM node:18-alpine

WORKDIR /app

COPY package*.json ./
RUN npm ci --only=production

COPY . .
RUN npm run build

EXPOSE 3000

CMD ["npm", "start"]"""


def generate_docker_compose(project: Any) -> str:
    return f"""version: '3.8'

services:
  {project.slug}:
    build: .
    ports:
      - "3000:3000"
    environment:
      - NODE_ENV=production
    restart: unless-stopped"""


def _missing_token(label: str, env_name: str) -> PlatformDeployResult:
    return PlatformDeployResult(
        status=STATUS_ERROR,
        url=None,
        logs=[f"{label} token not configured. Please add {env_name} to environment variables."],
    )


def _success_logs(label: str, steps: List[str], url: str) -> List[str]:
    return [f"✓ Project uploaded to {label}"] + [f"✓ {step}" for step in steps] + [f"🌐 Live at: {url}"]


def deploy_to_vercel(project: Any, files: List[Any], options: PlatformDeployOptions) -> PlatformDeployResult:
    if not settings.VERCEL_TOKEN:
        return _missing_token("Vercel", "VERCEL_TOKEN")

    payload = {
        "name": project.name,
        "files": prepare_files_for_vercel(files),
        "projectSettings": {
            "framework": options.framework or "next",
            "buildCommand": options.build_command or "npm run build",
            "outputDirectory": options.output_directory or ".next",
            "nodeVersion": options.node_version or "18.x",
        },
    }
    logger.debug("Simulated Vercel deployment payload: %s", json.dumps(payload)[:2000])

    url = f"https://{project.slug}.vercel.app"
    steps = ["Build started", "Build completed successfully", "Deployment completed"]
    return PlatformDeployResult(status=STATUS_SUCCESS, url=url, logs=_success_logs("Vercel", steps, url))


def deploy_to_netlify(project: Any, files: List[Any], options: PlatformDeployOptions) -> PlatformDeployResult:
    if not settings.NETLIFY_TOKEN:
        return _missing_token("Netlify", "NETLIFY_TOKEN")

    payload = {
        "name": project.name,
        "files": prepare_files_for_netlify(files),
        "settings": {
            "buildCommand": options.build_command or "npm run build",
            "publishDir": options.output_directory or "dist",
            "nodeVersion": options.node_version or "18",
        },
    }
    logger.debug("Simulated Netlify deployment payload: %s", json.dumps(payload)[:2000])

    url = f"https://{project.slug}.netlify.app"
    steps = ["Build started", "Build completed successfully", "Deployment completed"]
    return PlatformDeployResult(status=STATUS_SUCCESS, url=url, logs=_success_logs("Netlify", steps, url))


def deploy_to_coolify(project: Any, files: List[Any], options: PlatformDeployOptions) -> PlatformDeployResult:
    if not settings.COOLIFY_TOKEN:
        return _missing_token("Coolify", "COOLIFY_TOKEN")

    domain = options.custom_domain or f"{project.slug}.coolify.io"
    payload = {
        "name": project.name,
        "environment": options.environment or "production",
        "files": prepare_files_for_coolify(files),
        "docker": {
            "buildCommand": options.build_command or "npm run build",
            "dockerfile": generate_dockerfile(project),
            "compose": generate_docker_compose(project),
        },
        "settings": {
            "domain": domain,
            "ssl": True,
            "nodeVersion": options.node_version or "18",
        },
    }
    logger.debug("Simulated Coolify deployment to %s: %s", settings.COOLIFY_API_URL, json.dumps(payload)[:2000])

    url = f"https://{domain}"
    steps = ["Docker image built", "Container deployed", "SSL configured", "Environment configured"]
    return PlatformDeployResult(status=STATUS_SUCCESS, url=url, logs=_success_logs("Coolify", steps, url))


PLATFORMS: Dict[str, Callable[[Any, List[Any], PlatformDeployOptions], PlatformDeployResult]] = {
    "vercel": deploy_to_vercel,
    "netlify": deploy_to_netlify,
    "coolify": deploy_to_coolify,
}


def deploy_to_platform(
    db: Session,
    project: Any,
    files: List[Any],
    platform: str,
    options: Optional[PlatformDeployOptions] = None,
) -> Tuple[Deployment, PlatformDeployResult]:
    """
    Run the simulated platform deploy and record it as a Deployment.
    The caller is expected to have validated platform against PLATFORMS.
    """
    options = options or PlatformDeployOptions()
    result = PLATFORMS[platform](project, files, options)

    deployment = Deployment(
        id=str(uuid4()),
        project_id=project.id,
        status=result.status,
        url=result.url,
        logs=json.dumps(result.logs),
        platform=platform,
    )
    db.add(deployment)
    db.commit()
    db.refresh(deployment)
    logger.info("Platform deploy %s to %s finished with status %s", deployment.id, platform, result.status)
    return deployment, result
