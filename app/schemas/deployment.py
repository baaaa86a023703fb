# app/schemas/deployment.py
from datetime import datetime
from typing import List, Optional

from app.schemas.common import CamelModel

class DeploymentResponse(CamelModel):
    id: str
    project_id: str
    status: str
    url: Optional[str] = None
    logs: str = ""
    platform: Optional[str] = None
    created_at: datetime
    updated_at: datetime

class PlatformDeployOptions(CamelModel):
    environment: Optional[str] = None  # production, staging or development
    custom_domain: Optional[str] = None
    framework: Optional[str] = None
    build_command: Optional[str] = None
    output_directory: Optional[str] = None
    node_version: Optional[str] = None

class PlatformDeployRequest(CamelModel):
    platform: Optional[str] = None
    options: PlatformDeployOptions = PlatformDeployOptions()

class PlatformDeploymentInfo(CamelModel):
    id: str
    platform: str
    url: Optional[str] = None
    status: str
    logs: List[str]
    deployed_at: datetime

class PlatformDeployResponse(CamelModel):
    success: bool = True
    deployment: PlatformDeploymentInfo
