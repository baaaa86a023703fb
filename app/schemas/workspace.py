# app/schemas/workspace.py
from datetime import datetime
from typing import Optional

from app.schemas.common import CamelModel

class WorkspaceCreate(CamelModel):
    name: Optional[str] = None

class WorkspaceResponse(CamelModel):
    id: str
    name: str
    slug: str
    owner_id: str
    created_at: datetime
    updated_at: datetime
    project_count: int = 0

class ProjectCreate(CamelModel):
    name: Optional[str] = None

class ProjectResponse(CamelModel):
    id: str
    name: str
    slug: str
    workspace_id: str
    created_at: datetime
    updated_at: datetime
    file_count: int = 0
