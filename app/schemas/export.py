# app/schemas/export.py
from typing import Dict, List, Optional

from app.schemas.common import CamelModel

class ExportOptions(CamelModel):
    minify: bool = False
    include_dependencies: bool = False
    inline_assets: bool = False

class MultiExportRequest(CamelModel):
    formats: Optional[List[str]] = None
    options: ExportOptions = ExportOptions()

class ProjectSummary(CamelModel):
    id: str
    name: str
    slug: str

class MultiExportResponse(CamelModel):
    success: bool = True
    project: ProjectSummary
    exports: Dict[str, str]
    formats: List[str]
