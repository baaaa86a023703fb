# app/schemas/file.py
from datetime import datetime
from typing import Any, List, Optional

from app.schemas.common import CamelModel

class FileCreate(CamelModel):
    name: Optional[str] = None
    type: Optional[str] = None  # "file" (default) or "directory"
    parent_id: Optional[str] = None
    content: Optional[str] = None

class FileUpdate(CamelModel):
    content: Optional[str] = None

class FileResponse(CamelModel):
    id: str
    name: str
    path: str
    type: str
    content: Optional[str] = None
    project_id: str
    parent_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class FileNode(FileResponse):
    children: List["FileNode"] = []

    @classmethod
    def from_record(cls, record: Any) -> "FileNode":
        return cls(
            id=record.id,
            name=record.name,
            path=record.path,
            type=record.type,
            content=record.content,
            project_id=record.project_id,
            parent_id=record.parent_id,
            created_at=getattr(record, "created_at", None),
            updated_at=getattr(record, "updated_at", None),
            children=[],
        )

class FileDeleteResponse(CamelModel):
    success: bool = True
    deleted_ids: List[str] = []
