# app/schemas/auth.py
from pydantic import BaseModel, EmailStr
from typing import List

from app.schemas.workspace import WorkspaceResponse

class AuthRequest(BaseModel):
    email: EmailStr

class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    email: EmailStr
    workspaces: List[WorkspaceResponse]
