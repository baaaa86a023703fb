# app/schemas/user.py
from typing import Optional

from app.schemas.common import CamelModel

class ApiKeyStatus(CamelModel):
    has_api_key: bool
    api_key: Optional[str] = None  # Masked

class ApiKeyUpdate(CamelModel):
    api_key: Optional[str] = None

class UserSummary(CamelModel):
    id: str
    email: str
    name: Optional[str] = None

class ApiKeyUpdateResponse(CamelModel):
    message: str
    user: UserSummary
