# app/routers/auth.py
import logging
from uuid import uuid4

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import create_access_token
from app.core.slug import slugify
from app.models.user import User
from app.models.workspace import Workspace
from app.routers.workspace import list_user_workspaces
from app.schemas.auth import AuthRequest, AuthResponse

logger = logging.getLogger(__name__)

router = APIRouter()

DEFAULT_WORKSPACE_NAME = "Default Workspace"

@router.post("/login", response_model=AuthResponse)
def auth(payload: AuthRequest, db: Session = Depends(get_db)):
    """
    Receives an email, checks if the user exists.
    If not, creates the user (and a default workspace).
    Returns a session token along with the user's workspaces.
    """
    # 1. Check if the user exists
    user = db.query(User).filter(User.email == payload.email).first()

    # 2. If not found, create user and default workspace
    if not user:
        user = User(id=str(uuid4()), email=payload.email, name=payload.email.split("@")[0])
        db.add(user)
        default_workspace = Workspace(
            id=str(uuid4()),
            name=DEFAULT_WORKSPACE_NAME,
            slug=slugify(DEFAULT_WORKSPACE_NAME),
            owner_id=user.id
        )
        db.add(default_workspace)
        db.commit()
        db.refresh(user)
        logger.info("Created user %s with a default workspace", user.id)

    # 3. Issue a session token and return the user's workspaces
    return AuthResponse(
        access_token=create_access_token(user.id),
        user_id=user.id,
        email=user.email,
        workspaces=list_user_workspaces(db, user)
    )
