# app/routers/user.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import get_current_user
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.user import ApiKeyStatus, ApiKeyUpdate, ApiKeyUpdateResponse, UserSummary

logger = logging.getLogger(__name__)

router = APIRouter()

API_KEY_PREFIX = "sk-"
API_KEY_MIN_LENGTH = 20
VISIBLE_SUFFIX = 7


def mask_api_key(api_key: Optional[str]) -> Optional[str]:
    """sk-****...<last 7 chars>; the full key never leaves the server."""
    if not api_key:
        return None
    hidden = max(len(api_key) - VISIBLE_SUFFIX, 0)
    return f"{API_KEY_PREFIX}{'*' * hidden}{api_key[-VISIBLE_SUFFIX:]}"


@router.get("/api-key", response_model=ApiKeyStatus)
def get_api_key(user: User = Depends(get_current_user)):
    """
    Report whether the caller stored an OpenRouter key, with the key masked.
    """
    return ApiKeyStatus(has_api_key=bool(user.openrouter_api_key), api_key=mask_api_key(user.openrouter_api_key))


@router.post("/api-key", response_model=ApiKeyUpdateResponse)
def update_api_key(
    payload: ApiKeyUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Store the caller's OpenRouter key.

    - **apiKey**: must start with "sk-" and be at least 20 characters.
    """
    if not payload.api_key:
        raise HTTPException(status_code=400, detail="API key is required")
    if not payload.api_key.startswith(API_KEY_PREFIX) or len(payload.api_key) < API_KEY_MIN_LENGTH:
        raise HTTPException(status_code=400, detail="Invalid API key format")

    user.openrouter_api_key = payload.api_key
    db.commit()
    db.refresh(user)
    logger.info("User %s updated their API key", user.id)
    return ApiKeyUpdateResponse(
        message="API key updated successfully",
        user=UserSummary(id=user.id, email=user.email, name=user.name),
    )


@router.delete("/api-key", response_model=MessageResponse)
def delete_api_key(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Remove the caller's stored key; the server key is used from then on."""
    user.openrouter_api_key = None
    db.commit()
    return MessageResponse(message="API key removed successfully")
