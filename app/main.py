# app/main.py
import logging
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db, init_db
from app.core.exceptions import StudioError
from app.core.logging_config import setup_logging
from app.routers import ai, auth, deployment, export, file, preview, user, workspace

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
app.include_router(user.router, prefix="/user", tags=["User"])
app.include_router(workspace.router, prefix="/workspaces", tags=["Workspace"])
app.include_router(file.router, prefix="/projects", tags=["File"])
app.include_router(export.router, prefix="/projects", tags=["Export"])
app.include_router(deployment.router, prefix="/projects", tags=["Deployment"])
app.include_router(preview.router, prefix="/preview", tags=["Preview"])
app.include_router(ai.router, prefix="/ai", tags=["AI"])


@app.exception_handler(StudioError)
async def studio_error_handler(request: Request, exc: StudioError):
    logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"Invalid request: {location}: {first.get('msg')}" if location else f"Invalid request: {first.get('msg')}"
    return JSONResponse(status_code=400, content={"detail": message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# Initialize the database (create tables if needed)
init_db()


@app.get("/")
def read_root():
    return {"message": "Welcome to the Web Studio API!"}


@app.get("/health")
def health(db: Session = Depends(get_db)):
    """
    Liveness probe: checks the database and reports which integrations are configured.
    """
    timestamp = datetime.now(timezone.utc).isoformat()
    try:
        db.execute(text("SELECT 1"))
    except Exception as exc:
        logger.exception("Health check failed")
        return JSONResponse(
            status_code=500,
            content={"status": "unhealthy", "error": str(exc), "timestamp": timestamp},
        )

    return {
        "status": "healthy",
        "timestamp": timestamp,
        "environment": {
            "database": "connected",
            "openrouter": "configured" if settings.OPENROUTER_API_KEY else "not configured",
            "vercel": "configured" if settings.VERCEL_TOKEN else "not configured",
            "netlify": "configured" if settings.NETLIFY_TOKEN else "not configured",
            "coolify": "configured" if settings.COOLIFY_TOKEN else "not configured",
            "environment": settings.ENVIRONMENT,
        },
        "version": settings.APP_VERSION,
    }
