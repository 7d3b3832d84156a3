from __future__ import annotations

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..core.config import get_settings
from ..core.errors import install_exception_handlers
from ..core.logging import configure_logging, install_request_logging
from ..models.requests import HealthResponse
from .routes.issues import build_issue_router

settings = get_settings()
configure_logging(settings.LOG_LEVEL)

app = FastAPI(
    title=settings.APP_NAME,
    description="Composes JIRA issue request bodies from typed payloads, custom fields and update operations",
    version="1.0.0",
    openapi_tags=[
        {"name": "Issues (rich)", "description": "REST v3 issues with Atlassian Document Format text"},
        {"name": "Issues (plain)", "description": "REST v2 issues with plain text"},
        {"name": "Health", "description": "Health and diagnostics"},
    ],
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOW_ORIGINS or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Request logging
install_request_logging(app)
# Exceptions
install_exception_handlers(app)


# PUBLIC_INTERFACE
@app.get("/", tags=["Health"], summary="Health Check", response_model=HealthResponse)
def health_check():
    """Basic health check endpoint."""
    return HealthResponse(status="ok", app=settings.APP_NAME, environment=settings.APP_ENV)


# Mount versioned API
api_v1 = APIRouter(prefix="/api/v1")
api_v1.include_router(build_issue_router("rich"))
api_v1.include_router(build_issue_router("plain"))
app.include_router(api_v1)
