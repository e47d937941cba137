"""
API v1 Router
"""

from fastapi import APIRouter
from . import labels, projects

router = APIRouter()

router.include_router(projects.router, prefix="/projects", tags=["Projects"])
router.include_router(labels.router, prefix="/labels", tags=["Labels"])


@router.get("/", tags=["API"])
async def api_root():
    """API root — returns version and available endpoints."""
    return {
        "api": "v1",
        "version": "0.1.0",
        "endpoints": [
            "/projects",
            "/projects/by-repository",
            "/labels",
        ],
    }
