"""
System API endpoints (healthcheck).
"""

from fastapi import APIRouter

from movie_catalog.api.config import VERSION, get_environment

router = APIRouter(prefix="/v1", tags=["system"])


@router.get("/healthcheck")
def healthcheck():
    """Report availability, environment and version."""
    return {
        "status": "available",
        "system_info": {
            "environment": get_environment(),
            "version": VERSION,
        },
    }
