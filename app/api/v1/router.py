"""
API v1 router.

Aggregates all v1 endpoints.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import recommendations

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    recommendations.router, prefix="/academies", tags=["Recommendations"]
)
