"""API v1 router aggregator.

All v1 endpoint routers are included here and mounted at /api/v1.
"""

from fastapi import APIRouter

from career_compass.api.v1 import assessments, chat, recommendations

router = APIRouter()

# =============================================================================
# Assessment pipeline
# =============================================================================

router.include_router(assessments.router, prefix="/assessments", tags=["assessments"])
router.include_router(
    recommendations.router, prefix="/recommendations", tags=["recommendations"]
)

# =============================================================================
# Chat relay
# =============================================================================

router.include_router(chat.router, prefix="/chat", tags=["chat"])
