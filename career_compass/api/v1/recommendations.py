"""Recommendations API router.

- GET /latest: The current user's most recent recommendation
"""

from fastapi import APIRouter

from career_compass.api.deps import CurrentUserId, DbSession
from career_compass.core.errors import NotFoundError
from career_compass.core.responses import DataResponse
from career_compass.repositories.recommendation_repository import (
    RecommendationNotFoundError,
    RecommendationRepository,
)
from career_compass.schemas.recommendation import RecommendationRead

router = APIRouter()


@router.get("/latest")
async def get_latest_recommendation(
    user_id: CurrentUserId,
    db: DbSession,
) -> DataResponse[RecommendationRead]:
    """Get the most recently created recommendation for the current user.

    Raises:
        NotFoundError: 404 if the user has no recommendations yet.
    """
    try:
        recommendation = await RecommendationRepository.get_latest(
            db, user_id=user_id
        )
    except RecommendationNotFoundError as e:
        raise NotFoundError("Recommendation") from e

    return DataResponse(data=RecommendationRead.model_validate(recommendation))
