"""Repository for recommendations.

Append-only store: ``create`` always inserts, nothing is ever updated.
``get_latest`` resolves a user's current recommendation.
"""

import uuid
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from career_compass.models.recommendation import Recommendation


class RecommendationNotFoundError(LookupError):
    """The user has no recommendation yet.

    An expected condition at the retrieval boundary, not a failure.
    """

    def __init__(self, user_id: uuid.UUID) -> None:
        super().__init__(f"No recommendation for user {user_id}")
        self.user_id = user_id


class RecommendationRepository:
    """Stateless repository for Recommendation records.

    All methods are static; no instance state. Pass an AsyncSession
    for every call so the caller controls transaction boundaries.
    """

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        user_id: uuid.UUID,
        assessment_id: uuid.UUID,
        analysis: str,
        careers: list[dict[str, Any]],
        additional: dict[str, Any] | None = None,
    ) -> Recommendation:
        """Insert a new recommendation.

        Args:
            db: Async database session.
            user_id: Owning user's UUID.
            assessment_id: Originating submission's UUID.
            analysis: Profile analysis text.
            careers: Validated career entries in wire shape.
            additional: Optional development suggestions block.

        Returns:
            The flushed Recommendation with id and created_at set.
        """
        recommendation = Recommendation(
            user_id=user_id,
            assessment_id=assessment_id,
            analysis=analysis,
            careers=careers,
            additional=additional,
        )
        db.add(recommendation)
        await db.flush()
        await db.refresh(recommendation)
        return recommendation

    @staticmethod
    async def get_latest(
        db: AsyncSession,
        *,
        user_id: uuid.UUID,
    ) -> Recommendation:
        """Fetch the user's most recent recommendation.

        Args:
            db: Async database session.
            user_id: Authenticated user's UUID.

        Returns:
            The Recommendation with the latest created_at.

        Raises:
            RecommendationNotFoundError: If the user has none.
        """
        stmt = (
            select(Recommendation)
            .where(Recommendation.user_id == user_id)
            .order_by(Recommendation.created_at.desc())
            .limit(1)
        )
        result = await db.execute(stmt)
        recommendation = result.scalar_one_or_none()
        if recommendation is None:
            raise RecommendationNotFoundError(user_id)
        return recommendation
