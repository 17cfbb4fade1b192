"""Repository for assessment submissions.

Submissions are create-only; the pipeline writes one before any model call.
"""

import uuid
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from career_compass.models.assessment import AssessmentSubmission


class AssessmentRepository:
    """Stateless repository for AssessmentSubmission records.

    All methods are static; no instance state. Pass an AsyncSession
    for every call so the caller controls transaction boundaries.
    """

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        user_id: uuid.UUID,
        answers: dict[str, Any],
    ) -> AssessmentSubmission:
        """Record a new submission.

        Args:
            db: Async database session.
            user_id: Submitting user's UUID.
            answers: Raw answer map as submitted (question id → answer).

        Returns:
            The flushed AssessmentSubmission with id and submitted_at set.
        """
        submission = AssessmentSubmission(user_id=user_id, answers=answers)
        db.add(submission)
        await db.flush()
        await db.refresh(submission)
        return submission
