"""Recommendation model.

The validated, structured output derived from one assessment submission.
Append-only: a retake creates a new row, and the user's "current"
recommendation is the most recent by ``created_at``.
"""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from career_compass.models.base import Base, JSONDocument, UUIDPrimaryKeyMixin, utc_now

if TYPE_CHECKING:
    from career_compass.models.assessment import AssessmentSubmission


class Recommendation(UUIDPrimaryKeyMixin, Base):
    """Career recommendations for a user, tied to the originating submission.

    ``careers`` holds the validated career entries in their wire shape
    (camelCase keys). ``additional`` holds the optional development
    suggestions block, or NULL when the model did not supply one.
    """

    __tablename__ = "recommendations"

    user_id: Mapped[uuid.UUID] = mapped_column(
        nullable=False,
    )
    assessment_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("assessments.id", ondelete="CASCADE"),
        nullable=False,
    )
    analysis: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    careers: Mapped[list[dict[str, Any]]] = mapped_column(
        JSONDocument,
        nullable=False,
    )
    additional: Mapped[dict[str, Any] | None] = mapped_column(
        JSONDocument,
        nullable=True,
        default=None,
    )
    created_at: Mapped[datetime] = mapped_column(
        default=utc_now,
        nullable=False,
    )

    __table_args__ = (
        Index("ix_recommendations_user_id_created_at", "user_id", "created_at"),
        Index("ix_recommendations_assessment_id", "assessment_id"),
    )

    # Relationships
    assessment: Mapped["AssessmentSubmission"] = relationship(
        "AssessmentSubmission",
        back_populates="recommendations",
        foreign_keys=[assessment_id],
    )
