"""Assessment submission model.

One user's completed questionnaire, captured before any AI processing.
Created once per user action and never updated afterwards.
"""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from career_compass.models.base import Base, JSONDocument, UUIDPrimaryKeyMixin, utc_now

if TYPE_CHECKING:
    from career_compass.models.recommendation import Recommendation


class AssessmentSubmission(UUIDPrimaryKeyMixin, Base):
    """A user's raw assessment answers.

    ``answers`` is stored exactly as submitted: a mapping from question id
    (as a string key) to a single option or a list of options.
    """

    __tablename__ = "assessments"

    user_id: Mapped[uuid.UUID] = mapped_column(
        nullable=False,
    )
    answers: Mapped[dict[str, Any]] = mapped_column(
        JSONDocument,
        nullable=False,
    )
    submitted_at: Mapped[datetime] = mapped_column(
        default=utc_now,
        nullable=False,
    )

    __table_args__ = (Index("ix_assessments_user_id", "user_id"),)

    # Relationships
    recommendations: Mapped[list["Recommendation"]] = relationship(
        "Recommendation",
        back_populates="assessment",
        passive_deletes=True,
    )
