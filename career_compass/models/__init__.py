"""SQLAlchemy ORM models for Career Compass.

All models are exported from this module for convenient imports:
    from career_compass.models import AssessmentSubmission, Recommendation

- assessment.py: AssessmentSubmission (raw answers, created first)
- recommendation.py: Recommendation (references a submission)
"""

from career_compass.models.assessment import AssessmentSubmission
from career_compass.models.base import Base, UUIDPrimaryKeyMixin
from career_compass.models.recommendation import Recommendation

__all__ = [
    # Base classes
    "Base",
    "UUIDPrimaryKeyMixin",
    # Records
    "AssessmentSubmission",
    "Recommendation",
]
