"""Assessment question catalog.

The single source of truth for the self-assessment questionnaire. The
API serves it to the presentation layer and the answer formatter reads it
to label answers in the prompt; neither re-declares it.
"""

from dataclasses import dataclass
from enum import Enum


class Cardinality(Enum):
    """How many options a question accepts."""

    SINGLE = "single"
    MULTIPLE = "multiple"


@dataclass(frozen=True)
class Question:
    """One assessment question.

    Attributes:
        id: Stable identifier, unique across the catalog.
        text: Prompt shown to the user.
        options: Selectable options in display order.
        cardinality: Whether one or several options may be chosen.
    """

    id: int
    text: str
    options: tuple[str, ...]
    cardinality: Cardinality

    def __post_init__(self) -> None:
        if not self.options:
            raise ValueError(f"Question {self.id} has no options")
        if len(set(self.options)) != len(self.options):
            raise ValueError(f"Question {self.id} has duplicate options")


QUESTION_CATALOG: tuple[Question, ...] = (
    Question(
        id=1,
        text="What are your main interests?",
        options=(
            "Technology and Innovation",
            "Business and Finance",
            "Healthcare and Medicine",
            "Arts and Creativity",
            "Science and Research",
            "Education and Training",
            "Social Services",
            "Engineering and Construction",
        ),
        cardinality=Cardinality.MULTIPLE,
    ),
    Question(
        id=2,
        text="What type of work environment do you prefer?",
        options=(
            "Office setting",
            "Remote work",
            "Outdoor/Field work",
            "Laboratory",
            "Classroom",
            "Healthcare facility",
            "Creative studio",
            "Construction site",
        ),
        cardinality=Cardinality.SINGLE,
    ),
    Question(
        id=3,
        text="What are your strongest skills?",
        options=(
            "Analytical thinking",
            "Communication",
            "Leadership",
            "Technical skills",
            "Creative problem-solving",
            "Attention to detail",
            "Team collaboration",
            "Project management",
        ),
        cardinality=Cardinality.MULTIPLE,
    ),
    Question(
        id=4,
        text="What level of education are you willing to pursue?",
        options=(
            "High school diploma",
            "Associate's degree",
            "Bachelor's degree",
            "Master's degree",
            "Doctoral degree",
            "Professional certification",
            "Trade school",
            "On-the-job training",
        ),
        cardinality=Cardinality.SINGLE,
    ),
    Question(
        id=5,
        text="What is your preferred work schedule?",
        options=(
            "Regular 9-5",
            "Flexible hours",
            "Shift work",
            "Part-time",
            "Freelance/Contract",
            "Seasonal",
            "On-call",
            "Remote with flexible hours",
        ),
        cardinality=Cardinality.SINGLE,
    ),
)

_QUESTIONS_BY_ID: dict[int, Question] = {q.id: q for q in QUESTION_CATALOG}

if len(_QUESTIONS_BY_ID) != len(QUESTION_CATALOG):
    raise RuntimeError("Question catalog contains duplicate ids")


def get_question(question_id: int) -> Question | None:
    """Look up a catalog question by id.

    Returns:
        The Question, or None if the id is not in the catalog.
    """
    return _QUESTIONS_BY_ID.get(question_id)
