"""Answer formatting for prompt embedding.

Turns a raw answer map (question id → selected option or options) into
human-readable question/answer pairs. Output order follows the input
map's iteration order, not catalog order.
"""

import re
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass

from career_compass.services.question_catalog import Question, get_question

ANSWER_DELIMITER = ", "

AnswerValue = str | Sequence[str]

# Optional sign, ASCII digits only
_NUMERIC_KEY = re.compile(r"-?[0-9]+")


class MissingQuestionError(Exception):
    """An answer references a question id that is not in the catalog.

    Attributes:
        question_id: The offending key exactly as submitted.
    """

    def __init__(self, question_id: object) -> None:
        super().__init__(f"Question with ID {question_id} not found")
        self.question_id = question_id


@dataclass(frozen=True)
class FormattedAnswer:
    """One question/answer pair ready for the prompt transcript."""

    question_text: str
    answer_text: str


def _resolve_question_id(key: object) -> int:
    """Convert an answer-map key to a question id.

    JSON object keys always arrive as strings, so numeric strings are
    accepted alongside ints.

    Raises:
        MissingQuestionError: If the key is not an integer id.
    """
    if isinstance(key, bool):
        raise MissingQuestionError(key)
    if isinstance(key, int):
        return key
    if isinstance(key, str):
        stripped = key.strip()
        if _NUMERIC_KEY.fullmatch(stripped):
            return int(stripped)
    raise MissingQuestionError(key)


def _render_answer(answer: AnswerValue) -> str:
    if isinstance(answer, str):
        return answer
    return ANSWER_DELIMITER.join(answer)


def format_answers(
    answers: Mapping[object, AnswerValue],
    catalog: Iterable[Question] | None = None,
) -> list[FormattedAnswer]:
    """Format an answer map into question/answer pairs.

    Args:
        answers: Question id (int or numeric string) → a single option
            string or a sequence of option strings.
        catalog: Questions to resolve ids against. Defaults to the
            built-in question catalog.

    Returns:
        One FormattedAnswer per entry, in the input map's order. Sequences
        are joined with ``", "``; single strings pass through unchanged.

    Raises:
        MissingQuestionError: If any key does not resolve to a catalog
            question. Raised before any output is produced.
    """
    lookup: Callable[[int], Question | None]
    if catalog is None:
        lookup = get_question
    else:
        lookup = {question.id: question for question in catalog}.get

    formatted: list[FormattedAnswer] = []
    for key, answer in answers.items():
        question = lookup(_resolve_question_id(key))
        if question is None:
            raise MissingQuestionError(key)
        formatted.append(
            FormattedAnswer(
                question_text=question.text,
                answer_text=_render_answer(answer),
            )
        )
    return formatted
