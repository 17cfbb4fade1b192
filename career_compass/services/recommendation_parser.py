"""Model-output parsing and validation for career recommendations.

Turns the model's free-form text into a validated RecommendationPayload:

1. Strip leading/trailing Markdown code fences and whitespace
2. Parse the remainder as JSON
3. Validate the top-level shape (non-empty ``analysis``, non-empty ``careers`` list)
4. Validate every career entry (strict on required fields, lenient on extras
   and on ``relatedCareers``)
5. Parse the optional ``recommendations`` block; an unusable block is dropped

Any failure in steps 2-4 rejects the whole document. Nothing partial is
ever returned.
"""

import json
import re
from typing import Any

import structlog
from pydantic import ValidationError

from career_compass.schemas.recommendation import (
    AdditionalRecommendations,
    CareerEntry,
    RecommendationPayload,
)

logger = structlog.get_logger()

_LEADING_FENCE = re.compile(r"^```[A-Za-z0-9_+-]*[ \t]*(?:\r?\n)?")
_TRAILING_FENCE = re.compile(r"(?:\r?\n)?[ \t]*```$")

_LOG_EXCERPT_LENGTH = 200
"""Max characters of raw model text included in log events."""


class RecommendationParseError(Exception):
    """Base class for unusable model output.

    Attributes:
        raw_text: The model text exactly as received, kept for server-side
            diagnostics. Never returned to API callers.
    """

    def __init__(self, message: str, raw_text: str) -> None:
        super().__init__(message)
        self.raw_text = raw_text


class MalformedResponseError(RecommendationParseError):
    """The model output is not a JSON document."""

    def __init__(self, raw_text: str, reason: str = "Invalid JSON") -> None:
        super().__init__(f"Malformed model response: {reason}", raw_text)
        self.reason = reason


class SchemaViolationError(RecommendationParseError):
    """The JSON document does not have the recommendation shape.

    Attributes:
        violations: Human-readable descriptions of each problem found,
            e.g. ``"careers[1].title: Field required"``.
    """

    def __init__(self, violations: list[str], raw_text: str) -> None:
        super().__init__(
            "Recommendation schema violation: " + "; ".join(violations), raw_text
        )
        self.violations = violations


def strip_code_fences(text: str) -> str:
    """Remove a leading and a trailing Markdown code fence, plus whitespace.

    Accepts fenced (```` ```json ... ``` ```` or ```` ``` ... ``` ````) and
    unfenced input. Idempotent.
    """
    stripped = text.strip()
    stripped = _LEADING_FENCE.sub("", stripped, count=1)
    stripped = _TRAILING_FENCE.sub("", stripped, count=1)
    return stripped.strip()


def _format_location(prefix: str, loc: tuple[int | str, ...]) -> str:
    path = prefix
    for part in loc:
        path += f"[{part}]" if isinstance(part, int) else f".{part}"
    return path


def _validate_top_level(document: Any, raw_text: str) -> tuple[str, list[Any]]:
    """Check ``analysis`` and ``careers`` before looking at entries."""
    if not isinstance(document, dict):
        raise SchemaViolationError(
            [f"top level must be an object, got {type(document).__name__}"],
            raw_text,
        )

    violations: list[str] = []

    analysis = document.get("analysis")
    if not isinstance(analysis, str) or not analysis.strip():
        violations.append("analysis: must be a non-empty string")

    careers = document.get("careers")
    if not isinstance(careers, list):
        violations.append("careers: must be an array")
    elif not careers:
        violations.append("careers: must contain at least one entry")

    if violations:
        raise SchemaViolationError(violations, raw_text)

    return analysis, careers


def _validate_careers(careers: list[Any], raw_text: str) -> list[CareerEntry]:
    """Validate every career entry, collecting all violations."""
    validated: list[CareerEntry] = []
    violations: list[str] = []

    for index, entry in enumerate(careers):
        prefix = f"careers[{index}]"
        if not isinstance(entry, dict):
            violations.append(f"{prefix}: must be an object")
            continue
        try:
            validated.append(CareerEntry.model_validate(entry))
        except ValidationError as exc:
            violations.extend(
                f"{_format_location(prefix, err['loc'])}: {err['msg']}"
                for err in exc.errors()
            )

    if violations:
        raise SchemaViolationError(violations, raw_text)

    return validated


def _parse_additional(block: Any) -> AdditionalRecommendations | None:
    """Parse the optional development-suggestions block leniently."""
    if block is None:
        return None
    if not isinstance(block, dict):
        logger.info(
            "additional_recommendations_dropped",
            reason="not an object",
        )
        return None
    try:
        return AdditionalRecommendations.model_validate(block)
    except ValidationError as exc:
        logger.info(
            "additional_recommendations_dropped",
            reason="invalid fields",
            error_count=exc.error_count(),
        )
        return None


def parse_recommendation(raw_text: str) -> RecommendationPayload:
    """Parse and validate model output into a recommendation payload.

    Args:
        raw_text: Model text, fenced or unfenced.

    Returns:
        RecommendationPayload with at least one career entry.

    Raises:
        MalformedResponseError: The text is not valid JSON.
        SchemaViolationError: The JSON lacks a usable analysis, has no
            careers array, or any career misses a required field.
    """
    text = strip_code_fences(raw_text or "")

    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.warning(
            "recommendation_parse_failed",
            error_type="MalformedResponseError",
            reason=exc.msg,
            raw_excerpt=(raw_text or "")[:_LOG_EXCERPT_LENGTH],
        )
        raise MalformedResponseError(raw_text, reason=exc.msg) from exc

    try:
        analysis, careers = _validate_top_level(document, raw_text)
        validated_careers = _validate_careers(careers, raw_text)
    except SchemaViolationError as exc:
        logger.warning(
            "recommendation_parse_failed",
            error_type="SchemaViolationError",
            violations=exc.violations[:10],
            raw_excerpt=raw_text[:_LOG_EXCERPT_LENGTH],
        )
        raise

    return RecommendationPayload(
        analysis=analysis,
        careers=validated_careers,
        additional=_parse_additional(document.get("recommendations")),
    )
