"""
Coercion of free-form model output into an EvalVerdict.

``parse_verdict`` is strict and raises VerdictParseError, ``fallback_verdict``
never raises, and ``coerce_verdict`` chains the two. None of it touches the
network.
"""
from __future__ import annotations

import logging
import re

from pydantic import ValidationError

from promptgate.core.errors import VerdictParseError
from promptgate.utils.evaluate.schemas import EvalVerdict

logger = logging.getLogger(__name__)

APPROVAL_THRESHOLD = 7

FALLBACK_SCORE = 3
FALLBACK_SUGGESTIONS = {
    3: "create journal.js and connect to Anthropic SDK",
    4: "add a chat() function that takes user input and returns Claude's response",
}
FALLBACK_EXPLANATION = "Be specific about what to name and build."

_LEADING_FENCE = re.compile(r"^```(?:json)?\n?", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\n?```$")


def strip_code_fences(raw: str) -> str:
    """Trim whitespace and a surrounding fenced code block, if any."""
    text = (raw or "").strip()
    text = _LEADING_FENCE.sub("", text)
    text = _TRAILING_FENCE.sub("", text)
    return text.strip()


def normalize_verdict(verdict: EvalVerdict, step: int) -> EvalVerdict:
    """Apply the invariants the model is only asked, not forced, to respect."""
    update: dict = {}

    extracted = verdict.extracted_prompt
    if step != 4 or not (extracted or "").strip():
        if extracted is not None:
            update["extracted_prompt"] = None

    if verdict.approved and verdict.score < APPROVAL_THRESHOLD:
        logger.info("Downgrading approved verdict with score %s", verdict.score)
        update["approved"] = False

    return verdict.model_copy(update=update) if update else verdict


def parse_verdict(raw: str, step: int) -> EvalVerdict:
    """Parse model output into a verdict. Raises VerdictParseError on any mismatch."""
    cleaned = strip_code_fences(raw)
    if not cleaned:
        raise VerdictParseError("empty model output")

    try:
        verdict = EvalVerdict.model_validate_json(cleaned)
    except ValidationError as exc:
        raise VerdictParseError(f"model output is not a valid verdict: {exc.error_count()} error(s)") from exc

    return normalize_verdict(verdict, step)


def fallback_verdict(step: int) -> EvalVerdict:
    """Canned rejection used whenever the model output cannot be trusted."""
    return EvalVerdict(
        approved=False,
        score=FALLBACK_SCORE,
        suggestion=FALLBACK_SUGGESTIONS.get(step, FALLBACK_SUGGESTIONS[4]),
        explanation=FALLBACK_EXPLANATION,
        extracted_prompt=None,
    )


def coerce_verdict(raw: str, step: int) -> EvalVerdict:
    try:
        return parse_verdict(raw, step)
    except VerdictParseError as exc:
        logger.warning("Falling back to canned verdict for step %s: %s", step, exc)
        return fallback_verdict(step)
