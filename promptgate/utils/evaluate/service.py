from __future__ import annotations

import logging

from promptgate.core.errors import ClientInputError, UpstreamFailure
from promptgate.infrastructure.llm.base import BaseLLMProvider
from promptgate.utils.evaluate.parsing import coerce_verdict
from promptgate.utils.evaluate.rubric import EVAL_SYSTEM, build_evaluation_message
from promptgate.utils.evaluate.schemas import VALID_STEPS, EvalRequest, EvalVerdict

logger = logging.getLogger(__name__)

EVALUATION_FAILED = "Evaluation failed"


def validate_eval_request(req: EvalRequest) -> int:
    """Returns the validated step."""
    if not req.user_prompt or not req.step:
        raise ClientInputError("userPrompt and step are required")
    if req.step not in VALID_STEPS:
        raise ClientInputError("step must be 3 or 4")
    return req.step


class PromptEvaluator:
    """Scores a user-authored prompt against the rubric and returns one verdict."""

    def __init__(self, provider: BaseLLMProvider, *, max_tokens: int = 512) -> None:
        self._provider = provider
        self._max_tokens = max_tokens

    async def evaluate(self, req: EvalRequest) -> EvalVerdict:
        step = validate_eval_request(req)
        body = build_evaluation_message(
            req.user_prompt,
            step,
            project=req.project,
            project_name=req.project_name,
            project_type=req.project_type,
        )

        try:
            raw = await self._provider.complete(
                self._provider.user_turn(body),
                system=EVAL_SYSTEM,
                max_tokens=self._max_tokens,
            )
        except Exception as exc:
            logger.exception("Evaluate upstream call failed")
            raise UpstreamFailure.from_exception(EVALUATION_FAILED, exc) from exc

        verdict = coerce_verdict(raw, step)
        logger.info(
            "Evaluated step=%s project=%s approved=%s score=%s",
            step, req.project or "unknown", verdict.approved, verdict.score,
        )
        return verdict
