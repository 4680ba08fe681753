from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from promptgate.api.deps import get_prompt_evaluator
from promptgate.utils.evaluate.schemas import EvalRequest, EvalVerdict
from promptgate.utils.evaluate.service import PromptEvaluator

router = APIRouter(prefix="/evaluate", tags=["evaluate"])


@router.options("")
async def evaluate_preflight() -> Response:
    return Response(status_code=200)


@router.post("", response_model=EvalVerdict)
async def evaluate_prompt(
    body: EvalRequest,
    evaluator: PromptEvaluator = Depends(get_prompt_evaluator),
) -> EvalVerdict:
    """Score a user-authored prompt; always answers with a well-formed verdict."""
    return await evaluator.evaluate(body)
