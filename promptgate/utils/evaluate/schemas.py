from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

ProjectType = Literal["chat", "website", "tool"]

VALID_STEPS = (3, 4)
DEFAULT_PROJECT_TYPE: ProjectType = "chat"


class EvalRequest(BaseModel):
    """Prompt evaluation request schema."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    user_prompt: Optional[str] = Field(default=None, alias="userPrompt")
    step: Optional[int] = None
    project: Optional[str] = None
    project_name: Optional[str] = Field(default=None, alias="projectName")
    project_type: Optional[ProjectType] = Field(default=None, alias="projectType")


class EvalVerdict(BaseModel):
    """
    Verdict returned by the evaluator.

    Strict so that a model answering ``"approved": "yes"`` or ``"score": "8"``
    is treated as a contract violation rather than coerced.
    """
    model_config = ConfigDict(strict=True, extra="ignore", populate_by_name=True)

    approved: bool
    score: int = Field(ge=1, le=10)
    suggestion: str = Field(min_length=1)
    explanation: str = Field(min_length=1)
    extracted_prompt: Optional[str] = Field(default=None, alias="extractedPrompt")
