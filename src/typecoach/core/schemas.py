"""
Pydantic models for session configuration and loop payloads.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# =============================================================================
# CONFIGURATION
# =============================================================================

class LoopConfig(BaseModel):
    """Stopping policy parameters for one session."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    threshold: float = Field(0.9, ge=0.5, lt=1.0, description="Top-type probability that ends the loop")
    max_questions: int = Field(8, ge=2, le=12, description="Hard cap on questions asked")
    min_questions: int = Field(0, ge=0, le=10, description="Questions asked before any stop is allowed")

    @model_validator(mode="after")
    def _min_not_above_max(self) -> "LoopConfig":
        if self.min_questions > self.max_questions:
            raise ValueError("min_questions must not exceed max_questions")
        return self


# =============================================================================
# RECORDS
# =============================================================================

class AnswerRecord(BaseModel):
    """One entry of the answer log, with its entropy contribution."""
    question_id: str
    answer: str
    text: str
    delta: float = 0.0


class QuestionData(BaseModel):
    """A question as shown to the respondent."""
    id: str
    text: str


class Progress(BaseModel):
    asked: int
    max: int


class Hint(BaseModel):
    """Current leading type while the loop is still collecting."""
    top_label: str
    confidence: float


class TopType(BaseModel):
    id: str
    label: str
    confidence: float


# =============================================================================
# LOOP STATUS
# =============================================================================

class LoopStatus(BaseModel):
    """Result of every session operation."""
    done: bool
    posterior: Dict[str, float]
    progress: Progress
    question: Optional[QuestionData] = None
    hint: Optional[Hint] = None
    top: Optional[TopType] = None
    next_steps: List[str] = Field(default_factory=list)
    evidence: List[AnswerRecord] = Field(default_factory=list)
    stop_reason: Optional[str] = None
