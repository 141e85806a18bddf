"""
Quiz schemas for LearnHub.

Attempt state per question, reveal results and per-document scores.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .progress import compute_percent


class AttemptStatus(str, Enum):
    UNANSWERED = "unanswered"
    ANSWERED = "answered"
    REVEALED = "revealed"


class AttemptState(BaseModel):
    model_config = ConfigDict(frozen=True)

    question_id: int
    selected_option: Optional[int] = None
    revealed: bool = False

    @property
    def status(self) -> AttemptStatus:
        if self.selected_option is None:
            return AttemptStatus.UNANSWERED
        if self.revealed:
            return AttemptStatus.REVEALED
        return AttemptStatus.ANSWERED


class RevealResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    question_id: int
    correct: bool
    explanation: str
    selected_option: int
    correct_answer: int


class QuizScore(BaseModel):
    """
    Score for one document.

    total is always the document's question count; answered counts only
    revealed questions.
    """
    model_config = ConfigDict(frozen=True)

    correct: int = Field(..., ge=0)
    total: int = Field(..., ge=0)
    answered: int = Field(default=0, ge=0)

    @computed_field
    @property
    def percent(self) -> int:
        return compute_percent(self.correct, self.total)

    @computed_field
    @property
    def accuracy(self) -> int:
        """Percentage correct among revealed questions only."""
        return compute_percent(self.correct, self.answered)

    @property
    def is_complete(self) -> bool:
        return self.total > 0 and self.answered == self.total

    @property
    def feedback(self) -> str:
        if self.percent >= 80:
            return "Excellent!"
        if self.percent >= 60:
            return "Good job!"
        return "Keep practicing!"
