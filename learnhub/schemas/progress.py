"""
Progress tracking schemas for LearnHub.

Defines Pydantic models for reader progress including:
- Trackable items (skills or whole sections)
- Per-document completion state
- Aggregate completion statistics
"""

import math

from pydantic import BaseModel, ConfigDict, Field


def compute_percent(part: int, total: int) -> int:
    """
    Whole-number percentage, rounding halves up.

    Returns 0 when total is 0.
    """
    if total <= 0:
        return 0
    return int(math.floor(part / total * 100 + 0.5))


class ProgressItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    section_id: str
    label: str


class ProgressState(BaseModel):
    """Done flags for every item of one document."""
    model_config = ConfigDict(frozen=True)

    slug: str
    items: dict[str, bool] = {}

    def is_done(self, item_id: str) -> bool:
        return self.items.get(item_id, False)

    @property
    def done_ids(self) -> list[str]:
        return [item_id for item_id, done in self.items.items() if done]


class ProgressSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    percent: int = Field(..., ge=0, le=100)
    done_count: int = Field(..., ge=0)
    total_count: int = Field(..., ge=0)

    @property
    def is_complete(self) -> bool:
        return self.total_count > 0 and self.done_count == self.total_count
