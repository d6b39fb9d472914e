"""Backstory evaluation schemas."""

from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator


def _round_score(v: Any) -> Any:
    """Models sometimes answer 82.5; scores are whole numbers."""
    return round(v) if isinstance(v, float) else v


class RelationshipBackstory(BaseModel):
    """Structured details about the user's relationship with the companion."""

    how_you_met: Optional[str] = None
    relationship_duration: Optional[str] = None
    living_situation: Optional[str] = None
    home_description: Optional[str] = None
    partner_quirks: Optional[str] = None
    shared_memories: Optional[str] = None
    relationship_dynamics: Optional[str] = None


class BackstoryCriteria(BaseModel):
    """Per-criterion scores (1-100)."""

    detail: int
    consistency: int
    emotional_depth: int
    uniqueness: int

    @field_validator("detail", "consistency", "emotional_depth", "uniqueness", mode="before")
    @classmethod
    def round_scores(cls, v: Any) -> Any:
        return _round_score(v)


class BackstoryScore(BaseModel):
    """Evaluation of a companion backstory."""

    overall: int
    criteria: BackstoryCriteria
    suggestions: List[str] = Field(default_factory=list)
    last_evaluated: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    is_fallback: bool = Field(
        default=False, description="Scored by word count because the model reply was unusable"
    )

    @field_validator("overall", mode="before")
    @classmethod
    def round_overall(cls, v: Any) -> Any:
        return _round_score(v)
