"""Memory schemas."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

MemoryCategory = Literal[
    "personal",
    "preference",
    "relationship",
    "experience",
    "knowledge",
    "emotion",
]
EmotionalContext = Literal["nostalgic", "negative", "positive"]


def _dedupe(tags: List[str]) -> List[str]:
    """Drop repeated tags, keeping first-seen order."""
    return list(dict.fromkeys(tags))


class MemoryDecision(BaseModel):
    """Outcome of classifying one chat message."""

    should_store: bool = Field(default=False, description="Whether a memory should be created")
    content: str = Field(default="", description="Memory text (the message itself)")
    importance: int = Field(default=5, ge=1, le=10, description="Importance (1-10)")
    category: MemoryCategory = Field(default="experience", description="Memory category")
    tags: List[str] = Field(default_factory=list, description="Short labels")
    emotional_context: Optional[EmotionalContext] = Field(
        default=None, description="Coarse sentiment of the message"
    )

    model_config = ConfigDict(frozen=True)


class MemoryRecordBaseSchema(BaseModel):
    """Base memory record schema."""

    content: str = Field(..., min_length=1, description="Memory content")
    importance: int = Field(default=5, ge=1, le=10, description="Importance (1-10)")
    category: MemoryCategory = Field(default="personal", description="Memory category")
    tags: List[str] = Field(default_factory=list, description="Short labels")
    emotional_context: Optional[EmotionalContext] = Field(default=None)

    @field_validator("content", mode="before")
    @classmethod
    def strip_content(cls, v: Any) -> Any:
        """Whitespace-only content counts as empty."""
        return v.strip() if isinstance(v, str) else v

    @field_validator("tags")
    @classmethod
    def dedupe_tags(cls, v: List[str]) -> List[str]:
        """Tags are a set; keep first occurrence order."""
        return _dedupe([tag.strip() for tag in v if tag.strip()])


class MemoryRecordCreateSchema(MemoryRecordBaseSchema):
    """Schema for creating a memory record."""

    user_id: str = Field(..., description="User ID")
    companion_id: Optional[str] = Field(
        default=None, description="Companion ID (None for memories not tied to a companion)"
    )
    source_turn_id: Optional[str] = Field(
        default=None, description="Conversation turn the memory was extracted from"
    )
    user_created: bool = Field(default=False, description="Manually added by the user")

    @classmethod
    def from_decision(
        cls,
        decision: MemoryDecision,
        user_id: str,
        companion_id: str,
        source_turn_id: Optional[str] = None,
    ) -> "MemoryRecordCreateSchema":
        """Build a create payload from a storing classifier decision."""
        return cls(
            content=decision.content,
            importance=decision.importance,
            category=decision.category,
            tags=list(decision.tags),
            emotional_context=decision.emotional_context,
            user_id=user_id,
            companion_id=companion_id,
            source_turn_id=source_turn_id,
            user_created=False,
        )


class MemoryRecord(MemoryRecordCreateSchema):
    """Complete memory record schema."""

    id: str = Field(default_factory=lambda: uuid4().hex, description="Memory ID")
    is_visible: bool = Field(default=True, description="Soft-delete flag, toggled by the user")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_legacy(cls, data: Dict[str, Any]) -> "MemoryRecord":
        """
        Adapt a record stored in the older memory shape.

        The legacy shape keeps sentiment under ``context.emotionalTone``, uses a
        ``status`` of active/archived/deleted instead of a visibility flag, and
        marks manual entries with ``type == "manual"``. A missing category
        takes the legacy default, "experience".
        """
        context = data.get("context") or {}
        tone = context.get("emotionalTone")
        created_at = data.get("createdAt")

        fields: Dict[str, Any] = {
            "content": data["content"],
            "importance": data.get("importance", 5),
            "category": data.get("category", "experience"),
            "tags": data.get("tags") or [],
            "emotional_context": tone if tone in ("nostalgic", "negative", "positive") else None,
            "user_id": str(data["userId"]),
            "companion_id": str(data["companionId"]) if data.get("companionId") else None,
            "source_turn_id": str(data["messageId"]) if data.get("messageId") else None,
            "user_created": data.get("type") == "manual",
            "is_visible": data.get("status", "active") == "active",
        }
        if data.get("_id") is not None:
            fields["id"] = str(data["_id"])
        if created_at is not None:
            fields["created_at"] = created_at
        return cls(**fields)
