"""Conversation schemas."""

from datetime import datetime, timezone
from typing import Literal, Optional
from uuid import uuid4

from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel

Role = Literal["user", "assistant"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ConversationTurnBaseSchema(BaseModel):
    """Base conversation turn schema."""

    role: Role = Field(..., description="Message role")
    content: str = Field(..., min_length=1, description="Message content")


class ConversationTurnCreateSchema(ConversationTurnBaseSchema):
    """Schema for creating a conversation turn."""

    user_id: str = Field(..., description="User ID")
    companion_id: str = Field(..., description="Companion ID")
    reply_to_id: Optional[str] = Field(
        default=None, description="ID of the earlier turn this one replies to"
    )


def count_words(text: str) -> int:
    """Words as the chat client counts them: pieces between single spaces."""
    return len(text.split(" "))


class ConversationTurn(ConversationTurnBaseSchema):
    """Complete conversation turn schema."""

    id: str = Field(default_factory=lambda: uuid4().hex, description="Turn ID")
    user_id: str = Field(..., description="User ID")
    companion_id: str = Field(..., description="Companion ID")
    created_at: datetime = Field(default_factory=_utcnow, description="Creation timestamp")
    reply_to_id: Optional[str] = Field(default=None, description="Replied-to turn ID")
    has_replies: bool = Field(default=False, description="Whether a later turn replies to this one")
    word_count: int = Field(default=0, ge=0, description="Word count of the content")
    character_count: int = Field(default=0, ge=0, description="Character count of the content")
    is_deleted: bool = Field(default=False, description="Soft-delete flag")

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_create(cls, turn: ConversationTurnCreateSchema) -> "ConversationTurn":
        """New stored turn with its content counts filled in."""
        return cls(
            **turn.model_dump(),
            word_count=count_words(turn.content),
            character_count=len(turn.content),
        )


class ExportedMessage(BaseModel):
    """One turn in a conversation export."""

    id: str
    role: Role
    content: str
    timestamp: datetime
    word_count: int
    character_count: int
    is_deleted: bool

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_turn(cls, turn: ConversationTurn) -> "ExportedMessage":
        return cls(
            id=turn.id,
            role=turn.role,
            content=turn.content,
            timestamp=turn.created_at,
            word_count=turn.word_count,
            character_count=turn.character_count,
            is_deleted=turn.is_deleted,
        )


class ExportedConversation(BaseModel):
    """Conversation metadata in an export."""

    id: str
    started_at: Optional[datetime] = None
    message_count: int = 0

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ConversationExport(BaseModel):
    """
    Downloadable chat history, deleted turns included.

    Dump with ``model_dump(by_alias=True, mode="json")`` for the camelCase
    document shape (exportedAt, companionName, ...).
    """

    exported_at: datetime = Field(default_factory=_utcnow)
    companion_name: str
    conversation: ExportedConversation
    messages: list[ExportedMessage] = Field(default_factory=list)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @property
    def filename(self) -> str:
        return f"chat-history-{self.exported_at.date().isoformat()}.json"


class ReplyContext(BaseModel):
    """The earlier turn a new user message replies to."""

    original_content: str = Field(..., description="Content of the replied-to turn")
    role: Role = Field(..., description="Role of the replied-to turn")
    original_id: Optional[str] = Field(default=None, description="ID of the replied-to turn")

    @classmethod
    def from_turn(cls, turn: ConversationTurn) -> "ReplyContext":
        return cls(original_content=turn.content, role=turn.role, original_id=turn.id)


class ChatMessage(BaseModel):
    """One message in the chat-completions request format."""

    role: Literal["system", "user", "assistant"]
    content: str


class AssembledPrompt(BaseModel):
    """System instructions plus ordered messages, ready for the model call."""

    system_prompt: str = Field(..., description="Companion system instructions")
    messages: list[ChatMessage] = Field(
        ..., description="Chronological turns ending with the new user message"
    )
    reply_context: Optional[ReplyContext] = Field(
        default=None, description="Replied-to turn, available to the caller"
    )

    def to_request(self, model: str, temperature: float, max_tokens: int) -> dict:
        """Shape the prompt as a chat-completions request body."""
        return {
            "model": model,
            "messages": self.to_messages(),
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

    def to_messages(self) -> list[dict]:
        """System message followed by the conversation messages."""
        return [{"role": "system", "content": self.system_prompt}] + [
            message.model_dump() for message in self.messages
        ]
