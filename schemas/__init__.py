"""
Pydantic schemas for type-safe data transfer.
"""

from schemas.personality import PersonalityProfile, HumorStyle, CommunicationStyle, TRAIT_FIELDS
from schemas.conversation import (
    ConversationTurn,
    ConversationTurnCreateSchema,
    ReplyContext,
    ChatMessage,
    AssembledPrompt,
    ConversationExport,
    ExportedConversation,
    ExportedMessage,
    count_words,
)
from schemas.memory import (
    MemoryDecision,
    MemoryRecord,
    MemoryRecordCreateSchema,
    MemoryCategory,
    EmotionalContext,
)
from schemas.backstory import RelationshipBackstory, BackstoryCriteria, BackstoryScore

__all__ = [
    "PersonalityProfile",
    "HumorStyle",
    "CommunicationStyle",
    "TRAIT_FIELDS",
    "ConversationTurn",
    "ConversationTurnCreateSchema",
    "ReplyContext",
    "ChatMessage",
    "AssembledPrompt",
    "ConversationExport",
    "ExportedConversation",
    "ExportedMessage",
    "count_words",
    "MemoryDecision",
    "MemoryRecord",
    "MemoryRecordCreateSchema",
    "MemoryCategory",
    "EmotionalContext",
    "RelationshipBackstory",
    "BackstoryCriteria",
    "BackstoryScore",
]
