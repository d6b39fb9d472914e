"""
Memory Manager - turns chat messages into stored memories.

Memory creation is best-effort: a store failure is logged and never
interrupts the chat turn that triggered it.
"""

from typing import List, Optional

from pydantic import ValidationError

from core import InvalidMemoryDataError, get_logger
from memory.classifier import MemoryClassifier, memory_classifier
from memory.store import ConversationStore
from schemas import MemoryRecord, MemoryRecordCreateSchema

logger = get_logger(__name__)


class MemoryManager:
    """Classifies messages and persists the memories they yield."""

    def __init__(
        self,
        store: ConversationStore,
        classifier: MemoryClassifier = memory_classifier,
    ):
        self.store = store
        self.classifier = classifier

    async def create_memory_from_message(
        self,
        message: str,
        user_id: str,
        companion_id: str,
        source_turn_id: Optional[str] = None,
    ) -> Optional[MemoryRecord]:
        """
        Classify a user message and store a memory if it qualifies.

        Returns:
            The stored MemoryRecord, or None when the message holds nothing
            memorable or the write failed
        """
        decision = self.classifier.classify(message)
        if not decision.should_store:
            return None

        payload = MemoryRecordCreateSchema.from_decision(
            decision,
            user_id=user_id,
            companion_id=companion_id,
            source_turn_id=source_turn_id,
        )

        try:
            record = await self.store.add_memory(payload)
        except Exception as e:
            logger.error(
                "Error creating memory from message",
                user_id=user_id,
                companion_id=companion_id,
                error=str(e),
            )
            return None

        logger.info(
            "Created memory",
            memory_id=record.id,
            content_preview=record.content[:50],
            importance=record.importance,
            category=record.category,
        )
        return record

    async def add_manual_memory(
        self,
        user_id: str,
        content: str,
        importance: int = 5,
        tags: Optional[List[str]] = None,
        category: str = "personal",
        companion_id: Optional[str] = None,
    ) -> MemoryRecord:
        """
        Store a memory the user wrote themselves.

        Raises:
            InvalidMemoryDataError: empty content, importance outside 1-10 or
                an unknown category
            PersistenceError: the store rejected the write
        """
        try:
            payload = MemoryRecordCreateSchema(
                content=content,
                importance=importance,
                category=category,
                tags=tags or [],
                user_id=user_id,
                companion_id=companion_id,
                user_created=True,
            )
        except ValidationError as e:
            error = e.errors()[0]
            field = ".".join(str(part) for part in error["loc"]) or "memory"
            raise InvalidMemoryDataError(field, error["msg"]) from e

        record = await self.store.add_memory(payload)

        logger.info(
            "Created manual memory",
            memory_id=record.id,
            user_id=user_id,
            importance=record.importance,
            category=record.category,
        )
        return record

    async def get_memories(
        self, user_id: str, companion_id: Optional[str] = None, limit: int = 50
    ) -> List[MemoryRecord]:
        """Visible memories for a user, newest first."""
        return await self.store.list_memories(user_id, companion_id=companion_id, limit=limit)

    async def hide_memory(self, memory_id: str) -> MemoryRecord:
        """Soft-delete a memory."""
        return await self.store.set_memory_visibility(memory_id, visible=False)

    async def restore_memory(self, memory_id: str) -> MemoryRecord:
        """Make a hidden memory visible again."""
        return await self.store.set_memory_visibility(memory_id, visible=True)
