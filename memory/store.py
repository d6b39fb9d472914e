"""
Conversation store - the persistence contract the chat flow depends on.

The production document database lives outside this package; anything that
implements ConversationStore can back the orchestrator. InMemoryConversationStore
is the reference implementation used for local runs and tests.
"""

from typing import Dict, List, Optional, Protocol, runtime_checkable

from core import PersistenceError, get_logger
from schemas import (
    ConversationTurn,
    ConversationTurnCreateSchema,
    MemoryRecord,
    MemoryRecordCreateSchema,
    PersonalityProfile,
)

logger = get_logger(__name__)


@runtime_checkable
class ConversationStore(Protocol):
    """Async persistence operations used by the chat flow."""

    async def get_companion(self, companion_id: str) -> Optional[PersonalityProfile]: ...

    async def add_turn(self, turn: ConversationTurnCreateSchema) -> ConversationTurn: ...

    async def get_turn(self, turn_id: str) -> Optional[ConversationTurn]: ...

    async def get_recent_turns(
        self, user_id: str, companion_id: str, limit: int
    ) -> List[ConversationTurn]: ...

    async def get_history(
        self,
        user_id: str,
        companion_id: str,
        limit: Optional[int] = 50,
        include_deleted: bool = False,
    ) -> List[ConversationTurn]: ...

    async def delete_turn(self, turn_id: str) -> ConversationTurn: ...

    async def mark_has_replies(self, turn_id: str) -> None: ...

    async def add_memory(self, memory: MemoryRecordCreateSchema) -> MemoryRecord: ...

    async def list_memories(
        self, user_id: str, companion_id: Optional[str] = None, limit: int = 50
    ) -> List[MemoryRecord]: ...

    async def set_memory_visibility(self, memory_id: str, visible: bool) -> MemoryRecord: ...


class InMemoryConversationStore:
    """Dict-backed ConversationStore."""

    def __init__(self):
        self.companions: Dict[str, PersonalityProfile] = {}
        self.turns: Dict[str, ConversationTurn] = {}
        self.memories: Dict[str, MemoryRecord] = {}

    # ==================== Companions ====================

    async def save_companion(self, companion_id: str, profile: PersonalityProfile) -> None:
        self.companions[companion_id] = profile

    async def get_companion(self, companion_id: str) -> Optional[PersonalityProfile]:
        return self.companions.get(companion_id)

    # ==================== Conversation Turns ====================

    async def add_turn(self, turn: ConversationTurnCreateSchema) -> ConversationTurn:
        stored = ConversationTurn.from_create(turn)
        self.turns[stored.id] = stored
        return stored

    async def get_turn(self, turn_id: str) -> Optional[ConversationTurn]:
        return self.turns.get(turn_id)

    def _conversation(
        self, user_id: str, companion_id: str, include_deleted: bool = False
    ) -> List[ConversationTurn]:
        """Turns of one user-companion pair, oldest first."""
        # Insertion order breaks timestamp ties
        ordered = [
            (t.created_at, position, t)
            for position, t in enumerate(self.turns.values())
            if t.user_id == user_id
            and t.companion_id == companion_id
            and (include_deleted or not t.is_deleted)
        ]
        ordered.sort(key=lambda item: item[:2])
        return [t for _, _, t in ordered]

    async def get_recent_turns(
        self, user_id: str, companion_id: str, limit: int
    ) -> List[ConversationTurn]:
        """Most recent turns first, as a descending-timestamp query returns them."""
        turns = self._conversation(user_id, companion_id)
        return list(reversed(turns))[:limit]

    async def get_history(
        self,
        user_id: str,
        companion_id: str,
        limit: Optional[int] = 50,
        include_deleted: bool = False,
    ) -> List[ConversationTurn]:
        """The last `limit` turns oldest first; None returns the whole conversation."""
        turns = self._conversation(user_id, companion_id, include_deleted=include_deleted)
        if limit is None:
            return turns
        return turns[-limit:] if limit > 0 else []

    async def delete_turn(self, turn_id: str) -> ConversationTurn:
        turn = self.turns.get(turn_id)
        if turn is None:
            raise PersistenceError("delete_turn", f"turn {turn_id} not found")
        deleted = turn.model_copy(update={"is_deleted": True})
        self.turns[turn_id] = deleted
        return deleted

    async def mark_has_replies(self, turn_id: str) -> None:
        turn = self.turns.get(turn_id)
        if turn is None:
            raise PersistenceError("mark_has_replies", f"turn {turn_id} not found")
        self.turns[turn_id] = turn.model_copy(update={"has_replies": True})

    # ==================== Memories ====================

    async def add_memory(self, memory: MemoryRecordCreateSchema) -> MemoryRecord:
        record = MemoryRecord(**memory.model_dump())
        self.memories[record.id] = record
        return record

    async def list_memories(
        self, user_id: str, companion_id: Optional[str] = None, limit: int = 50
    ) -> List[MemoryRecord]:
        """Visible memories, newest first."""
        records = [
            m for m in self.memories.values()
            if m.user_id == user_id
            and m.is_visible
            and (companion_id is None or m.companion_id == companion_id)
        ]
        records.sort(key=lambda m: m.created_at, reverse=True)
        return records[:limit]

    async def set_memory_visibility(self, memory_id: str, visible: bool) -> MemoryRecord:
        record = self.memories.get(memory_id)
        if record is None:
            raise PersistenceError("set_memory_visibility", f"memory {memory_id} not found")
        updated = record.model_copy(update={"is_visible": visible})
        self.memories[memory_id] = updated
        logger.info("Memory visibility changed", memory_id=memory_id, visible=visible)
        return updated
