"""
Tests for memory persistence: the manager and the in-memory store.
"""

import pytest
from unittest.mock import AsyncMock

from core import InvalidMemoryDataError, PersistenceError
from memory.memory_manager import MemoryManager
from memory.store import ConversationStore, InMemoryConversationStore
from schemas import ConversationTurnCreateSchema


@pytest.fixture
def memory_store():
    return InMemoryConversationStore()


@pytest.fixture
def manager(memory_store):
    return MemoryManager(memory_store)


class TestCreateMemory:
    """create_memory_from_message()"""

    async def test_stores_qualifying_message(self, manager, memory_store):
        record = await manager.create_memory_from_message(
            "I'm allergic to shellfish", user_id="u1", companion_id="c1", source_turn_id="t1"
        )

        assert record is not None
        assert record.importance == 9
        assert record.category == "personal"
        assert record.user_created is False
        assert record.is_visible is True
        assert memory_store.memories[record.id] == record

    async def test_skips_non_qualifying_message(self, manager, memory_store):
        assert await manager.create_memory_from_message("ok", "u1", "c1") is None
        assert memory_store.memories == {}

    async def test_store_failure_is_swallowed(self, memory_store):
        memory_store.add_memory = AsyncMock(side_effect=PersistenceError("add_memory", "down"))
        manager = MemoryManager(memory_store)

        assert await manager.create_memory_from_message("my brother is 12", "u1", "c1") is None


class TestManualMemory:
    """add_manual_memory()"""

    async def test_defaults(self, manager, memory_store):
        record = await manager.add_manual_memory("u1", "  My sister's name is Ana  ")

        assert record.content == "My sister's name is Ana"
        assert record.importance == 5
        assert record.category == "personal"
        assert record.tags == []
        assert record.user_created is True
        assert record.companion_id is None
        assert record.is_visible is True
        assert memory_store.memories[record.id] == record

    async def test_explicit_fields(self, manager):
        record = await manager.add_manual_memory(
            "u1",
            "We met at a jazz bar",
            importance=8,
            tags=["music", "music", "first-date"],
            category="relationship",
            companion_id="c1",
        )

        assert record.importance == 8
        assert record.category == "relationship"
        assert record.tags == ["music", "first-date"]
        assert record.companion_id == "c1"

    @pytest.mark.parametrize("content", ["", "   "])
    async def test_rejects_empty_content(self, manager, memory_store, content):
        with pytest.raises(InvalidMemoryDataError) as exc_info:
            await manager.add_manual_memory("u1", content)

        assert exc_info.value.context["field"] == "content"
        assert memory_store.memories == {}

    async def test_rejects_out_of_range_importance(self, manager):
        with pytest.raises(InvalidMemoryDataError) as exc_info:
            await manager.add_manual_memory("u1", "I love tea", importance=11)

        assert exc_info.value.context["field"] == "importance"

    async def test_rejects_unknown_category(self, manager):
        with pytest.raises(InvalidMemoryDataError):
            await manager.add_manual_memory("u1", "I love tea", category="gossip")


class TestVisibility:
    """Soft delete and restore."""

    async def test_hide_and_restore(self, manager):
        record = await manager.create_memory_from_message("my hobby is pottery", "u1", "c1")

        hidden = await manager.hide_memory(record.id)
        assert hidden.is_visible is False
        assert await manager.get_memories("u1") == []

        restored = await manager.restore_memory(record.id)
        assert restored.is_visible is True
        assert [m.id for m in await manager.get_memories("u1")] == [record.id]

    async def test_unknown_memory(self, manager):
        with pytest.raises(PersistenceError):
            await manager.hide_memory("missing")


class TestInMemoryStore:
    """Reference store behaviour."""

    def test_satisfies_protocol(self, memory_store):
        assert isinstance(memory_store, ConversationStore)

    async def test_recent_turns_newest_first(self, memory_store):
        for i in range(5):
            await memory_store.add_turn(
                ConversationTurnCreateSchema(
                    role="user", content=f"m{i}", user_id="u1", companion_id="c1"
                )
            )
        await memory_store.add_turn(
            ConversationTurnCreateSchema(role="user", content="other", user_id="u2", companion_id="c1")
        )

        recent = await memory_store.get_recent_turns("u1", "c1", limit=3)

        assert [t.content for t in recent] == ["m4", "m3", "m2"]

    async def test_list_memories_filters_by_companion(self, manager):
        await manager.create_memory_from_message("my mom sings", "u1", "c1")
        await manager.create_memory_from_message("my dad cooks", "u1", "c2")

        memories = await manager.get_memories("u1", companion_id="c2")

        assert [m.content for m in memories] == ["my dad cooks"]

    async def test_mark_has_replies_unknown_turn(self, memory_store):
        with pytest.raises(PersistenceError):
            await memory_store.mark_has_replies("missing")

    async def test_add_turn_fills_counts(self, memory_store):
        turn = await memory_store.add_turn(
            ConversationTurnCreateSchema(
                role="user", content="hello  there", user_id="u1", companion_id="c1"
            )
        )

        assert turn.word_count == 3
        assert turn.character_count == 12
        assert turn.is_deleted is False

    async def test_history_oldest_first_and_bounded(self, memory_store):
        for i in range(5):
            await memory_store.add_turn(
                ConversationTurnCreateSchema(
                    role="user", content=f"m{i}", user_id="u1", companion_id="c1"
                )
            )

        history = await memory_store.get_history("u1", "c1", limit=3)

        assert [t.content for t in history] == ["m2", "m3", "m4"]
        assert len(await memory_store.get_history("u1", "c1", limit=None)) == 5

    async def test_deleted_turns_hidden_from_reads(self, memory_store):
        turns = []
        for i in range(3):
            turns.append(
                await memory_store.add_turn(
                    ConversationTurnCreateSchema(
                        role="user", content=f"m{i}", user_id="u1", companion_id="c1"
                    )
                )
            )

        deleted = await memory_store.delete_turn(turns[1].id)

        assert deleted.is_deleted is True
        assert [t.content for t in await memory_store.get_history("u1", "c1")] == ["m0", "m2"]
        assert [t.content for t in await memory_store.get_recent_turns("u1", "c1", 5)] == ["m2", "m0"]
        everything = await memory_store.get_history("u1", "c1", include_deleted=True)
        assert [t.content for t in everything] == ["m0", "m1", "m2"]

    async def test_delete_unknown_turn(self, memory_store):
        with pytest.raises(PersistenceError):
            await memory_store.delete_turn("missing")
