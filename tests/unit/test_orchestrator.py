"""
Tests for the chat turn flow.

Store, memory extraction and the companion agent are wired together with an
in-memory store and a mocked LLM client.
"""

import pytest
from unittest.mock import AsyncMock

from agents import ChatOrchestrator, CompanionAgent
from core import ConfigurationError, ExternalCallError, InvalidInputError


class TestProcessMessage:
    """Happy path."""

    async def test_stores_both_turns(self, orchestrator, store):
        result = await orchestrator.process_message("user-1", "comp-1", "  hello there  ")

        assert result.user_turn.content == "hello there"
        assert result.user_turn.role == "user"
        assert result.assistant_turn.content == "hey you, tell me more!"
        assert result.assistant_turn.role == "assistant"
        assert result.assistant_turn.reply_to_id == result.user_turn.id
        assert len(store.turns) == 2

    async def test_creates_memory_for_personal_message(self, orchestrator, store):
        result = await orchestrator.process_message("user-1", "comp-1", "My dad taught me to fish")

        assert result.memory is not None
        assert result.memory.source_turn_id == result.user_turn.id
        assert result.memory.tags == ["family"]
        assert list(store.memories) == [result.memory.id]

    async def test_no_memory_for_small_talk(self, orchestrator, store):
        result = await orchestrator.process_message("user-1", "comp-1", "ok")

        assert result.memory is None
        assert store.memories == {}

    async def test_prompt_ends_with_new_message(self, orchestrator, mock_llm):
        await orchestrator.process_message("user-1", "comp-1", "first")
        await orchestrator.process_message("user-1", "comp-1", "second")

        messages = mock_llm.chat.call_args.kwargs["messages"]
        assert messages[0]["role"] == "system"
        assert [m["content"] for m in messages[1:]] == [
            "first",
            "hey you, tell me more!",
            "second",
        ]

    async def test_history_window_is_bounded(self, store, mock_llm):
        orchestrator = ChatOrchestrator(
            store=store,
            agent=CompanionAgent(mock_llm, context_limit=4),
            context_limit=4,
        )
        for i in range(5):
            await orchestrator.process_message("user-1", "comp-1", f"msg {i}")

        messages = mock_llm.chat.call_args.kwargs["messages"]
        # system + 4 earlier turns + new message
        assert len(messages) == 6
        assert messages[-1]["content"] == "msg 4"


class TestReplyContext:
    """Replying to an earlier turn."""

    async def test_reply_marks_original_and_reaches_agent(self, store, mock_llm):
        agent = CompanionAgent(mock_llm)
        orchestrator = ChatOrchestrator(store=store, agent=agent)
        first = await orchestrator.process_message("user-1", "comp-1", "first")

        agent.respond = AsyncMock(wraps=agent.respond)
        result = await orchestrator.process_message(
            "user-1", "comp-1", "about that", reply_to_id=first.assistant_turn.id
        )

        reply_context = agent.respond.call_args.kwargs["reply_context"]
        assert reply_context.original_content == "hey you, tell me more!"
        assert reply_context.role == "assistant"
        assert result.user_turn.reply_to_id == first.assistant_turn.id
        assert store.turns[first.assistant_turn.id].has_replies is True

    async def test_unknown_reply_id_is_ignored(self, orchestrator):
        result = await orchestrator.process_message(
            "user-1", "comp-1", "about that", reply_to_id="missing"
        )

        assert result.assistant_turn.content == "hey you, tell me more!"


class TestHistory:
    """get_history() and export_history()"""

    async def test_history_oldest_first(self, orchestrator):
        await orchestrator.process_message("user-1", "comp-1", "first")
        await orchestrator.process_message("user-1", "comp-1", "second")

        history = await orchestrator.get_history("user-1", "comp-1")

        assert [t.content for t in history] == [
            "first",
            "hey you, tell me more!",
            "second",
            "hey you, tell me more!",
        ]
        assert [t.content for t in await orchestrator.get_history("user-1", "comp-1", limit=1)] == [
            "hey you, tell me more!"
        ]

    async def test_export_includes_deleted_turns(self, orchestrator, store):
        first = await orchestrator.process_message("user-1", "comp-1", "hello  there")
        await store.delete_turn(first.assistant_turn.id)

        export = await orchestrator.export_history("user-1", "comp-1")

        assert export.companion_name == "Mira"
        assert export.conversation.id == "user-1:comp-1"
        assert export.conversation.started_at == first.user_turn.created_at
        assert export.conversation.message_count == 2
        assert [m.is_deleted for m in export.messages] == [False, True]
        assert export.messages[0].word_count == 3
        assert export.messages[0].character_count == 12
        assert export.filename.startswith("chat-history-")

    async def test_export_document_shape(self, orchestrator):
        await orchestrator.process_message("user-1", "comp-1", "hi")

        document = (await orchestrator.export_history("user-1", "comp-1")).model_dump(
            by_alias=True, mode="json"
        )

        assert set(document) == {"exportedAt", "companionName", "conversation", "messages"}
        assert set(document["conversation"]) == {"id", "startedAt", "messageCount"}
        assert set(document["messages"][0]) == {
            "id",
            "role",
            "content",
            "timestamp",
            "wordCount",
            "characterCount",
            "isDeleted",
        }

    async def test_export_empty_conversation(self, orchestrator):
        export = await orchestrator.export_history("user-1", "comp-1")

        assert export.messages == []
        assert export.conversation.started_at is None
        assert export.conversation.message_count == 0

    async def test_export_unknown_companion(self, orchestrator):
        with pytest.raises(ConfigurationError):
            await orchestrator.export_history("user-1", "missing")


class TestFailures:
    """Error handling around the turn."""

    @pytest.mark.parametrize("message", ["", "   ", None])
    async def test_empty_message_rejected(self, orchestrator, message):
        with pytest.raises(InvalidInputError):
            await orchestrator.process_message("user-1", "comp-1", message)

    async def test_unknown_companion(self, orchestrator):
        with pytest.raises(ConfigurationError):
            await orchestrator.process_message("user-1", "nobody", "hi")

    async def test_memory_write_failure_does_not_block_reply(self, orchestrator, store):
        store.add_memory = AsyncMock(side_effect=RuntimeError("disk full"))

        result = await orchestrator.process_message("user-1", "comp-1", "My mom is visiting")

        assert result.memory is None
        assert result.assistant_turn.content == "hey you, tell me more!"

    async def test_model_failure_propagates_after_user_turn_stored(
        self, orchestrator, store, mock_llm
    ):
        mock_llm.chat.side_effect = ExternalCallError(status_code=503, details="unavailable")

        with pytest.raises(ExternalCallError):
            await orchestrator.process_message("user-1", "comp-1", "hello?")

        assert [t.role for t in store.turns.values()] == ["user"]

    async def test_misconfigured_companion_sends_nothing(self, store, orchestrator, mock_llm):
        broken = store.companions["comp-1"].model_copy(update={"empathy_level": 0})
        await store.save_companion("comp-1", broken)

        with pytest.raises(ConfigurationError):
            await orchestrator.process_message("user-1", "comp-1", "hi")

        mock_llm.chat.assert_not_called()
