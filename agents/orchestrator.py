"""
Chat Orchestrator - runs one chat turn end to end.

Flow:
1. Resolve reply context
2. Store the user's message
3. Extract a memory from it (best-effort)
4. Build the prompt from the companion and recent turns
5. Ask the model for a reply
6. Store the reply
"""

from dataclasses import dataclass
from typing import List, Optional

from agents.companion_agent import CompanionAgent
from config.settings import settings
from core import ConfigurationError, InvalidInputError, get_logger
from memory.memory_manager import MemoryManager
from memory.store import ConversationStore
from schemas import (
    ConversationExport,
    ConversationTurn,
    ConversationTurnCreateSchema,
    ExportedConversation,
    ExportedMessage,
    MemoryRecord,
    ReplyContext,
)

logger = get_logger(__name__)


@dataclass
class ChatResult:
    """Outcome of one chat turn."""
    user_turn: ConversationTurn
    assistant_turn: ConversationTurn
    memory: Optional[MemoryRecord] = None


class ChatOrchestrator:
    """Coordinates store, memory extraction and the companion agent."""

    def __init__(
        self,
        store: ConversationStore,
        agent: CompanionAgent,
        memory_manager: Optional[MemoryManager] = None,
        context_limit: int = settings.CONVERSATION_CONTEXT_LIMIT,
    ):
        self.store = store
        self.agent = agent
        self.memory = memory_manager or MemoryManager(store)
        self.context_limit = context_limit
        logger.info("Chat orchestrator initialized", context_limit=context_limit)

    async def process_message(
        self,
        user_id: str,
        companion_id: str,
        message: str,
        reply_to_id: Optional[str] = None,
    ) -> ChatResult:
        """
        Process an incoming user message and return both stored turns.

        Raises:
            InvalidInputError: empty message
            ConfigurationError: companion missing or misconfigured
            ExternalCallError: the model call failed; the user turn stays stored
        """
        if not isinstance(message, str) or not message.strip():
            raise InvalidInputError("message", "message is required")
        message = message.strip()

        companion = await self.store.get_companion(companion_id)
        if companion is None:
            raise ConfigurationError("companion", f"companion {companion_id} not found")

        logger.info(
            "Processing message",
            user_id=user_id,
            companion_id=companion_id,
            message_preview=message[:50],
            reply_to_id=reply_to_id,
        )

        # 1. Reply context; an unknown id is ignored
        reply_context = None
        if reply_to_id:
            original = await self.store.get_turn(reply_to_id)
            if original is not None:
                reply_context = ReplyContext.from_turn(original)
            else:
                logger.warning("Replied-to turn not found", reply_to_id=reply_to_id)

        # 2. Store user message
        user_turn = await self.store.add_turn(
            ConversationTurnCreateSchema(
                role="user",
                content=message,
                user_id=user_id,
                companion_id=companion_id,
                reply_to_id=reply_to_id,
            )
        )

        # 3. Memory extraction never fails the turn
        memory = await self.memory.create_memory_from_message(
            message,
            user_id=user_id,
            companion_id=companion_id,
            source_turn_id=user_turn.id,
        )

        # 4. Recent turns (newest first from the store) include the new
        #    message, which the prompt appends separately
        recent = await self.store.get_recent_turns(
            user_id, companion_id, limit=self.context_limit + 1
        )
        history = [turn for turn in recent if turn.id != user_turn.id][: self.context_limit]
        history.reverse()

        # 5. Companion reply
        result = await self.agent.respond(
            companion,
            history,
            message,
            reply_context=reply_context,
        )

        # 6. Store assistant response, threaded to the user turn
        assistant_turn = await self.store.add_turn(
            ConversationTurnCreateSchema(
                role="assistant",
                content=result.response,
                user_id=user_id,
                companion_id=companion_id,
                reply_to_id=user_turn.id,
            )
        )

        if reply_context is not None:
            await self.store.mark_has_replies(reply_to_id)

        logger.info(
            "Chat turn complete",
            user_id=user_id,
            user_turn_id=user_turn.id,
            assistant_turn_id=assistant_turn.id,
            memory_created=memory is not None,
        )

        return ChatResult(user_turn=user_turn, assistant_turn=assistant_turn, memory=memory)

    async def get_history(
        self, user_id: str, companion_id: str, limit: int = 50
    ) -> List[ConversationTurn]:
        """Last `limit` non-deleted turns, oldest first, for displaying the chat."""
        return await self.store.get_history(user_id, companion_id, limit=limit)

    async def export_history(self, user_id: str, companion_id: str) -> ConversationExport:
        """
        Full conversation for download, deleted turns included.

        Raises:
            ConfigurationError: companion not found
        """
        companion = await self.store.get_companion(companion_id)
        if companion is None:
            raise ConfigurationError("companion", f"companion {companion_id} not found")

        turns = await self.store.get_history(
            user_id, companion_id, limit=None, include_deleted=True
        )

        logger.info(
            "Exporting chat history",
            user_id=user_id,
            companion_id=companion_id,
            message_count=len(turns),
        )

        return ConversationExport(
            companion_name=companion.name,
            conversation=ExportedConversation(
                id=f"{user_id}:{companion_id}",
                started_at=turns[0].created_at if turns else None,
                message_count=len(turns),
            ),
            messages=[ExportedMessage.from_turn(turn) for turn in turns],
        )
