"""
Shared pytest fixtures for companion core tests.
"""

import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

from agents import ChatOrchestrator, CompanionAgent
from memory.store import InMemoryConversationStore
from schemas import ConversationTurn, PersonalityProfile
from utils.llm_client import LLMResponse


# --- Personality fixtures ---

@pytest.fixture
def personality():
    """A fully configured companion with one trait in each band."""
    return PersonalityProfile(
        name="Mira",
        gender="female",
        affection_level=2,
        empathy_level=5,
        curiosity_level=9,
        playfulness=6,
        humor_style="witty",
        communication_style="intimate",
        user_preferred_address="love",
        pronouns="she/her",
        backstory="Grew up in a lighthouse and collects sea glass.",
    )


# --- Conversation fixtures ---

@pytest.fixture
def base_time():
    return datetime(2026, 2, 5, 14, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_turns(base_time):
    """Factory: n alternating user/assistant turns, one minute apart, oldest first."""

    def _make(n: int, user_id: str = "user-1", companion_id: str = "comp-1"):
        return [
            ConversationTurn(
                id=f"turn-{i}",
                role="user" if i % 2 == 0 else "assistant",
                content=f"message {i}",
                user_id=user_id,
                companion_id=companion_id,
                created_at=base_time + timedelta(minutes=i),
            )
            for i in range(n)
        ]

    return _make


# --- Mock LLM client ---

@pytest.fixture
def mock_llm():
    """Mock LLM client for testing without API calls."""
    llm = AsyncMock()
    llm.chat = AsyncMock(
        return_value=LLMResponse(content="  hey you, tell me more!  ", model="test-model")
    )
    llm.chat_with_system = AsyncMock(
        return_value=LLMResponse(content="{}", model="test-model")
    )
    return llm


# --- Store and orchestrator ---

@pytest.fixture
async def store(personality):
    """In-memory store with one configured companion."""
    store = InMemoryConversationStore()
    await store.save_companion("comp-1", personality)
    return store


@pytest.fixture
def companion_agent(mock_llm):
    return CompanionAgent(mock_llm, model="test-model")


@pytest.fixture
def orchestrator(store, companion_agent):
    return ChatOrchestrator(store=store, agent=companion_agent)
