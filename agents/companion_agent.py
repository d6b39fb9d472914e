"""
Companion Agent - builds the companion's prompt and asks the model for a reply.

build_prompt() is pure: personality + recent turns + new message in, system
prompt and ordered messages out. CompanionAgent adds the model call on top.
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

from pydantic import ValidationError

from config.settings import settings
from core import ConfigurationError, ExternalCallError, get_logger
from prompts import (
    COMPANION_SYSTEM_PROMPT,
    DEFAULT_BACKSTORY,
    TRAIT_DESCRIPTIONS,
    TRAIT_GUIDES,
)
from schemas import (
    TRAIT_FIELDS,
    AssembledPrompt,
    ChatMessage,
    ConversationTurn,
    PersonalityProfile,
    ReplyContext,
)
from utils.llm_client import LLMClient, LLMResponse

logger = get_logger(__name__)

# Trait name -> profile field
TRAITS = dict(zip(("affection", "empathy", "curiosity", "playfulness"), TRAIT_FIELDS))


def trait_band(level: int) -> str:
    """Band a 1-10 trait level: <=3 low, 4-6 medium, >=7 high."""
    if level <= 3:
        return "low"
    if level <= 6:
        return "medium"
    return "high"


def get_personality_description(level: int, trait: str) -> str:
    """Short description shown next to a trait level."""
    return TRAIT_DESCRIPTIONS[trait][trait_band(level)]


def get_trait_guide(level: int, trait: str) -> str:
    """Longer guide for expressing a trait."""
    return TRAIT_GUIDES[trait][trait_band(level)]


def validate_personality(personality: Any) -> PersonalityProfile:
    """
    Check a personality before it reaches a prompt.

    Accepts a PersonalityProfile, a mapping (stored document), or any object
    with matching attributes. Missing or out-of-range traits are never
    defaulted.

    Raises:
        ConfigurationError: personality missing or invalid
    """
    if personality is None:
        raise ConfigurationError("personality", "missing")

    if isinstance(personality, PersonalityProfile):
        for field_name in TRAIT_FIELDS:
            level = getattr(personality, field_name, None)
            if isinstance(level, bool) or not isinstance(level, int):
                raise ConfigurationError(field_name, "required trait is missing")
            if not 1 <= level <= 10:
                raise ConfigurationError(field_name, f"{level} is outside 1-10")
        return personality

    try:
        return PersonalityProfile.model_validate(personality)
    except ValidationError as e:
        error = e.errors()[0]
        setting = ".".join(str(part) for part in error["loc"]) or "personality"
        raise ConfigurationError(setting, error["msg"]) from e


def build_system_prompt(personality: PersonalityProfile) -> str:
    """Fill the companion template for one personality."""
    fields = {
        "name": personality.name,
        "gender": personality.gender,
        "pronouns": personality.pronouns,
        "backstory": personality.backstory or DEFAULT_BACKSTORY,
        "humor_style": personality.humor_style,
        "communication_style": personality.communication_style,
        "user_preferred_address": personality.user_preferred_address,
    }
    for trait, field_name in TRAITS.items():
        level = getattr(personality, field_name)
        fields[field_name] = level
        fields[f"{trait}_description"] = get_personality_description(level, trait)
        fields[f"{trait}_guide"] = get_trait_guide(level, trait)

    return COMPANION_SYSTEM_PROMPT.format(**fields)


def format_history(
    turns: Iterable[ConversationTurn],
    limit: int = settings.CONVERSATION_CONTEXT_LIMIT,
) -> List[ChatMessage]:
    """
    Most recent `limit` turns as chat messages, oldest first.

    Turns may arrive in any order (stores usually return newest first).
    """
    ordered = sorted(turns, key=lambda turn: turn.created_at)
    window = ordered[-limit:] if limit > 0 else []
    return [ChatMessage(role=turn.role, content=turn.content) for turn in window]


def build_prompt(
    personality: Any,
    recent_turns: Iterable[ConversationTurn],
    new_message: str,
    reply_context: Optional[ReplyContext] = None,
    limit: int = settings.CONVERSATION_CONTEXT_LIMIT,
) -> AssembledPrompt:
    """
    Assemble the request for one companion reply.

    Args:
        personality: Companion personality (profile, mapping or attribute object)
        recent_turns: Earlier conversation turns, any order
        new_message: The user's new message, always the last message
        reply_context: Earlier turn the new message replies to, if any
        limit: Maximum number of earlier turns to include

    Returns:
        AssembledPrompt, unsent

    Raises:
        ConfigurationError: personality missing or invalid
    """
    profile = validate_personality(personality)

    messages = format_history(recent_turns, limit=limit)
    messages.append(ChatMessage(role="user", content=new_message))

    return AssembledPrompt(
        system_prompt=build_system_prompt(profile),
        messages=messages,
        reply_context=reply_context,
    )


def parse_reply(raw: Optional[str]) -> str:
    """
    Companion reply from raw model text.

    Raises:
        ExternalCallError: the model returned nothing but whitespace
    """
    reply = (raw or "").strip()
    if not reply:
        raise ExternalCallError(details="empty reply")
    return reply


@dataclass
class CompanionResponse:
    """Response from the companion agent."""
    response: str
    prompt: AssembledPrompt
    usage: Optional[LLMResponse] = None


class CompanionAgent:
    """Speaks as a configured companion."""

    def __init__(
        self,
        llm: LLMClient,
        model: str = settings.MODEL_CONVERSATION,
        temperature: float = settings.CONVERSATION_TEMPERATURE,
        max_tokens: int = settings.CONVERSATION_MAX_TOKENS,
        context_limit: int = settings.CONVERSATION_CONTEXT_LIMIT,
    ):
        self.llm = llm
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.context_limit = context_limit

    async def respond(
        self,
        personality: Any,
        recent_turns: Iterable[ConversationTurn],
        message: str,
        reply_context: Optional[ReplyContext] = None,
    ) -> CompanionResponse:
        """
        Generate the companion's reply to a message.

        Raises:
            ConfigurationError: invalid personality, nothing is sent
            ExternalCallError: model call failed or returned an empty reply
        """
        prompt = build_prompt(
            personality,
            recent_turns,
            message,
            reply_context=reply_context,
            limit=self.context_limit,
        )

        logger.info(
            "Generating companion response",
            model=self.model,
            history_length=len(prompt.messages) - 1,
            is_reply=reply_context is not None,
        )

        result = await self.llm.chat(
            model=self.model,
            messages=prompt.to_messages(),
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )

        return CompanionResponse(
            response=parse_reply(result.content),
            prompt=prompt,
            usage=result,
        )
