"""
Backstory Agent - scores and rewrites companion backstories.

Evaluation never fails on a bad model reply: when the endpoint errors or the
reply is not the expected JSON, a word-count score is returned instead.
"""

import json
import re
from typing import Optional

from pydantic import ValidationError

from config.settings import settings
from core import ExternalCallError, InvalidInputError, get_logger
from prompts import (
    BACKSTORY_EVALUATION_PROMPT,
    BACKSTORY_EVALUATION_SYSTEM,
    BACKSTORY_IMPROVEMENT_PROMPT,
    BACKSTORY_IMPROVEMENT_SYSTEM,
    FALLBACK_SUGGESTIONS,
)
from schemas import BackstoryCriteria, BackstoryScore, RelationshipBackstory
from utils.llm_client import LLMClient

logger = get_logger(__name__)

CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)

RELATIONSHIP_LABELS = (
    ("how_you_met", "How we met"),
    ("relationship_duration", "Duration"),
    ("living_situation", "Living situation"),
    ("home_description", "Our home"),
    ("partner_quirks", "Partner quirks"),
    ("shared_memories", "Shared memories"),
    ("relationship_dynamics", "Relationship dynamics"),
)


def format_relationship_details(
    relationship: Optional[RelationshipBackstory], separator: str = "\n\n"
) -> str:
    """Labelled relationship details, empty fields skipped."""
    if relationship is None:
        return ""
    lines = []
    for field_name, label in RELATIONSHIP_LABELS:
        value = getattr(relationship, field_name)
        if not value:
            continue
        if field_name == "living_situation":
            value = value.replace("_", " ", 1)
        lines.append(f"{label}: {value}")
    return separator.join(lines)


def compose_backstory(
    backstory: Optional[str], relationship: Optional[RelationshipBackstory] = None
) -> str:
    """Free-text backstory followed by the relationship details."""
    full = backstory or ""
    details = format_relationship_details(relationship)
    if details:
        full += "\n\n" + details
    return full


def fallback_score(backstory: str) -> BackstoryScore:
    """Deterministic score from word count: two points a word, capped at 60."""
    word_count = len(backstory.split())
    base = min(word_count * 2, 60)
    return BackstoryScore(
        overall=base,
        criteria=BackstoryCriteria(
            detail=min(word_count, 40),
            consistency=base,
            emotional_depth=base - 10,
            uniqueness=base - 5,
        ),
        suggestions=list(FALLBACK_SUGGESTIONS),
        is_fallback=True,
    )


def parse_evaluation(raw: str) -> BackstoryScore:
    """
    Parse the model's JSON evaluation, with or without a markdown code fence.

    Raises:
        ValueError: reply is not the expected JSON
    """
    text = raw.strip()
    fenced = CODE_FENCE.match(text)
    if fenced:
        text = fenced.group(1)
    data = json.loads(text)
    try:
        return BackstoryScore(
            overall=data["overall"],
            criteria=BackstoryCriteria(**data["criteria"]),
            suggestions=data.get("suggestions") or [],
        )
    except (KeyError, TypeError, ValidationError) as e:
        raise ValueError(f"unexpected evaluation shape: {e}") from e


class BackstoryAgent:
    """Evaluates and improves companion backstories."""

    def __init__(self, llm: LLMClient, model: str = settings.MODEL_BACKSTORY):
        self.llm = llm
        self.model = model

    async def evaluate(
        self,
        backstory: Optional[str] = None,
        relationship: Optional[RelationshipBackstory] = None,
    ) -> BackstoryScore:
        """
        Score a backstory 1-100 overall and per criterion.

        Raises:
            InvalidInputError: nothing to evaluate
        """
        full_backstory = compose_backstory(backstory, relationship)
        if not full_backstory.strip():
            raise InvalidInputError("backstory", "no backstory content provided")

        try:
            result = await self.llm.chat_with_system(
                model=self.model,
                system_prompt=BACKSTORY_EVALUATION_SYSTEM,
                user_message=BACKSTORY_EVALUATION_PROMPT.format(backstory=full_backstory),
                temperature=settings.BACKSTORY_EVAL_TEMPERATURE,
                max_tokens=settings.BACKSTORY_MAX_TOKENS,
            )
        except ExternalCallError as e:
            logger.warning("Backstory evaluation call failed, using fallback", error=e.message)
            return fallback_score(full_backstory)

        try:
            return parse_evaluation(result.content)
        except ValueError as e:
            logger.warning(
                "Failed to parse backstory evaluation, using fallback",
                error=str(e),
                response_preview=result.content[:100],
            )
            return fallback_score(full_backstory)

    async def improve(
        self,
        companion_name: str,
        companion_gender: str,
        backstory: Optional[str] = None,
        relationship: Optional[RelationshipBackstory] = None,
    ) -> str:
        """
        Rewrite a backstory into a richer 200-400 word story.

        Raises:
            ExternalCallError: model call failed or returned nothing
        """
        prompt = BACKSTORY_IMPROVEMENT_PROMPT.format(
            companion_name=companion_name,
            companion_gender=companion_gender,
            backstory=backstory or "None provided",
            relationship_details=format_relationship_details(relationship, separator="\n")
            or "None provided",
        )

        result = await self.llm.chat_with_system(
            model=self.model,
            system_prompt=BACKSTORY_IMPROVEMENT_SYSTEM,
            user_message=prompt,
            temperature=settings.BACKSTORY_IMPROVE_TEMPERATURE,
            max_tokens=settings.BACKSTORY_MAX_TOKENS,
        )

        improved = result.content.strip()
        if not improved:
            raise ExternalCallError(details="empty backstory")

        logger.info("Backstory improved", companion_name=companion_name, length=len(improved))
        return improved
