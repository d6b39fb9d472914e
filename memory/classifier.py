"""
Memory classifier - decides whether a chat message holds a personal fact
worth remembering.

Rule-based and pure: no I/O, no model calls. The same message always
produces the same decision.

Order matters everywhere in this module:
- RULES are tried top to bottom and the first rule with a matching pattern
  sets category, importance and tags.
- SUPPLEMENTARY_CHECKS run on every message. A check that matches always
  adds its tags, and only sets category/importance when nothing before it
  has.
- EMOTION_KEYWORDS are scanned in order and the first hit wins.
"""

import re
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

from core import get_logger
from schemas import MemoryDecision

logger = get_logger(__name__)

# Tags that mark very personal information and earn an importance bonus
PERSONAL_TAGS = frozenset({"childhood", "family", "personal-history"})
MAX_IMPORTANCE = 10


def _compile(*patterns: str) -> Tuple[re.Pattern, ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


@dataclass(frozen=True)
class MemoryRule:
    """One row of the rule table."""

    name: str
    patterns: Tuple[re.Pattern, ...]
    category: str
    importance: int
    tags: Tuple[str, ...]

    def matches(self, message: str) -> bool:
        return any(pattern.search(message) for pattern in self.patterns)


@dataclass(frozen=True)
class SupplementaryCheck:
    """An always-on check run after the rule table, on the lowercased message."""

    name: str
    predicate: Callable[[str], bool]
    category: str
    importance: int
    tags: Tuple[str, ...]


RULES: Tuple[MemoryRule, ...] = (
    # Food preferences and childhood habits
    MemoryRule(
        name="food_preference",
        patterns=_compile(
            r"i (love|loved|like|liked|enjoy|enjoyed|hate|hated|dislike|disliked) (to )?(eat|eating) (\w+)",
            r"i used to (eat|love|like) (\w+)",
        ),
        category="preference",
        importance=7,
        tags=("food", "preferences"),
    ),
    MemoryRule(
        name="childhood_food",
        patterns=_compile(
            r"i (once )?loved (to )?(eat|eating) (\w+)",
            r"when i was (\w+) i (loved|liked|ate) (\w+)",
        ),
        category="personal",
        importance=8,
        tags=("food", "childhood", "personal-history"),
    ),
    MemoryRule(
        name="favorite_food",
        patterns=_compile(
            r"my favorite (food|dish|meal) is",
            r"i always (eat|order|cook)",
        ),
        category="preference",
        importance=8,
        tags=("food", "favorites"),
    ),
    MemoryRule(
        name="dietary_restriction",
        patterns=_compile(r"i'm (allergic to|can't eat|don't like)"),
        category="personal",
        importance=9,
        tags=("health", "food", "restrictions"),
    ),
    # Personal history and experiences
    MemoryRule(
        name="personal_history",
        patterns=_compile(
            r"when i was (young|a kid|little|growing up)",
            r"i used to",
            r"back when i was",
        ),
        category="personal",
        importance=8,
        tags=("childhood", "personal-history"),
    ),
    MemoryRule(
        name="past_experience",
        patterns=_compile(r"i once (did|went|tried|experienced)", r"i remember when"),
        category="experience",
        importance=7,
        tags=("memories", "experiences"),
    ),
    MemoryRule(
        name="personal_growth",
        patterns=_compile(r"and then i grew up", r"but now i", r"these days i"),
        category="personal",
        importance=7,
        tags=("growth", "change", "personal-development"),
    ),
    # Likes and dislikes
    MemoryRule(
        name="likes",
        patterns=_compile(r"i (really )?love", r"i'm passionate about", r"i enjoy"),
        category="preference",
        importance=7,
        tags=("likes", "interests"),
    ),
    MemoryRule(
        name="dislikes",
        patterns=_compile(r"i (really )?hate", r"i can't stand", r"i dislike"),
        category="preference",
        importance=7,
        tags=("dislikes",),
    ),
    # Family and relationships
    MemoryRule(
        name="family",
        patterns=_compile(
            r"my (mom|dad|mother|father|parents|family)",
            r"my (brother|sister|sibling)",
        ),
        category="personal",
        importance=8,
        tags=("family",),
    ),
    MemoryRule(
        name="relationships",
        patterns=_compile(
            r"my (friend|friends|boyfriend|girlfriend|partner|spouse|husband|wife)",
        ),
        category="relationship",
        importance=8,
        tags=("relationships",),
    ),
    # Hobbies and interests
    MemoryRule(
        name="hobbies",
        patterns=_compile(r"i (play|do|practice) (\w+)", r"my hobby is", r"i'm into"),
        category="preference",
        importance=7,
        tags=("hobbies", "interests"),
    ),
    # Work and career
    MemoryRule(
        name="work",
        patterns=_compile(r"i work (as|at|in)", r"my job is", r"i'm a"),
        category="personal",
        importance=8,
        tags=("work", "career"),
    ),
    # Personality traits
    MemoryRule(
        name="personality",
        patterns=_compile(
            r"i'm (usually|always|often|sometimes)",
            r"i tend to",
            r"i'm the type of person who",
        ),
        category="personal",
        importance=8,
        tags=("personality",),
    ),
    # Dreams and goals
    MemoryRule(
        name="goals",
        patterns=_compile(r"i want to", r"my dream is", r"i hope to", r"someday i"),
        category="personal",
        importance=7,
        tags=("goals", "dreams"),
    ),
    # Fears and concerns
    MemoryRule(
        name="fears",
        patterns=_compile(r"i'm afraid of", r"i worry about", r"i fear"),
        category="emotion",
        importance=8,
        tags=("fears", "emotions"),
    ),
    # Values and beliefs
    MemoryRule(
        name="values",
        patterns=_compile(r"i believe (in|that)", r"i think (that )?(\w+) is important"),
        category="personal",
        importance=8,
        tags=("values", "beliefs"),
    ),
)

_CHILDHOOD_FOOD = _compile(r"i (once )?loved? to eat", r"i used to eat")
_LIFE_TRANSITION = _compile(r"(then|and) i grew up", r"but now", r"these days")

SUPPLEMENTARY_CHECKS: Tuple[SupplementaryCheck, ...] = (
    SupplementaryCheck(
        name="sweets",
        predicate=lambda text: any(word in text for word in ("raw sugar", "sweet", "candy")),
        category="preference",
        importance=7,
        tags=("food", "sweets", "childhood", "tastes"),
    ),
    SupplementaryCheck(
        name="childhood_food_habit",
        predicate=lambda text: any(p.search(text) for p in _CHILDHOOD_FOOD),
        category="personal",
        importance=8,
        tags=("food", "childhood", "personal-history", "habits"),
    ),
    SupplementaryCheck(
        name="life_transition",
        predicate=lambda text: any(p.search(text) for p in _LIFE_TRANSITION),
        category="personal",
        importance=7,
        tags=("growth", "life-changes", "personal-development"),
    ),
)

EMOTION_KEYWORDS: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("loved", "love"), "nostalgic"),
    (("hate", "dislike"), "negative"),
    (("excited", "happy"), "positive"),
)


def detect_emotional_context(lower_message: str) -> Optional[str]:
    """First keyword set found in the (lowercased) message wins."""
    for keywords, label in EMOTION_KEYWORDS:
        if any(keyword in lower_message for keyword in keywords):
            return label
    return None


@dataclass
class _Analysis:
    should_store: bool = False
    category: Optional[str] = None
    importance: Optional[int] = None
    tags: List[str] = field(default_factory=list)


class MemoryClassifier:
    """
    Ordered rule table plus supplementary checks.

    Usage:
        decision = MemoryClassifier().classify("my mom makes the best soup")
        if decision.should_store:
            ...
    """

    def __init__(
        self,
        rules: Sequence[MemoryRule] = RULES,
        supplementary_checks: Sequence[SupplementaryCheck] = SUPPLEMENTARY_CHECKS,
    ):
        self.rules = tuple(rules)
        self.supplementary_checks = tuple(supplementary_checks)

    def classify(self, message: str) -> MemoryDecision:
        """
        Decide whether a message should become a memory.

        Args:
            message: Raw chat message

        Returns:
            MemoryDecision; should_store is False when nothing matched
        """
        if not message or not message.strip():
            return MemoryDecision(should_store=False)

        lower_message = message.lower()
        analysis = _Analysis()

        # 1. Rule table, first match wins
        for rule in self.rules:
            if rule.matches(message):
                analysis.should_store = True
                analysis.category = rule.category
                analysis.importance = rule.importance
                analysis.tags.extend(rule.tags)
                logger.debug("Memory rule matched", rule=rule.name)
                break

        # 2. Supplementary checks fill gaps and always add tags
        for check in self.supplementary_checks:
            if not check.predicate(lower_message):
                continue
            analysis.should_store = True
            if analysis.category is None:
                analysis.category = check.category
                analysis.importance = check.importance
            analysis.tags.extend(check.tags)
            logger.debug("Supplementary memory check matched", check=check.name)

        emotional_context = detect_emotional_context(lower_message)

        if not analysis.should_store:
            return MemoryDecision(should_store=False, emotional_context=emotional_context)

        tags = list(dict.fromkeys(analysis.tags))
        importance = analysis.importance
        if PERSONAL_TAGS.intersection(tags):
            importance = min(MAX_IMPORTANCE, importance + 1)

        return MemoryDecision(
            should_store=True,
            content=message,
            importance=importance,
            category=analysis.category,
            tags=tags,
            emotional_context=emotional_context,
        )


# Default rule table; classification holds no state, so one instance is shared
memory_classifier = MemoryClassifier()


def classify(message: str) -> MemoryDecision:
    """Classify a message with the default rule table."""
    return memory_classifier.classify(message)
