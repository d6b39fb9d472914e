"""
Prompts module - All LLM prompts organized by feature.

Import prompts directly:
    from prompts import COMPANION_SYSTEM_PROMPT, BACKSTORY_EVALUATION_PROMPT

Or import from specific modules:
    from prompts.companion import TRAIT_GUIDES
"""

from prompts.companion import (
    COMPANION_SYSTEM_PROMPT,
    DEFAULT_BACKSTORY,
    TRAIT_DESCRIPTIONS,
    TRAIT_GUIDES,
)
from prompts.backstory import (
    BACKSTORY_EVALUATION_SYSTEM,
    BACKSTORY_EVALUATION_PROMPT,
    BACKSTORY_IMPROVEMENT_SYSTEM,
    BACKSTORY_IMPROVEMENT_PROMPT,
    FALLBACK_SUGGESTIONS,
)

__all__ = [
    "COMPANION_SYSTEM_PROMPT",
    "DEFAULT_BACKSTORY",
    "TRAIT_DESCRIPTIONS",
    "TRAIT_GUIDES",
    "BACKSTORY_EVALUATION_SYSTEM",
    "BACKSTORY_EVALUATION_PROMPT",
    "BACKSTORY_IMPROVEMENT_SYSTEM",
    "BACKSTORY_IMPROVEMENT_PROMPT",
    "FALLBACK_SUGGESTIONS",
]
