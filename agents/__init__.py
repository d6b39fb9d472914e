"""Agent modules for the AI companion."""

from .companion_agent import CompanionAgent, CompanionResponse, build_prompt, parse_reply
from .orchestrator import ChatOrchestrator, ChatResult
from .backstory_agent import BackstoryAgent

__all__ = [
    "CompanionAgent",
    "CompanionResponse",
    "build_prompt",
    "parse_reply",
    "ChatOrchestrator",
    "ChatResult",
    "BackstoryAgent",
]
