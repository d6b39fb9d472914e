"""
AI Companion - terminal chat against the configured model.
Main entry point for the application.

Usage:
    python main.py
    python main.py --name Sam --affection 8 --playfulness 9
"""

import argparse
import asyncio
import sys

from agents import ChatOrchestrator, CompanionAgent
from agents.companion_agent import validate_personality
from config.settings import settings
from core import CompanionCoreException, ConfigurationError, configure_logging, get_logger
from memory.store import InMemoryConversationStore
from schemas import PersonalityProfile
from utils.llm_client import build_llm_client

logger = get_logger(__name__)

USER_ID = "local-user"
COMPANION_ID = "local-companion"


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Chat with an AI companion")
    parser.add_argument("--name", default="Alex", help="Companion name")
    for trait in ("affection", "empathy", "curiosity", "playfulness"):
        parser.add_argument(f"--{trait}", type=int, default=None, help=f"{trait} level (1-10)")
    return parser.parse_args()


def build_companion(args: argparse.Namespace) -> PersonalityProfile:
    """
    Default companion with any trait overrides from the command line.

    Raises:
        ConfigurationError: an override is outside 1-10
    """
    profile = PersonalityProfile.default(name=args.name)
    overrides = {
        "affection_level": args.affection,
        "empathy_level": args.empathy,
        "curiosity_level": args.curiosity,
        "playfulness": args.playfulness,
    }
    data = profile.model_dump()
    data.update({key: value for key, value in overrides.items() if value is not None})
    return validate_personality(data)


async def chat_loop(companion: PersonalityProfile) -> None:
    store = InMemoryConversationStore()
    await store.save_companion(COMPANION_ID, companion)

    # One client for the whole process
    llm = build_llm_client(settings)
    orchestrator = ChatOrchestrator(store=store, agent=CompanionAgent(llm))

    print(f"Chatting with {companion.name}. Ctrl-D to quit.")
    while True:
        try:
            message = input("you> ")
        except EOFError:
            break
        if not message.strip():
            continue
        try:
            result = await orchestrator.process_message(USER_ID, COMPANION_ID, message)
        except CompanionCoreException as e:
            logger.error("Chat turn failed", **e.to_dict())
            print("Something went wrong, please try again.")
            continue
        if result.memory is not None:
            print(f"  (remembered: {', '.join(result.memory.tags)})")
        print(f"{companion.name.lower()}> {result.assistant_turn.content}")


def main():
    configure_logging(settings.LOG_LEVEL, json_logs=settings.LOG_FORMAT == "json")
    args = parse_args()
    try:
        companion = build_companion(args)
    except ConfigurationError as e:
        print(e.message, file=sys.stderr)
        sys.exit(2)

    try:
        asyncio.run(chat_loop(companion))
    except KeyboardInterrupt:
        logger.info("Shutting down")
        sys.exit(0)


if __name__ == "__main__":
    main()
