"""CLI entry point for the conversational chat client."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from chatbot import ChatSession, ModelDescriptor
from chatbot.config import API_KEY_VARS, ChatConfig, load_chat_config
from chatbot.registry import list_models


def build_session(config: ChatConfig) -> ChatSession:
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return ChatSession.from_config(config)


def _print_models(session: ChatSession) -> None:
    for descriptor in list_models():
        marker = "*" if descriptor.id == session.selected_model_id else " "
        print(f"{marker} {descriptor.id}  {descriptor.display_name} - {descriptor.description} (max tokens: {descriptor.max_tokens:,})")


def _assistant_label(descriptor: Optional[ModelDescriptor]) -> str:
    return descriptor.display_name if descriptor else "Assistant"


async def run(session: ChatSession) -> None:
    print("Chat is ready. Commands: /models, /model <id>, /clear. Type 'exit' or 'quit' to stop.")
    while True:
        try:
            user_text = input("You: ").strip()
        except (KeyboardInterrupt, EOFError):
            print("\nGoodbye!")
            break

        if not user_text:
            continue

        if user_text.lower() in {"exit", "quit"}:
            print("Goodbye!")
            break

        if user_text == "/models":
            _print_models(session)
            continue

        if user_text.startswith("/model "):
            session.select_model(user_text.split(maxsplit=1)[1].strip())
            print(f"Model: {session.selected_model_id}\n")
            continue

        if user_text == "/clear":
            session.clear()
            print("Chat cleared.\n")
            continue

        # Label the reply with the model the request was sent with.
        descriptor = session.selected_model
        task = session.submit(user_text)
        if task is None:
            continue
        reply = await task
        if reply is not None:
            print(f"{_assistant_label(descriptor)}: {reply.content}\n")


async def _main() -> None:
    config = load_chat_config()
    session = build_session(config)
    if session.blocked:
        print(f"API key required. Set {API_KEY_VARS[0]} in your environment or .env file.")
        return
    async with session:
        await run(session)


def main() -> None:
    asyncio.run(_main())


if __name__ == "__main__":
    main()
