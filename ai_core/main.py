"""
ai-core - Terminal Chat Entry Point
===================================

Chat with the agent from a terminal. It:
1. Loads configuration
2. Registers the example tools
3. Builds the OpenAI-compatible model and a file-backed session memory
4. Reads messages from stdin and streams answers to stdout

Run with:
    python -m ai_core.main [session_id]

Or after installing:
    ai-core [session_id]
"""

import asyncio
import sys

from openai import APIError

from ai_core.agent import Agent, AgentError
from ai_core.memory import FileMemoryStore
from ai_core.models import OpenAIAdapter, UsageMetrics
from ai_core.tools.weather import register_weather_tool
from ai_core.utils.config import get_config
from ai_core.utils.logger import Logger

main_logger = Logger("Main")

EXIT_COMMANDS = {"exit", "quit"}


def _print_chunk(text: str) -> None:
    print(text, end="", flush=True)


def _format_usage(usage: UsageMetrics | None) -> str:
    if usage is None:
        return "usage: not reported"
    return (
        f"usage: {usage.prompt_tokens} prompt + {usage.completion_tokens} completion "
        f"= {usage.total_tokens} tokens in {usage.duration_ms:.0f} ms"
    )


async def main(session_id: str = "default") -> None:
    """
    Main async entry point.

    Args:
        session_id: Memory session to read from and append to
    """
    config = get_config()

    register_weather_tool()

    agent = Agent(OpenAIAdapter())
    memory = FileMemoryStore(session_id, config.memory.directory)

    main_logger.info(f"Chatting in session '{session_id}'. Type 'exit' to stop.")

    while True:
        try:
            line = await asyncio.to_thread(input, "> ")
        except EOFError:
            break

        message = line.strip()
        if not message:
            continue
        if message.lower() in EXIT_COMMANDS:
            break

        try:
            result = await agent.process(message, memory=memory, on_chunk=_print_chunk)
        except (AgentError, APIError) as e:
            main_logger.error("Agent run failed", e)
            continue

        print()
        print(_format_usage(result.usage))


def run() -> None:
    """
    Synchronous entry point.

    This is called when running with the `ai-core` command.
    """
    session_id = sys.argv[1] if len(sys.argv) > 1 else "default"
    try:
        asyncio.run(main(session_id))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
