"""
Context Assembly
================

Pure functions that turn a base instruction, memory entries and
retrieved knowledge-base chunks into prompt text.

System prompt layout (blocks separated by a blank line, absent blocks
leave no trace):

    <base instruction>

    ## Relevant Context
    [faq.md] Refunds take 5 days

    Some unsourced chunk

    Past conversation:
    User: hi
    Assistant: hello
"""

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from ai_core.rag import RetrievedChunk
    from ai_core.tools import Tool

BLOCK_SEPARATOR = "\n\n"
PAST_CONVERSATION_HEADER = "Past conversation:"
RELEVANT_CONTEXT_HEADER = "## Relevant Context"


def assemble_context(
    user_input: str,
    tools: Sequence["Tool"] | None = None,
    memory: str = ""
) -> str:
    """
    Build a flat prompt string from user input, memory and tool names.

    Example:
        assemble_context("hi", tools=[weather_tool], memory="likes tea")
        # "Memory: likes tea\\nTools available: get_weather\\nUser input: hi"
    """
    lines = []
    if memory:
        lines.append(f"Memory: {memory}")
    if tools:
        lines.append(f"Tools available: {', '.join(tool.name for tool in tools)}")
    lines.append(f"User input: {user_input}")
    return "\n".join(lines)


def _past_conversation(entries: Sequence[str]) -> str:
    return PAST_CONVERSATION_HEADER + "\n" + "\n".join(entries)


def build_system_prompt(entries: Sequence[str], base: str | None = None) -> str:
    """
    Combine a base instruction with memory entries.

    Args:
        entries: Memory entries, oldest first
        base: Optional base instruction

    Returns:
        The system prompt, or "" when there is nothing to say
    """
    blocks = []
    if base:
        blocks.append(base)
    if entries:
        blocks.append(_past_conversation(entries))
    return BLOCK_SEPARATOR.join(blocks)


def build_rag_system_prompt(
    chunks: Sequence["RetrievedChunk"],
    memory_entries: Sequence[str],
    base: str | None = None
) -> str:
    """
    Combine a base instruction, retrieved chunks and memory entries.

    Each chunk is prefixed with ``[<source>] `` when it has a source.
    """
    blocks = []
    if base:
        blocks.append(base)
    if chunks:
        rendered = [
            f"[{chunk.source}] {chunk.content}" if chunk.source else chunk.content
            for chunk in chunks
        ]
        blocks.append(RELEVANT_CONTEXT_HEADER + "\n" + BLOCK_SEPARATOR.join(rendered))
    if memory_entries:
        blocks.append(_past_conversation(memory_entries))
    return BLOCK_SEPARATOR.join(blocks)
