"""
Agent Core
==========

The agent loop: drive a model through a bounded generate / run-tools
cycle until it produces an answer.

Agent Loop:
    Context (messages + base system prompt)
         │
         ▼
    Merge memory into the system prompt (once per run)
         │
         ▼
    generate() ◄──────────────────────────┐
         │                                 │
    ┌─── Has Tool Calls? ───┐              │
    │                       │              │
    Yes                     No             │
    │                       │              │
    ▼                       ▼              │
    Run each tool      Finalize: stream() if a chunk
    in order,          callback was given, write the
    append results     turn to memory, return
    │                                      │
    └──────────────────────────────────────┘
              (at most max_iterations generate calls)

Tool failures become tool messages inside the loop. Anything raised by
the model backend propagates to the caller untouched.
"""

import inspect
from dataclasses import dataclass, field
from typing import Any, Callable

from ai_core.agent.context import build_rag_system_prompt, build_system_prompt
from ai_core.agent.tools_executor import ToolExecutor
from ai_core.memory import MemoryStore
from ai_core.models.base import AIModel
from ai_core.models.types import (
    ChatMessage,
    ModelContext,
    UsageMetrics,
    add_usage,
)
from ai_core.rag import Retriever
from ai_core.tools import ToolRegistry, tool_registry
from ai_core.utils.config import get_config
from ai_core.utils.logger import Logger

logger = Logger("AgentRuntime")

DEFAULT_MAX_ITERATIONS = 5

ChunkCallback = Callable[[str], Any]
UsageCallback = Callable[[UsageMetrics, int], Any]


class AgentError(RuntimeError):
    """Base class for failures that end an agent run."""


class MaxIterationsError(AgentError):
    """The model kept requesting tools past the iteration budget."""

    def __init__(self, max_iterations: int):
        super().__init__("Maximum agent iterations reached")
        self.max_iterations = max_iterations


@dataclass
class AgentResult:
    """
    The outcome of one agent run.

    Attributes:
        output: The final answer text
        history: The full transcript, including tool round trips
        usage: Usage summed over every backend call, None if none reported
    """
    output: str
    history: list[ChatMessage] = field(default_factory=list)
    usage: UsageMetrics | None = None


async def _notify(callback: Callable[..., Any] | None, *args: Any) -> None:
    if callback is None:
        return
    result = callback(*args)
    if inspect.isawaitable(result):
        await result


def _user_entry(messages: list[ChatMessage]) -> str | None:
    if not messages:
        return None
    trigger = messages[-1]
    if trigger.role == "user" and trigger.content:
        return f"User: {trigger.content}"
    return None


async def run_agent(
    model: AIModel,
    context: ModelContext,
    *,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    on_chunk: ChunkCallback | None = None,
    memory: MemoryStore | None = None,
    on_usage: UsageCallback | None = None,
    registry: ToolRegistry | None = None
) -> AgentResult:
    """
    Run the agent loop until the model answers without tool calls.

    Args:
        model: The backend to drive
        context: Input messages, base system prompt, tools and generation
            controls
        max_iterations: Maximum number of generate calls
        on_chunk: Receives each streamed text fragment; when given, the
            final answer is re-requested through ``model.stream``
        memory: Session memory, read once up front and written once at
            the end
        on_usage: Receives ``(usage, iteration)`` for every backend call
            that reported usage
        registry: Where tool calls are resolved (defaults to the
            process-wide registry)

    Returns:
        AgentResult with the answer, transcript and summed usage

    Raises:
        MaxIterationsError: If no answer arrived within max_iterations
    """
    executor = ToolExecutor(registry)
    messages = list(context.messages)

    system_prompt = context.system_prompt
    if memory is not None:
        entries = await memory.get_all()
        system_prompt = build_system_prompt(entries, context.system_prompt) or None

    total_usage: UsageMetrics | None = None

    for iteration in range(1, max_iterations + 1):
        logger.debug(f"Iteration {iteration}", {"messages": len(messages)})

        result = await model.generate(context.with_messages(messages, system_prompt))

        if result.usage is not None:
            total_usage = add_usage(total_usage, result.usage)
            logger.debug(f"Usage for iteration {iteration}", result.usage.to_dict())
            await _notify(on_usage, result.usage, iteration)

        if not result.tool_calls:
            if on_chunk is not None:
                parts = []
                async for chunk in model.stream(context.with_messages(messages, system_prompt)):
                    if chunk.text:
                        parts.append(chunk.text)
                        await _notify(on_chunk, chunk.text)
                    if chunk.usage is not None:
                        total_usage = add_usage(total_usage, chunk.usage)
                        await _notify(on_usage, chunk.usage, iteration)
                output = "".join(parts)
            else:
                output = result.output

            # Only the text of the final answer is kept
            messages.append(ChatMessage.assistant(output))

            if memory is not None:
                user_entry = _user_entry(context.messages)
                if user_entry is not None:
                    await memory.add(user_entry)
                await memory.add(f"Assistant: {output}")

            logger.info(f"Generated response ({len(output)} chars) after {iteration} iteration(s)")
            return AgentResult(output=output, history=messages, usage=total_usage)

        messages.append(ChatMessage.assistant(result.output or None, result.tool_calls))

        for tool_call in result.tool_calls:
            messages.append(await executor.execute(tool_call))

    logger.error(f"Reached max iterations ({max_iterations}) without a final answer")
    raise MaxIterationsError(max_iterations)


class Agent:
    """
    Convenience wrapper around run_agent for chat-style callers.

    The agent offers every registered tool to the model, optionally
    grounds the base system prompt in retrieved knowledge-base chunks,
    and appends the new user message to the supplied history.

    Example:
        agent = Agent(OpenAIAdapter(), system_prompt="Be brief.")

        result = await agent.process(
            "What's the weather in Paris?",
            memory=FileMemoryStore("U123", Path("memory")),
            on_chunk=lambda text: print(text, end="")
        )
    """

    def __init__(
        self,
        model: AIModel,
        registry: ToolRegistry | None = None,
        system_prompt: str | None = None,
        retriever: Retriever | None = None,
        max_iterations: int | None = None,
        top_k: int = 5
    ):
        """
        Initialize the agent.

        Args:
            model: The backend to drive
            registry: Tool registry (defaults to the process-wide one)
            system_prompt: Base instruction (defaults to AGENT_SYSTEM_PROMPT)
            retriever: Optional knowledge-base retriever
            max_iterations: Loop bound (defaults to AGENT_MAX_ITERATIONS)
            top_k: Number of chunks to retrieve per message
        """
        config = get_config()

        self.model = model
        self.registry = registry if registry is not None else tool_registry
        self.system_prompt = system_prompt if system_prompt is not None else config.agent.system_prompt
        self.retriever = retriever
        self.max_iterations = max_iterations if max_iterations is not None else config.agent.max_iterations
        self.top_k = top_k

    async def build_context(
        self,
        message: str,
        history: list[ChatMessage] | None = None
    ) -> ModelContext:
        """Build the model context for a new user message."""
        system_prompt = self.system_prompt
        if self.retriever is not None:
            chunks = await self.retriever.retrieve(message, top_k=self.top_k)
            system_prompt = build_rag_system_prompt(chunks, [], system_prompt) or None

        return ModelContext(
            messages=[*(history or []), ChatMessage.user(message)],
            system_prompt=system_prompt,
            tools=self.registry.get_all() or None,
        )

    async def process(
        self,
        message: str,
        history: list[ChatMessage] | None = None,
        memory: MemoryStore | None = None,
        on_chunk: ChunkCallback | None = None,
        on_usage: UsageCallback | None = None
    ) -> AgentResult:
        """
        Answer a user message.

        Args:
            message: The user's message
            history: Earlier turns of this conversation
            memory: Session memory to read and update
            on_chunk: Streaming callback for the final answer
            on_usage: Per-call usage callback

        Returns:
            The AgentResult of the run
        """
        logger.info(f"Processing message: {message[:50]}")

        context = await self.build_context(message, history)
        return await run_agent(
            self.model,
            context,
            max_iterations=self.max_iterations,
            on_chunk=on_chunk,
            memory=memory,
            on_usage=on_usage,
            registry=self.registry,
        )
