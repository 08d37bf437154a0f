"""
OpenAI Adapter
==============

An AIModel backed by the OpenAI chat completions API. Works with OpenAI
itself or any compatible endpoint, e.g. Ollama at
http://localhost:11434/v1.

Request mapping:
    ModelContext.system_prompt  -> leading {"role": "system"} message
    ModelContext.messages       -> chat messages (tool calls / tool results
                                   in the OpenAI wire shape)
    ModelContext.tools          -> "tools" + tool_choice="auto", only when
                                   the list is non-empty

Response mapping:
    message.content             -> ModelResult.output
    message.tool_calls          -> ModelResult.tool_calls (arguments kept
                                   as the JSON text the API returned)
    response.usage + timing     -> ModelResult.usage
"""

import json
import time
from collections.abc import AsyncIterator
from typing import Any

from openai import AsyncOpenAI

from ai_core.models.base import AIModel
from ai_core.models.types import (
    ChatMessage,
    ModelChunk,
    ModelContext,
    ModelResult,
    ToolCall,
    UsageMetrics,
)
from ai_core.utils.config import get_config
from ai_core.utils.logger import Logger

logger = Logger("OpenAIAdapter")


def _encode_arguments(arguments: str | dict[str, Any]) -> str:
    if isinstance(arguments, str):
        return arguments
    return json.dumps(arguments)


def to_openai_messages(messages: list[ChatMessage]) -> list[dict]:
    """
    Convert transcript messages to OpenAI chat message dicts.

    Args:
        messages: The transcript

    Returns:
        Message dicts ready for chat.completions.create
    """
    result = []
    for message in messages:
        if message.role == "assistant" and message.tool_calls:
            result.append({
                "role": "assistant",
                "content": message.content or "",
                "tool_calls": [
                    {
                        "id": tc.id,
                        "type": "function",
                        "function": {
                            "name": tc.name,
                            "arguments": _encode_arguments(tc.arguments),
                        },
                    }
                    for tc in message.tool_calls
                ],
            })
        elif message.role == "tool":
            result.append({
                "role": "tool",
                "tool_call_id": message.tool_call_id,
                "content": message.content or "",
            })
        else:
            result.append({"role": message.role, "content": message.content or ""})
    return result


def _usage_from(usage: Any, duration_ms: float) -> UsageMetrics | None:
    if usage is None:
        return None
    return UsageMetrics(
        prompt_tokens=usage.prompt_tokens or 0,
        completion_tokens=usage.completion_tokens or 0,
        total_tokens=usage.total_tokens or 0,
        duration_ms=duration_ms,
    )


class OpenAIAdapter(AIModel):
    """
    OpenAI-compatible model backend.

    Example:
        model = OpenAIAdapter(model="llama3.2", base_url="http://localhost:11434/v1")

        result = await model.generate(ModelContext(
            messages=[ChatMessage.user("Hello!")],
            system_prompt="Be brief."
        ))
        print(result.output, result.usage)
    """

    def __init__(
        self,
        model: str | None = None,
        base_url: str | None = None,
        api_key: str | None = None,
        client: AsyncOpenAI | None = None
    ):
        """
        Initialize the adapter.

        Args:
            model: Model name (defaults to OPENAI_MODEL)
            base_url: API base URL (defaults to OPENAI_BASE_URL)
            api_key: API key (defaults to OPENAI_API_KEY, then "ollama")
            client: Pre-built client, mainly for tests
        """
        config = get_config().openai

        self.model = model or config.model
        self.client = client or AsyncOpenAI(
            api_key=api_key or config.api_key,
            base_url=base_url or config.base_url,
        )

        logger.info(f"OpenAI adapter initialized with model: {self.model}")

    def _build_request(self, context: ModelContext) -> dict[str, Any]:
        messages = to_openai_messages(context.messages)
        if context.system_prompt:
            messages.insert(0, {"role": "system", "content": context.system_prompt})

        request: dict[str, Any] = {"model": self.model, "messages": messages}
        if context.temperature is not None:
            request["temperature"] = context.temperature
        if context.max_tokens is not None:
            request["max_tokens"] = context.max_tokens
        if context.tools:
            request["tools"] = [tool.to_openai_function() for tool in context.tools]
        return request

    async def generate(self, context: ModelContext) -> ModelResult:
        request = self._build_request(context)
        if "tools" in request:
            request["tool_choice"] = "auto"

        started = time.perf_counter()
        response = await self.client.chat.completions.create(**request, stream=False)
        duration_ms = (time.perf_counter() - started) * 1000

        usage = _usage_from(response.usage, duration_ms)

        if not response.choices or response.choices[0].message is None:
            return ModelResult(output="", usage=usage)

        message = response.choices[0].message
        output = message.content if isinstance(message.content, str) else ""

        tool_calls = None
        if message.tool_calls:
            tool_calls = tuple(
                ToolCall(id=tc.id, name=tc.function.name, arguments=tc.function.arguments)
                for tc in message.tool_calls
            )
            logger.debug(f"Model requested {len(tool_calls)} tool call(s)")

        return ModelResult(output=output, tool_calls=tool_calls, usage=usage)

    async def stream(self, context: ModelContext) -> AsyncIterator[ModelChunk]:
        request = self._build_request(context)

        started = time.perf_counter()
        stream = await self.client.chat.completions.create(
            **request,
            stream=True,
            stream_options={"include_usage": True}
        )

        reported = None
        async for chunk in stream:
            if chunk.choices:
                delta = chunk.choices[0].delta
                if delta is not None and delta.content:
                    yield ModelChunk(text=delta.content)
            if getattr(chunk, "usage", None) is not None:
                reported = chunk.usage

        usage = _usage_from(reported, (time.perf_counter() - started) * 1000)
        if usage is not None:
            yield ModelChunk(text="", usage=usage)
