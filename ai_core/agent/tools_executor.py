"""
Tool Executor
=============

Runs the tool calls a model requests, one at a time, and turns every
outcome into a tool-role transcript message:

    unknown tool        -> "Error: Tool <name> not found."
    bad JSON arguments  -> "Error: <parse error>"
    schema violation    -> "Error: <validation error>"
    tool raised         -> "Error: <exception message>"
    success             -> JSON-serialized result

This is the only recovery boundary in the agent loop. A failing tool
never aborts a run; the model sees the error and can react to it.
"""

import json
from typing import Any

from pydantic import BaseModel

from ai_core.models.types import ChatMessage, ToolCall
from ai_core.tools import ToolRegistry, tool_registry
from ai_core.utils.logger import Logger

logger = Logger("ToolExecutor")


def parse_arguments(arguments: str | dict[str, Any]) -> Any:
    """
    Parse tool call arguments.

    JSON text is decoded; an already-structured mapping is returned as is.

    Raises:
        json.JSONDecodeError: If the text is not valid JSON
    """
    if isinstance(arguments, str):
        return json.loads(arguments)
    return arguments


def _json_default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    return str(value)


def serialize_output(output: Any) -> str:
    """Serialize a tool result as JSON for the model."""
    return json.dumps(output, default=_json_default)


class ToolExecutor:
    """
    Executes tool calls against a registry.

    Example:
        executor = ToolExecutor(registry)

        for call in result.tool_calls:
            messages.append(await executor.execute(call))
    """

    def __init__(self, registry: ToolRegistry | None = None):
        """
        Initialize the tool executor.

        Args:
            registry: Registry to resolve tools in (defaults to the
                process-wide one)
        """
        self.registry = registry if registry is not None else tool_registry

    async def execute(self, tool_call: ToolCall) -> ChatMessage:
        """
        Execute a single tool call.

        Args:
            tool_call: The call to execute

        Returns:
            A tool-role message answering the call
        """
        tool = self.registry.get_by_name(tool_call.name)

        if tool is None:
            logger.error(f"Tool not found: {tool_call.name}")
            return ChatMessage.tool(
                tool_call_id=tool_call.id,
                name=tool_call.name,
                content=f"Error: Tool {tool_call.name} not found."
            )

        try:
            params = tool.schema.model_validate(parse_arguments(tool_call.arguments))
            logger.info(f"Executing tool: {tool.name}")
            logger.debug(f"Arguments for {tool.name}", params.model_dump(mode="json"))

            output = await tool.execute(params)
            content = serialize_output(output)

        except Exception as e:
            logger.warning(f"Tool {tool.name} failed: {type(e).__name__}: {e}")
            return ChatMessage.tool(
                tool_call_id=tool_call.id,
                name=tool.name,
                content=f"Error: {e}"
            )

        logger.debug(f"Tool {tool.name} succeeded")
        return ChatMessage.tool(tool_call_id=tool_call.id, name=tool.name, content=content)

    async def execute_all(self, tool_calls: list[ToolCall] | tuple[ToolCall, ...]) -> list[ChatMessage]:
        """
        Execute tool calls sequentially, in order.

        Each call completes (or fails) before the next one starts.

        Returns:
            One tool message per call, in the same order
        """
        results = []
        for tool_call in tool_calls:
            results.append(await self.execute(tool_call))
        return results
