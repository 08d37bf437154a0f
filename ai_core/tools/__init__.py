"""
Tools System
============

Tools are functions the model can ask the agent to call. Each tool has:
- a name (the registry key)
- a description (shown to the model)
- a schema: a pydantic model that validates the call's arguments and
  whose JSON schema is what the model sees
- an async execute function taking the validated input

How Tools Work:
1. Tools are registered once at startup
2. The agent offers the registered tools to the model
3. The model answers with tool calls (name + JSON arguments)
4. The tool executor resolves, validates and runs each call
5. Results go back to the model as tool messages

This module provides:
- Tool dataclass for defining tools
- ToolRegistry for managing available tools
- tool_registry, the process-wide default registry
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from pydantic import BaseModel

from ai_core.utils.logger import Logger

logger = Logger("Tools")


@dataclass
class Tool:
    """
    Definition of a callable tool.

    Attributes:
        name: Unique identifier for the tool
        description: What the tool does (shown to the model)
        schema: Pydantic model validating the tool input
        execute: Async function run with the validated input

    Example:
        class SendMessageInput(BaseModel):
            channel: str
            text: str

        async def send_message(params: SendMessageInput) -> dict:
            return {"delivered": True, "channel": params.channel}

        tool = Tool(
            name="send_message",
            description="Send a message to a channel",
            schema=SendMessageInput,
            execute=send_message
        )
    """
    name: str
    description: str
    schema: type[BaseModel]
    execute: Callable[[Any], Awaitable[Any]]

    def parameters(self) -> dict[str, Any]:
        """
        JSON schema of the tool input with $ref indirections inlined.

        Recursive models cannot be inlined; their definitions stay under
        $defs and are referenced from the inlined schema.
        """
        schema = self.schema.model_json_schema()
        definitions = schema.pop("$defs", None)
        if definitions:
            recursive = _recursive_defs(definitions)
            root = schema.get("$ref")
            if isinstance(root, str) and set(schema) == {"$ref"}:
                schema = dict(definitions[root.split("/")[-1]])
            schema = _inline_refs(schema, definitions, recursive)
            if recursive:
                schema["$defs"] = {
                    name: _inline_refs(definitions[name], definitions, recursive)
                    for name in sorted(recursive)
                }
        schema.pop("title", None)
        return schema

    def to_openai_function(self) -> dict:
        """Convert to the OpenAI function calling format."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters()
            }
        }


def _recursive_defs(definitions: dict[str, Any]) -> set[str]:
    """Names of definitions that can reach themselves through $ref."""
    def refs(node: Any) -> set[str]:
        if isinstance(node, dict):
            found = set()
            ref = node.get("$ref")
            if isinstance(ref, str) and ref.startswith("#/$defs/"):
                found.add(ref.split("/")[-1])
            for value in node.values():
                found |= refs(value)
            return found
        if isinstance(node, list):
            return set().union(*(refs(item) for item in node))
        return set()

    edges = {name: refs(schema) for name, schema in definitions.items()}
    recursive = set()
    for start in edges:
        seen: set[str] = set()
        stack = list(edges[start])
        while stack:
            name = stack.pop()
            if name == start:
                recursive.add(start)
                break
            if name in seen:
                continue
            seen.add(name)
            stack.extend(edges.get(name, ()))
    return recursive


def _inline_refs(
    node: Any,
    definitions: dict[str, Any],
    keep: set[str] | frozenset[str] = frozenset()
) -> Any:
    if isinstance(node, dict):
        ref = node.get("$ref")
        if isinstance(ref, str) and ref.startswith("#/$defs/"):
            name = ref.split("/")[-1]
            if name not in keep:
                return _inline_refs(definitions.get(name, {}), definitions, keep)
        return {key: _inline_refs(value, definitions, keep) for key, value in node.items()}
    if isinstance(node, list):
        return [_inline_refs(item, definitions, keep) for item in node]
    return node


class ToolRegistry:
    """
    Registry of available tools, keyed by name.

    Registering a name twice replaces the earlier tool; the last
    registration wins.

    Example:
        registry = ToolRegistry()
        registry.register(weather_tool)

        tool = registry.get_by_name("get_weather")   # Tool or None
        tools = registry.get_all()
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._tools: dict[str, Tool] = {}

    def register(self, tool: Tool) -> None:
        """
        Register a tool, replacing any tool with the same name.

        Args:
            tool: The tool to register
        """
        if tool.name in self._tools:
            logger.debug(f"Replacing tool: {tool.name}")
        else:
            logger.debug(f"Registered tool: {tool.name}")
        self._tools[tool.name] = tool

    def get_by_name(self, name: str) -> Tool | None:
        """
        Get a tool by name.

        Returns:
            The tool, or None if not found
        """
        return self._tools.get(name)

    def get_all(self) -> list[Tool]:
        """Snapshot of all registered tools."""
        return list(self._tools.values())

    def list_names(self) -> list[str]:
        """Get list of all tool names."""
        return list(self._tools.keys())

    def get_openai_functions(self) -> list[dict]:
        """All tools in OpenAI function format."""
        return [tool.to_openai_function() for tool in self._tools.values()]

    def clear(self) -> None:
        """Remove every tool (test setup)."""
        self._tools.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)


# Global tool registry instance
tool_registry = ToolRegistry()


__all__ = [
    "Tool",
    "ToolRegistry",
    "tool_registry",
]
