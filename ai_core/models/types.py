"""
Conversation Types
==================

The normalized shapes that flow between the agent runtime and a model
backend:

- ChatMessage: one turn in the transcript
- ToolCall: one requested tool invocation
- ModelContext: a request to a backend
- ModelResult / ModelChunk: what a backend returns
- UsageMetrics: token counts and timing for one backend call

Tool call arguments stay a JSON text blob end to end. The backend emits
them as text and the tool executor owns parsing.
"""

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from ai_core.tools import Tool

MessageRole = Literal["user", "assistant", "system", "tool"]


@dataclass(frozen=True)
class ToolCall:
    """
    A tool invocation requested by the model.

    Attributes:
        id: Backend-assigned identifier, echoed back on the tool result
        name: The tool name to resolve in the registry
        arguments: JSON text (a mapping is tolerated and passed through)
    """
    id: str
    name: str
    arguments: str | dict[str, Any] = "{}"


@dataclass(frozen=True)
class ChatMessage:
    """
    One message in a conversation.

    Attributes:
        role: "user", "assistant", "system" or "tool"
        content: Message text; None only for assistant turns with tool calls
        tool_calls: Requested invocations (assistant turns only)
        tool_call_id: The call this message answers (tool turns only)
        name: The tool that produced this message (tool turns only)
    """
    role: MessageRole
    content: str | None
    tool_calls: tuple[ToolCall, ...] | None = None
    tool_call_id: str | None = None
    name: str | None = None

    @classmethod
    def user(cls, content: str) -> "ChatMessage":
        return cls(role="user", content=content)

    @classmethod
    def assistant(
        cls,
        content: str | None,
        tool_calls: list[ToolCall] | tuple[ToolCall, ...] | None = None
    ) -> "ChatMessage":
        return cls(
            role="assistant",
            content=content,
            tool_calls=tuple(tool_calls) if tool_calls else None,
        )

    @classmethod
    def tool(cls, tool_call_id: str, name: str, content: str) -> "ChatMessage":
        return cls(role="tool", content=content, tool_call_id=tool_call_id, name=name)


@dataclass(frozen=True)
class UsageMetrics:
    """
    Token usage and wall-clock time of one backend call.

    Attributes:
        prompt_tokens: Tokens in the request
        completion_tokens: Tokens generated
        total_tokens: Sum as reported by the backend
        duration_ms: Wall-clock time of the call in milliseconds
    """
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    duration_ms: float = 0

    def __add__(self, other: "UsageMetrics") -> "UsageMetrics":
        if not isinstance(other, UsageMetrics):
            return NotImplemented
        return UsageMetrics(
            prompt_tokens=self.prompt_tokens + other.prompt_tokens,
            completion_tokens=self.completion_tokens + other.completion_tokens,
            total_tokens=self.total_tokens + other.total_tokens,
            duration_ms=self.duration_ms + other.duration_ms,
        )

    def to_dict(self) -> dict[str, float]:
        return {
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
            "total_tokens": self.total_tokens,
            "duration_ms": self.duration_ms,
        }


def add_usage(
    total: UsageMetrics | None,
    usage: UsageMetrics | None
) -> UsageMetrics | None:
    """
    Merge two usage records field by field.

    None means "nothing reported" and is the identity, so a run that never
    received usage stays None.
    """
    if usage is None:
        return total
    if total is None:
        return usage
    return total + usage


@dataclass
class ModelContext:
    """
    A normalized request to a model backend.

    Attributes:
        messages: The transcript, oldest first
        system_prompt: Sent as the first system message when set
        temperature: Optional sampling temperature
        max_tokens: Optional generation cap
        tools: Tools the model may call on this request
    """
    messages: list[ChatMessage] = field(default_factory=list)
    system_prompt: str | None = None
    temperature: float | None = None
    max_tokens: int | None = None
    tools: list["Tool"] | None = None

    def with_messages(
        self,
        messages: list[ChatMessage],
        system_prompt: str | None = None
    ) -> "ModelContext":
        """Copy of this context with a new transcript and system prompt."""
        return replace(self, messages=list(messages), system_prompt=system_prompt)


@dataclass(frozen=True)
class ModelResult:
    """The result of a one-shot generate call."""
    output: str
    tool_calls: tuple[ToolCall, ...] | None = None
    usage: UsageMetrics | None = None


@dataclass(frozen=True)
class ModelChunk:
    """
    One piece of a streamed answer.

    Usage, when the backend reports it, arrives only on the last chunk of
    the stream and that chunk carries empty text.
    """
    text: str = ""
    usage: UsageMetrics | None = None
