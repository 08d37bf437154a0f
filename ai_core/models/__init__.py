"""
Models
======

The model capability contract and its data types:
- AIModel: what a text-generation backend implements
- ChatMessage, ToolCall, ModelContext, ModelResult, ModelChunk, UsageMetrics
- OpenAIAdapter: the OpenAI-compatible backend
"""

from ai_core.models.types import (
    ChatMessage,
    MessageRole,
    ModelChunk,
    ModelContext,
    ModelResult,
    ToolCall,
    UsageMetrics,
    add_usage,
)
from ai_core.models.base import AIModel
from ai_core.models.openai_adapter import OpenAIAdapter

__all__ = [
    "AIModel",
    "ChatMessage",
    "MessageRole",
    "ModelChunk",
    "ModelContext",
    "ModelResult",
    "OpenAIAdapter",
    "ToolCall",
    "UsageMetrics",
    "add_usage",
]
