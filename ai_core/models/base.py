"""
Model Capability
================

The contract a text-generation backend must satisfy to drive the agent
loop. Any backend (a real API, a deterministic stub, a replayed fixture)
that implements these two methods is interchangeable.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator

from ai_core.models.types import ModelChunk, ModelContext, ModelResult


class AIModel(ABC):
    """
    Abstract text-generation backend.

    Implementations must:
    - send ``context.system_prompt`` as the first message when it is set
    - offer ``context.tools`` to the model only when the list is non-empty
    - report usage when the backend surfaces it

    Example:
        class EchoModel(AIModel):
            async def generate(self, context):
                return ModelResult(output=context.messages[-1].content)

            async def stream(self, context):
                yield ModelChunk(text=context.messages[-1].content)
    """

    @abstractmethod
    async def generate(self, context: ModelContext) -> ModelResult:
        """Run one blocking completion over the context."""

    @abstractmethod
    def stream(self, context: ModelContext) -> AsyncIterator[ModelChunk]:
        """
        Stream a completion as a finite, single-pass sequence of chunks.

        Chunks arrive in generation order. A usage-bearing chunk, if any,
        is the last item and has empty text. Implement as an async
        generator (``async def`` with ``yield``).
        """
