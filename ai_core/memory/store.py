"""
Memory Store
============

Per-session conversation memory as an append-only, ordered log of
strings. The agent reads the whole log once per run to build its system
prompt and appends the finished turn ("User: ..." / "Assistant: ...")
when the run completes.

Both operations are coroutines so in-memory and persistent stores are
interchangeable. Retention and eviction belong to concrete stores.
"""

from abc import ABC, abstractmethod

from ai_core.utils.logger import Logger

logger = Logger("MemoryStore")


class MemoryStore(ABC):
    """Append-only, ordered sequence of entries for one session."""

    @abstractmethod
    async def add(self, entry: str) -> None:
        """Append an entry."""

    @abstractmethod
    async def get_all(self) -> list[str]:
        """All entries in insertion order."""


class InMemoryStore(MemoryStore):
    """
    List-backed memory that lives only as long as the process.

    Example:
        memory = InMemoryStore()
        await memory.add("User: hi")
        await memory.get_all()  # ["User: hi"]
    """

    def __init__(self, entries: list[str] | None = None):
        self._entries: list[str] = list(entries or [])

    async def add(self, entry: str) -> None:
        self._entries.append(entry)
        logger.debug(f"Added entry ({len(entry)} chars)")

    async def get_all(self) -> list[str]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
