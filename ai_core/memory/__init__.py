"""
Memory System
=============

Per-session conversation memory. A MemoryStore is an append-only, ordered
log of strings scoped to one session:

- InMemoryStore: lives in RAM, cleared on restart
- FileMemoryStore: one JSON-lines file per session, survives restarts

Usage:
    from ai_core.memory import FileMemoryStore

    memory = FileMemoryStore(session_id="U123", directory=Path("memory"))
    await memory.add("User: Hello!")
    entries = await memory.get_all()
"""

from ai_core.memory.store import MemoryStore, InMemoryStore
from ai_core.memory.file_store import FileMemoryStore

__all__ = [
    "MemoryStore",
    "InMemoryStore",
    "FileMemoryStore",
]
