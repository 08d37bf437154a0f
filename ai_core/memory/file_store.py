"""
File Memory Store
=================

File-backed persistent memory, one file per session:

    memory/
    ├── default-<sha256[:16]>.jsonl
    └── U123ABC-<sha256[:16]>.jsonl

File names are the sanitized session id plus a hash of the raw id, so
ids that sanitize alike still get their own file.

Each line is one JSON-encoded entry, so entries may safely contain
newlines. Files are only ever appended to, which keeps insertion order
and survives restarts.

Concurrent runs on different sessions never touch the same file. Runs on
the same session get whatever ordering the filesystem's appends provide.
"""

import asyncio
import hashlib
import json
import re
from pathlib import Path

from ai_core.memory.store import MemoryStore
from ai_core.utils.logger import Logger

logger = Logger("FileMemoryStore")

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


def session_filename(session_id: str) -> str:
    """
    Map a session id to a safe file name.

    Raises:
        ValueError: If the session id is empty
    """
    if not session_id:
        raise ValueError("session_id must be a non-empty string")
    safe = _UNSAFE_CHARS.sub("_", session_id).lstrip(".")
    digest = hashlib.sha256(session_id.encode("utf-8")).hexdigest()[:16]
    return f"{safe or '_'}-{digest}.jsonl"


class FileMemoryStore(MemoryStore):
    """
    Session-scoped memory persisted as JSON lines.

    Example:
        memory = FileMemoryStore("U123", Path("memory"))

        await memory.add("User: What's the weather?")
        await memory.add("Assistant: Sunny.")

        entries = await memory.get_all()
    """

    def __init__(self, session_id: str, directory: Path):
        """
        Initialize the store.

        Args:
            session_id: The session this store is scoped to
            directory: Directory holding one file per session
        """
        self.session_id = session_id
        self.directory = Path(directory)
        self.path = self.directory / session_filename(session_id)

        self.directory.mkdir(parents=True, exist_ok=True)

    async def add(self, entry: str) -> None:
        # Run file I/O in thread pool to avoid blocking
        await asyncio.to_thread(self._add_sync, entry)

    def _add_sync(self, entry: str) -> None:
        with self.path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(entry) + "\n")
        logger.debug(f"Appended entry to {self.path.name}")

    async def get_all(self) -> list[str]:
        return await asyncio.to_thread(self._get_all_sync)

    def _get_all_sync(self) -> list[str]:
        if not self.path.exists():
            return []

        entries = []
        with self.path.open(encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if line:
                    entries.append(json.loads(line))
        return entries
