"""Test session memory stores"""

import tempfile
import unittest
from pathlib import Path

from ai_core.memory import FileMemoryStore, InMemoryStore
from ai_core.memory.file_store import session_filename


class TestInMemoryStore(unittest.IsolatedAsyncioTestCase):

    async def test_add_and_get_all(self):
        memory = InMemoryStore()
        await memory.add("User: hi")
        await memory.add("Assistant: hello")
        self.assertEqual(await memory.get_all(), ["User: hi", "Assistant: hello"])

    async def test_get_all_returns_a_copy(self):
        memory = InMemoryStore(["a"])
        entries = await memory.get_all()
        entries.append("b")
        self.assertEqual(await memory.get_all(), ["a"])
        self.assertEqual(len(memory), 1)


class TestFileMemoryStore(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.directory = Path(self._tmp.name) / "memory"

    def tearDown(self):
        self._tmp.cleanup()

    async def test_unknown_session_is_empty(self):
        memory = FileMemoryStore("nobody", self.directory)
        self.assertEqual(await memory.get_all(), [])
        self.assertTrue(self.directory.is_dir())

    async def test_order_survives_new_instances(self):
        first = FileMemoryStore("U123", self.directory)
        await first.add("User: one")
        await first.add("Assistant: two\nwith a second line")

        second = FileMemoryStore("U123", self.directory)
        await second.add("User: three")

        self.assertEqual(
            await FileMemoryStore("U123", self.directory).get_all(),
            ["User: one", "Assistant: two\nwith a second line", "User: three"],
        )

    async def test_sessions_are_isolated(self):
        alice = FileMemoryStore("alice", self.directory)
        bob = FileMemoryStore("bob", self.directory)

        await alice.add("User: from alice")
        await bob.add("User: from bob")

        self.assertEqual(await alice.get_all(), ["User: from alice"])
        self.assertEqual(await bob.get_all(), ["User: from bob"])

    async def test_ids_that_sanitize_alike_are_isolated(self):
        colon = FileMemoryStore("team:alice", self.directory)
        underscore = FileMemoryStore("team_alice", self.directory)
        dotted = FileMemoryStore(".team_alice", self.directory)

        await colon.add("User: from team:alice")

        self.assertNotEqual(colon.path, underscore.path)
        self.assertNotEqual(underscore.path, dotted.path)
        self.assertEqual(await underscore.get_all(), [])
        self.assertEqual(await dotted.get_all(), [])
        self.assertEqual(await colon.get_all(), ["User: from team:alice"])


class TestSessionFilename(unittest.TestCase):

    def test_plain_id(self):
        name = session_filename("U123")
        self.assertTrue(name.startswith("U123-"))
        self.assertTrue(name.endswith(".jsonl"))

    def test_name_is_stable(self):
        self.assertEqual(session_filename("team:alice"), session_filename("team:alice"))

    def test_ids_that_sanitize_alike_get_distinct_names(self):
        names = {session_filename(s) for s in ("team:alice", "team_alice", "team/alice", ".team_alice")}
        self.assertEqual(len(names), 4)

    def test_path_characters_are_replaced(self):
        name = session_filename("../etc/passwd")
        self.assertNotIn("/", name)
        self.assertFalse(name.startswith("."))

    def test_empty_id_rejected(self):
        with self.assertRaises(ValueError):
            session_filename("")


if __name__ == "__main__":
    unittest.main()
