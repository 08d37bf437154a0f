"""Test prompt assembly"""

import unittest

from ai_core.agent.context import (
    assemble_context,
    build_rag_system_prompt,
    build_system_prompt,
)
from ai_core.rag import RetrievedChunk
from tests.fakes import make_echo_tool


class TestBuildSystemPrompt(unittest.TestCase):

    def test_entries_only(self):
        entries = ["User: hi", "Assistant: hello", "User: bye"]
        self.assertEqual(
            build_system_prompt(entries),
            "Past conversation:\n" + "\n".join(entries),
        )

    def test_base_only(self):
        self.assertEqual(build_system_prompt([], "Be brief."), "Be brief.")

    def test_nothing(self):
        self.assertEqual(build_system_prompt([], None), "")
        self.assertEqual(build_system_prompt([]), "")

    def test_base_and_entries(self):
        self.assertEqual(
            build_system_prompt(["User: hi"], "Be brief."),
            "Be brief.\n\nPast conversation:\nUser: hi",
        )

    def test_entry_order_is_kept(self):
        prompt = build_system_prompt(["b", "a", "c"])
        self.assertEqual(prompt, "Past conversation:\nb\na\nc")


class TestBuildRAGSystemPrompt(unittest.TestCase):

    def test_all_blocks(self):
        chunks = [
            RetrievedChunk(content="Refunds take 5 days", score=0.9, source="faq.md"),
            RetrievedChunk(content="Shipping is free", score=0.5),
        ]
        prompt = build_rag_system_prompt(chunks, ["User: hi"], "Be brief.")
        self.assertEqual(
            prompt,
            "Be brief.\n\n"
            "## Relevant Context\n"
            "[faq.md] Refunds take 5 days\n\n"
            "Shipping is free\n\n"
            "Past conversation:\nUser: hi",
        )

    def test_chunks_only(self):
        chunks = [RetrievedChunk(content="A", score=1.0, source="s")]
        self.assertEqual(
            build_rag_system_prompt(chunks, []),
            "## Relevant Context\n[s] A",
        )

    def test_without_chunks_matches_plain_prompt(self):
        self.assertEqual(
            build_rag_system_prompt([], ["User: hi"], "Be brief."),
            build_system_prompt(["User: hi"], "Be brief."),
        )

    def test_empty(self):
        self.assertEqual(build_rag_system_prompt([], []), "")


class TestAssembleContext(unittest.TestCase):

    def test_all_lines(self):
        tools = [make_echo_tool("echo"), make_echo_tool("shout")]
        prompt = assemble_context("hello", tools=tools, memory="likes tea")
        self.assertEqual(
            prompt,
            "Memory: likes tea\nTools available: echo, shout\nUser input: hello",
        )

    def test_user_input_only(self):
        self.assertEqual(assemble_context("hello"), "User input: hello")

    def test_empty_memory_and_tools_are_omitted(self):
        prompt = assemble_context("hello", tools=[], memory="")
        self.assertNotIn("Memory:", prompt)
        self.assertNotIn("Tools available:", prompt)

    def test_tools_without_memory(self):
        prompt = assemble_context("hello", tools=[make_echo_tool()])
        self.assertEqual(prompt, "Tools available: echo\nUser input: hello")


if __name__ == "__main__":
    unittest.main()
