"""Test embeddings, the vector store and the retriever"""

import tempfile
import unittest
from pathlib import Path

from ai_core.rag import (
    EmbeddingGenerator,
    RetrievedChunk,
    VectorDocument,
    VectorRetriever,
    VectorStore,
)
from tests.fakes import FakeEmbeddings, fake_embedding_client


def _doc(doc_id, embedding, **metadata):
    return VectorDocument(id=doc_id, content=f"content {doc_id}", embedding=embedding, metadata=metadata)


class TestVectorStore(unittest.TestCase):

    def setUp(self):
        self.store = VectorStore()
        self.store.add_batch([
            _doc("east", [1.0, 0.0], source="a.md"),
            _doc("north", [0.0, 1.0], source="b.md"),
            _doc("northeast", [0.7, 0.7], source="a.md"),
        ])

    def test_search_orders_by_similarity(self):
        results = self.store.search([1.0, 0.1], top_k=2)
        self.assertEqual([r.id for r in results], ["east", "northeast"])
        self.assertGreater(results[0].score, results[1].score)

    def test_search_with_metadata_filter(self):
        results = self.store.search([0.0, 1.0], top_k=5, filter_metadata={"source": "a.md"})
        self.assertEqual([r.id for r in results], ["northeast", "east"])

    def test_add_replaces_same_id(self):
        self.store.add(_doc("east", [0.0, -1.0]))
        self.assertEqual(len(self.store), 3)
        self.assertEqual(self.store.search([0.0, -1.0], top_k=1)[0].id, "east")

    def test_delete_and_clear(self):
        self.assertTrue(self.store.delete("north"))
        self.assertFalse(self.store.delete("north"))
        self.assertIsNone(self.store.get("north"))
        self.assertEqual(len(self.store), 2)

        self.store.clear()
        self.assertEqual(self.store.search([1.0, 0.0]), [])

    def test_zero_query_returns_nothing(self):
        self.assertEqual(self.store.search([0.0, 0.0]), [])

    def test_mismatched_dimension_leaves_store_unchanged(self):
        with self.assertRaises(ValueError):
            self.store.add(_doc("up", [0.0, 0.0, 1.0]))

        self.assertIsNone(self.store.get("up"))
        self.assertEqual(len(self.store), 3)
        self.assertEqual(self.store.search([0.0, 1.0], top_k=1)[0].id, "north")

    def test_failed_batch_adds_nothing(self):
        with self.assertRaises(ValueError):
            self.store.add_batch([
                _doc("south", [0.0, -1.0]),
                _doc("up", [0.0, 0.0, 1.0]),
            ])

        self.assertIsNone(self.store.get("south"))
        self.assertEqual(len(self.store), 3)

    def test_query_dimension_must_match(self):
        with self.assertRaises(ValueError):
            self.store.search([1.0, 0.0, 0.0])

    def test_failed_add_is_not_persisted(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "vectors"
            store = VectorStore(path)
            store.add(_doc("east", [1.0, 0.0]))

            with self.assertRaises(ValueError):
                store.add(_doc("up", [0.0, 0.0, 1.0]))

            reloaded = VectorStore(path)
            self.assertEqual(len(reloaded), 1)
            self.assertEqual(reloaded.search([1.0, 0.0])[0].id, "east")

    def test_persistence(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "vectors"
            store = VectorStore(path)
            store.add(_doc("east", [1.0, 0.0], source="a.md"))
            store.add(_doc("north", [0.0, 1.0]))

            reloaded = VectorStore(path)

            self.assertEqual(len(reloaded), 2)
            self.assertEqual(reloaded.get("east").metadata, {"source": "a.md"})
            self.assertEqual(reloaded.search([0.1, 1.0], top_k=1)[0].id, "north")


class TestEmbeddingGenerator(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.embeddings = FakeEmbeddings({"a": [1.0, 0.0], "b": [0.0, 1.0]})
        self.generator = EmbeddingGenerator(
            model="test-embed",
            client=fake_embedding_client(self.embeddings),
        )

    async def test_generate_is_cached(self):
        self.assertEqual(await self.generator.generate("a"), [1.0, 0.0])
        self.assertEqual(await self.generator.generate("a"), [1.0, 0.0])
        self.assertEqual(len(self.embeddings.requests), 1)
        self.assertEqual(self.embeddings.requests[0]["model"], "test-embed")

    async def test_batch_skips_cached_texts(self):
        await self.generator.generate("a")
        vectors = await self.generator.generate_batch(["b", "a"])

        self.assertEqual(vectors, [[0.0, 1.0], [1.0, 0.0]])
        self.assertEqual(self.embeddings.requests[-1]["input"], ["b"])
        self.assertEqual(self.generator.get_cache_size(), 2)

    async def test_empty_batch(self):
        self.assertEqual(await self.generator.generate_batch([]), [])
        self.assertEqual(self.embeddings.requests, [])


class TestVectorRetriever(unittest.IsolatedAsyncioTestCase):

    async def test_index_and_retrieve(self):
        embeddings = FakeEmbeddings({
            "Refunds take 5 days": [1.0, 0.0],
            "Shipping is free": [0.0, 1.0],
            "how long for a refund?": [0.9, 0.1],
        })
        generator = EmbeddingGenerator(model="m", client=fake_embedding_client(embeddings))
        retriever = VectorRetriever(VectorStore(), generator)

        await retriever.index("Refunds take 5 days", source="faq.md")
        await retriever.index("Shipping is free")

        chunks = await retriever.retrieve("how long for a refund?", top_k=2)

        self.assertEqual([c.content for c in chunks], ["Refunds take 5 days", "Shipping is free"])
        self.assertIsInstance(chunks[0], RetrievedChunk)
        self.assertEqual(chunks[0].source, "faq.md")
        self.assertIsNone(chunks[1].source)
        self.assertGreater(chunks[0].score, chunks[1].score)


if __name__ == "__main__":
    unittest.main()
