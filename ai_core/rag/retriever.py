"""
Retriever
=========

Given a query, return ranked content chunks from a knowledge base. The
agent never calls a retriever itself: the Agent facade folds retrieved
chunks into the system prompt before the loop starts.
"""

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass

from ai_core.rag.embeddings import EmbeddingGenerator
from ai_core.rag.vectorstore import VectorDocument, VectorStore
from ai_core.utils.logger import Logger

logger = Logger("Retriever")


@dataclass(frozen=True)
class RetrievedChunk:
    """
    A single knowledge-base hit.

    Attributes:
        content: The chunk text
        score: Similarity score, higher is more relevant
        source: Where the chunk came from (file name, URL, ...), if known
    """
    content: str
    score: float
    source: str | None = None


class Retriever(ABC):
    """Anything that can turn a query into ranked chunks."""

    @abstractmethod
    async def retrieve(self, query: str, top_k: int = 5) -> list[RetrievedChunk]:
        """Return up to ``top_k`` chunks, most relevant first."""


class VectorRetriever(Retriever):
    """
    Retriever over a VectorStore, embedding queries on the fly.

    Example:
        retriever = VectorRetriever(VectorStore(), EmbeddingGenerator())

        await retriever.index("Refunds take 5 days", source="faq.md")
        chunks = await retriever.retrieve("how long do refunds take?")
    """

    def __init__(self, store: VectorStore, embedder: EmbeddingGenerator):
        self.store = store
        self.embedder = embedder

    async def index(self, content: str, source: str | None = None) -> str:
        """
        Embed and store one chunk.

        Returns:
            The new document id
        """
        embedding = await self.embedder.generate(content)
        doc_id = uuid.uuid4().hex
        metadata = {"source": source} if source else {}
        self.store.add(VectorDocument(
            id=doc_id,
            content=content,
            embedding=embedding,
            metadata=metadata
        ))
        return doc_id

    async def retrieve(self, query: str, top_k: int = 5) -> list[RetrievedChunk]:
        logger.debug(f"Retrieving for: '{query[:50]}'")

        query_embedding = await self.embedder.generate(query)
        documents = self.store.search(query_embedding, top_k=top_k)

        chunks = [
            RetrievedChunk(
                content=doc.content,
                score=doc.score or 0.0,
                source=doc.metadata.get("source")
            )
            for doc in documents
        ]

        logger.debug(f"Found {len(chunks)} chunks")
        return chunks
