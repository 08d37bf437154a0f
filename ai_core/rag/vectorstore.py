"""
Vector Store
============

A small vector database for knowledge-base chunks, searched by cosine
similarity with numpy. It keeps an in-memory index and, when given a
storage path, persists it to disk:

- documents.json: document content and metadata
- embeddings.npy: numpy array of embeddings, one row per document

Cosine Similarity:
    cos(A, B) = (A · B) / (||A|| * ||B||)
    1 means same direction, 0 unrelated, -1 opposite.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import numpy as np

from ai_core.utils.logger import Logger

logger = Logger("VectorStore")


@dataclass
class VectorDocument:
    """
    A document stored in the vector store.

    Attributes:
        id: Unique identifier for the document
        content: The original text content
        embedding: The vector embedding
        metadata: Additional data (e.g. {"source": "handbook.md"})
        score: Similarity score (set during search)
    """
    id: str
    content: str
    embedding: list[float]
    metadata: dict[str, Any] = field(default_factory=dict)
    score: float | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "content": self.content,
            "metadata": self.metadata,
        }


class VectorStore:
    """
    Cosine-similarity vector store, optionally persisted to disk.

    Example:
        store = VectorStore(Path("data/vectorstore"))

        store.add(VectorDocument(
            id="doc_1",
            content="Refunds are processed within 5 days",
            embedding=[0.1, -0.2, ...],
            metadata={"source": "faq.md"}
        ))

        results = store.search([0.15, -0.18, ...], top_k=5)
    """

    def __init__(self, storage_path: Path | None = None):
        """
        Initialize the vector store.

        Args:
            storage_path: Directory for data files; None keeps it in memory
        """
        self.storage_path = storage_path

        # Rows of _embeddings follow the order of _documents
        self._documents: dict[str, VectorDocument] = {}
        self._embeddings: np.ndarray | None = None

        if storage_path is not None:
            storage_path.mkdir(parents=True, exist_ok=True)
            self._load()

        logger.info(f"Vector store initialized with {len(self._documents)} documents")

    @property
    def documents_file(self) -> Path | None:
        return self.storage_path / "documents.json" if self.storage_path else None

    @property
    def embeddings_file(self) -> Path | None:
        return self.storage_path / "embeddings.npy" if self.storage_path else None

    def _load(self) -> None:
        """Load existing data from disk."""
        if not self.documents_file.exists() or not self.embeddings_file.exists():
            return

        with open(self.documents_file, encoding="utf-8") as f:
            docs_data = json.load(f)
        embeddings = np.load(self.embeddings_file)

        for row, doc_data in zip(embeddings, docs_data):
            doc = VectorDocument(
                id=doc_data["id"],
                content=doc_data["content"],
                embedding=row.tolist(),
                metadata=doc_data.get("metadata", {}),
            )
            self._documents[doc.id] = doc

        self._rebuild_embeddings()
        logger.debug(f"Loaded {len(self._documents)} documents from disk")

    def _save(self) -> None:
        """Save data to disk (no-op for in-memory stores)."""
        if self.storage_path is None:
            return

        docs_list = [doc.to_dict() for doc in self._documents.values()]
        with open(self.documents_file, "w", encoding="utf-8") as f:
            json.dump(docs_list, f)

        if self._embeddings is not None:
            np.save(self.embeddings_file, self._embeddings)
        elif self.embeddings_file.exists():
            self.embeddings_file.unlink()

        logger.debug(f"Saved {len(self._documents)} documents to disk")

    @staticmethod
    def _stack(documents: dict[str, VectorDocument]) -> np.ndarray | None:
        """
        Stack document embeddings into a matrix, one row per document.

        Raises:
            ValueError: If the embeddings do not share one dimension
        """
        if not documents:
            return None
        dimensions = {len(doc.embedding) for doc in documents.values()}
        if len(dimensions) != 1 or 0 in dimensions:
            raise ValueError(f"Embedding dimensions must match, got {sorted(dimensions)}")
        return np.array([doc.embedding for doc in documents.values()], dtype=float)

    def _rebuild_embeddings(self) -> None:
        self._embeddings = self._stack(self._documents)

    def _commit(self, documents: dict[str, VectorDocument]) -> None:
        # Nothing changes unless the new matrix could be built
        embeddings = self._stack(documents)
        self._documents = documents
        self._embeddings = embeddings
        self._save()

    def add(self, document: VectorDocument) -> None:
        """
        Add a document, replacing any document with the same ID.

        Args:
            document: The document to add

        Raises:
            ValueError: If the embedding dimension differs from the stored ones
        """
        self._commit({**self._documents, document.id: document})

    def add_batch(self, documents: list[VectorDocument]) -> None:
        """Add multiple documents, saving once at the end. All or nothing."""
        updated = dict(self._documents)
        for doc in documents:
            updated[doc.id] = doc
        self._commit(updated)
        logger.debug(f"Added batch of {len(documents)} documents")

    def search(
        self,
        query_vector: list[float],
        top_k: int = 5,
        filter_metadata: dict[str, Any] | None = None
    ) -> list[VectorDocument]:
        """
        Search for similar documents.

        Args:
            query_vector: The query embedding
            top_k: Number of results to return
            filter_metadata: Optional metadata filters (e.g., {"source": "faq.md"})

        Returns:
            Copies of the matching documents with ``score`` set, most
            similar first

        Raises:
            ValueError: If the query dimension differs from the stored one
        """
        if self._embeddings is None or top_k <= 0:
            return []

        query = np.asarray(query_vector, dtype=float)
        if query.shape != (self._embeddings.shape[1],):
            raise ValueError(
                f"Query dimension {query.size} does not match stored dimension {self._embeddings.shape[1]}"
            )

        query_norm = np.linalg.norm(query)
        if query_norm == 0:
            return []
        doc_norms = np.linalg.norm(self._embeddings, axis=1)

        # Avoid division by zero
        doc_norms = np.where(doc_norms == 0, 1, doc_norms)

        similarities = self._embeddings @ query / (doc_norms * query_norm)

        scored = []
        for doc, score in zip(self._documents.values(), similarities):
            if filter_metadata and not all(
                doc.metadata.get(k) == v
                for k, v in filter_metadata.items()
                if v is not None
            ):
                continue
            scored.append((doc, float(score)))

        scored.sort(key=lambda pair: pair[1], reverse=True)

        return [
            VectorDocument(
                id=doc.id,
                content=doc.content,
                embedding=doc.embedding,
                metadata=doc.metadata,
                score=score
            )
            for doc, score in scored[:top_k]
        ]

    def delete(self, doc_id: str) -> bool:
        """
        Delete a document by ID.

        Returns:
            True if the document was found and deleted
        """
        if doc_id not in self._documents:
            return False

        del self._documents[doc_id]
        self._rebuild_embeddings()
        self._save()
        return True

    def get(self, doc_id: str) -> VectorDocument | None:
        """Get a document by ID."""
        return self._documents.get(doc_id)

    def clear(self) -> None:
        """Clear all documents from the store."""
        self._documents.clear()
        self._embeddings = None
        self._save()
        logger.info("Vector store cleared")

    def __len__(self) -> int:
        return len(self._documents)
