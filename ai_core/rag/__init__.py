"""
RAG (Retrieval Augmented Generation)
====================================

Semantic search over a knowledge base. Instead of putting a whole corpus
into the prompt, RAG:

1. Indexes chunks as vector embeddings
2. Embeds the query and finds the most similar chunks
3. Hands only those chunks to the context assembler

Components:
- embeddings.py: Generate vector embeddings from text
- vectorstore.py: Store and search vectors
- retriever.py: The Retriever contract and a vector-backed implementation
"""

from ai_core.rag.embeddings import EmbeddingGenerator
from ai_core.rag.vectorstore import VectorStore, VectorDocument
from ai_core.rag.retriever import RetrievedChunk, Retriever, VectorRetriever

__all__ = [
    "EmbeddingGenerator",
    "VectorStore",
    "VectorDocument",
    "RetrievedChunk",
    "Retriever",
    "VectorRetriever",
]
