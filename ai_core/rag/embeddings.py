"""
Embedding Generation
====================

Generates vector embeddings from text using an OpenAI-compatible
embeddings endpoint.

Texts with similar meanings get similar vectors, which is what lets the
vector store find relevant knowledge-base chunks for a query.

Caching:
    Embeddings are cached in memory by text hash, so the same query or
    document is only embedded once per process.
"""

import hashlib
from typing import Sequence

from openai import AsyncOpenAI

from ai_core.utils.config import get_config
from ai_core.utils.logger import Logger

logger = Logger("Embeddings")


class EmbeddingGenerator:
    """
    Generates text embeddings with an in-memory cache.

    Example:
        generator = EmbeddingGenerator(model="text-embedding-3-small")

        vector = await generator.generate("How do I reset my password?")
        vectors = await generator.generate_batch(["first", "second"])
    """

    def __init__(
        self,
        model: str | None = None,
        base_url: str | None = None,
        api_key: str | None = None,
        client: AsyncOpenAI | None = None
    ):
        """
        Initialize the embedding generator.

        Args:
            model: Embedding model (defaults to OPENAI_EMBEDDING_MODEL)
            base_url: API base URL (defaults to OPENAI_BASE_URL)
            api_key: API key (defaults to OPENAI_API_KEY)
            client: Pre-built client, mainly for tests
        """
        config = get_config().openai

        self.model = model or config.embedding_model
        self.client = client or AsyncOpenAI(
            api_key=api_key or config.api_key,
            base_url=base_url or config.base_url,
        )

        # Key: hash of text, Value: embedding vector
        self._cache: dict[str, list[float]] = {}

        logger.info(f"Embedding generator initialized with model: {self.model}")

    def _hash_text(self, text: str) -> str:
        return hashlib.md5(text.encode()).hexdigest()

    async def generate(self, text: str) -> list[float]:
        """
        Generate an embedding for a single text.

        Args:
            text: The text to embed

        Returns:
            Vector embedding as a list of floats
        """
        cache_key = self._hash_text(text)
        if cache_key in self._cache:
            logger.debug("Embedding cache hit")
            return self._cache[cache_key]

        response = await self.client.embeddings.create(
            model=self.model,
            input=text
        )

        embedding = response.data[0].embedding
        self._cache[cache_key] = embedding

        logger.debug(f"Generated embedding (dim={len(embedding)})")
        return embedding

    async def generate_batch(self, texts: Sequence[str]) -> list[list[float]]:
        """
        Generate embeddings for multiple texts in one API call.

        Cached texts are skipped; results keep the input order.

        Args:
            texts: Texts to embed

        Returns:
            List of embedding vectors (same order as input)
        """
        if not texts:
            return []

        results: list[list[float] | None] = []
        pending: list[tuple[int, str]] = []

        for i, text in enumerate(texts):
            cached = self._cache.get(self._hash_text(text))
            results.append(cached)
            if cached is None:
                pending.append((i, text))

        if pending:
            logger.debug(f"Generating {len(pending)} embeddings (batch)")

            response = await self.client.embeddings.create(
                model=self.model,
                input=[text for _, text in pending]
            )

            for (index, text), item in zip(pending, response.data):
                results[index] = item.embedding
                self._cache[self._hash_text(text)] = item.embedding
        else:
            logger.debug(f"All {len(texts)} embeddings found in cache")

        return [r for r in results if r is not None]

    def get_cache_size(self) -> int:
        """Get the number of cached embeddings."""
        return len(self._cache)
