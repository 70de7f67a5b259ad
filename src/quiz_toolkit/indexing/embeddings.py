"""
Embedding generation.

Two layers:

    get_embedding_model()   Factory mapping EmbeddingConfig.provider to a
                            LangChain Embeddings class.
    EmbeddingGenerator      What the rest of the toolkit calls. Wraps the
                            provider and falls back to a deterministic
                            local vector whenever the provider is missing
                            or fails, so generate() always returns.

The fallback vector is seeded from a SHA-256 of the text: the same text
always maps to the same unit-length vector, on every machine and Python
version. It carries no meaning, but it keeps ingestion, search and the
test suite working without network access.

Usage:
    from quiz_toolkit.indexing.embeddings import EmbeddingGenerator
    from quiz_toolkit.config import EmbeddingConfig

    embedder = EmbeddingGenerator(EmbeddingConfig())
    vector = embedder.generate("Service Above Self")   # len == 1536
"""

import hashlib
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

import numpy as np
from langchain_core.embeddings import Embeddings

from quiz_toolkit.config import EmbeddingConfig

logger = logging.getLogger(__name__)

# Providers that call a paid API and need EmbeddingConfig.api_key
_KEYED_PROVIDERS = {"openai", "cohere"}


def get_embedding_model(config: EmbeddingConfig) -> Embeddings:
    """
    Factory that returns a LangChain embedding model based on config.

    Each provider has its own LangChain integration package. They are
    imported lazily so only the package for the provider in use is needed.

    "openai" also covers OpenAI-compatible gateways: set base_url (or
    OPENAI_BASE_URL) to e.g. https://openrouter.ai/api/v1.

    Raises:
        ValueError: If the provider is not recognized.
        ImportError: If the required package for the provider is not installed.
    """
    provider = config.provider.lower()

    if provider == "openai":
        from langchain_openai import OpenAIEmbeddings

        return OpenAIEmbeddings(
            model=config.model_name,
            api_key=config.api_key,
            base_url=config.base_url,
            **config.model_kwargs,
        )

    elif provider == "huggingface":
        try:
            from langchain_huggingface import HuggingFaceEmbeddings
        except ImportError:
            raise ImportError(
                "HuggingFace embeddings require langchain-huggingface. "
                "Install with: pip install quiz-toolkit[huggingface]"
            )

        return HuggingFaceEmbeddings(
            model_name=config.model_name,
            model_kwargs=config.model_kwargs,
        )

    elif provider == "cohere":
        try:
            from langchain_cohere import CohereEmbeddings
        except ImportError:
            raise ImportError(
                "Cohere embeddings require langchain-cohere. "
                "Install with: pip install quiz-toolkit[cohere]"
            )

        return CohereEmbeddings(
            model=config.model_name,
            cohere_api_key=config.api_key,
            **config.model_kwargs,
        )

    else:
        raise ValueError(
            f"Unknown embedding provider: '{config.provider}'. "
            f"Supported: 'openai', 'huggingface', 'cohere'. "
            f"For other providers, pass a LangChain Embeddings instance directly."
        )


def fallback_embedding(text: str, dimensions: int = 1536) -> list[float]:
    """
    Deterministic local embedding.

    Draws `dimensions` uniforms in [-1, 1) from a generator seeded with
    the first 8 bytes of SHA-256(text), then scales to unit length. An
    all-zero draw is returned unscaled.
    """
    seed = int.from_bytes(hashlib.sha256(text.encode("utf-8")).digest()[:8], "big")
    rng = np.random.default_rng(seed)
    vector = rng.uniform(-1.0, 1.0, dimensions)

    norm = np.linalg.norm(vector)
    if norm > 0:
        vector = vector / norm
    return vector.tolist()


class EmbeddingGenerator:
    """
    Text → fixed-length vector, with a local fallback.

    The provider model is built on first use. Building or calling it may
    fail for many reasons (no key, bad key, rate limit, network); every
    one of them ends in fallback_embedding() and a log line, never an
    exception.
    """

    def __init__(self, config: EmbeddingConfig = None, model: Optional[Embeddings] = None):
        """
        Args:
            config: Provider, credentials and vector size.
            model: Ready-made LangChain Embeddings instance. Skips the
                factory and the credential check.
        """
        self._config = config or EmbeddingConfig()
        self._model = model

        if model is None and self._needs_key and not self._config.api_key:
            logger.warning(
                "No API key for embedding provider '%s'; using local fallback embeddings",
                self._config.provider,
            )

    @property
    def dimensions(self) -> int:
        return self._config.dimensions

    @property
    def _needs_key(self) -> bool:
        return self._config.provider.lower() in _KEYED_PROVIDERS

    def generate(self, text: str) -> list[float]:
        """Embed one text. Never raises."""
        if self._model is None and self._needs_key and not self._config.api_key:
            return fallback_embedding(text, self.dimensions)

        try:
            if self._model is None:
                self._model = get_embedding_model(self._config)
            vector = self._model.embed_query(text)
        except Exception as exc:
            logger.warning("Embedding provider failed (%s); using local fallback", exc)
            return fallback_embedding(text, self.dimensions)

        if not vector:
            logger.warning("Embedding provider returned an empty vector; using local fallback")
            return fallback_embedding(text, self.dimensions)

        return [float(x) for x in vector]

    def generate_many(self, texts: list[str]) -> list[list[float]]:
        """
        Embed several texts, preserving order.

        Runs on a thread pool when EmbeddingConfig.workers > 1. Each text
        is embedded independently, so the result is the same either way.
        """
        workers = min(self._config.workers, len(texts))
        if workers <= 1:
            return [self.generate(text) for text in texts]

        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(self.generate, texts))
