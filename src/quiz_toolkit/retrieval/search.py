"""
Semantic search over stored chunks.

Embeds the query with the same EmbeddingGenerator used at ingestion,
then ranks the chunks in scope by cosine similarity. Ranking is plain
numpy over the repository's chunks (exact, not approximate), which is
plenty for a club's training library.

Two scopes:
    search_document()  chunks of one document
    search_tenant()    chunks of every document a tenant owns

Ties are broken by chunk index (then document id) so equal scores always
come back in the same order.

Usage:
    from quiz_toolkit.retrieval.search import SemanticRetriever

    retriever = SemanticRetriever(repository, embedder)
    result = retriever.search_document("What is the motto?", document_id)
    for scored in result.chunks:
        print(scored.rank, scored.score, scored.chunk.content[:60])
"""

import logging
from typing import Optional
from uuid import UUID

import numpy as np

from quiz_toolkit.base.repository import BaseRepository
from quiz_toolkit.config import RetrieverConfig
from quiz_toolkit.indexing.embeddings import EmbeddingGenerator
from quiz_toolkit.models.document import Chunk, Document
from quiz_toolkit.models.result import RetrievalResult, ScoredChunk

logger = logging.getLogger(__name__)


def rank_chunks(query_vector: list[float], chunks: list[Chunk], limit: int) -> list[ScoredChunk]:
    """
    Rank chunks by cosine similarity to query_vector.

    Chunks without an embedding, or with one of a different length than
    the query, are skipped. Returns at most `limit` results, best first.
    """
    query = np.asarray(query_vector, dtype=float)
    candidates = [c for c in chunks if c.embedding and len(c.embedding) == len(query)]
    if not candidates or limit <= 0:
        return []

    matrix = np.asarray([c.embedding for c in candidates], dtype=float)
    norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
    dots = matrix @ query
    # Provider vectors may not be unit length. Zero vectors score 0.
    scores = np.divide(dots, norms, out=np.zeros_like(dots), where=norms > 0)

    order = sorted(
        range(len(candidates)),
        key=lambda i: (-scores[i], candidates[i].index, str(candidates[i].document_id)),
    )

    return [
        ScoredChunk(chunk=candidates[i], score=float(scores[i]), rank=rank)
        for rank, i in enumerate(order[:limit])
    ]


class SemanticRetriever:
    """
    Query → ranked chunks, scoped to a document or a tenant.

    An empty scope (no chunks, or none embedded yet) yields an empty
    RetrievalResult rather than an error.
    """

    def __init__(
        self,
        repository: BaseRepository,
        embedder: EmbeddingGenerator = None,
        config: RetrieverConfig = None,
    ):
        self._repository = repository
        self._embedder = embedder or EmbeddingGenerator()
        self._config = config or RetrieverConfig()

    def search_document(self, query: str, document_id: UUID, limit: Optional[int] = None) -> RetrievalResult:
        if limit is None:
            limit = self._config.document_limit
        chunks = self._repository.get_chunks_by_document(document_id)
        return self._search(query, chunks, limit, f"document:{document_id}")

    def search_tenant(self, query: str, tenant_id: UUID, limit: Optional[int] = None) -> RetrievalResult:
        if limit is None:
            limit = self._config.tenant_limit
        chunks = self._repository.get_chunks_by_tenant(tenant_id)
        return self._search(query, chunks, limit, f"tenant:{tenant_id}")

    def search_documents(self, query: str, tenant_id: UUID, limit: Optional[int] = None) -> list[Document]:
        """
        Find the tenant's documents whose content best matches query.

        Documents come back once each, in the rank of their best chunk.
        A blank query returns nothing.
        """
        if not query or not query.strip():
            return []

        result = self.search_tenant(query, tenant_id, limit)
        document_ids = list(dict.fromkeys(s.chunk.document_id for s in result.chunks))
        return self._repository.get_documents_by_ids(document_ids)

    def _search(self, query: str, chunks: list[Chunk], limit: int, scope: str) -> RetrievalResult:
        embedded = [c for c in chunks if c.embedding]
        if not embedded:
            logger.debug("No embedded chunks in %s", scope)
            return RetrievalResult(chunks=[], query_used=query, scope=scope)

        query_vector = self._embedder.generate(query)
        ranked = rank_chunks(query_vector, embedded, limit)

        return RetrievalResult(
            chunks=ranked,
            query_used=query,
            scope=scope,
            total_candidates=len(embedded),
        )
