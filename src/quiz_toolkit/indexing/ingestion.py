"""
Document ingestion: upload → extract → chunk → embed → store.

    LocalFileStorage.save ─► Document row
                              │
    extractor.extract ─► pages ─► ParagraphChunker ─► Chunk rows (index 0..n-1)
                                                       │
                                  EmbeddingGenerator ◄─┘ (optionally parallel)
                                                       │
                                  repository.create_chunks (one batch)

Chunk indices are assigned in extraction order before any embedding
runs, so parallel embedding can never reorder a document.

Usage:
    ingestor = DocumentIngestor(repository, storage=LocalFileStorage(config.storage))
    with open("handbook.pdf", "rb") as f:
        result = ingestor.upload_document(
            tenant_id=club_id,
            uploader_id="alice",
            filename="handbook.pdf",
            stream=f,
            title="Club handbook",
        )
    if result.no_content:
        ...  # tell the uploader nothing could be extracted
"""

import logging
from typing import BinaryIO, Optional
from uuid import UUID

from quiz_toolkit.base.indexer import BaseChunker, BaseExtractor
from quiz_toolkit.base.repository import BaseRepository
from quiz_toolkit.errors import ConflictError, NotFoundError
from quiz_toolkit.indexing.chunking import ParagraphChunker
from quiz_toolkit.indexing.embeddings import EmbeddingGenerator
from quiz_toolkit.indexing.extraction import get_extractor, is_extraction_failure
from quiz_toolkit.models.document import Chunk, ChunkMetadata, Document, DocumentType, DocumentUpdate
from quiz_toolkit.models.result import DocumentSummary, IngestionResult
from quiz_toolkit.storage.files import LocalFileStorage

logger = logging.getLogger(__name__)


class DocumentIngestor:
    """
    Turns uploaded files into embedded, persisted chunks.

    The extractor is picked from the file extension unless one is given
    explicitly (handy for tests and for formats stored without one).
    """

    def __init__(
        self,
        repository: BaseRepository,
        chunker: BaseChunker = None,
        embedder: EmbeddingGenerator = None,
        storage: LocalFileStorage = None,
        extractor: Optional[BaseExtractor] = None,
    ):
        self._repository = repository
        self._chunker = chunker or ParagraphChunker()
        self._embedder = embedder or EmbeddingGenerator()
        self._storage = storage or LocalFileStorage()
        self._extractor = extractor

    def upload_document(
        self,
        tenant_id: UUID,
        uploader_id: str,
        filename: str,
        stream: BinaryIO,
        title: str,
        description: Optional[str] = None,
        document_type: DocumentType = DocumentType.OTHER,
    ) -> IngestionResult:
        """
        Store an uploaded file, register it, and ingest it.

        A file that cannot be read back or parsed does not fail the
        upload: the document is kept and the result says no_content.

        Raises:
            NotFoundError: Unknown tenant or uploader.
            ValueError: Unsupported file format.
            PersistenceError: The repository failed.
        """
        if not self._repository.tenant_exists(tenant_id):
            raise NotFoundError(f"Tenant {tenant_id} not found")
        if not self._repository.learner_exists(uploader_id):
            raise NotFoundError(f"User {uploader_id} not found")
        if self._extractor is None:
            get_extractor(filename)  # reject unsupported formats before storing anything

        path = self._storage.save(filename, stream)
        document = self._repository.create_document(Document(
            title=title,
            description=description,
            file_path=path,
            uploaded_by=uploader_id,
            tenant_id=tenant_id,
            document_type=document_type,
        ))
        logger.info("Registered document %s ('%s') for tenant %s", document.id, title, tenant_id)

        try:
            return self.process_document(document.id)
        except OSError:
            logger.exception("Could not read stored file for document %s", document.id)
            return IngestionResult(document=document, chunk_count=0, no_content=True)

    def process_document(self, document_id: UUID) -> IngestionResult:
        """
        Extract, chunk, embed and persist a stored document.

        Raises:
            NotFoundError: The document does not exist.
            ConflictError: The document already has chunks.
            OSError: The stored file cannot be opened.
        """
        document = self._repository.get_document(document_id)
        if document is None:
            raise NotFoundError(f"Document {document_id} not found")
        if self._repository.get_chunks_by_document(document_id):
            raise ConflictError(f"Document {document_id} has already been processed")

        extractor = self._extractor or get_extractor(document.file_path)
        with self._storage.open(document.file_path) as stream:
            pages = extractor.extract(stream)

        if not pages or is_extraction_failure(pages):
            logger.warning("No content extracted from document %s", document_id)
            return IngestionResult(document=document, chunk_count=0, no_content=True)

        chunks = self.build_chunks(document_id, pages)
        if not chunks:
            logger.warning("Document %s produced no chunks", document_id)
            return IngestionResult(document=document, chunk_count=0, no_content=True)

        vectors = self._embedder.generate_many([chunk.content for chunk in chunks])
        for chunk, vector in zip(chunks, vectors):
            chunk.embedding = vector

        self._repository.create_chunks(chunks)
        logger.info(
            "Ingested document %s: %d page(s), %d chunk(s)",
            document_id, len(pages), len(chunks),
        )
        return IngestionResult(document=document, chunk_count=len(chunks))

    def build_chunks(self, document_id: UUID, pages: list[str]) -> list[Chunk]:
        """
        Chunk every page and number the results 0..n-1 in page order.

        Embeddings are left empty; process_document fills them in.
        """
        chunks: list[Chunk] = []
        for page_number, page_text in enumerate(pages, 1):
            for content in self._chunker.chunk(page_text):
                chunks.append(Chunk(
                    document_id=document_id,
                    content=content,
                    index=len(chunks),
                    metadata=ChunkMetadata(page=page_number, length=len(content)),
                ))
        return chunks

    def backfill_embeddings(self, document_id: UUID) -> int:
        """
        Embed chunks stored without a vector (e.g. the default quiz chunk).

        Returns:
            How many chunks were updated.
        """
        missing = [c for c in self._repository.get_chunks_by_document(document_id) if c.embedding is None]
        if not missing:
            return 0

        vectors = self._embedder.generate_many([c.content for c in missing])
        for chunk, vector in zip(missing, vectors):
            self._repository.update_chunk_embedding(chunk.id, vector)

        logger.info("Backfilled %d embedding(s) for document %s", len(missing), document_id)
        return len(missing)

    # -- Document management ------------------------------------------------

    def get_document(self, document_id: UUID) -> DocumentSummary:
        document = self._repository.get_document(document_id)
        if document is None:
            raise NotFoundError(f"Document {document_id} not found")
        return self._summarize(document)

    def list_documents(self, tenant_id: UUID, active_only: bool = False) -> list[DocumentSummary]:
        documents = self._repository.list_documents_by_tenant(tenant_id)
        if active_only:
            documents = [d for d in documents if d.is_active]
        return [self._summarize(d) for d in documents]

    def update_document(self, document_id: UUID, update: DocumentUpdate) -> Document:
        """
        Apply a metadata edit. The stored file and owning tenant are untouched.

        Raises:
            NotFoundError: The document does not exist.
        """
        document = self._repository.get_document(document_id)
        if document is None:
            raise NotFoundError(f"Document {document_id} not found")

        updated = document.model_copy(update=update.model_dump())
        return self._repository.update_document(updated)

    def delete_document(self, document_id: UUID) -> bool:
        """
        Remove a document with its stored file, quiz sessions and chunks.

        Returns:
            False if the document does not exist.
        """
        document = self._repository.get_document(document_id)
        if document is None:
            return False

        self._storage.delete(document.file_path)
        for session in self._repository.list_sessions_by_document(document_id):
            self._repository.delete_session(session.id)
        removed = self._repository.delete_chunks_by_document(document_id)
        self._repository.delete_document(document_id)

        logger.info("Deleted document %s and %d chunk(s)", document_id, removed)
        return True

    def _summarize(self, document: Document) -> DocumentSummary:
        return DocumentSummary(
            document=document,
            chunk_count=len(self._repository.get_chunks_by_document(document.id)),
            session_count=len(self._repository.list_sessions_by_document(document.id)),
        )
