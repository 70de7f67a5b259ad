"""
Shared test fixtures for the quiz-toolkit test suite.

Provides reusable fixtures: configs, an in-memory repository seeded with
a tenant and learners, and sample documents, chunks and question drafts.
"""

from uuid import uuid4

import pytest

from quiz_toolkit.config import (
    ChunkingConfig,
    EmbeddingConfig,
    LLMConfig,
    QuizConfig,
    RetrieverConfig,
    StorageConfig,
)
from quiz_toolkit.indexing.embeddings import EmbeddingGenerator, fallback_embedding
from quiz_toolkit.models.document import Chunk, ChunkMetadata, Document
from quiz_toolkit.models.quiz import QuestionDraft, QuestionKind, QuestionOptions
from quiz_toolkit.storage.memory import InMemoryRepository

TEST_DIMENSIONS = 8


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def llm_config():
    return LLMConfig(provider="openai", model_name="gpt-4o-mini", temperature=0.0)


@pytest.fixture
def embedding_config():
    """Offline embedding config: no key, small vectors."""
    return EmbeddingConfig(api_key=None, dimensions=TEST_DIMENSIONS)


@pytest.fixture
def chunking_config():
    return ChunkingConfig(max_chunk_size=200)


@pytest.fixture
def retriever_config():
    return RetrieverConfig(document_limit=3, tenant_limit=5)


@pytest.fixture
def quiz_config():
    return QuizConfig(default_question_count=3, default_goal=50, max_context_chunks=2)


@pytest.fixture
def storage_config(tmp_path):
    return StorageConfig(upload_root=str(tmp_path / "uploads"))


@pytest.fixture
def embedder(embedding_config):
    return EmbeddingGenerator(embedding_config)


# ---------------------------------------------------------------------------
# Repository and sample data fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def tenant_id():
    return uuid4()


@pytest.fixture
def repository(tenant_id):
    """Repository that knows one tenant and two learners."""
    return InMemoryRepository(learners={"alice", "bob"}, tenants={tenant_id})


@pytest.fixture
def document(repository, tenant_id):
    return repository.create_document(Document(
        title="Club handbook",
        file_path="uploads/formation/handbook.txt",
        uploaded_by="alice",
        tenant_id=tenant_id,
    ))


@pytest.fixture
def sample_chunks(document):
    """Three embedded chunks of the sample document."""
    texts = [
        "The club meets every Tuesday at noon in the community hall.",
        "New members are sponsored by an existing member and approved by the board.",
        "The club president serves a one-year term starting on the first of July.",
    ]
    return [
        Chunk(
            document_id=document.id,
            content=text,
            embedding=fallback_embedding(text, TEST_DIMENSIONS),
            metadata=ChunkMetadata(page=1, length=len(text)),
            index=i,
        )
        for i, text in enumerate(texts)
    ]


@pytest.fixture
def stored_chunks(repository, sample_chunks):
    return repository.create_chunks(sample_chunks)


@pytest.fixture
def sample_drafts():
    """One draft of each question kind."""
    return [
        QuestionDraft(
            text="On which day does the club meet?",
            options=QuestionOptions(
                kind=QuestionKind.MULTIPLE_CHOICE,
                choices={"A": "Monday", "B": "Tuesday", "C": "Friday"},
            ),
            correct_answer="B",
            difficulty=1,
        ),
        QuestionDraft(
            text="New members need board approval.",
            options=QuestionOptions.true_false(),
            correct_answer="true",
            difficulty=2,
        ),
        QuestionDraft(
            text="How long is the president's term, in years?",
            options=QuestionOptions(kind=QuestionKind.NUMERIC),
            correct_answer="1",
            difficulty=3,
        ),
    ]
