"""
Configuration for the quiz toolkit.

Split into one config per concern so each stage module only receives
what it needs. ToolkitConfig bundles them all for convenience.

Usage:
    # Full config, passed to QuizToolkit
    config = ToolkitConfig()

    # Override specific parts
    config = ToolkitConfig(
        llm=LLMConfig(provider="anthropic", model_name="claude-sonnet-4-5-20250929"),
        chunking=ChunkingConfig(max_chunk_size=1000),
    )

    # Standalone: use just one piece
    embedding_config = EmbeddingConfig(api_key="sk-...", workers=4)
"""

import os
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

# Load .env from the project root (walks up from this file to find it).
# Runs once at import time so the env-backed defaults below see it.
_env_path = Path(__file__).resolve().parent.parent.parent / ".env"
load_dotenv(_env_path)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class LLMProvider(str, Enum):
    """
    Supported chat model providers.

    Each provider needs a different LangChain class (ChatOpenAI vs
    ChatAnthropic), so the set is closed.
    """

    OPENAI = "openai"
    ANTHROPIC = "anthropic"


# ---------------------------------------------------------------------------
# Per-concern configs
# ---------------------------------------------------------------------------

class LLMConfig(BaseModel):
    """
    Chat model configuration.

    Used by: generation/strategies.py, generation/explanation.py

    Question generation and answer explanations both receive this config.
    """

    provider: LLMProvider = Field(
        default=LLMProvider.OPENAI,
        description="Which LLM provider to use",
    )
    model_name: str = Field(
        default="gpt-4o-mini",
        description="Model identifier (e.g. 'gpt-4o-mini', 'claude-sonnet-4-5-20250929')",
    )
    temperature: float = Field(
        default=0.3,
        ge=0.0,
        le=2.0,
        description="Sampling temperature. A little variety keeps quizzes from repeating",
    )
    max_tokens: int = Field(
        default=4000,
        gt=0,
        description="Maximum tokens in the LLM response",
    )


class EmbeddingConfig(BaseModel):
    """
    Embedding provider configuration.

    Used by: indexing/embeddings.py

    api_key and base_url default to OPENAI_API_KEY / OPENAI_BASE_URL so an
    OpenAI-compatible gateway (OpenRouter, Azure proxy, local server) works
    by setting two env vars. With no key at all the generator never calls
    out and uses the deterministic local embedding instead.
    """

    provider: str = Field(
        default="openai",
        description="Embedding provider: 'openai', 'huggingface', 'cohere'",
    )
    model_name: str = Field(
        default="text-embedding-3-small",
        description="Embedding model identifier",
    )
    api_key: Optional[str] = Field(
        default_factory=lambda: os.getenv("OPENAI_API_KEY"),
        description="Provider API key. Missing key means local fallback embeddings",
    )
    base_url: Optional[str] = Field(
        default_factory=lambda: os.getenv("OPENAI_BASE_URL"),
        description="Base URL of an OpenAI-compatible embeddings endpoint",
    )
    dimensions: int = Field(
        default=1536,
        gt=0,
        description="Length of every embedding vector (fallback vectors included)",
    )
    workers: int = Field(
        default=1,
        ge=1,
        description="Threads used to embed chunks during ingestion",
    )
    model_kwargs: dict[str, Any] = Field(
        default_factory=dict,
        description="Extra kwargs passed to the embedding model constructor",
    )


class ChunkingConfig(BaseModel):
    """
    Chunking configuration.

    Used by: indexing/chunking.py

    Chunks are packed paragraph by paragraph up to max_chunk_size
    characters. There is no overlap: every chunk is a disjoint slice of
    the page so questions can point back at exactly one of them.
    """

    max_chunk_size: int = Field(
        default=800,
        ge=50,
        le=10000,
        description="Maximum chunk length in characters",
    )


class RetrieverConfig(BaseModel):
    """
    Retrieval configuration.

    Used by: retrieval/search.py
    """

    document_limit: int = Field(
        default=5,
        gt=0,
        description="Chunks returned when searching inside one document",
    )
    tenant_limit: int = Field(
        default=10,
        gt=0,
        description="Chunks returned when searching a tenant's whole corpus",
    )

    @model_validator(mode="after")
    def validate_tenant_limit(self) -> "RetrieverConfig":
        """A corpus-wide search never returns fewer chunks than a single-document one."""
        if self.tenant_limit < self.document_limit:
            self.tenant_limit = self.document_limit
        return self


class QuizConfig(BaseModel):
    """
    Quiz session configuration.

    Used by: generation/questions.py, quiz/sessions.py
    """

    default_question_count: int = Field(
        default=10,
        gt=0,
        le=50,
        description="Questions generated for every new session",
    )
    default_goal: int = Field(
        default=80,
        ge=0,
        description="Score a session must reach to count as passed",
    )
    max_context_chunks: int = Field(
        default=5,
        gt=0,
        description="Leading chunks sent to the LLM as question material",
    )


class StorageConfig(BaseModel):
    """
    File storage configuration.

    Used by: storage/files.py
    """

    upload_root: str = Field(
        default_factory=lambda: os.getenv("QUIZ_UPLOAD_ROOT", "uploads/formation"),
        description="Directory uploaded documents are written to",
    )


# ---------------------------------------------------------------------------
# Top-level config bundling everything
# ---------------------------------------------------------------------------

class ToolkitConfig(BaseModel):
    """
    Complete toolkit configuration.

    QuizToolkit receives this and hands slices to each stage:
        self.chunker = ParagraphChunker(config.chunking)
        self.embedder = EmbeddingGenerator(config.embedding)
        self.generator = QuestionGenerator(repository, config.llm, config.quiz)

    All sub-configs have defaults, so ToolkitConfig() with no arguments
    gives a working (offline, fallback-only) setup.
    """

    llm: LLMConfig = Field(default_factory=LLMConfig)
    embedding: EmbeddingConfig = Field(default_factory=EmbeddingConfig)
    chunking: ChunkingConfig = Field(default_factory=ChunkingConfig)
    retriever: RetrieverConfig = Field(default_factory=RetrieverConfig)
    quiz: QuizConfig = Field(default_factory=QuizConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
