"""Tests for config models: pure Pydantic validation, no API calls."""

import pytest

from quiz_toolkit.config import (
    ChunkingConfig,
    EmbeddingConfig,
    LLMConfig,
    LLMProvider,
    QuizConfig,
    RetrieverConfig,
    StorageConfig,
    ToolkitConfig,
)


class TestLLMConfig:

    def test_defaults(self):
        config = LLMConfig()
        assert config.provider == LLMProvider.OPENAI
        assert config.model_name == "gpt-4o-mini"
        assert config.max_tokens == 4000

    def test_anthropic_provider(self):
        config = LLMConfig(provider="anthropic", model_name="claude-sonnet-4-5-20250929")
        assert config.provider == LLMProvider.ANTHROPIC

    def test_unknown_provider_rejected(self):
        with pytest.raises(Exception):
            LLMConfig(provider="mistral")

    def test_temperature_bounds(self):
        LLMConfig(temperature=0.0)
        LLMConfig(temperature=2.0)
        with pytest.raises(Exception):
            LLMConfig(temperature=-0.1)
        with pytest.raises(Exception):
            LLMConfig(temperature=2.1)


class TestEmbeddingConfig:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        config = EmbeddingConfig()
        assert config.provider == "openai"
        assert config.model_name == "text-embedding-3-small"
        assert config.dimensions == 1536
        assert config.workers == 1
        assert config.api_key is None

    def test_api_key_from_env(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        monkeypatch.setenv("OPENAI_BASE_URL", "https://openrouter.ai/api/v1")
        config = EmbeddingConfig()
        assert config.api_key == "sk-test"
        assert config.base_url == "https://openrouter.ai/api/v1"

    def test_workers_at_least_one(self):
        with pytest.raises(Exception):
            EmbeddingConfig(workers=0)


class TestChunkingConfig:

    def test_defaults(self):
        assert ChunkingConfig().max_chunk_size == 800

    def test_bounds(self):
        with pytest.raises(Exception):
            ChunkingConfig(max_chunk_size=10)
        with pytest.raises(Exception):
            ChunkingConfig(max_chunk_size=20000)


class TestRetrieverConfig:

    def test_defaults(self):
        config = RetrieverConfig()
        assert config.document_limit == 5
        assert config.tenant_limit == 10

    def test_tenant_limit_raised_to_document_limit(self):
        config = RetrieverConfig(document_limit=8, tenant_limit=3)
        assert config.tenant_limit == 8


class TestQuizConfig:

    def test_defaults(self):
        config = QuizConfig()
        assert config.default_question_count == 10
        assert config.default_goal == 80
        assert config.max_context_chunks == 5

    def test_question_count_positive(self):
        with pytest.raises(Exception):
            QuizConfig(default_question_count=0)


class TestStorageConfig:

    def test_default_root(self, monkeypatch):
        monkeypatch.delenv("QUIZ_UPLOAD_ROOT", raising=False)
        assert StorageConfig().upload_root == "uploads/formation"

    def test_root_from_env(self, monkeypatch):
        monkeypatch.setenv("QUIZ_UPLOAD_ROOT", "/srv/uploads")
        assert StorageConfig().upload_root == "/srv/uploads"


class TestToolkitConfig:

    def test_all_defaults(self):
        config = ToolkitConfig()
        assert isinstance(config.llm, LLMConfig)
        assert isinstance(config.embedding, EmbeddingConfig)
        assert isinstance(config.chunking, ChunkingConfig)
        assert isinstance(config.retriever, RetrieverConfig)
        assert isinstance(config.quiz, QuizConfig)
        assert isinstance(config.storage, StorageConfig)

    def test_partial_override(self):
        config = ToolkitConfig(quiz=QuizConfig(default_goal=60))
        assert config.quiz.default_goal == 60
        assert config.chunking.max_chunk_size == 800
