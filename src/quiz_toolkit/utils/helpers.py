"""
Shared utility functions.

Helpers used across the toolkit: the LLM factory, a UTC clock and message text.
"""

from datetime import datetime, timezone

from langchain_core.language_models.chat_models import BaseChatModel

from quiz_toolkit.config import LLMConfig, LLMProvider


def get_llm(config: LLMConfig) -> BaseChatModel:
    """
    Factory that returns a LangChain chat model based on config.

    Same pattern as the embedding factory. Lazy imports so you only
    need the package for the provider you actually use.

    Used by:
        - generation/strategies.py (generating questions)
        - generation/explanation.py (explaining answers)

    Args:
        config: LLMConfig with provider, model_name, temperature, max_tokens.

    Returns:
        A LangChain BaseChatModel instance.

    Raises:
        ValueError: If the provider is not recognized.
    """
    if config.provider == LLMProvider.OPENAI:
        from langchain_openai import ChatOpenAI

        return ChatOpenAI(
            model=config.model_name,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
        )

    elif config.provider == LLMProvider.ANTHROPIC:
        from langchain_anthropic import ChatAnthropic

        return ChatAnthropic(
            model=config.model_name,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
        )

    else:
        raise ValueError(
            f"Unknown LLM provider: '{config.provider}'. "
            f"Supported: 'openai', 'anthropic'."
        )


def message_text(response) -> str:
    """Extract text from a chat model response (AIMessage or plain string)."""
    return response.content if hasattr(response, "content") else str(response)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
