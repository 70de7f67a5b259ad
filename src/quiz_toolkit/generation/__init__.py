"""
Generation: quiz questions and answer explanations.

Usage:
    from quiz_toolkit.generation import QuestionGenerator, ExplanationGenerator
"""

from .explanation import ExplanationGenerator, template_explanation
from .questions import DEFAULT_CHUNK_CONTENT, QuestionGenerator
from .strategies import (
    DEFAULT_CURRICULUM,
    MAX_DEFAULT_QUESTIONS,
    DefaultCurriculumStrategy,
    LLMQuestionStrategy,
    TemplateQuestionStrategy,
)

__all__ = [
    "DEFAULT_CHUNK_CONTENT",
    "DEFAULT_CURRICULUM",
    "MAX_DEFAULT_QUESTIONS",
    "DefaultCurriculumStrategy",
    "ExplanationGenerator",
    "LLMQuestionStrategy",
    "QuestionGenerator",
    "TemplateQuestionStrategy",
    "template_explanation",
]
