"""
Question generation strategies, tried in order by QuestionGenerator.

    LLMQuestionStrategy         chat model reads the first chunks and writes
                                a mixed quiz (structured output)
    TemplateQuestionStrategy    placeholder open questions, one per slot
    DefaultCurriculumStrategy   fixed organisation-basics quiz, used when
                                the document has no chunks at all

The first two only apply to documents with chunks. The curriculum always
applies, so the chain ends in something that cannot fail.

Usage:
    from quiz_toolkit.generation.strategies import LLMQuestionStrategy

    strategy = LLMQuestionStrategy(LLMConfig(), max_context_chunks=5)
    if strategy.applies(context):
        drafts = strategy.generate(context)
"""

import logging

from langchain_core.prompts import PromptTemplate
from pydantic import ValidationError

from quiz_toolkit.base.generator import BaseQuestionStrategy, GenerationContext
from quiz_toolkit.config import LLMConfig
from quiz_toolkit.errors import QuestionGenerationError
from quiz_toolkit.models.generation import GeneratedQuestion, GeneratedQuestionSet
from quiz_toolkit.models.quiz import (
    CHOICE_KINDS,
    QuestionDraft,
    QuestionKind,
    QuestionOptions,
)
from quiz_toolkit.utils.helpers import get_llm

logger = logging.getLogger(__name__)

MAX_DEFAULT_QUESTIONS = 10


# ---------------------------------------------------------------------------
# Tier 1: LLM
# ---------------------------------------------------------------------------

class LLMQuestionStrategy(BaseQuestionStrategy):
    """
    Generates questions from the document's leading chunks.

    The model returns a GeneratedQuestionSet; each item is converted into
    a QuestionDraft. Items that fail validation (unknown kind, answer that
    is not a choice, too few options) are dropped one by one rather than
    failing the whole batch. Only an empty result counts as failure.

    The chat model is built on first use, so constructing the strategy
    never needs credentials.
    """

    name = "llm"

    def __init__(self, llm_config: LLMConfig = None, max_context_chunks: int = 5):
        self._llm_config = llm_config or LLMConfig()
        self._max_context_chunks = max_context_chunks
        self._llm = None
        self._prompt = PromptTemplate(
            input_variables=["content", "count"],
            template=(
                "You are writing a training quiz for members of a service club.\n\n"
                "Source material:\n{content}\n\n"
                "Write {count} questions that test understanding of the material above. "
                "Mix the kinds: multiple_choice (options labelled A-D), true_false "
                "(options 'true' and 'false'), open_text and numeric.\n"
                "For choice questions, correct_answer is the label of the right option. "
                "For the other kinds it is the exact expected answer.\n"
                "Rate difficulty from 1 (recall) to 5 (synthesis) and explain each answer "
                "in one or two sentences."
            ),
        )

    def applies(self, context: GenerationContext) -> bool:
        return context.has_chunks

    def generate(self, context: GenerationContext) -> list[QuestionDraft]:
        content = self._build_content(context)
        if not content:
            raise QuestionGenerationError("Document chunks contain no text")

        try:
            if self._llm is None:
                self._llm = get_llm(self._llm_config)
            chain = self._prompt | self._llm.with_structured_output(GeneratedQuestionSet)
            result = chain.invoke({"content": content, "count": context.count})
        except Exception as exc:
            raise QuestionGenerationError(f"LLM question generation failed: {exc}") from exc

        drafts = []
        for item in result.questions:
            draft = to_draft(item)
            if draft is not None:
                drafts.append(draft)

        if not drafts:
            raise QuestionGenerationError("LLM returned no usable questions")

        logger.info(
            "LLM produced %d usable question(s) of %d returned",
            len(drafts), len(result.questions),
        )
        return drafts[:context.count]

    def _build_content(self, context: GenerationContext) -> str:
        leading = [c.content.strip() for c in context.chunks[:self._max_context_chunks]]
        return "\n\n".join(text for text in leading if text)


def to_draft(item: GeneratedQuestion):
    """
    Turn one LLM question into a validated QuestionDraft, or None.

    Repairs the common slips: kind names in odd case, and a choice
    answer given as the option's text instead of its label.
    """
    try:
        kind = QuestionKind(item.kind.strip().lower())
    except ValueError:
        logger.warning("Dropping generated question with unknown kind '%s'", item.kind)
        return None

    choices = dict(item.options) if kind in CHOICE_KINDS else {}
    if kind == QuestionKind.TRUE_FALSE:
        choices = {label.lower(): text for label, text in choices.items()}
        if set(choices) != {"true", "false"}:
            choices = QuestionOptions.true_false().choices

    answer = item.correct_answer.strip()
    if kind in CHOICE_KINDS and answer not in choices:
        answer = _match_choice(answer, choices)

    try:
        return QuestionDraft(
            text=item.text.strip(),
            options=QuestionOptions(kind=kind, choices=choices),
            correct_answer=answer,
            explanation=item.explanation or None,
            difficulty=min(max(item.difficulty, 1), 5),
        )
    except ValidationError as exc:
        logger.warning("Dropping invalid generated question '%s': %s", item.text[:60], exc.errors()[0]["msg"])
        return None


def _match_choice(answer: str, choices: dict[str, str]) -> str:
    """Map an answer given as a label in the wrong case, or as option text, to its label."""
    folded = answer.casefold()
    for label, text in choices.items():
        if folded == label.casefold() or folded == text.strip().casefold():
            return label
    return answer


# ---------------------------------------------------------------------------
# Tier 2: placeholders
# ---------------------------------------------------------------------------

class TemplateQuestionStrategy(BaseQuestionStrategy):
    """
    Placeholder open questions, so a session can still start when the
    LLM is unavailable. Every question is difficulty 1.
    """

    name = "template"

    def applies(self, context: GenerationContext) -> bool:
        return context.has_chunks

    def generate(self, context: GenerationContext) -> list[QuestionDraft]:
        return [
            QuestionDraft(
                text=f"Question {n} based on the document content",
                options=QuestionOptions(kind=QuestionKind.OPEN_TEXT),
                correct_answer="Correct answer",
                difficulty=1,
            )
            for n in range(1, context.count + 1)
        ]


# ---------------------------------------------------------------------------
# Tier 3: default curriculum
# ---------------------------------------------------------------------------

def _multiple_choice(text, choices, answer, explanation, difficulty=1):
    return QuestionDraft(
        text=text,
        options=QuestionOptions(kind=QuestionKind.MULTIPLE_CHOICE, choices=choices),
        correct_answer=answer,
        explanation=explanation,
        difficulty=difficulty,
    )


def _true_false(text, answer, explanation, difficulty=1):
    return QuestionDraft(
        text=text,
        options=QuestionOptions.true_false(),
        correct_answer=answer,
        explanation=explanation,
        difficulty=difficulty,
    )


DEFAULT_CURRICULUM: tuple[QuestionDraft, ...] = (
    _multiple_choice(
        "What is the motto of Rotary International?",
        {"A": "Serve First", "B": "Service Above Self", "C": "Rotary Serving Humanity", "D": "One Rotary"},
        "B",
        "Rotary's official motto is 'Service Above Self'.",
    ),
    _true_false(
        "Rotary International was founded in 1905.",
        "true",
        "Paul Harris founded the first Rotary club in Chicago in 1905.",
    ),
    _multiple_choice(
        "How many Avenues of Service does Rotary have?",
        {"A": "3", "B": "4", "C": "5", "D": "6"},
        "C",
        "The five Avenues are Club, Vocational, Community, International and Youth Service.",
        difficulty=2,
    ),
    _true_false(
        "Rotary's main objective is to serve others and promote integrity.",
        "true",
        "Service and high ethical standards are at the heart of the Object of Rotary.",
    ),
    QuestionDraft(
        text="What is the main mission of Rotary International?",
        options=QuestionOptions(kind=QuestionKind.OPEN_TEXT),
        correct_answer="To serve others, promote integrity and advance world understanding, goodwill and peace",
        difficulty=2,
    ),
    _multiple_choice(
        "In which city was the first Rotary club founded?",
        {"A": "New York", "B": "London", "C": "Chicago", "D": "Evanston"},
        "C",
        "The first club met in Chicago in February 1905.",
    ),
    _true_false(
        "The Four-Way Test begins with the question 'Is it the truth?'",
        "true",
        "The first of the four questions is 'Is it the TRUTH?'",
    ),
    QuestionDraft(
        text="How many questions make up the Four-Way Test?",
        options=QuestionOptions(kind=QuestionKind.NUMERIC),
        correct_answer="4",
        explanation="Truth, fairness, goodwill and better friendships, and benefit to all concerned.",
        difficulty=1,
    ),
    _multiple_choice(
        "Which disease has Rotary worked to eradicate worldwide since 1985?",
        {"A": "Malaria", "B": "Polio", "C": "Measles", "D": "Tuberculosis"},
        "B",
        "PolioPlus, launched in 1985, is Rotary's flagship eradication programme.",
        difficulty=2,
    ),
    _true_false(
        "Rotaract clubs are intended for people aged 60 and over.",
        "false",
        "Rotaract is Rotary's programme for young adults.",
    ),
)


class DefaultCurriculumStrategy(BaseQuestionStrategy):
    """
    The fixed organisation-basics quiz. Always applies; returns at most
    MAX_DEFAULT_QUESTIONS drafts.
    """

    name = "default_curriculum"

    def __init__(self, curriculum: tuple[QuestionDraft, ...] = DEFAULT_CURRICULUM):
        self._curriculum = curriculum

    def applies(self, context: GenerationContext) -> bool:
        return True

    def generate(self, context: GenerationContext) -> list[QuestionDraft]:
        limit = min(context.count, MAX_DEFAULT_QUESTIONS)
        return [draft.model_copy() for draft in self._curriculum[:limit]]
