"""
Structured-output schemas for LLM question generation.

The LLM fills these via with_structured_output(). They are deliberately
loose (plain strings and dicts) because models get kinds and answer keys
slightly wrong; generation/strategies.py turns each item into a validated
QuestionDraft and drops the ones it cannot repair.
"""

from pydantic import BaseModel, Field


class GeneratedQuestion(BaseModel):
    """One quiz question as produced by the LLM."""

    text: str = Field(description="The question, phrased for the learner")
    kind: str = Field(
        description="One of: multiple_choice, true_false, open_text, numeric",
    )
    options: dict[str, str] = Field(
        default_factory=dict,
        description=(
            "Answer choices. multiple_choice: labels A-D mapped to text. "
            "true_false: {'true': 'True', 'false': 'False'}. Empty otherwise."
        ),
    )
    correct_answer: str = Field(
        description="The label of the correct choice, or the exact expected answer",
    )
    explanation: str = Field(default="", description="Why the answer is correct")
    difficulty: int = Field(default=1, description="1 (recall) to 5 (synthesis)")


class GeneratedQuestionSet(BaseModel):
    questions: list[GeneratedQuestion] = Field(default_factory=list)
