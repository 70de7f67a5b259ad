"""
Abstract base class for question generation strategies.

Question generation is an ordered chain of strategies: the pipeline asks
each one in turn and keeps the first that delivers. Strategies are pure:
they read the GenerationContext and return drafts, and never touch the
repository, so each tier can be tested on its own.
"""

from abc import ABC, abstractmethod

from pydantic import BaseModel, ConfigDict, Field

from quiz_toolkit.models.document import Chunk, Document
from quiz_toolkit.models.quiz import QuestionDraft, Session


class GenerationContext(BaseModel):
    """Everything a strategy may look at when producing questions."""

    model_config = ConfigDict(frozen=True)

    session: Session
    document: Document
    chunks: list[Chunk] = Field(default_factory=list, description="Document chunks in index order")
    count: int = Field(gt=0, description="How many questions are wanted")

    @property
    def has_chunks(self) -> bool:
        return bool(self.chunks)


class BaseQuestionStrategy(ABC):
    """
    Contract for one tier of the question generation chain.

    applies() is a cheap precondition check; generate() does the work and
    raises QuestionGenerationError when it cannot produce anything, which
    tells the pipeline to move on to the next tier.
    """

    name: str = "base"

    @abstractmethod
    def applies(self, context: GenerationContext) -> bool:
        ...

    @abstractmethod
    def generate(self, context: GenerationContext) -> list[QuestionDraft]:
        """
        Produce up to context.count question drafts.

        Raises:
            QuestionGenerationError: If this tier cannot deliver.
        """
        ...
