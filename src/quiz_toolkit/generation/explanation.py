"""
Answer explanations shown to the learner after each submission.

The chat model explains why the right answer is right. If the call fails
for any reason the learner still gets a short templated explanation, so
answering a question never fails because of the LLM.
"""

import logging

from langchain_core.prompts import PromptTemplate

from quiz_toolkit.config import LLMConfig
from quiz_toolkit.models.quiz import Question
from quiz_toolkit.utils.helpers import get_llm, message_text

logger = logging.getLogger(__name__)


def template_explanation(correct_answer: str, user_answer: str, is_correct: bool) -> str:
    if is_correct:
        return f"Well done! '{correct_answer}' is the correct answer."
    return (
        f"The correct answer was '{correct_answer}'; you answered '{user_answer}'. "
        "Review the training material to learn more."
    )


class ExplanationGenerator:
    def __init__(self, llm_config: LLMConfig = None):
        self._llm_config = llm_config or LLMConfig()
        self._llm = None
        self._prompt = PromptTemplate(
            input_variables=["question", "correct_answer", "user_answer"],
            template=(
                "A club member answered a training quiz question.\n\n"
                "Question: {question}\n"
                "Correct answer: {correct_answer}\n"
                "Member's answer: {user_answer}\n\n"
                "In two or three friendly sentences, say whether the member was right "
                "and explain why the correct answer is correct."
            ),
        )

    def explain(self, question: Question, correct_answer: str, user_answer: str, is_correct: bool = None) -> str:
        """
        Explain the correct answer to a question. Never raises.

        Args:
            question: The question that was answered.
            correct_answer: Displayable correct answer (option text for choice questions).
            user_answer: What the learner submitted.
            is_correct: Verdict used by the template fallback. Derived from a
                case-insensitive comparison when omitted.
        """
        if is_correct is None:
            is_correct = correct_answer.casefold() == user_answer.casefold()

        try:
            if self._llm is None:
                self._llm = get_llm(self._llm_config)
            chain = self._prompt | self._llm
            text = message_text(chain.invoke({
                "question": question.text,
                "correct_answer": correct_answer,
                "user_answer": user_answer,
            })).strip()
        except Exception:
            logger.warning("Explanation generation failed; using template", exc_info=True)
            return template_explanation(correct_answer, user_answer, is_correct)

        return text or template_explanation(correct_answer, user_answer, is_correct)
