"""
Training quiz example: upload a document and take its quiz.

This script:
    1. Uploads a PDF (or .txt) into an in-memory repository
    2. Searches it
    3. Starts a quiz session and answers every question from the console
    4. Prints the learner's progress

Without OPENAI_API_KEY it still runs: embeddings use the local
fallback and questions fall back to placeholders.

Run:
    pip install -e .
    python examples/training_quiz.py data/club_handbook.pdf
"""

import logging
import sys
from uuid import uuid4

from quiz_toolkit import InMemoryRepository, QuizConfig, QuizToolkit, ToolkitConfig
from quiz_toolkit.logging_utils import configure_logging


def main(path: str):
    configure_logging(logging.INFO)

    club_id = uuid4()
    repository = InMemoryRepository(learners={"alice"}, tenants={club_id})
    toolkit = QuizToolkit(repository, ToolkitConfig(quiz=QuizConfig(default_question_count=5)))

    with open(path, "rb") as f:
        ingested = toolkit.upload_document(club_id, "alice", path, f, title="Club handbook")
    if ingested.no_content:
        print("No text could be extracted; the quiz will use the default curriculum.")
    else:
        print(f"Indexed {ingested.chunk_count} chunks")
        for scored in toolkit.search("How often does the club meet?", ingested.document.id).chunks[:3]:
            print(f"  [{scored.score:.2f}] {scored.chunk.content[:80]}")

    summary = toolkit.start_session("alice", ingested.document.id)
    session_id = summary.session.id

    for view in toolkit.get_questions(session_id, "alice"):
        question = view.question
        print(f"\n{question.text}")
        for label, text in question.options.choices.items():
            print(f"  {label}) {text}")

        result = toolkit.submit_answer(session_id, "alice", question.id, input("> "))
        print("Correct!" if result.is_correct else f"Answer: {result.correct_answer}")
        print(result.explanation)
        for badge in result.badges_awarded:
            print(f"Badge earned: {badge.kind.value} (+{badge.points} pts)")

    progress = toolkit.get_progress("alice")
    print(f"\nScore {result.total_score}/{summary.session.goal} ({result.status.value})")
    print(f"Badge points: {progress.total_points}")


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else "data/club_handbook.pdf")
