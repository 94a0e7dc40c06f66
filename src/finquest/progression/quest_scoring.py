"""Quest grading: position-wise answer matching and the 60% pass rule."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from finquest.exceptions import InvalidInputError

PASS_RATIO = 0.6


@dataclass(frozen=True)
class ScoreResult:
    correct: int
    total: int
    percentage: int
    passed: bool


def _validate_answers(answers: Any) -> list[int]:
    if not isinstance(answers, (list, tuple)):
        raise InvalidInputError("Answers must be a list of option indices")
    for answer in answers:
        # bool is an int subclass; True is not a valid option index.
        if isinstance(answer, bool) or not isinstance(answer, int):
            raise InvalidInputError(f"Answer {answer!r} is not an option index")
    return list(answers)


def _correct_index(question: Mapping[str, Any]) -> int | None:
    return question.get("correct")


def score_quest(answers: Sequence[int], questions: Sequence[Mapping[str, Any]]) -> ScoreResult:
    """Grade submitted answers against a quest's questions.

    Answers beyond the question list, and questions without an answer, never
    count as correct. A quest with no questions scores 0 and fails.
    """
    answers = _validate_answers(answers)
    total = len(questions)

    correct = sum(
        1
        for answer, question in zip(answers, questions)
        if answer == _correct_index(question)
    )

    if total == 0:
        return ScoreResult(correct=0, total=0, percentage=0, passed=False)

    return ScoreResult(
        correct=correct,
        total=total,
        percentage=math.floor(correct / total * 100 + 0.5),
        passed=correct >= math.ceil(total * PASS_RATIO),
    )


def answer_feedback(answers: Sequence[int], questions: Sequence[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Per-question review shown after a submission."""
    feedback = []
    for index, question in enumerate(questions):
        your_answer = answers[index] if index < len(answers) else None
        correct = _correct_index(question)
        feedback.append({
            "question": question.get("question", ""),
            "your_answer": your_answer,
            "correct_answer": correct,
            "is_correct": your_answer is not None and your_answer == correct,
            "explanation": question.get("explanation"),
        })
    return feedback
