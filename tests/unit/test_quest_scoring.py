"""Quest grading tests: position-wise matching and the 60% rule."""

import pytest

from finquest.exceptions import InvalidInputError
from finquest.progression.quest_scoring import answer_feedback, score_quest


def questions(*correct: int) -> list[dict]:
    return [
        {"question": f"Q{i}", "options": ["a", "b", "c", "d"], "correct": c, "explanation": f"E{i}"}
        for i, c in enumerate(correct)
    ]


class TestScoreQuest:
    def test_all_correct(self):
        result = score_quest([0, 1, 2, 3, 0], questions(0, 1, 2, 3, 0))
        assert (result.correct, result.total, result.percentage, result.passed) == (5, 5, 100, True)

    def test_three_of_five_passes(self):
        result = score_quest([0, 1, 2, 0, 1], questions(0, 1, 2, 3, 0))
        assert result.correct == 3
        assert result.percentage == 60
        assert result.passed

    def test_two_of_five_fails(self):
        result = score_quest([0, 1, 0, 0, 1], questions(0, 1, 2, 3, 0))
        assert result.percentage == 40
        assert not result.passed

    def test_percentage_rounds_half_up(self):
        result = score_quest([0, 1, 3], questions(0, 1, 2))
        assert result.percentage == 67
        assert result.passed  # ceil(3 * 0.6) == 2

    def test_missing_answers_never_match(self):
        result = score_quest([0], questions(0, 1, 2))
        assert result.correct == 1
        assert result.total == 3
        assert not result.passed

    def test_extra_answers_ignored(self):
        result = score_quest([0, 1, 2, 3, 0, 1, 2], questions(0, 1, 2))
        assert result.correct == 3
        assert result.total == 3

    def test_zero_questions_scores_zero_and_fails(self):
        result = score_quest([], [])
        assert result.percentage == 0
        assert not result.passed

    @pytest.mark.parametrize("answers", ["0,1,2", None, [0, "1"], [0, 1.0], [True, 1]])
    def test_malformed_answers_rejected(self, answers):
        with pytest.raises(InvalidInputError):
            score_quest(answers, questions(0, 1))


class TestAnswerFeedback:
    def test_feedback_per_question(self):
        feedback = answer_feedback([0, 2], questions(0, 1, 2))
        assert [f["is_correct"] for f in feedback] == [True, False, False]
        assert feedback[1]["your_answer"] == 2
        assert feedback[1]["correct_answer"] == 1
        assert feedback[2]["your_answer"] is None
        assert feedback[0]["explanation"] == "E0"
