"""
Unit Tests for Question Deduplication

Tests for dedupe_questions() and question_key().
"""

from quizdoc.core.models.questions import FinalizedQuestion, Level, QuestionType, Subject
from quizdoc.parsing.dedupe import dedupe_questions, question_key


def mcq(question: str, options=("3", "4"), answer: str = "B", topic=None) -> FinalizedQuestion:
    return FinalizedQuestion(question, topic, QuestionType.MCQ, tuple(options), answer, "",
                             Level.MEDIUM, Subject.MATH)


def blank(question: str = "") -> FinalizedQuestion:
    return FinalizedQuestion(question, None, QuestionType.SHORT_ANSWER, (), "", "",
                             Level.MEDIUM, Subject.MATH)


class TestQuestionKey:
    """Tests for question_key helper."""

    def test_key_when_whitespace_differs_then_equal(self):
        assert question_key(mcq("What  is\n2 + 2?")) == question_key(mcq("What is 2 + 2?"))

    def test_key_when_answer_case_differs_then_equal(self):
        assert question_key(mcq("Pick", answer="b")) == question_key(mcq("Pick", answer="B "))

    def test_key_when_options_differ_then_different(self):
        assert question_key(mcq("Pick", options=("1", "2"))) != question_key(mcq("Pick", options=("1", "3")))


class TestDedupeQuestions:
    """Tests for dedupe_questions function."""

    def test_dedupe_when_duplicates_then_first_kept_in_order(self):
        first = mcq("What is 2 + 2?", topic="Algebra")
        other = mcq("What is 3 + 3?", options=("5", "6"))
        repeat = mcq("What is  2 + 2?", topic="Arithmetic")

        result = dedupe_questions([first, other, repeat])

        assert result == [first, other]
        assert result[0].topic == "Algebra"

    def test_dedupe_when_topic_only_differs_then_still_duplicate(self):
        assert len(dedupe_questions([mcq("Q", topic="A"), mcq("Q", topic="B")])) == 1

    def test_dedupe_when_no_text_options_or_answer_then_dropped(self):
        assert dedupe_questions([blank(), blank("   "), mcq("Real")]) == [mcq("Real")]

    def test_dedupe_when_stem_empty_but_options_then_kept(self):
        """An MCQ whose stem is only an image or equation still has options."""
        result = dedupe_questions([mcq(""), mcq("Real")])

        assert [q.question for q in result] == ["", "Real"]

    def test_dedupe_when_keep_empty_then_first_empty_kept(self):
        result = dedupe_questions([blank(), blank("   "), mcq("Real")], drop_empty=False)

        assert [q.question for q in result] == ["", "Real"]

    def test_dedupe_when_applied_twice_then_same_result(self):
        questions = [mcq("A"), mcq("B"), mcq("A"), mcq("C")]

        once = dedupe_questions(questions)

        assert dedupe_questions(once) == once

    def test_dedupe_when_empty_input_then_empty(self):
        assert dedupe_questions([]) == []
