"""
Unit Tests for the Question Block Parser

Tests for QuestionBlockParser line classification, topic extraction and
state transitions.
"""

import pytest

from quizdoc.common.topics import TopicTaxonomy
from quizdoc.core.models.questions import Level
from quizdoc.parsing.parser import QuestionBlockParser, is_generic_explanation, parse_questions


def parse_one(text: str):
    questions = parse_questions(text)
    assert len(questions) == 1
    return questions[0]


class TestQuestionStart:
    """Tests for question-start detection."""

    def test_parse_when_numbered_line_with_topic_and_options_then_all_fields(self):
        """Numbering, topic pair, inline options and answer on the next line."""
        text = (
            "Q.1) Algebra Linear functions, Solve for x: 2x=4. A) 1 B) 2 C) 3 D) 4\n"
            "Answer: B"
        )

        question = parse_one(text)

        assert question.topic == "Algebra - Linear functions"
        assert question.question_text == "Solve for x: 2x=4."
        assert question.options == ["1", "2", "3", "4"]
        assert question.correct_answer_raw == "B"

    @pytest.mark.parametrize("line", [
        "1. What is 2 + 2?",
        "1) What is 2 + 2?",
        "Q1 What is 2 + 2?",
        "Q.1: What is 2 + 2?",
        "Question 1: What is 2 + 2?",
        "question 1 What is 2 + 2?",
    ])
    def test_parse_when_numbering_styles_then_question_text_stripped(self, line):
        assert parse_one(line).question_text == "What is 2 + 2?"

    def test_parse_when_decimal_line_then_not_question_start(self):
        """ "2.5" is a number, not question 2."""
        question = parse_one("1. Which value is larger?\n2.5 or 2.05")

        assert question.question_text == "Which value is larger? 2.5 or 2.05"

    def test_parse_when_lines_before_first_question_then_ignored(self):
        text = "Worksheet 3\nName ________\n1. What is 3 x 3?\nAnswer: 9"

        question = parse_one(text)

        assert question.question_text == "What is 3 x 3?"
        assert question.correct_answer_raw == "9"

    def test_parse_when_line_starts_with_topic_label_then_new_question(self):
        questions = parse_questions("Circles Find the circumference.\nCircles Find the area.")

        assert [q.topic for q in questions] == ["Circles", "Circles"]
        assert questions[1].question_text == "Find the area."

    def test_parse_when_text_empty_then_no_questions(self):
        assert parse_questions("") == []
        assert parse_questions("just some notes\nwithout numbering") == []


class TestTopics:
    """Tests for topic extraction on question-start lines."""

    def test_parse_when_topic_line_then_explicit_topic(self):
        question = parse_one("Topic: Circles\nFind the radius of a circle with area 9.")

        assert question.topic == "Circles"
        assert question.question_text == "Find the radius of a circle with area 9."

    def test_parse_when_unknown_topic_line_then_taken_verbatim(self):
        question = parse_one("Topic: Thermodynamics\nWhat is entropy?")

        assert question.topic == "Thermodynamics"
        assert question.question_text == "What is entropy?"

    def test_parse_when_numbered_topic_prefix_then_explicit_topic(self):
        question = parse_one("1. Topic: Circles")

        assert question.topic == "Circles"
        assert question.question_text == ""

    def test_parse_when_unknown_label_before_colon_then_trusted(self):
        question = parse_one("1. Kinematics: How far does the car travel?")

        assert question.topic == "Kinematics"
        assert question.question_text == "How far does the car travel?"

    def test_parse_when_label_before_colon_differs_in_case_then_canonical(self):
        question = parse_one("2. geometry and trigonometry: Find the angle.")

        assert question.topic == "Geometry and Trigonometry"
        assert question.question_text == "Find the angle."

    @pytest.mark.parametrize("line", [
        "1. The ratio is 3:4, what is x?",
        "1. Visit http://example.com and answer",
        "1. See [IMAGE:rId5.png] and answer",
        r"1. Evaluate \(f:x\) at 2",
    ])
    def test_parse_when_colon_is_not_separator_then_no_topic(self, line):
        question = parse_one(line)

        assert question.topic is None
        assert question.question_text == line[3:]

    def test_parse_when_custom_taxonomy_then_used(self):
        taxonomy = TopicTaxonomy(["Biology", "Genetics"])

        questions = QuestionBlockParser(taxonomy).parse("1. Biology Genetics, Name the allele.")

        assert questions[0].topic == "Biology - Genetics"
        assert questions[0].question_text == "Name the allele."


class TestLevelTags:
    """Tests for inline [easy]/[medium]/[hard] tags."""

    def test_parse_when_level_tag_then_hint_and_tag_removed(self):
        question = parse_one("3. [hard] Algebra: Solve x^2=4")

        assert question.level_hint is Level.HARD
        assert question.topic == "Algebra"
        assert question.question_text == "Solve x^2=4"

    def test_parse_when_several_tags_then_last_in_order_wins(self):
        question = parse_one("3. [Easy] [HARD] What is 1 + 1?")

        assert question.level_hint is Level.HARD
        assert question.question_text == "What is 1 + 1?"

    def test_parse_when_no_tag_then_no_hint(self):
        assert parse_one("1. What is 1 + 1?").level_hint is None


class TestOptionsAndAnswers:
    """Tests for option lines, answers and explanations."""

    def test_parse_when_options_on_separate_lines_then_collected(self):
        text = "1. What is 2 + 2?\nA) 3\nB) 4\nC) 5\nAnswer: B\nExplanation: Two plus two is four."

        question = parse_one(text)

        assert question.options == ["3", "4", "5"]
        assert question.correct_answer_raw == "B"
        assert question.explanation == "Two plus two is four."

    def test_parse_when_options_header_then_prefix_removed(self):
        text = "1. Pick the prime.\nOptions:\nOptions: A) 4  B) 7\nAns - B"

        question = parse_one(text)

        assert question.options == ["4", "7"]
        assert question.correct_answer_raw == "B"

    def test_parse_when_stem_continues_before_options_then_joined(self):
        text = "1. A train travels 60 km\nin 1.5 hours. What is its speed?\nA) 30  B) 40"

        question = parse_one(text)

        assert question.question_text == "A train travels 60 km in 1.5 hours. What is its speed?"
        assert question.options == ["30", "40"]

    def test_parse_when_first_option_line_has_leading_text_then_stem_extended(self):
        question = parse_one("1. Solve 2x = 6.\nChoose one: A) 2  B) 3")

        assert question.question_text == "Solve 2x = 6. Choose one:"
        assert question.options == ["2", "3"]

    def test_parse_when_option_wraps_then_appended_to_last_option(self):
        question = parse_one("1. Pick the sentence.\nA) The dog\nran home.\nB) The cat")

        assert question.options == ["The dog ran home.", "The cat"]

    def test_parse_when_answer_has_trailing_text_then_explanation(self):
        text = "1. Slope of y = 2x?\nA) 1  B) 2\nCorrect Answer: B) because the coefficient is 2\nIt multiplies x."

        question = parse_one(text)

        assert question.correct_answer_raw == "B"
        assert question.explanation == "because the coefficient is 2 It multiplies x."

    def test_parse_when_lowercase_answer_letter_then_uppercased(self):
        assert parse_one("1. Pick.\nA) x  B) y\nanswer: b").correct_answer_raw == "B"

    def test_parse_when_answer_is_value_then_kept_verbatim(self):
        assert parse_one("1. Capital of France?\nAnswer: Paris").correct_answer_raw == "Paris"

    def test_parse_when_short_answer_followed_by_text_then_explanation(self):
        question = parse_one("1. What is 6 x 7?\nAnswer: 42\nSix sevens are forty-two.")

        assert question.explanation == "Six sevens are forty-two."

    def test_parse_when_explanation_spans_lines_then_joined(self):
        text = "1. What is 2 + 2?\nSolution: Add them.\nThe result is 4."

        assert parse_one(text).explanation == "Add them. The result is 4."

    def test_parse_when_passage_line_then_separate_paragraph(self):
        text = (
            "1. Which choice completes the text?\n"
            "Passage/Sentence: The scientist's ____ findings surprised everyone.\n"
            "A) novel\nB) tired\nAnswer: A"
        )

        question = parse_one(text)

        assert question.question_text == (
            "Which choice completes the text?\n\nThe scientist's ____ findings surprised everyone."
        )
        assert question.options == ["novel", "tired"]

    def test_parse_when_typographic_dash_then_normalised(self):
        assert parse_one("1. 5 – 3 = ?").question_text == "5 - 3 = ?"


class TestGenericExplanations:
    """Tests for boilerplate explanation handling."""

    def test_parse_when_first_explanation_generic_then_skipped(self):
        text = "1. Pick.\nA) x  B) y\nAnswer: A\nExplanation: Choice B is incorrect."

        assert parse_one(text).explanation is None

    def test_parse_when_choice_sentence_with_reason_then_kept(self):
        text = "1. Pick.\nA) x  B) y\nAnswer: A\nChoice A is correct because it balances the equation."

        assert parse_one(text).explanation == "Choice A is correct because it balances the equation."

    def test_parse_when_generic_after_real_explanation_then_appended(self):
        text = "1. Pick.\nA) x  B) y\nAnswer: A\nExplanation: x balances it.\nChoice B is incorrect."

        assert parse_one(text).explanation == "x balances it. Choice B is incorrect."

    def test_parse_when_generic_line_skipped_then_option_continuation_kept(self):
        """A dropped boilerplate line does not divert the next line into the explanation."""
        text = "1. Pick.\nA) x  B) y\nChoice B is correct.\nand more"

        question = parse_one(text)

        assert question.explanation is None
        assert question.options == ["x", "y and more"]

    @pytest.mark.parametrize("text,expected", [
        ("Choice B is incorrect.", True),
        ("Choice C is incorrect and may result from a sign error.", True),
        ("Choice A is correct This is the value of x.", True),
        ("This is correct.", True),
        ("Correct because x = 2.", False),
        ("Choice D is incorrect since the slope is negative and the line falls.", False),
        ("Add both sides.", False),
    ])
    def test_is_generic_explanation_when_text_then_expected(self, text, expected):
        assert is_generic_explanation(text) is expected
