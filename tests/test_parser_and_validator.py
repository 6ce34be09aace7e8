"""
Tests for labelled-section parsing and answer shape checks.
"""

import pytest

from generation.parser import LabeledSectionParser
from generation.validator import is_valid_answer, verify_pyq_answer, verify_question
from models.schemas import GeneratedQuestion, QuestionType

from conftest import VALID_MCQ_TEXT, VALID_MSQ_TEXT, VALID_NAT_TEXT, VALID_SUB_TEXT

parser = LabeledSectionParser()


# ============================================================
# Parsing
# ============================================================

class TestParseQuestion:
    def test_mcq_sections(self):
        question = parser.parse_question(VALID_MCQ_TEXT, QuestionType.MCQ)
        assert question.question_statement.startswith("A body starts from rest")
        assert question.options == ["5 m/s", "10 m/s", "15 m/s", "20 m/s"]
        assert question.answer == "B"
        assert question.solution.startswith("Using v = u + at")
        assert question.question_type == QuestionType.MCQ

    def test_option_markers_are_stripped_and_blank_lines_ignored(self):
        text = "QUESTION: Pick one of these four choices.\nOPTIONS:\n\nA)   first\nB) second\n\nC)third\nD) fourth\nANSWER: A\nSOLUTION: x"
        question = parser.parse_question(text, QuestionType.MSQ)
        assert question.options == ["first", "second", "third", "fourth"]

    def test_at_most_four_options_are_kept(self):
        text = "QUESTION: Too many choices here.\nOPTIONS:\nA) one\nB) two\nC) three\nD) four\nE) five\nANSWER: A\nSOLUTION: x"
        question = parser.parse_question(text, QuestionType.MCQ)
        assert question.options == ["one", "two", "three", "four"]

    def test_options_ignored_for_numerical_questions(self):
        text = "QUESTION: What is 6 times 7?\nOPTIONS:\nA) 42\nANSWER: 42\nSOLUTION: multiply"
        question = parser.parse_question(text, QuestionType.NAT)
        assert question.options is None
        assert question.answer == "42"

    def test_missing_sections_are_empty_not_errors(self):
        question = parser.parse_question("The model rambled without any labels.", QuestionType.MCQ)
        assert question.question_statement == ""
        assert question.options is None
        assert question.answer == ""
        assert question.solution == ""

    def test_answer_only_takes_its_own_line(self):
        question = parser.parse_question(VALID_SUB_TEXT, QuestionType.SUB)
        assert question.answer == "Every action has an equal and opposite reaction."
        assert question.solution.startswith("When you push against a wall")

    def test_answer_on_same_line_as_solution(self):
        question = parser.parse_question("QUESTION: Sample statement here\nANSWER: C SOLUTION: because", QuestionType.MCQ)
        assert question.answer == "C"
        assert question.solution == "because"

    def test_multiline_solution_kept_whole(self):
        text = "QUESTION: Statement long enough\nANSWER: 3\nSOLUTION: step one\nstep two\n\nstep three\n"
        question = parser.parse_question(text, QuestionType.NAT)
        assert question.solution == "step one\nstep two\n\nstep three"


class TestParseSolution:
    def test_answer_and_solution(self):
        result = parser.parse_solution("ANSWER: A,D\nSOLUTION: Both statements hold.")
        assert result.answer == "A,D"
        assert result.solution == "Both statements hold."

    def test_missing_answer(self):
        result = parser.parse_solution("SOLUTION: no answer line")
        assert result.answer == ""
        assert result.solution == "no answer line"


# ============================================================
# Validation
# ============================================================

@pytest.mark.parametrize("answer,expected", [
    ("A", True),
    ("d", True),
    (" B ", True),
    ("E", False),
    ("AB", False),
    ("A,B", False),
    ("", False),
])
def test_mcq_answer_shape(answer, expected):
    assert is_valid_answer(answer, QuestionType.MCQ) is expected


@pytest.mark.parametrize("answer,expected", [
    ("A,C", True),
    ("B", True),
    ("a, b, d", True),
    ("A,B,C,D", True),
    ("A,E", False),
    ("A,", False),
    ("", False),
])
def test_msq_answer_shape(answer, expected):
    assert is_valid_answer(answer, QuestionType.MSQ) is expected


@pytest.mark.parametrize("answer,expected", [
    ("42", True),
    ("3.14", True),
    ("-0.5", True),
    (".5", True),
    ("1e-3", True),
    ("9 J", True),
    ("approximately 9", False),
    ("", False),
])
def test_nat_answer_shape(answer, expected):
    assert is_valid_answer(answer, QuestionType.NAT) is expected


def test_sub_answer_must_not_be_empty():
    assert is_valid_answer("Because of inertia.", QuestionType.SUB)
    assert not is_valid_answer("", QuestionType.SUB)


class TestVerifyQuestion:
    def test_valid_examples_pass(self):
        for text, question_type in [
            (VALID_MCQ_TEXT, QuestionType.MCQ),
            (VALID_MSQ_TEXT, QuestionType.MSQ),
            (VALID_NAT_TEXT, QuestionType.NAT),
            (VALID_SUB_TEXT, QuestionType.SUB),
        ]:
            assert verify_question(parser.parse_question(text, question_type)), question_type

    def test_msq_multi_answer_accepted(self):
        question = parser.parse_question(VALID_MSQ_TEXT, QuestionType.MSQ)
        assert question.answer == "A,C"
        assert verify_question(question)

    def test_mcq_answer_outside_options_rejected(self):
        question = parser.parse_question(VALID_MCQ_TEXT.replace("ANSWER: B", "ANSWER: E"), QuestionType.MCQ)
        assert not verify_question(question)

    def test_short_statement_rejected(self):
        question = GeneratedQuestion(
            question_statement="Too short",
            answer="42",
            solution="A sufficiently long worked solution.",
            question_type=QuestionType.NAT,
        )
        assert not verify_question(question)

    def test_short_solution_rejected(self):
        question = GeneratedQuestion(
            question_statement="What is six times seven?",
            answer="42",
            solution="6 x 7 = 42",
            question_type=QuestionType.NAT,
        )
        assert not verify_question(question)

    def test_mcq_needs_exactly_four_options(self):
        question = parser.parse_question(VALID_MCQ_TEXT, QuestionType.MCQ)
        three = question.model_copy(update={"options": question.options[:3]})
        missing = question.model_copy(update={"options": None})
        assert not verify_question(three)
        assert not verify_question(missing)


def test_pyq_answer_checks_shape_only():
    assert verify_pyq_answer("C", QuestionType.MCQ)
    assert not verify_pyq_answer("E", QuestionType.MCQ)
    assert verify_pyq_answer("B,D", QuestionType.MSQ)
    assert verify_pyq_answer("10", QuestionType.NAT)
    assert not verify_pyq_answer("ten", QuestionType.NAT)
    assert verify_pyq_answer("ok", QuestionType.SUB)
