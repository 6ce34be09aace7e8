"""Shape checks applied to parsed model output before it is accepted"""

import re
from typing import Optional, List

from models.schemas import GeneratedQuestion, QuestionType

VALID_OPTIONS = {"A", "B", "C", "D"}
REQUIRED_OPTION_COUNT = 4
MIN_STATEMENT_LENGTH = 10
MIN_SOLUTION_LENGTH = 20

# Leading number, the way a lenient float parse reads "42 cm" as 42
NUMBER_PREFIX = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?|^\s*[+-]?Infinity")


def is_valid_answer(answer: str, question_type: QuestionType) -> bool:
    """Check the answer shape for a question type"""
    if question_type == QuestionType.MCQ:
        return answer.strip().upper() in VALID_OPTIONS
    if question_type == QuestionType.MSQ:
        choices = [choice.strip() for choice in answer.upper().split(",")]
        return bool(choices) and all(choice in VALID_OPTIONS for choice in choices)
    if question_type == QuestionType.NAT:
        return NUMBER_PREFIX.match(answer) is not None
    return len(answer) > 0


def has_required_options(options: Optional[List[str]], question_type: QuestionType) -> bool:
    if not question_type.has_options:
        return True
    return options is not None and len(options) == REQUIRED_OPTION_COUNT


def verify_question(question: GeneratedQuestion) -> bool:
    """Whether a generated question can be handed back to the caller"""
    if not has_required_options(question.options, question.question_type):
        return False
    if not is_valid_answer(question.answer, question.question_type):
        return False
    if len(question.question_statement) < MIN_STATEMENT_LENGTH:
        return False
    if len(question.solution) < MIN_SOLUTION_LENGTH:
        return False
    return True


def verify_pyq_answer(answer: str, question_type: QuestionType) -> bool:
    """Whether a PYQ answer has the right shape; the statement is given, so only the answer is checked"""
    return is_valid_answer(answer, question_type)
