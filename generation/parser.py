"""Parsing of labelled model output into questions and solutions"""

import re
from typing import List, Optional

from models.schemas import GeneratedQuestion, PYQSolutionResult, QuestionType

QUESTION_PATTERN = re.compile(r"QUESTION:\s*(.*?)(?=OPTIONS:|ANSWER:)", re.DOTALL)
OPTIONS_PATTERN = re.compile(r"OPTIONS:\s*(.*?)(?=ANSWER:)", re.DOTALL)
ANSWER_PATTERN = re.compile(r"ANSWER:\s*(.*?)(?=\n|SOLUTION:|\Z)")
SOLUTION_PATTERN = re.compile(r"SOLUTION:\s*(.*)", re.DOTALL)
OPTION_MARKER = re.compile(r"^[A-D]\)\s*")

MAX_OPTIONS = 4


class ResponseParser:
    """Turns raw generated text into structured results"""

    def parse_question(self, text: str, question_type: QuestionType) -> GeneratedQuestion:
        raise NotImplementedError

    def parse_solution(self, text: str) -> PYQSolutionResult:
        raise NotImplementedError


def _section(pattern: re.Pattern, text: str) -> str:
    match = pattern.search(text)
    return match.group(1).strip() if match else ""


class LabeledSectionParser(ResponseParser):
    """
    Reads QUESTION:/OPTIONS:/ANSWER:/SOLUTION: sections out of the text.

    A section that cannot be found comes back empty instead of raising;
    validation decides whether the result is usable.
    """

    def parse_options(self, text: str) -> Optional[List[str]]:
        match = OPTIONS_PATTERN.search(text)
        if not match:
            return None
        lines = [line.strip() for line in match.group(1).strip().split("\n")]
        options = [OPTION_MARKER.sub("", line) for line in lines if line]
        return options[:MAX_OPTIONS]

    def parse_question(self, text: str, question_type: QuestionType) -> GeneratedQuestion:
        return GeneratedQuestion(
            question_statement=_section(QUESTION_PATTERN, text),
            options=self.parse_options(text) if question_type.has_options else None,
            answer=_section(ANSWER_PATTERN, text),
            solution=_section(SOLUTION_PATTERN, text),
            question_type=question_type,
        )

    def parse_solution(self, text: str) -> PYQSolutionResult:
        return PYQSolutionResult(
            answer=_section(ANSWER_PATTERN, text),
            solution=_section(SOLUTION_PATTERN, text),
        )
