"""Answer and solution generation for previous year questions"""

from typing import List, Optional, Union
import logging

from config.settings import MAX_VALIDATION_ATTEMPTS
from generation.gemini_client import GeminiClient
from generation.parser import LabeledSectionParser, ResponseParser
from generation.prompts import build_pyq_solution_prompt
from generation.question_generator import default_client, generate_until_valid
from generation.validator import verify_pyq_answer
from models.schemas import PYQSolutionResult, QuestionContext, QuestionType

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class PYQSolver:
    """Fills in the answer and solution for an existing question statement"""

    def __init__(
        self,
        client: Optional[GeminiClient] = None,
        parser: Optional[ResponseParser] = None,
        max_validation_attempts: Optional[int] = MAX_VALIDATION_ATTEMPTS,
    ):
        self.client = client or default_client()
        self.parser = parser or LabeledSectionParser()
        self.max_validation_attempts = max_validation_attempts

    def solve(
        self,
        question_statement: str,
        question_type: Union[QuestionType, str],
        options: Optional[List[str]],
        context: QuestionContext,
    ) -> PYQSolutionResult:
        question_type = QuestionType(question_type)

        def produce() -> PYQSolutionResult:
            prompt = build_pyq_solution_prompt(question_statement, question_type, options, context)
            return self.parser.parse_solution(self.client.generate_text(prompt))

        return generate_until_valid(
            produce,
            lambda result: verify_pyq_answer(result.answer, question_type),
            self.max_validation_attempts,
            f"PYQ {question_type.value} answer",
        )
