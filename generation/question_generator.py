"""LLM-based question generation with validation and regeneration"""

from typing import Callable, Optional, Sequence, TypeVar, Union
import logging

from config.settings import GEMINI_API_KEYS, MAX_VALIDATION_ATTEMPTS
from generation.credentials import CredentialRotator
from generation.exceptions import ValidationRetryExhaustedError
from generation.gemini_client import GeminiClient
from generation.parser import LabeledSectionParser, ResponseParser
from generation.prompts import build_question_prompt
from generation.validator import verify_question
from models.schemas import GeneratedQuestion, QuestionContext, QuestionType

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

T = TypeVar("T")


def default_client() -> GeminiClient:
    return GeminiClient(CredentialRotator(GEMINI_API_KEYS))


def generate_until_valid(
    produce: Callable[[], T],
    is_valid: Callable[[T], bool],
    max_attempts: Optional[int],
    label: str,
) -> T:
    """
    Call `produce` until `is_valid` accepts its result.

    With `max_attempts` set to None this never gives up, so a model that keeps
    returning malformed output blocks the caller. Errors raised by `produce`
    (such as exhausted credentials) are not retried here.
    """
    attempt = 0
    while True:
        attempt += 1
        result = produce()
        if is_valid(result):
            if attempt > 1:
                logger.info(f"{label} passed verification on attempt {attempt}")
            return result

        if max_attempts is not None and attempt >= max_attempts:
            raise ValidationRetryExhaustedError(
                f"Could not produce valid content for {label} after {attempt} attempts"
            )
        logger.warning(f"{label} verification failed, regenerating (attempt {attempt})...")


class QuestionGenerator:
    """Generates one exam question at a time from the hierarchy context"""

    def __init__(
        self,
        client: Optional[GeminiClient] = None,
        parser: Optional[ResponseParser] = None,
        max_validation_attempts: Optional[int] = MAX_VALIDATION_ATTEMPTS,
    ):
        self.client = client or default_client()
        self.parser = parser or LabeledSectionParser()
        self.max_validation_attempts = max_validation_attempts

    def generate(
        self,
        question_type: Union[QuestionType, str],
        topic_id: str,
        existing_questions: Sequence[str],
        already_generated: Sequence[str],
        context: QuestionContext,
    ) -> GeneratedQuestion:
        """
        Generate a question that passes verification.

        Args:
            question_type: MCQ, MSQ, NAT or SUB
            topic_id: Topic the question is for
            existing_questions: Previous year statements used as inspiration
            already_generated: Statements generated earlier for this topic
            context: Exam hierarchy names for the prompt

        Raises:
            ValueError: unknown question type
            CredentialsExhaustedError: every API key failed
            ValidationRetryExhaustedError: only when a validation cap is configured
        """
        question_type = QuestionType(question_type)
        logger.info(
            f"Generating {question_type.value} for topic {topic_id} ({context.topic_name}) "
            f"with {len(existing_questions)} PYQs, {len(already_generated)} already generated"
        )

        def produce() -> GeneratedQuestion:
            prompt = build_question_prompt(question_type, existing_questions, already_generated, context)
            text = self.client.generate_text(prompt)
            return self.parser.parse_question(text, question_type)

        question = generate_until_valid(
            produce,
            verify_question,
            self.max_validation_attempts,
            f"{question_type.value} question for '{context.topic_name}'",
        )
        logger.info(f"✓ Generated {question_type.value} for topic {topic_id}")
        return question
