"""
Drives question generation for the form: manual single questions,
weightage-based auto generation and PYQ solution backfill
"""

from typing import Callable, List, Optional, Sequence, Union
import logging

from sqlalchemy.exc import SQLAlchemyError

from generation.exceptions import GenerationError
from generation.pyq_solver import PYQSolver
from generation.question_generator import QuestionGenerator
from generation.weightage import distribute, total_from_distribution
from models.schemas import (
    QuestionMetadata,
    QuestionType,
    QuestionWithMetadata,
    RunReport,
    TopicDistribution,
)
from store.repository import QuestionBankRepository

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

ProgressCallback = Callable[[RunReport, Optional[QuestionWithMetadata]], None]


class RunnerError(Exception):
    """A request the form cannot carry out, shown to the user as-is"""


def _never_paused() -> bool:
    return False


class GenerationRunner:
    """
    Ties the question bank to the generation clients.

    Batch runs check `should_pause` before every topic and every question.
    A question or solution that has already started always finishes.
    """

    def __init__(
        self,
        repository: QuestionBankRepository,
        generator: QuestionGenerator,
        solver: PYQSolver,
    ):
        self.repository = repository
        self.generator = generator
        self.solver = solver

    # ==========================================
    # MANUAL MODE
    # ==========================================

    def generate_manual_question(
        self,
        topic_id: str,
        question_type: Union[QuestionType, str],
        metadata: QuestionMetadata,
    ) -> QuestionWithMetadata:
        """Generate one question for preview; nothing is saved until save_questions is called"""
        if not topic_id or not question_type:
            raise RunnerError("Please select a topic and question type")

        context = self.repository.context_for_topic(topic_id)
        if context is None:
            raise RunnerError("Could not load context information")

        question = self.generator.generate(
            question_type,
            topic_id,
            self.repository.existing_statements(topic_id),
            self.repository.generated_statements(topic_id),
            context,
        )
        return QuestionWithMetadata.from_generated(question, topic_id, metadata)

    def save_questions(self, questions: Sequence[QuestionWithMetadata]) -> int:
        for question in questions:
            self.repository.save_question(question)
        logger.info(f"✓ Saved {len(questions)} questions")
        return len(questions)

    # ==========================================
    # AUTO MODE
    # ==========================================

    def plan_distribution(self, course_id: str, total_questions: int) -> List[TopicDistribution]:
        if total_questions is None or total_questions <= 0:
            raise RunnerError("Please enter a valid number of questions")

        topics = self.repository.load_topic_weights(course_id)
        if not topics:
            raise RunnerError("Could not load topics for distribution calculation")

        distribution = distribute(topics, total_questions)
        logger.info(f"Planned {total_from_distribution(distribution)} questions across {len(distribution)} topics")
        return distribution

    def run_auto_generation(
        self,
        distribution: Sequence[TopicDistribution],
        question_type: Union[QuestionType, str],
        metadata: QuestionMetadata,
        should_pause: Callable[[], bool] = _never_paused,
        on_progress: Optional[ProgressCallback] = None,
    ) -> RunReport:
        """
        Generate and save every question in the distribution.

        A topic whose context cannot be resolved is skipped. A question that
        fails to generate or save is logged and skipped; the run carries on.
        """
        if not distribution:
            raise RunnerError("Please select a course and calculate distribution first")

        question_type = QuestionType(question_type or QuestionType.MCQ)
        report = RunReport(planned=total_from_distribution(distribution))

        for topic_plan in distribution:
            if should_pause():
                report.paused = True
                break

            context = self.repository.context_for_topic(topic_plan.topic_id)
            if context is None:
                logger.warning(f"No context for topic {topic_plan.topic_id}, skipping {topic_plan.questions_to_generate} questions")
                report.skipped += max(topic_plan.questions_to_generate, 0)
                continue

            existing = self.repository.existing_statements(topic_plan.topic_id)

            for _ in range(topic_plan.questions_to_generate):
                if should_pause():
                    report.paused = True
                    break

                try:
                    generated = self.repository.generated_statements(topic_plan.topic_id)
                    question = self.generator.generate(
                        question_type, topic_plan.topic_id, existing, generated, context
                    )
                    saved = QuestionWithMetadata.from_generated(question, topic_plan.topic_id, metadata)
                    self.repository.save_question(saved)
                except (GenerationError, SQLAlchemyError) as e:
                    logger.error(f"Error generating question for {topic_plan.topic_name}: {e}")
                    report.failed += 1
                    continue

                report.completed += 1
                if on_progress:
                    on_progress(report, saved)

            if report.paused:
                break

        logger.info(
            f"Auto generation finished: {report.completed}/{report.planned} saved, "
            f"{report.failed} failed, {report.skipped} skipped, paused={report.paused}"
        )
        return report

    # ==========================================
    # PYQ SOLUTIONS
    # ==========================================

    def run_pyq_solutions(
        self,
        should_pause: Callable[[], bool] = _never_paused,
        on_progress: Optional[ProgressCallback] = None,
    ) -> RunReport:
        """Fill in answers and solutions for every PYQ that has neither"""
        pyqs = self.repository.list_unsolved_pyqs()
        if not pyqs:
            raise RunnerError("No PYQs found without answers/solutions")

        report = RunReport(planned=len(pyqs))

        for pyq in pyqs:
            if should_pause():
                report.paused = True
                break

            context = self.repository.context_for_topic(pyq.topic_id)
            if context is None:
                logger.warning(f"No context for PYQ {pyq.id}, skipping")
                report.skipped += 1
                continue

            try:
                result = self.solver.solve(
                    pyq.question_statement,
                    pyq.question_type,
                    pyq.decoded_options(),
                    context,
                )
                self.repository.save_pyq_solution(pyq.id, result)
            except (GenerationError, SQLAlchemyError, ValueError) as e:
                logger.error(f"Error generating PYQ solution for {pyq.id}: {e}")
                report.failed += 1
                continue

            report.completed += 1
            if on_progress:
                on_progress(report, None)

        logger.info(f"PYQ solutions finished: {report.completed}/{report.planned} solved, {report.failed} failed")
        return report
