"""
Question bank reads and writes
All database access from the orchestrator goes through QuestionBankRepository
"""

import json
from typing import Dict, List, Optional

from sqlalchemy.orm import sessionmaker

from models.schemas import (
    PendingPYQ,
    PYQSolutionResult,
    QuestionContext,
    QuestionWithMetadata,
    TopicWeight,
)
from store import models


def _as_options(models_list) -> List[Dict[str, str]]:
    return [{"id": row.id, "name": row.name} for row in models_list]


class QuestionBankRepository:
    """Read access to the syllabus and historical questions, write access to generated content"""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    # ==========================================
    # HIERARCHY
    # ==========================================

    def list_exams(self) -> List[Dict[str, str]]:
        with self.session_factory() as db:
            return _as_options(db.query(models.Exam).order_by(models.Exam.name).all())

    def list_courses(self, exam_id: str) -> List[Dict[str, str]]:
        with self.session_factory() as db:
            return _as_options(db.query(models.Course).filter(models.Course.exam_id == exam_id).all())

    def list_subjects(self, course_id: str) -> List[Dict[str, str]]:
        with self.session_factory() as db:
            return _as_options(db.query(models.Subject).filter(models.Subject.course_id == course_id).all())

    def list_units(self, subject_id: str) -> List[Dict[str, str]]:
        with self.session_factory() as db:
            return _as_options(db.query(models.Unit).filter(models.Unit.subject_id == subject_id).all())

    def list_chapters(self, unit_id: str) -> List[Dict[str, str]]:
        with self.session_factory() as db:
            return _as_options(db.query(models.Chapter).filter(models.Chapter.unit_id == unit_id).all())

    def list_topics(self, chapter_id: str) -> List[Dict[str, str]]:
        with self.session_factory() as db:
            return _as_options(db.query(models.Topic).filter(models.Topic.chapter_id == chapter_id).all())

    def list_parts(self, course_id: str) -> List[Dict[str, str]]:
        with self.session_factory() as db:
            return _as_options(db.query(models.Part).filter(models.Part.course_id == course_id).all())

    def list_slots(self, course_id: str) -> List[Dict[str, str]]:
        with self.session_factory() as db:
            return _as_options(db.query(models.Slot).filter(models.Slot.course_id == course_id).all())

    def load_topic_weights(self, course_id: str) -> List[TopicWeight]:
        """Every topic under a course, walking subject → unit → chapter → topic"""
        with self.session_factory() as db:
            rows = (
                db.query(models.Topic)
                .join(models.Chapter, models.Topic.chapter_id == models.Chapter.id)
                .join(models.Unit, models.Chapter.unit_id == models.Unit.id)
                .join(models.Subject, models.Unit.subject_id == models.Subject.id)
                .filter(models.Subject.course_id == course_id)
                .order_by(models.Subject.name, models.Unit.name, models.Chapter.name, models.Topic.name)
                .all()
            )
            return [TopicWeight(id=row.id, name=row.name, weightage=row.weightage or 0) for row in rows]

    def context_for_topic(self, topic_id: str) -> Optional[QuestionContext]:
        """Names of the exam, course, subject and topic above a topic, or None if the chain is broken"""
        with self.session_factory() as db:
            row = (
                db.query(models.Topic.name, models.Subject.name, models.Course.name, models.Exam.name)
                .join(models.Chapter, models.Topic.chapter_id == models.Chapter.id)
                .join(models.Unit, models.Chapter.unit_id == models.Unit.id)
                .join(models.Subject, models.Unit.subject_id == models.Subject.id)
                .join(models.Course, models.Subject.course_id == models.Course.id)
                .join(models.Exam, models.Course.exam_id == models.Exam.id)
                .filter(models.Topic.id == topic_id)
                .first()
            )
        if row is None:
            return None
        topic_name, subject_name, course_name, exam_name = row
        return QuestionContext(
            exam_name=exam_name,
            course_name=course_name,
            subject_name=subject_name,
            topic_name=topic_name,
        )

    # ==========================================
    # QUESTIONS
    # ==========================================

    def existing_statements(self, topic_id: str) -> List[str]:
        with self.session_factory() as db:
            rows = (
                db.query(models.TopicWiseQuestion.question_statement)
                .filter(models.TopicWiseQuestion.topic_id == topic_id)
                .all()
            )
            return [statement for (statement,) in rows]

    def generated_statements(self, topic_id: str) -> List[str]:
        """Statements already generated for a topic, oldest first"""
        with self.session_factory() as db:
            rows = (
                db.query(models.NewQuestion.question_statement)
                .filter(models.NewQuestion.topic_id == topic_id)
                .order_by(models.NewQuestion.created_at)
                .all()
            )
            return [statement for (statement,) in rows]

    def save_question(self, question: QuestionWithMetadata) -> str:
        with self.session_factory() as db:
            row = models.NewQuestion(
                topic_id=question.topic_id,
                question_statement=question.question_statement,
                options=json.dumps(question.options) if question.options else None,
                answer=question.answer,
                solution=question.solution,
                question_type=question.question_type.value,
                part_id=question.part_id or None,
                slot_id=question.slot_id or None,
                correct_marks=question.correct_marks,
                incorrect_marks=question.incorrect_marks,
                skipped_marks=question.skipped_marks,
                time_minutes=question.time_minutes,
            )
            db.add(row)
            db.commit()
            return row.id

    def list_unsolved_pyqs(self) -> List[PendingPYQ]:
        """Previous year questions with neither an answer nor a solution"""
        with self.session_factory() as db:
            rows = (
                db.query(models.TopicWiseQuestion)
                .filter(models.TopicWiseQuestion.answer.is_(None))
                .filter(models.TopicWiseQuestion.solution.is_(None))
                .all()
            )
            return [
                PendingPYQ(
                    id=row.id,
                    topic_id=row.topic_id,
                    question_statement=row.question_statement,
                    question_type=row.question_type,
                    options_json=row.options,
                )
                for row in rows
            ]

    def save_pyq_solution(self, pyq_id: str, result: PYQSolutionResult) -> bool:
        with self.session_factory() as db:
            updated = (
                db.query(models.TopicWiseQuestion)
                .filter(models.TopicWiseQuestion.id == pyq_id)
                .update({"answer": result.answer, "solution": result.solution})
            )
            db.commit()
            return updated > 0
