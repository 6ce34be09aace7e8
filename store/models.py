"""
SQLAlchemy models for the question bank
Exam → Course → Subject → Unit → Chapter → Topic hierarchy,
historical questions (read source) and generated questions (write target)
"""

import uuid

from sqlalchemy import Column, DateTime, Float, ForeignKey, String, Text
from sqlalchemy.sql import func

from store.database import Base


def _uuid() -> str:
    return str(uuid.uuid4())


class Exam(Base):
    __tablename__ = "exams"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(255), nullable=False)

    def __repr__(self):
        return f"<Exam(id={self.id}, name='{self.name}')>"


class Course(Base):
    __tablename__ = "courses"

    id = Column(String(36), primary_key=True, default=_uuid)
    exam_id = Column(String(36), ForeignKey("exams.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)


class Subject(Base):
    __tablename__ = "subjects"

    id = Column(String(36), primary_key=True, default=_uuid)
    course_id = Column(String(36), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)


class Unit(Base):
    __tablename__ = "units"

    id = Column(String(36), primary_key=True, default=_uuid)
    subject_id = Column(String(36), ForeignKey("subjects.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)


class Chapter(Base):
    __tablename__ = "chapters"

    id = Column(String(36), primary_key=True, default=_uuid)
    unit_id = Column(String(36), ForeignKey("units.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)


class Topic(Base):
    """Leaf of the syllabus hierarchy; weightage drives the auto distribution"""
    __tablename__ = "topics"

    id = Column(String(36), primary_key=True, default=_uuid)
    chapter_id = Column(String(36), ForeignKey("chapters.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    weightage = Column(Float, nullable=True)

    def __repr__(self):
        return f"<Topic(id={self.id}, name='{self.name}', weightage={self.weightage})>"


class Part(Base):
    __tablename__ = "parts"

    id = Column(String(36), primary_key=True, default=_uuid)
    course_id = Column(String(36), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)


class Slot(Base):
    __tablename__ = "slots"

    id = Column(String(36), primary_key=True, default=_uuid)
    course_id = Column(String(36), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)


class TopicWiseQuestion(Base):
    """
    Previous year question filed under a topic.
    options is a JSON-encoded list; answer and solution stay NULL until backfilled.
    """
    __tablename__ = "questions_topic_wise"

    id = Column(String(36), primary_key=True, default=_uuid)
    topic_id = Column(String(36), ForeignKey("topics.id", ondelete="CASCADE"), nullable=False, index=True)
    question_statement = Column(Text, nullable=False)
    question_type = Column(String(8), nullable=False)
    options = Column(Text, nullable=True)
    answer = Column(Text, nullable=True)
    solution = Column(Text, nullable=True)


class NewQuestion(Base):
    """Generated question with its part/slot tags and marking scheme"""
    __tablename__ = "new_questions"

    id = Column(String(36), primary_key=True, default=_uuid)
    topic_id = Column(String(36), ForeignKey("topics.id", ondelete="CASCADE"), nullable=False, index=True)
    question_statement = Column(Text, nullable=False)
    options = Column(Text, nullable=True)
    answer = Column(Text, nullable=False)
    solution = Column(Text, nullable=False)
    question_type = Column(String(8), nullable=False)
    part_id = Column(String(36), ForeignKey("parts.id", ondelete="SET NULL"), nullable=True)
    slot_id = Column(String(36), ForeignKey("slots.id", ondelete="SET NULL"), nullable=True)
    correct_marks = Column(Float, nullable=False, default=4)
    incorrect_marks = Column(Float, nullable=False, default=-1)
    skipped_marks = Column(Float, nullable=False, default=0)
    time_minutes = Column(Float, nullable=False, default=2)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<NewQuestion(id={self.id}, topic_id={self.topic_id}, type={self.question_type})>"
