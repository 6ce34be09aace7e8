"""Pydantic models for data validation"""

import json
from enum import Enum
from pydantic import BaseModel, ConfigDict
from typing import List, Optional


class QuestionType(str, Enum):
    """Question type tags"""
    MCQ = "MCQ"  # single correct
    MSQ = "MSQ"  # one or more correct
    NAT = "NAT"  # numerical answer
    SUB = "SUB"  # subjective

    @property
    def has_options(self) -> bool:
        return self in (QuestionType.MCQ, QuestionType.MSQ)


class TopicWeight(BaseModel):
    """A topic and its share of exam emphasis"""
    id: str
    name: str
    weightage: float = 0


class TopicDistribution(BaseModel):
    """Number of questions planned for one topic"""
    model_config = ConfigDict(frozen=True)

    topic_id: str
    topic_name: str
    weightage: float
    questions_to_generate: int


class QuestionContext(BaseModel):
    """Exam hierarchy names injected into every prompt"""
    model_config = ConfigDict(frozen=True)

    exam_name: str
    course_name: str
    subject_name: str
    topic_name: str


class GeneratedQuestion(BaseModel):
    """Question parsed from model output"""
    question_statement: str
    options: Optional[List[str]] = None
    answer: str
    solution: str
    question_type: QuestionType


class PYQSolutionResult(BaseModel):
    """Answer and solution for a previous year question"""
    answer: str
    solution: str


class QuestionMetadata(BaseModel):
    """Tagging and marking applied to every question saved from a run"""
    part_id: Optional[str] = None
    slot_id: Optional[str] = None
    correct_marks: float = 4
    incorrect_marks: float = -1
    skipped_marks: float = 0
    time_minutes: float = 2


class QuestionWithMetadata(GeneratedQuestion):
    """Generated question ready to be written to the question bank"""
    topic_id: str
    part_id: Optional[str] = None
    slot_id: Optional[str] = None
    correct_marks: float = 4
    incorrect_marks: float = -1
    skipped_marks: float = 0
    time_minutes: float = 2

    @classmethod
    def from_generated(cls, question: GeneratedQuestion, topic_id: str, metadata: QuestionMetadata) -> "QuestionWithMetadata":
        return cls(**question.model_dump(), topic_id=topic_id, **metadata.model_dump())


class PendingPYQ(BaseModel):
    """Previous year question still missing an answer and solution"""
    id: str
    topic_id: str
    question_statement: str
    question_type: str
    options_json: Optional[str] = None  # JSON list as stored

    def decoded_options(self) -> Optional[List[str]]:
        """Raises ValueError when the stored options are not a JSON list"""
        if not self.options_json:
            return None
        options = json.loads(self.options_json)
        if not isinstance(options, list):
            raise ValueError(f"options for PYQ {self.id} are not a list")
        return [str(option) for option in options]


class RunReport(BaseModel):
    """Outcome of an auto generation or PYQ solution run"""
    planned: int = 0
    completed: int = 0
    failed: int = 0
    skipped: int = 0
    paused: bool = False
