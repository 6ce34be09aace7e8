"""
Shared fixtures: scripted generation endpoint and an in-memory question bank
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from models.schemas import QuestionContext
from store import models
from store.database import init_db, make_session_factory
from store.repository import QuestionBankRepository

VALID_MCQ_TEXT = """QUESTION: A body starts from rest and accelerates uniformly at 2 m/s^2. What is its speed after 5 s?
OPTIONS:
A) 5 m/s
B) 10 m/s
C) 15 m/s
D) 20 m/s
ANSWER: B
SOLUTION: Using v = u + at with u = 0, a = 2 m/s^2 and t = 5 s gives v = 10 m/s."""

VALID_MSQ_TEXT = """QUESTION: Which of the following quantities are vectors in classical mechanics?
OPTIONS:
A) Velocity
B) Speed
C) Force
D) Work
ANSWER: A,C
SOLUTION: Velocity and force have both magnitude and direction; speed and work are scalars."""

VALID_NAT_TEXT = """QUESTION: A 2 kg mass moves at 3 m/s. What is its kinetic energy in joules?
ANSWER: 9
SOLUTION: KE = 1/2 m v^2 = 0.5 * 2 * 9 = 9 J, so the answer is 9."""

VALID_SUB_TEXT = """QUESTION: Explain Newton's third law of motion with an everyday example.
ANSWER: Every action has an equal and opposite reaction.
SOLUTION: When you push against a wall, the wall pushes back on you with an equal force in the opposite direction."""


class ScriptedClient:
    """Stands in for GeminiClient, returning queued responses in order"""

    def __init__(self, responses):
        self.responses = list(responses)
        self.prompts = []

    def generate_text(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.responses:
            raise AssertionError("ScriptedClient ran out of responses")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def context():
    return QuestionContext(
        exam_name="JEE",
        course_name="JEE Main",
        subject_name="Physics",
        topic_name="Kinematics",
    )


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
def repository(session_factory):
    return QuestionBankRepository(session_factory)


@pytest.fixture
def bank(session_factory):
    """
    JEE > JEE Main > Physics > Mechanics > Motion with three weighted topics,
    one PYQ per topic (the Kinematics one unsolved), a part and a slot.
    Returns a dict of ids.
    """
    with session_factory() as db:
        exam = models.Exam(id="exam-1", name="JEE")
        course = models.Course(id="course-1", exam_id="exam-1", name="JEE Main")
        subject = models.Subject(id="subject-1", course_id="course-1", name="Physics")
        unit = models.Unit(id="unit-1", subject_id="subject-1", name="Mechanics")
        chapter = models.Chapter(id="chapter-1", unit_id="unit-1", name="Motion")
        db.add_all([exam, course, subject, unit, chapter])
        db.add_all([
            models.Topic(id="topic-a", chapter_id="chapter-1", name="Kinematics", weightage=50),
            models.Topic(id="topic-b", chapter_id="chapter-1", name="Laws of Motion", weightage=30),
            models.Topic(id="topic-c", chapter_id="chapter-1", name="Work and Energy", weightage=None),
        ])
        db.add_all([
            models.Part(id="part-1", course_id="course-1", name="Section A"),
            models.Slot(id="slot-1", course_id="course-1", name="Shift 1"),
        ])
        db.add_all([
            models.TopicWiseQuestion(
                id="pyq-1",
                topic_id="topic-a",
                question_statement="A car covers 100 m in 10 s. Find its average speed.",
                question_type="NAT",
            ),
            models.TopicWiseQuestion(
                id="pyq-2",
                topic_id="topic-b",
                question_statement="State Newton's first law.",
                question_type="SUB",
                answer="An object stays at rest or in uniform motion unless acted on.",
                solution="This is the law of inertia.",
            ),
        ])
        db.commit()

    return {
        "exam": "exam-1",
        "course": "course-1",
        "subject": "subject-1",
        "unit": "unit-1",
        "chapter": "chapter-1",
        "topics": ["topic-a", "topic-b", "topic-c"],
        "part": "part-1",
        "slot": "slot-1",
    }
