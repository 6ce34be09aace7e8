"""
Streamlit form for the question bank generator

Manual mode generates one question for a selected topic, auto mode spreads a
question count across every topic of a course by weightage, and PYQ mode
fills in answers and solutions for previous year questions.

Run with: streamlit run ui/app.py
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.append(str(Path(__file__).parent.parent))

import streamlit as st
from typing import Dict, List, Optional

from config.settings import (
    DEFAULT_CORRECT_MARKS,
    DEFAULT_INCORRECT_MARKS,
    DEFAULT_SKIPPED_MARKS,
    DEFAULT_TIME_MINUTES,
    DEFAULT_TOTAL_QUESTIONS,
    GEMINI_API_KEYS,
)
from generation.credentials import CredentialRotator
from generation.exceptions import GenerationError
from generation.gemini_client import GeminiClient
from generation.pyq_solver import PYQSolver
from generation.question_generator import QuestionGenerator
from generation.weightage import total_from_distribution
from models.schemas import QuestionMetadata, QuestionType, QuestionWithMetadata
from orchestration.runner import GenerationRunner, RunnerError
from store.database import make_session_factory
from store.repository import QuestionBankRepository

import logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Page config
st.set_page_config(
    page_title="AI Question Bank Generator",
    page_icon="🎓",
    layout="wide"
)

MODES = {
    "manual": "Manual Mode",
    "auto": "Auto Mode",
    "pyq": "Generate PYQ Solutions",
}


def initialize_system():
    """Build the repository, generation clients and runner once per session"""
    if "system_initialized" not in st.session_state:
        with st.spinner("🔄 Connecting to question bank..."):
            try:
                rotator = CredentialRotator(GEMINI_API_KEYS)
                client = GeminiClient(rotator)
                repository = QuestionBankRepository(make_session_factory())

                st.session_state["repository"] = repository
                st.session_state["runner"] = GenerationRunner(
                    repository,
                    QuestionGenerator(client),
                    PYQSolver(client),
                )
                st.session_state["key_count"] = len(rotator)
                st.session_state["system_initialized"] = True

                logger.info("✓ System initialized successfully")

            except GenerationError as e:
                st.error(f"❌ {e}")
                st.stop()


def select_record(label: str, records: List[Dict[str, str]], key: str, disabled: bool = False, optional: bool = False) -> Optional[str]:
    """Selectbox over {id, name} records; returns the chosen id"""
    ids = [record["id"] for record in records]
    names = {record["id"]: record["name"] for record in records}
    if optional:
        ids = [None] + ids
        names[None] = "None"
    return st.selectbox(
        label,
        ids,
        index=None if not optional else 0,
        format_func=lambda record_id: names.get(record_id, ""),
        key=key,
        disabled=disabled or not records,
        placeholder=f"Select {label.lower()}",
    )


def marking_inputs() -> QuestionMetadata:
    col1, col2, col3, col4 = st.columns(4)
    correct = col1.number_input("Correct Marks", value=DEFAULT_CORRECT_MARKS, step=0.1, key="correct_marks")
    incorrect = col2.number_input("Incorrect Marks", value=DEFAULT_INCORRECT_MARKS, step=0.1, key="incorrect_marks")
    skipped = col3.number_input("Skipped Marks", value=DEFAULT_SKIPPED_MARKS, step=0.1, key="skipped_marks")
    minutes = col4.number_input("Time (minutes)", value=DEFAULT_TIME_MINUTES, step=0.1, key="time_minutes")
    return QuestionMetadata(
        part_id=st.session_state.get("part_id"),
        slot_id=st.session_state.get("slot_id"),
        correct_marks=correct,
        incorrect_marks=incorrect,
        skipped_marks=skipped,
        time_minutes=minutes,
    )


def display_question(question: QuestionWithMetadata, number: int):
    with st.container():
        st.markdown(f"### Question {number} ({question.question_type.value})")
        st.markdown(question.question_statement)

        if question.options:
            for idx, option in enumerate(question.options):
                st.markdown(f"**{chr(ord('A') + idx)}.** {option}")

        st.markdown(f"**Answer:** {question.answer}")
        with st.expander("📖 Solution"):
            st.markdown(question.solution)

        st.caption(
            f"Marks: +{question.correct_marks} / {question.incorrect_marks} / skipped {question.skipped_marks} "
            f"| Time: {question.time_minutes} min"
        )
        st.markdown("---")


def manual_mode(runner: GenerationRunner, repository: QuestionBankRepository, course_id: Optional[str], question_type: Optional[str], metadata: QuestionMetadata):
    st.header("📝 Manual Generation")

    col1, col2 = st.columns(2)
    with col1:
        subject_id = select_record("Subject", repository.list_subjects(course_id) if course_id else [], "subject_id", disabled=not course_id)
        unit_id = select_record("Unit", repository.list_units(subject_id) if subject_id else [], "unit_id", disabled=not subject_id)
    with col2:
        chapter_id = select_record("Chapter", repository.list_chapters(unit_id) if unit_id else [], "chapter_id", disabled=not unit_id)
        topic_id = select_record("Topic", repository.list_topics(chapter_id) if chapter_id else [], "topic_id", disabled=not chapter_id)

    if st.button("🚀 Generate Question", type="primary", use_container_width=True, disabled=not (topic_id and question_type)):
        with st.spinner("Generating question..."):
            try:
                question = runner.generate_manual_question(topic_id, question_type, metadata)
                st.session_state["generated_questions"] = [question]
            except (RunnerError, GenerationError, ValueError) as e:
                st.error(f"❌ {e}")

    questions = st.session_state.get("generated_questions", [])
    if questions:
        st.subheader("Preview")
        for i, question in enumerate(questions, 1):
            display_question(question, i)

        if st.button("💾 Save to Question Bank", use_container_width=True):
            saved = runner.save_questions(questions)
            st.session_state["new_questions_count"] = st.session_state.get("new_questions_count", 0) + saved
            st.session_state["generated_questions"] = []
            st.success("✅ Questions saved successfully!")


def auto_mode(runner: GenerationRunner, course_id: Optional[str], question_type: Optional[str], metadata: QuestionMetadata):
    st.header("⚙️ Auto Generation")

    col1, col2 = st.columns([2, 1])
    total_questions = col1.number_input("Total questions to generate", min_value=0, value=DEFAULT_TOTAL_QUESTIONS, step=1)
    col2.markdown(" ")
    if col2.button("📊 Calculate Distribution", disabled=not course_id, use_container_width=True):
        try:
            st.session_state["distribution"] = runner.plan_distribution(course_id, int(total_questions))
        except RunnerError as e:
            st.error(f"❌ {e}")

    distribution = st.session_state.get("distribution", [])
    if distribution:
        with st.expander("📚 Topic Distribution", expanded=True):
            st.markdown("| # | Topic | Weightage | Questions |")
            st.markdown("|---|-------|-----------|-----------|")
            for i, plan in enumerate(distribution, 1):
                st.markdown(f"| {i} | {plan.topic_name} | {plan.weightage} | {plan.questions_to_generate} |")
            st.info(f"📊 Total: {total_from_distribution(distribution)} questions")

    col1, col2 = st.columns(2)
    start = col1.button("▶️ Start Auto Generation", type="primary", use_container_width=True, disabled=not distribution)
    if col2.button("⏸️ Pause", use_container_width=True):
        st.session_state["paused"] = True
        st.warning("Generation will pause after the current question")

    if start:
        st.session_state["paused"] = False
        progress_bar = st.progress(0)
        status_text = st.empty()

        def on_progress(report, question):
            progress_bar.progress(min(report.completed / max(report.planned, 1), 1.0))
            status_text.text(f"Generated {report.completed}/{report.planned}")

        try:
            report = runner.run_auto_generation(
                distribution,
                question_type or QuestionType.MCQ.value,
                metadata,
                should_pause=lambda: st.session_state.get("paused", False),
                on_progress=on_progress,
            )
        except (RunnerError, ValueError) as e:
            st.error(f"❌ {e}")
            return

        st.session_state["new_questions_count"] = st.session_state.get("new_questions_count", 0) + report.completed
        col1, col2, col3 = st.columns(3)
        col1.metric("Saved", report.completed)
        col2.metric("Failed", report.failed)
        col3.metric("Skipped", report.skipped)
        if report.paused:
            st.warning("⏸️ Generation paused")
        else:
            st.success(f"🎉 Generated {report.completed} questions!")


def pyq_mode(runner: GenerationRunner, course_id: Optional[str]):
    st.header("📖 PYQ Solutions")
    st.info("Generates answers and solutions for previous year questions that have neither.")

    if st.button("🚀 Generate PYQ Solutions", type="primary", use_container_width=True, disabled=not course_id):
        st.session_state["paused"] = False
        status_text = st.empty()

        def on_progress(report, _):
            status_text.text(f"Solved {report.completed}/{report.planned}")

        try:
            report = runner.run_pyq_solutions(
                should_pause=lambda: st.session_state.get("paused", False),
                on_progress=on_progress,
            )
        except RunnerError as e:
            st.error(f"❌ {e}")
            return

        st.session_state["pyq_solutions_count"] = st.session_state.get("pyq_solutions_count", 0) + report.completed
        st.success(f"✅ Generated {report.completed} PYQ solutions ({report.failed} failed)")


def main():
    st.title("🎓 AI Question Bank Generator")

    initialize_system()

    repository = st.session_state["repository"]
    runner = st.session_state["runner"]

    # Sidebar: System stats
    with st.sidebar:
        st.header("📊 System Status")
        st.metric("API Keys", st.session_state["key_count"])
        st.metric("New Questions", st.session_state.get("new_questions_count", 0))
        st.metric("PYQ Solutions", st.session_state.get("pyq_solutions_count", 0))

    mode = st.radio("Mode", list(MODES), format_func=MODES.get, horizontal=True)

    col1, col2 = st.columns(2)
    with col1:
        exam_id = select_record("Exam", repository.list_exams(), "exam_id")
    with col2:
        course_id = select_record("Course", repository.list_courses(exam_id) if exam_id else [], "course_id", disabled=not exam_id)

    question_type = None
    if mode != "pyq":
        question_type = st.selectbox(
            "Question Type",
            [qt.value for qt in QuestionType],
            index=None,
            placeholder="Select question type",
        )

    col1, col2 = st.columns(2)
    with col1:
        select_record("Part", repository.list_parts(course_id) if course_id else [], "part_id", disabled=not course_id, optional=True)
    with col2:
        select_record("Slot", repository.list_slots(course_id) if course_id else [], "slot_id", disabled=not course_id, optional=True)

    metadata = QuestionMetadata(part_id=st.session_state.get("part_id"), slot_id=st.session_state.get("slot_id"))
    if mode != "pyq":
        st.subheader("Marking Scheme")
        metadata = marking_inputs()

    st.markdown("---")

    if mode == "manual":
        manual_mode(runner, repository, course_id, question_type, metadata)
    elif mode == "auto":
        auto_mode(runner, course_id, question_type, metadata)
    else:
        pyq_mode(runner, course_id)


if __name__ == "__main__":
    main()
