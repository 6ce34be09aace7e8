"""Prompt builders for question generation and PYQ solutions"""

from typing import List, Optional, Sequence

from config.settings import EXISTING_QUESTIONS_IN_PROMPT, GENERATED_QUESTIONS_IN_PROMPT
from models.schemas import QuestionContext, QuestionType

TYPE_INSTRUCTIONS = {
    QuestionType.MCQ: "Generate a Multiple Choice Question with 4 options where ONLY ONE option is correct.",
    QuestionType.MSQ: (
        "Generate a Multiple Select Question with 4 options where ONE OR MORE options can be correct "
        "(but at least one must be correct)."
    ),
    QuestionType.NAT: "Generate a Numerical Answer Type question where the answer is a specific number (integer or decimal).",
    QuestionType.SUB: "Generate a Subjective question that requires a detailed descriptive answer.",
}

VALIDATION_RULES = {
    QuestionType.MCQ: "CRITICAL: Ensure that EXACTLY ONE option is correct. Double-check your answer.",
    QuestionType.MSQ: (
        "CRITICAL: Ensure that AT LEAST ONE option is correct. "
        "Multiple correct options are allowed and encouraged when appropriate."
    ),
    QuestionType.NAT: "CRITICAL: Provide an exact numerical answer. No ranges or approximations.",
    QuestionType.SUB: "CRITICAL: Provide a comprehensive answer with proper explanation.",
}

ANSWER_HINTS = {
    QuestionType.MCQ: 'single letter like "A"',
    QuestionType.MSQ: 'letters separated by commas like "A,C" or single letter like "B"',
    QuestionType.NAT: 'exact number like "42" or "3.14"',
    QuestionType.SUB: "brief but complete answer",
}

CHECKLIST_ITEMS = {
    QuestionType.MCQ: "Exactly one option is correct",
    QuestionType.MSQ: "At least one option is correct",
    QuestionType.NAT: "Answer is precise",
    QuestionType.SUB: "Answer is precise",
}

PYQ_ANSWER_FORMATS = {
    QuestionType.MCQ: "Provide the correct option letter (A, B, C, or D)",
    QuestionType.MSQ: 'Provide the correct option letters separated by commas (e.g., "A,C" or just "B" if only one is correct)',
    QuestionType.NAT: "Provide the exact numerical answer",
    QuestionType.SUB: "Provide a comprehensive answer",
}

OPTIONS_TEMPLATE = """OPTIONS:
A) [option A - make it clear and complete]
B) [option B - make it clear and complete]
C) [option C - make it clear and complete]
D) [option D - make it clear and complete]"""


def _inspiration_block(existing_questions: Sequence[str]) -> str:
    if not existing_questions:
        return ""
    excerpts = "\n\n".join(list(existing_questions)[:EXISTING_QUESTIONS_IN_PROMPT])
    return (
        "Here are previous year questions on this topic for inspiration "
        "(DO NOT copy directly, use them to understand the concept and difficulty level):\n"
        f"{excerpts}"
    )


def _avoid_block(already_generated: Sequence[str]) -> str:
    if not already_generated:
        return ""
    excerpts = "\n\n".join(list(already_generated)[-GENERATED_QUESTIONS_IN_PROMPT:])
    return (
        "These questions have already been generated for this topic, create something FRESH and UNIQUE:\n"
        f"{excerpts}"
    )


def build_question_prompt(
    question_type: QuestionType,
    existing_questions: Sequence[str],
    already_generated: Sequence[str],
    context: QuestionContext,
) -> str:
    """Build the generation prompt for one new question"""
    options_template = OPTIONS_TEMPLATE if question_type.has_options else ""

    return f"""You are an expert question creator for {context.exam_name} - {context.course_name} exam.

EXAM CONTEXT:
- Exam: {context.exam_name}
- Course: {context.course_name}
- Subject: {context.subject_name}
- Topic: {context.topic_name}

IMPORTANT: Create a question that matches the difficulty level and style typical for {context.exam_name} {context.course_name} exam.

{TYPE_INSTRUCTIONS[question_type]}

{VALIDATION_RULES[question_type]}

{_inspiration_block(existing_questions)}

{_avoid_block(already_generated)}

FORMATTING INSTRUCTIONS:
Format your response EXACTLY as follows (do not include any other text):

QUESTION: [write the clear, unambiguous question statement here]
{options_template}
ANSWER: [{ANSWER_HINTS[question_type]}]
SOLUTION: [write detailed step-by-step solution explaining how to arrive at the answer]

QUALITY CHECKLIST:
- Question is clear and unambiguous
- {CHECKLIST_ITEMS[question_type]}
- Solution is detailed and easy to follow
- Difficulty matches {context.exam_name} standard"""


def format_options(options: Optional[List[str]]) -> str:
    if not options:
        return ""
    lines = [f"{chr(ord('A') + idx)}) {option}" for idx, option in enumerate(options)]
    return "\n\nOPTIONS:\n" + "\n".join(lines)


def build_pyq_solution_prompt(
    question_statement: str,
    question_type: QuestionType,
    options: Optional[List[str]],
    context: QuestionContext,
) -> str:
    """Build the prompt asking for the answer and solution of an existing question"""
    critical = ""
    if question_type == QuestionType.MCQ:
        critical = "CRITICAL: Choose EXACTLY ONE correct option."
    elif question_type == QuestionType.MSQ:
        critical = "CRITICAL: Choose AT LEAST ONE correct option (can be multiple)."

    return f"""You are solving a {context.exam_name} - {context.course_name} exam question.

Subject: {context.subject_name}
Topic: {context.topic_name}

QUESTION:
{question_statement}{format_options(options)}

Your task:
1. {PYQ_ANSWER_FORMATS[question_type]}
2. Provide a detailed step-by-step solution

Format your response EXACTLY as follows:
ANSWER: [your answer here]
SOLUTION: [detailed step-by-step solution]

{critical}""".rstrip()
