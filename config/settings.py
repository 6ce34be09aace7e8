"""Configuration settings for the question bank generator"""

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()


def _optional_int(name: str):
    value = os.getenv(name, "").strip()
    return int(value) if value else None


def _optional_float(name: str):
    value = os.getenv(name, "").strip()
    return float(value) if value else None


# Paths
BASE_DIR = Path(__file__).parent.parent

# API Keys
# Comma-separated pool, rotated on every call. An empty pool is reported
# when the credential rotator is built at startup.
GEMINI_API_KEYS = [key.strip() for key in os.getenv("GEMINI_API_KEYS", "").split(",") if key.strip()]

# Model Configuration
GEMINI_API_URL = os.getenv(
    "GEMINI_API_URL",
    "https://generativelanguage.googleapis.com/v1beta/models/gemini-pro:generateContent",
)
TEMPERATURE = float(os.getenv("TEMPERATURE", "0.9"))
TOP_K = int(os.getenv("TOP_K", "40"))
TOP_P = float(os.getenv("TOP_P", "0.95"))
MAX_OUTPUT_TOKENS = int(os.getenv("MAX_OUTPUT_TOKENS", "2048"))

# Seconds before an endpoint call is abandoned. Unset means wait indefinitely.
GEMINI_TIMEOUT = _optional_float("GEMINI_TIMEOUT")

# Regeneration cap when the model output fails validation.
# Unset means regenerate until a valid question comes back.
MAX_VALIDATION_ATTEMPTS = _optional_int("MAX_VALIDATION_ATTEMPTS")

# Prompt context
EXISTING_QUESTIONS_IN_PROMPT = int(os.getenv("EXISTING_QUESTIONS_IN_PROMPT", "5"))
GENERATED_QUESTIONS_IN_PROMPT = int(os.getenv("GENERATED_QUESTIONS_IN_PROMPT", "3"))

# Database
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR / 'question_bank.db'}")

# Marking defaults shown in the form
DEFAULT_CORRECT_MARKS = float(os.getenv("DEFAULT_CORRECT_MARKS", "4"))
DEFAULT_INCORRECT_MARKS = float(os.getenv("DEFAULT_INCORRECT_MARKS", "-1"))
DEFAULT_SKIPPED_MARKS = float(os.getenv("DEFAULT_SKIPPED_MARKS", "0"))
DEFAULT_TIME_MINUTES = float(os.getenv("DEFAULT_TIME_MINUTES", "2"))
DEFAULT_TOTAL_QUESTIONS = int(os.getenv("DEFAULT_TOTAL_QUESTIONS", "100"))
