"""
Generation settings.
Reads configuration from environment variables (.env file).
"""

import os

DEFAULT_QUIZ_SIZE = 5
DEFAULT_PORT = 5000


def get_api_key() -> str | None:
    """Gemini API key, or None when not configured."""
    key = os.environ.get("GEMINI_API_KEY", "").strip()
    return key or None


def is_gemini_configured() -> bool:
    """Check if a Gemini API key is available."""
    return get_api_key() is not None


def get_default_quiz_size() -> int:
    """
    Default number of questions per quiz.

    Environment variables:
        QUIZ_DEFAULT_SIZE - positive integer (falls back to 5 if unset or invalid)
    """
    raw = os.environ.get("QUIZ_DEFAULT_SIZE", "").strip()
    try:
        size = int(raw)
    except ValueError:
        return DEFAULT_QUIZ_SIZE
    return size if size > 0 else DEFAULT_QUIZ_SIZE


def get_port() -> int:
    try:
        return int(os.environ.get("PORT", DEFAULT_PORT))
    except ValueError:
        return DEFAULT_PORT
