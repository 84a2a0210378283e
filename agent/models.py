import os

DEFAULT_MODEL = "gemini-2.0-flash"


def select_model() -> str:
    """
    Select the Gemini model used for quiz generation.
    QUIZ_MODEL overrides the default; gemini-2.0-flash is fast and free tier friendly.
    """
    return os.environ.get("QUIZ_MODEL", "").strip() or DEFAULT_MODEL
