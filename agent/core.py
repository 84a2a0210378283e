import json
import re
import time

from google import genai
from google.genai import types

from agent.config import get_api_key, get_default_quiz_size
from agent.models import select_model
from agent.prompts import build_grading_prompt, build_quiz_prompt, build_title_prompt
from knowledge.quiz_templates import ANSWER_TYPES, QuizTemplate

MIN_CONTENT_CHARS = 100
MAX_QUIZ_SIZE = 50
DIFFICULTIES = ("easy", "medium", "hard")

_REQUIRED_QUESTION_FIELDS = ("questionText", "answerType", "correctAnswer")
_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


class QuizGenerationError(Exception):
    """Raised when a quiz cannot be generated. `status` maps to an HTTP code."""

    def __init__(self, message: str, status: int = 500):
        super().__init__(message)
        self.status = status


class QuizGenerator:
    def __init__(self, client=None, model: str = None):
        self._client = client
        self.model = model or select_model()

    @property
    def client(self):
        """Gemini client, created on first use so the app can start without a key."""
        if self._client is None:
            api_key = get_api_key()
            if not api_key:
                raise QuizGenerationError("GEMINI_API_KEY is not configured", status=503)
            self._client = genai.Client(api_key=api_key)
        return self._client

    def generate(self, template: QuizTemplate, content: str, quiz_size: int = None,
                 difficulty: str = "medium", source_name: str = "document") -> dict:
        """Generate a quiz for `content` shaped by `template`.

        Returns a dict with title, templateId, difficulty and the parsed questions.
        Raises QuizGenerationError for invalid input or unusable model output.
        """
        if quiz_size is None:
            quiz_size = get_default_quiz_size()
        _validate_request(content, quiz_size, difficulty)

        start = time.time()
        print(f"  Using model: {self.model}")
        print(f"  Template: {template.id} | {quiz_size} questions | {difficulty}")

        title = self._complete(build_title_prompt(content)).strip().strip('"')
        if not title:
            title = f"Quiz on {source_name}"

        raw = self._complete(build_quiz_prompt(template, content, quiz_size, difficulty), as_json=True)
        questions = parse_questions(raw)
        print(f"  Generated {len(questions)} question(s) in {time.time() - start:.1f}s")

        return {
            "title": title,
            "templateId": template.id,
            "difficulty": difficulty,
            "questionCount": len(questions),
            "questions": questions,
        }

    def grade(self, questions: list, answers: list) -> dict:
        """Grade a submission.

        Args:
            questions: Question dicts as returned by `generate`. An optional
                "points" key weights a question (default 1).
            answers: The user's answers, one per question in the same order.
                None or "" counts as unanswered.

        Multiple-choice and true/false answers must match the correct answer
        exactly. Short answers are judged by the model.
        """
        _validate_submission(questions, answers)

        total_points = 0
        earned_points = 0
        responses = []
        for question, user_answer in zip(questions, answers):
            points = question.get("points", 1)
            total_points += points

            is_correct = False
            if user_answer not in (None, ""):
                if question["answerType"] == "short_answer":
                    is_correct = self._judge_short_answer(question, user_answer)
                else:
                    is_correct = user_answer == question["correctAnswer"]
            if is_correct:
                earned_points += points

            responses.append({
                "questionText": question["questionText"],
                "answerType": question["answerType"],
                "userAnswer": user_answer,
                "correctAnswer": question["correctAnswer"],
                "isCorrect": is_correct,
                "explanation": question.get("explanation"),
            })

        score = earned_points / total_points * 100 if total_points > 0 else 0
        print(f"  Graded {len(responses)} answer(s): {earned_points}/{total_points} points")

        return {
            "score": score,
            "totalPoints": total_points,
            "earnedPoints": earned_points,
            "feedback": score_feedback(score),
            "responses": responses,
        }

    def _judge_short_answer(self, question: dict, user_answer: str) -> bool:
        prompt = build_grading_prompt(question["questionText"], question["correctAnswer"], user_answer)
        verdict = self._complete(prompt).strip().upper()
        return verdict.startswith("CORRECT")

    def _complete(self, prompt: str, as_json: bool = False) -> str:
        """Send a single prompt. Retries once on API failure."""
        config = None
        if as_json:
            config = types.GenerateContentConfig(response_mime_type="application/json")

        try:
            response = self.client.models.generate_content(model=self.model, contents=prompt, config=config)
        except QuizGenerationError:
            raise
        except Exception as e:
            print(f"  API error: {e}")
            try:
                response = self.client.models.generate_content(model=self.model, contents=prompt, config=config)
            except Exception as e2:
                raise QuizGenerationError(f"Model request failed: {e2}") from e2

        return response.text or ""


def _validate_request(content: str, quiz_size: int, difficulty: str):
    if not content or len(content.strip()) < MIN_CONTENT_CHARS:
        raise QuizGenerationError("Document content is too short or could not be extracted", status=400)
    if not isinstance(quiz_size, int) or isinstance(quiz_size, bool) or not 1 <= quiz_size <= MAX_QUIZ_SIZE:
        raise QuizGenerationError(f"quizSize must be between 1 and {MAX_QUIZ_SIZE}", status=400)
    if difficulty not in DIFFICULTIES:
        raise QuizGenerationError(f"difficulty must be one of: {', '.join(DIFFICULTIES)}", status=400)


def _validate_submission(questions, answers):
    if not isinstance(questions, list) or not questions:
        raise QuizGenerationError("questions must be a non-empty list", status=400)
    if not isinstance(answers, list) or len(answers) != len(questions):
        raise QuizGenerationError("answers must be a list with one entry per question", status=400)

    for i, (q, a) in enumerate(zip(questions, answers), start=1):
        if not isinstance(q, dict) or q.get("answerType") not in ANSWER_TYPES:
            raise QuizGenerationError(f"Question {i} has no valid answerType", status=400)
        missing = [f for f in _REQUIRED_QUESTION_FIELDS if q.get(f) in (None, "")]
        if missing:
            raise QuizGenerationError(f"Question {i} is missing: {', '.join(missing)}", status=400)
        points = q.get("points", 1)
        if not isinstance(points, (int, float)) or isinstance(points, bool) or points < 0:
            raise QuizGenerationError(f"Question {i} has invalid points", status=400)
        if a is not None and not isinstance(a, str):
            raise QuizGenerationError(f"Answer {i} must be a string", status=400)


# Minimum score for each feedback message, highest first
FEEDBACK_BANDS = (
    (90, "Excellent! You have a strong understanding of the material."),
    (70, "Good work! You have a good grasp of most concepts."),
    (50, "You're making progress, but there's room for improvement."),
)
LOW_SCORE_FEEDBACK = "You might want to review the material again to strengthen your understanding."


def score_feedback(score: float) -> str:
    for threshold, message in FEEDBACK_BANDS:
        if score >= threshold:
            return message
    return LOW_SCORE_FEEDBACK


def parse_questions(raw: str) -> list:
    """Parse the model's JSON reply into a list of question dicts."""
    text = _CODE_FENCE.sub("", (raw or "").strip())
    if not text:
        raise QuizGenerationError("No response received from model")

    try:
        questions = json.loads(text)
    except json.JSONDecodeError as e:
        raise QuizGenerationError(f"Failed to parse model response as JSON: {e}") from e

    if not isinstance(questions, list):
        raise QuizGenerationError("Model response is not a list of questions")

    parsed = []
    for i, q in enumerate(questions, start=1):
        if not isinstance(q, dict):
            raise QuizGenerationError(f"Question {i} is not an object")
        missing = [f for f in _REQUIRED_QUESTION_FIELDS if q.get(f) in (None, "")]
        if missing:
            raise QuizGenerationError(f"Question {i} is missing: {', '.join(missing)}")
        if q["answerType"] not in ANSWER_TYPES:
            raise QuizGenerationError(f"Question {i} has unknown answerType '{q['answerType']}'")

        parsed.append({
            "questionText": q["questionText"],
            "answerType": q["answerType"],
            "options": q.get("options") or None,
            "correctAnswer": q["correctAnswer"],
            "explanation": q.get("explanation") or None,
        })
    return parsed
