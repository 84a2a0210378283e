from knowledge.quiz_templates import QuizTemplate

# Characters of document content sent when asking for a title
TITLE_CONTENT_CHARS = 1500

DIFFICULTY_GUIDANCE = {
    "easy": "Questions should check recall of clearly stated facts. Avoid trick options.",
    "medium": "Mix recall with questions that require understanding how ideas connect.",
    "hard": "Favor questions that require analysis, inference and applying concepts to new cases.",
}


def build_title_prompt(content: str) -> str:
    """Prompt asking for a short quiz title."""
    return (
        "Create a short but descriptive title for a quiz about the following document content. "
        "The title should be at most 7 words. Reply with the title only.\n\n"
        f"Document content:\n{content[:TITLE_CONTENT_CHARS]}"
    )


def build_quiz_prompt(template: QuizTemplate, content: str, quiz_size: int, difficulty: str = "medium") -> str:
    """Build the question-generation prompt for a template.

    Args:
        template: The chosen quiz template. Its prompt modifier, question type
            distribution, focus areas and example questions shape the request.
        content: Extracted document text.
        quiz_size: Total number of questions to generate.
        difficulty: One of "easy", "medium", "hard".
    """
    distribution = _format_distribution(template.question_types, quiz_size)
    focus = "\n".join(f"- {area}" for area in template.focus_areas)
    examples = "\n".join(f"- {q}" for q in template.example_questions)
    guidance = DIFFICULTY_GUIDANCE.get(difficulty, DIFFICULTY_GUIDANCE["medium"])

    return f"""You are an expert education specialist creating a quiz for students to test their knowledge.
Based on the following document content, generate {quiz_size} quiz questions.
Each question should test understanding of key concepts in the document.

## Template: {template.name}
{template.prompt_modifier}

## Question Types
{distribution}

## Focus Areas
{focus}

## Example Questions (style guide only, do not copy)
{examples}

## Difficulty: {difficulty}
{guidance}

## Output Format
For each question, include:
1. A clear, concise question
2. The question type (multiple_choice, true_false, or short_answer)
3. For multiple_choice: 4 possible answer options
4. The correct answer
5. A brief explanation of why the answer is correct

Respond with JSON only, using exactly this structure:
[
  {{
    "questionText": "Question text here",
    "answerType": "multiple_choice",
    "options": ["Option A", "Option B", "Option C", "Option D"],
    "correctAnswer": "Option A",
    "explanation": "Explanation of why Option A is correct"
  }}
]

For true_false questions, "options" should be ["True", "False"].
For short_answer questions, "options" should be null.
Ensure all content is factually accurate based only on the document content.

Document content:
{content}
"""


def _format_distribution(distribution, quiz_size: int) -> str:
    """One line per answer type the template uses, with its question count."""
    counts = distribution.allocate(quiz_size)
    lines = []
    for answer_type in distribution.question_types():
        if counts[answer_type] > 0:
            lines.append(f"- {counts[answer_type]} x {answer_type}")
    return "\n".join(lines)


def build_grading_prompt(question_text: str, correct_answer: str, user_answer: str) -> str:
    """Prompt asking the model to judge a short answer."""
    return (
        f"Question: {question_text}\n"
        f"Correct answer: {correct_answer}\n"
        f"User's answer: {user_answer}\n\n"
        "Evaluate if the user's answer is correct when compared to the correct answer.\n"
        "Consider semantic equivalence, not just exact matching.\n"
        'Only respond with "CORRECT" or "INCORRECT".'
    )
