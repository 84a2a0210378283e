"""
Quiz template definitions and the catalog that serves them.

A template describes how questions are generated for one kind of document:
the instruction handed to the model, the split between question types, the
areas to focus on and a few example questions.
"""

from dataclasses import dataclass, field

from knowledge.icons import IconKind, render_icon

FALLBACK_TEMPLATE_ID = "general"

# Fixed order used wherever answer types are listed
ANSWER_TYPES = ("multiple_choice", "true_false", "short_answer")


@dataclass(frozen=True)
class QuestionTypeDistribution:
    """Percentage split between question types. Must sum to 100."""

    multiple_choice: int
    true_false: int
    short_answer: int

    def __post_init__(self):
        values = (self.multiple_choice, self.true_false, self.short_answer)
        if any(not isinstance(v, int) or isinstance(v, bool) or v < 0 for v in values):
            raise ValueError(f"Question type percentages must be non-negative integers, got {values}")
        if sum(values) != 100:
            raise ValueError(f"Question type percentages must sum to 100, got {sum(values)}")

    def as_dict(self) -> dict:
        return {
            "multiple_choice": self.multiple_choice,
            "true_false": self.true_false,
            "short_answer": self.short_answer,
        }

    def question_types(self) -> list:
        """Answer types with a non-zero share."""
        shares = self.as_dict()
        return [t for t in ANSWER_TYPES if shares[t] > 0]

    def allocate(self, total: int) -> dict:
        """
        Split `total` questions across the answer types.

        Uses largest-remainder rounding so the counts always add up to
        `total`. Ties go to the type listed first.
        """
        if total < 0:
            raise ValueError("Question count cannot be negative")

        shares = self.as_dict()
        counts = {}
        remainders = []
        for i, answer_type in enumerate(ANSWER_TYPES):
            exact = total * shares[answer_type]
            counts[answer_type] = exact // 100
            remainders.append((-(exact % 100), i, answer_type))

        leftover = total - sum(counts.values())
        for _, _, answer_type in sorted(remainders)[:leftover]:
            counts[answer_type] += 1
        return counts


@dataclass(frozen=True)
class QuizTemplate:
    id: str
    name: str
    description: str
    document_types: tuple
    icon: IconKind
    prompt_modifier: str
    question_types: QuestionTypeDistribution
    focus_areas: tuple = field(default_factory=tuple)
    example_questions: tuple = field(default_factory=tuple)

    def to_dict(self) -> dict:
        """JSON shape consumed by the quiz-creation UI."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "documentTypes": list(self.document_types),
            "icon": render_icon(self.icon, "name"),
            "promptModifier": self.prompt_modifier,
            "questionTypes": {
                "multipleChoice": self.question_types.multiple_choice,
                "trueFalse": self.question_types.true_false,
                "shortAnswer": self.question_types.short_answer,
            },
            "focusAreas": list(self.focus_areas),
            "exampleQuestions": list(self.example_questions),
        }


GENERAL_TEMPLATE = QuizTemplate(
    id="general",
    name="General Knowledge",
    description="Balanced mix of questions covering the main points of any document type",
    document_types=("any",),
    icon=IconKind.BOOK,
    prompt_modifier="Focus on the main concepts and key facts presented in the document.",
    question_types=QuestionTypeDistribution(multiple_choice=60, true_false=20, short_answer=20),
    focus_areas=("Main concepts", "Key facts", "Important details"),
    example_questions=(
        "What is the main thesis of this document?",
        "Which of the following best summarizes the author's perspective?",
        "What evidence supports the main argument?",
    ),
)

ACADEMIC_TEMPLATE = QuizTemplate(
    id="academic",
    name="Academic Paper",
    description="Specifically designed for scholarly articles and research papers",
    document_types=("research", "academic", "scientific"),
    icon=IconKind.GRADUATION_CAP,
    prompt_modifier=(
        "Focus on the methodology, findings, and implications of the research presented. "
        "Include questions about the experimental design, data analysis, and conclusions."
    ),
    question_types=QuestionTypeDistribution(multiple_choice=50, true_false=20, short_answer=30),
    focus_areas=(
        "Methodology",
        "Findings",
        "Research implications",
        "Literature review",
        "Data analysis",
    ),
    example_questions=(
        "What research method was used in this study?",
        "Which of the following best describes the study's findings?",
        "How did the researchers address potential limitations in their study?",
    ),
)

TECHNICAL_TEMPLATE = QuizTemplate(
    id="technical",
    name="Technical Document",
    description="For technical documentation, manuals, and specifications",
    document_types=("technical", "manual", "documentation"),
    icon=IconKind.CODE,
    prompt_modifier=(
        "Focus on technical specifications, procedures, and implementation details. "
        "Favor precision and technical accuracy in the questions."
    ),
    question_types=QuestionTypeDistribution(multiple_choice=70, true_false=20, short_answer=10),
    focus_areas=(
        "Technical specifications",
        "Procedures",
        "Implementation details",
        "System requirements",
        "Best practices",
    ),
    example_questions=(
        "What is the correct sequence for implementing this procedure?",
        "Which component is responsible for handling this function?",
        "What would happen if this step was omitted from the process?",
    ),
)

BUSINESS_TEMPLATE = QuizTemplate(
    id="business",
    name="Business Document",
    description="For business plans, reports, and case studies",
    document_types=("business", "report", "case study"),
    icon=IconKind.BAR_CHART,
    prompt_modifier=(
        "Focus on business metrics, strategies, market analysis, and financial implications. "
        "Include questions about business processes and strategic decisions."
    ),
    question_types=QuestionTypeDistribution(multiple_choice=50, true_false=20, short_answer=30),
    focus_areas=(
        "Business strategy",
        "Market analysis",
        "Financial data",
        "Competitive landscape",
        "Growth projections",
    ),
    example_questions=(
        "What growth strategy is being proposed in this document?",
        "Which market segment is identified as having the highest potential?",
        "What are the key performance indicators mentioned in this report?",
    ),
)

NARRATIVE_TEMPLATE = QuizTemplate(
    id="narrative",
    name="Narrative Text",
    description="For stories, essays, and literary works",
    document_types=("narrative", "essay", "literature"),
    icon=IconKind.BOOK_OPEN,
    prompt_modifier=(
        "Focus on plot elements, character analysis, themes, and literary devices. "
        "Ask questions that probe understanding of the narrative structure and authorial intent."
    ),
    question_types=QuestionTypeDistribution(multiple_choice=40, true_false=20, short_answer=40),
    focus_areas=(
        "Plot development",
        "Character motivation",
        "Themes",
        "Symbolism",
        "Narrative structure",
    ),
    example_questions=(
        "What motivates the protagonist's actions in the story?",
        "Which theme is most prominently explored in this text?",
        "How does the author's use of symbolism contribute to the overall meaning?",
    ),
)

ALL_TEMPLATES = (
    GENERAL_TEMPLATE,
    ACADEMIC_TEMPLATE,
    TECHNICAL_TEMPLATE,
    BUSINESS_TEMPLATE,
    NARRATIVE_TEMPLATE,
)


class TemplateCatalog:
    """Read-only registry of quiz templates, kept in registration order."""

    def __init__(self, templates):
        self._templates = tuple(templates)
        self._by_id = {}
        for template in self._templates:
            if template.id in self._by_id:
                raise ValueError(f"Duplicate template id '{template.id}'")
            self._by_id[template.id] = template
        if FALLBACK_TEMPLATE_ID not in self._by_id:
            raise ValueError(f"Catalog must contain the '{FALLBACK_TEMPLATE_ID}' template")

    def get_all_templates(self) -> tuple:
        return self._templates

    def get_template_by_id(self, template_id: str):
        """Exact, case-sensitive lookup. Returns None for unknown ids."""
        return self._by_id.get(template_id)

    @property
    def fallback(self) -> QuizTemplate:
        return self._by_id[FALLBACK_TEMPLATE_ID]

    def __len__(self):
        return len(self._templates)

    def __iter__(self):
        return iter(self._templates)


def load_default_catalog() -> TemplateCatalog:
    """Build the catalog shipped with the application."""
    return TemplateCatalog(ALL_TEMPLATES)
