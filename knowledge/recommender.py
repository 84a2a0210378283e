"""Recommend quiz templates for a document based on its filename."""

from typing import NamedTuple

from knowledge.quiz_templates import TemplateCatalog


class ClassificationRule(NamedTuple):
    template_id: str
    keywords: tuple
    extensions: tuple = ()

    def matches(self, filename_lower: str, extension: str) -> bool:
        if extension and extension in self.extensions:
            return True
        return any(kw in filename_lower for kw in self.keywords)


# Checked top to bottom; the first rule that matches wins, regardless of how
# many keywords of a later rule also appear in the name.
DEFAULT_RULES = (
    ClassificationRule(
        "academic",
        ("research", "academic", "thesis", "dissertation", "study", "scientific", "paper"),
        ("tex",),
    ),
    ClassificationRule(
        "technical",
        ("technical", "manual", "specification", "documentation", "guide",
         "api", "system", "implementation", "code"),
        ("md", "rst"),
    ),
    ClassificationRule(
        "business",
        ("business", "report", "plan", "proposal", "analysis", "case-study",
         "case study", "financial", "market", "quarterly"),
    ),
    ClassificationRule(
        "narrative",
        ("story", "essay", "novel", "chapter", "literature", "book", "narrative"),
        ("epub", "lit"),
    ),
)


def _extension(filename_lower: str) -> str:
    if "." not in filename_lower:
        return ""
    return filename_lower.rsplit(".", 1)[1]


class TemplateRecommender:
    def __init__(self, catalog: TemplateCatalog, rules=DEFAULT_RULES):
        self.catalog = catalog
        self.rules = tuple(rules)

        unknown = [r.template_id for r in self.rules if catalog.get_template_by_id(r.template_id) is None]
        if unknown:
            raise ValueError(f"Classification rules reference unknown templates: {', '.join(unknown)}")

    def classify(self, filename) -> str:
        """Return the id of the best template for `filename`."""
        fallback_id = self.catalog.fallback.id
        if not filename:
            return fallback_id

        lower = filename.lower()
        extension = _extension(lower)
        for rule in self.rules:
            if rule.matches(lower, extension):
                return rule.template_id
        return fallback_id

    def get_recommended_templates(self, filename) -> list:
        """
        Recommended templates for a document, most relevant first.

        A recognised filename yields [matched, general]; anything else,
        including an empty or missing name, yields [general].
        """
        fallback = self.catalog.fallback
        template_id = self.classify(filename)
        if template_id == fallback.id:
            return [fallback]
        return [self.catalog.get_template_by_id(template_id), fallback]
