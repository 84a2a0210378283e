"""Tests for knowledge.recommender — filename based template recommendation."""

import pytest

from knowledge.icons import IconKind
from knowledge.quiz_templates import (
    GENERAL_TEMPLATE,
    QuestionTypeDistribution,
    QuizTemplate,
    TemplateCatalog,
    load_default_catalog,
)
from knowledge.recommender import ClassificationRule, TemplateRecommender


@pytest.fixture
def recommender():
    return TemplateRecommender(load_default_catalog())


def _ids(templates):
    return [t.id for t in templates]


class TestPrimaryMatch:
    @pytest.mark.parametrize("filename", [
        "research-paper.pdf",
        "academic-study.docx",
        "thesis-draft.pdf",
        "dissertation.tex",
        "Scientific_Paper_v2.pdf",
    ])
    def test_academic(self, recommender, filename):
        assert recommender.get_recommended_templates(filename)[0].id == "academic"

    @pytest.mark.parametrize("filename", [
        "technical-specification.pdf",
        "user-manual.docx",
        "api-documentation.md",
        "system-guide.rst",
        "code_implementation.pdf",
    ])
    def test_technical(self, recommender, filename):
        assert recommender.get_recommended_templates(filename)[0].id == "technical"

    @pytest.mark.parametrize("filename", [
        "business-plan.pdf",
        "quarterly-report.docx",
        "financial-proposal.pptx",
        "market-analysis.xlsx",
    ])
    def test_business(self, recommender, filename):
        assert recommender.get_recommended_templates(filename)[0].id == "business"

    @pytest.mark.parametrize("filename", [
        "short-story.pdf",
        "essay-draft.docx",
        "novel-chapter.pdf",
        "literature-review.docx",
        "book.epub",
    ])
    def test_narrative(self, recommender, filename):
        assert recommender.get_recommended_templates(filename)[0].id == "narrative"

    @pytest.mark.parametrize("filename", ["notes.tex", "readme.md", "index.rst", "tales.lit"])
    def test_extension_only(self, recommender, filename):
        assert recommender.get_recommended_templates(filename)[0].id != "general"


class TestFallback:
    @pytest.mark.parametrize("filename", [
        "document.pdf",
        "untitled.docx",
        "file123.pdf",
        "scan1.pdf",
        "",
        None,
    ])
    def test_generic_names_get_general_only(self, recommender, filename):
        result = recommender.get_recommended_templates(filename)
        assert _ids(result) == ["general"]

    @pytest.mark.parametrize("filename", [
        "research-paper.pdf",
        "technical-manual.pdf",
        "business-report.pdf",
        "novel.epub",
    ])
    def test_general_follows_a_match(self, recommender, filename):
        result = recommender.get_recommended_templates(filename)
        assert len(result) == 2
        assert result[0].id != "general"
        assert result[1].id == "general"

    def test_no_duplicates(self, recommender):
        for filename in ["research.pdf", "document.pdf", "story.txt"]:
            ids = _ids(recommender.get_recommended_templates(filename))
            assert len(ids) == len(set(ids))


class TestMatchingPolicy:
    @pytest.mark.parametrize("filename, expected", [
        ("RESEARCH-PAPER.PDF", "academic"),
        ("Technical-Manual.PDF", "technical"),
        ("business-REPORT.docx", "business"),
        ("Novel.EPUB", "narrative"),
    ])
    def test_case_insensitive(self, recommender, filename, expected):
        upper = recommender.get_recommended_templates(filename)
        lower = recommender.get_recommended_templates(filename.lower())
        assert upper[0].id == expected
        assert _ids(upper) == _ids(lower)

    def test_priority_order_beats_match_count(self, recommender):
        # one academic keyword, three business keywords
        result = recommender.get_recommended_templates("quarterly-business-report-study.pdf")
        assert result[0].id == "academic"

    def test_case_study_resolves_by_priority(self, recommender):
        # "study" belongs to the academic rule, which is checked first
        assert recommender.get_recommended_templates("case-study.pdf")[0].id == "academic"

    def test_technical_before_narrative(self, recommender):
        assert recommender.get_recommended_templates("story-guide.pdf")[0].id == "technical"

    def test_extension_rule_checked_in_priority_order(self, recommender):
        # .md is a technical extension, technical comes before narrative
        assert recommender.get_recommended_templates("novel.md")[0].id == "technical"

    def test_idempotent(self, recommender):
        first = recommender.get_recommended_templates("thesis-draft.pdf")
        second = recommender.get_recommended_templates("thesis-draft.pdf")
        assert _ids(first) == _ids(second)

    def test_returns_catalog_objects(self, recommender):
        result = recommender.get_recommended_templates("user-manual.docx")
        assert result[0] is recommender.catalog.get_template_by_id("technical")
        assert result[1] is recommender.catalog.fallback


class TestCustomRules:
    def test_alternate_catalog_and_rules(self):
        recipes = QuizTemplate(
            id="recipes",
            name="Recipes",
            description="Cooking",
            document_types=("recipe",),
            icon=IconKind.BOOK_OPEN,
            prompt_modifier="Focus on ingredients.",
            question_types=QuestionTypeDistribution(50, 50, 0),
        )
        catalog = TemplateCatalog([GENERAL_TEMPLATE, recipes])
        recommender = TemplateRecommender(catalog, rules=[ClassificationRule("recipes", ("recipe",))])

        assert _ids(recommender.get_recommended_templates("Pasta_Recipe.pdf")) == ["recipes", "general"]
        assert _ids(recommender.get_recommended_templates("research-paper.pdf")) == ["general"]

    def test_rule_for_missing_template_rejected(self):
        catalog = TemplateCatalog([GENERAL_TEMPLATE])
        with pytest.raises(ValueError, match="academic"):
            TemplateRecommender(catalog)
