import argparse
import os
import sys

from dotenv import load_dotenv

# Load .env file from project root
load_dotenv(os.path.join(os.path.dirname(__file__), ".env"))

from agent.core import QuizGenerator, QuizGenerationError
from knowledge.icons import render_icon
from knowledge.quiz_templates import load_default_catalog
from knowledge.recommender import TemplateRecommender


def _format_template_line(template) -> str:
    qt = template.question_types
    return (
        f"  {render_icon(template.icon)} {template.id:<10} {template.name:<20} "
        f"MC {qt.multiple_choice}% / TF {qt.true_false}% / SA {qt.short_answer}%"
    )


def _format_template_detail(template) -> str:
    lines = [
        f"{render_icon(template.icon)} {template.name} ({template.id})",
        f"  {template.description}",
        f"  Document types: {', '.join(template.document_types)}",
        "",
        "  Question type distribution:",
    ]
    for answer_type, share in template.question_types.as_dict().items():
        lines.append(f"    {answer_type:<16} {share:>3}%")
    lines.append("")
    lines.append("  Focus areas:")
    lines.extend(f"    - {area}" for area in template.focus_areas)
    lines.append("")
    lines.append("  Example questions:")
    lines.extend(f"    - {q}" for q in template.example_questions)
    return "\n".join(lines)


def cmd_list(catalog, args) -> int:
    print("Available templates:")
    for template in catalog.get_all_templates():
        print(_format_template_line(template))
    return 0


def cmd_show(catalog, args) -> int:
    template = catalog.get_template_by_id(args.template_id)
    if template is None:
        print(f"Error: template '{args.template_id}' not found")
        return 1
    print(_format_template_detail(template))
    return 0


def cmd_recommend(catalog, args) -> int:
    recommender = TemplateRecommender(catalog)
    templates = recommender.get_recommended_templates(args.filename)
    print(f"Recommended templates for '{args.filename}':")
    for i, template in enumerate(templates, start=1):
        print(f"  {i}. {render_icon(template.icon)} {template.name} ({template.id})")
    return 0


def cmd_generate(catalog, args) -> int:
    try:
        with open(args.file, "r", encoding="utf-8") as f:
            content = f.read()
    except OSError as e:
        print(f"Error: could not read {args.file}: {e}")
        return 1

    filename = os.path.basename(args.file)
    if args.template:
        template = catalog.get_template_by_id(args.template)
        if template is None:
            print(f"Error: template '{args.template}' not found")
            return 1
    else:
        template = TemplateRecommender(catalog).get_recommended_templates(filename)[0]
        print(f"  Auto-selected template: {template.name}")

    generator = QuizGenerator()
    try:
        quiz = generator.generate(
            template,
            content,
            quiz_size=args.size,
            difficulty=args.difficulty,
            source_name=filename,
        )
    except QuizGenerationError as e:
        print(f"\nError: {e}")
        return 1

    print(f"\n{'=' * 60}")
    print(f"  {quiz['title']}")
    print(f"{'=' * 60}")
    for i, q in enumerate(quiz["questions"], start=1):
        print(f"\n{i}. [{q['answerType']}] {q['questionText']}")
        for option in q["options"] or []:
            print(f"     - {option}")
        print(f"   Answer: {q['correctAnswer']}")
        if q["explanation"]:
            print(f"   Why: {q['explanation']}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Quiz templates: browse, recommend for a document, and generate quizzes"
    )
    parser.add_argument(
        "--web",
        action="store_true",
        help="Launch the web API",
    )
    parser.add_argument("--port", type=int, default=None, help="Port for --web (default: $PORT or 5000)")

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("list", help="List all templates")

    show = sub.add_parser("show", help="Show one template in detail")
    show.add_argument("template_id")

    recommend = sub.add_parser("recommend", help="Recommend templates for a document filename")
    recommend.add_argument("filename")

    generate = sub.add_parser("generate", help="Generate a quiz from a text file")
    generate.add_argument("file")
    generate.add_argument("--template", "-t", help="Template id (default: best match for the filename)")
    generate.add_argument("--size", "-n", type=int, default=None, help="Number of questions")
    generate.add_argument(
        "--difficulty", "-d",
        choices=["easy", "medium", "hard"],
        default="medium",
    )
    return parser


COMMANDS = {
    "list": cmd_list,
    "show": cmd_show,
    "recommend": cmd_recommend,
    "generate": cmd_generate,
}


def run_cli(argv=None) -> int:
    """Run the command-line interface. Returns the exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Web interface mode
    if args.web:
        from web.server import start_server
        start_server(port=args.port)
        return 0

    if not args.command:
        parser.print_help()
        return 0

    catalog = load_default_catalog()
    return COMMANDS[args.command](catalog, args)


if __name__ == "__main__":
    sys.exit(run_cli())
