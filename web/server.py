from flask import Flask, request, jsonify

from agent.config import is_gemini_configured, get_port
from agent.core import QuizGenerator, QuizGenerationError
from knowledge.quiz_templates import load_default_catalog
from knowledge.recommender import TemplateRecommender


def create_app(catalog=None, generator=None) -> Flask:
    """Build the web app.

    Args:
        catalog: TemplateCatalog to serve. Defaults to the built-in catalog.
        generator: Object with QuizGenerator-compatible `generate` and `grade` methods.
            Defaults to a QuizGenerator that talks to Gemini.
    """
    app = Flask(__name__)

    if catalog is None:
        catalog = load_default_catalog()
    recommender = TemplateRecommender(catalog)
    if generator is None:
        generator = QuizGenerator()

    @app.route("/api/templates", methods=["GET"])
    def list_templates():
        """Full catalog, in registration order."""
        return jsonify([t.to_dict() for t in catalog.get_all_templates()])

    @app.route("/api/templates/recommend", methods=["GET"])
    def recommend_templates():
        """Recommended templates for a document filename, best match first."""
        filename = request.args.get("filename", "")
        templates = recommender.get_recommended_templates(filename)
        return jsonify({
            "filename": filename,
            "templates": [t.to_dict() for t in templates],
        })

    @app.route("/api/templates/<template_id>", methods=["GET"])
    def get_template(template_id):
        template = catalog.get_template_by_id(template_id)
        if template is None:
            return jsonify({"error": f"Template '{template_id}' not found"}), 404
        return jsonify(template.to_dict())

    @app.route("/api/quiz/generate", methods=["POST"])
    def generate_quiz():
        """Generate a quiz from document text using the chosen template."""
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({"error": "Request body must be a JSON object"}), 400

        content = data.get("content", "")
        if not isinstance(content, str) or not content.strip():
            return jsonify({"error": "Missing content in request body"}), 400

        template_id = data.get("templateId") or catalog.fallback.id
        if not isinstance(template_id, str):
            return jsonify({"error": "templateId must be a string"}), 400
        template = catalog.get_template_by_id(template_id)
        if template is None:
            return jsonify({"error": f"Template '{template_id}' not found"}), 404

        try:
            quiz = generator.generate(
                template,
                content,
                quiz_size=data.get("quizSize"),
                difficulty=data.get("difficulty", "medium"),
                source_name=data.get("sourceName") or "document",
            )
        except QuizGenerationError as e:
            print(f"  Quiz generation error: {e}")
            body = {"error": str(e)}
            if e.status >= 500:
                body = {"error": "Failed to generate quiz", "details": str(e)}
            return jsonify(body), e.status

        return jsonify(quiz)

    @app.route("/api/quiz/grade", methods=["POST"])
    def grade_quiz():
        """Score a submission against generated questions."""
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({"error": "Request body must be a JSON object"}), 400

        try:
            result = generator.grade(data.get("questions"), data.get("answers"))
        except QuizGenerationError as e:
            print(f"  Quiz grading error: {e}")
            body = {"error": str(e)}
            if e.status >= 500:
                body = {"error": "Failed to grade quiz", "details": str(e)}
            return jsonify(body), e.status

        return jsonify(result)

    @app.route("/api/status", methods=["GET"])
    def get_status():
        """Return integration status (Gemini, catalog size)."""
        return jsonify({"gemini": is_gemini_configured(), "templates": len(catalog)})

    return app


def start_server(port=None):
    """Start the web API server."""
    port = port or get_port()
    app = create_app()
    print(f"\n{'=' * 60}")
    print(f"  Quiz Template Service")
    print(f"  API running on http://localhost:{port}/api/templates")
    print(f"{'=' * 60}\n")
    app.run(host="0.0.0.0", port=port, debug=False)
