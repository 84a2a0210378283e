"""Tests for app.run_cli — the command-line interface."""

import json
from types import SimpleNamespace

import pytest

import app
import agent.core as core


class TestBrowse:
    def test_list(self, capsys):
        assert app.run_cli(["list"]) == 0
        out = capsys.readouterr().out
        for template_id in ("general", "academic", "technical", "business", "narrative"):
            assert template_id in out
        assert "MC 70% / TF 20% / SA 10%" in out

    def test_show(self, capsys):
        assert app.run_cli(["show", "academic"]) == 0
        out = capsys.readouterr().out
        assert "Academic Paper (academic)" in out
        assert "Methodology" in out

    def test_show_unknown(self, capsys):
        assert app.run_cli(["show", "missing"]) == 1
        assert "not found" in capsys.readouterr().out

    def test_recommend(self, capsys):
        assert app.run_cli(["recommend", "thesis-draft.pdf"]) == 0
        out = capsys.readouterr().out
        assert "1. [^] Academic Paper (academic)" in out
        assert "2. [=] General Knowledge (general)" in out

    def test_no_command_prints_help(self, capsys):
        assert app.run_cli([]) == 0
        assert "usage" in capsys.readouterr().out.lower()


class TestGenerate:
    @pytest.fixture
    def fake_gemini(self, monkeypatch):
        questions = [{
            "questionText": "What does the manual describe?",
            "answerType": "short_answer",
            "options": None,
            "correctAnswer": "Installation",
        }]
        replies = ["Manual Quiz", json.dumps(questions)]
        models = SimpleNamespace(generate_content=lambda model, contents, config=None: SimpleNamespace(text=replies.pop(0)))
        monkeypatch.setenv("GEMINI_API_KEY", "secret")
        monkeypatch.setattr(core.genai, "Client", lambda api_key: SimpleNamespace(models=models))

    def test_generate_auto_selects_template(self, tmp_path, capsys, fake_gemini):
        doc = tmp_path / "install-manual.txt"
        doc.write_text("Install the package, configure the service, then restart it. " * 3)
        assert app.run_cli(["generate", str(doc), "--size", "1"]) == 0
        out = capsys.readouterr().out
        assert "Auto-selected template: Technical Document" in out
        assert "Manual Quiz" in out
        assert "Answer: Installation" in out

    def test_generate_unknown_template(self, tmp_path, capsys):
        doc = tmp_path / "notes.txt"
        doc.write_text("text")
        assert app.run_cli(["generate", str(doc), "--template", "missing"]) == 1
        assert "not found" in capsys.readouterr().out

    def test_generate_missing_file(self, tmp_path, capsys):
        assert app.run_cli(["generate", str(tmp_path / "nope.txt")]) == 1
        assert "could not read" in capsys.readouterr().out

    def test_generate_reports_errors(self, tmp_path, capsys):
        doc = tmp_path / "short.txt"
        doc.write_text("too short")
        assert app.run_cli(["generate", str(doc)]) == 1
        assert "too short" in capsys.readouterr().out
