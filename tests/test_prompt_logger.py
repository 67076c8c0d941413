"""Tests for the markdown prompt logger."""

import pytest

from pantry_chef.llm import prompt_logger


@pytest.fixture
def log_dir(tmp_path, monkeypatch):
    directory = tmp_path / "prompt_logs"
    monkeypatch.setattr(prompt_logger, "LOG_DIR", directory)
    monkeypatch.setattr(prompt_logger, "LOG_PROMPTS", False)
    prompt_logger.reset_session()
    yield directory
    prompt_logger.reset_session()


def test_disabled_by_default(log_dir):
    assert not prompt_logger.is_enabled()
    assert prompt_logger.log_prompt(kind="recipe", model="gemini", prompt="p") is None
    assert prompt_logger.get_session_log_dir() is None
    assert not log_dir.exists()


def test_calls_are_numbered_within_a_session(log_dir):
    prompt_logger.enable_prompt_logging(True)

    first = prompt_logger.log_prompt(kind="recipe", model="gemini-1.5-flash", prompt="Make soup", response="{}")
    second = prompt_logger.log_prompt(kind="tips", model="gemini-1.5-flash", prompt="Tips", error="boom", status_code=500)

    assert first.name == "01_recipe.md"
    assert second.name == "02_tips.md"
    assert first.parent == prompt_logger.get_session_log_dir()
    assert "Make soup" in first.read_text(encoding="utf-8")
    text = second.read_text(encoding="utf-8")
    assert "**ERROR:** boom" in text
    assert "**Status:** 500" in text


def test_reset_session_restarts_numbering(log_dir):
    prompt_logger.enable_prompt_logging(True)
    prompt_logger.log_prompt(kind="question", model="gemini", prompt="q")

    prompt_logger.reset_session()
    path = prompt_logger.log_prompt(kind="question", model="gemini", prompt="q")

    assert path.name == "01_question.md"
