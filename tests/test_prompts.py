"""Unit tests for prompt loading."""
import pytest

from dressme.prompts import (
    clear_cache,
    get_chat_system_prompt,
    get_vision_system_prompt,
    get_vision_user_prompt,
    load_prompt,
)


@pytest.fixture(autouse=True)
def fresh_cache():
    clear_cache()
    yield
    clear_cache()


def test_packaged_prompts():
    assert get_vision_system_prompt().startswith("You are a fashion assistant.")
    assert "at most 2 sentences" in get_vision_system_prompt()
    assert get_vision_user_prompt() == "Analyze the garment in the image and give a styling tip."
    assert get_chat_system_prompt() == "You are a friendly fashion assistant. Be concise and practical."


def test_working_directory_overrides_package(tmp_path, monkeypatch):
    """A prompts/ folder in the working directory takes precedence."""
    (tmp_path / "prompts").mkdir()
    (tmp_path / "prompts" / "chat_system.txt").write_text("  Answer like a tailor.\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    assert get_chat_system_prompt() == "Answer like a tailor."
    assert get_vision_user_prompt() == "Analyze the garment in the image and give a styling tip."


def test_missing_prompt_raises():
    with pytest.raises(FileNotFoundError, match="not_a_prompt"):
        load_prompt("not_a_prompt")
