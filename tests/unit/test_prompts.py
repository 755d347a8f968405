"""
Tests for the prompt registry and loader.
"""

import pytest

import roadaware.prompts as registry
from roadaware.prompts import POTHOLE_ANALYSIS, get_prompt, list_prompts, render_prompt
from roadaware.prompts.loader import load_prompts


class TestRegistry:
    def test_pothole_prompt_is_registered(self):
        assert POTHOLE_ANALYSIS in [p.name for p in list_prompts()]
        assert get_prompt(POTHOLE_ANALYSIS).arguments == []

    def test_pothole_prompt_renders(self):
        text = render_prompt(POTHOLE_ANALYSIS)
        assert text.startswith("You are an AI assistant")
        assert "priority of fixing each pothole from 1-10" in text
        assert text.endswith("only valid HTML table markup.")

    def test_unknown_prompt(self):
        with pytest.raises(KeyError):
            get_prompt("does-not-exist")


class TestLoader:
    def test_loads_arguments_and_renders(self, tmp_path):
        (tmp_path / "greet.prompt.md").write_text(
            "---\nname: greet\ndescription: Say hi\narguments:\n  - name: who\n---\nHello {{ who }}!\n",
            encoding="utf-8",
        )
        prompts = load_prompts(tmp_path)
        assert prompts["greet"].description == "Say hi"
        assert prompts["greet"].render(who="council") == "Hello council!"
        with pytest.raises(ValueError):
            prompts["greet"].render()

    def test_name_defaults_to_file_stem(self, tmp_path):
        (tmp_path / "plain.prompt.md").write_text("---\ndescription: x\n---\nbody\n", encoding="utf-8")
        assert load_prompts(tmp_path)["plain"].render() == "body"

    def test_skips_files_without_front_matter(self, tmp_path):
        (tmp_path / "broken.prompt.md").write_text("no front matter", encoding="utf-8")
        assert load_prompts(tmp_path) == {}

    def test_missing_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_prompts(tmp_path / "nope")


class TestRefresh:
    def test_reloads_edited_template(self, tmp_path, monkeypatch):
        template = tmp_path / "notice.prompt.md"
        template.write_text("---\nname: notice\n---\nfirst\n", encoding="utf-8")
        monkeypatch.setattr(registry, "_PROMPTS_PATH", tmp_path)
        try:
            registry.refresh()
            assert render_prompt("notice") == "first"

            template.write_text("---\nname: notice\n---\nsecond\n", encoding="utf-8")
            assert render_prompt("notice") == "first"
            registry.refresh()
            assert render_prompt("notice") == "second"
        finally:
            monkeypatch.undo()
            registry.refresh()

        assert POTHOLE_ANALYSIS in [p.name for p in list_prompts()]
