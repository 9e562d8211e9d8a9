"""
Tests for terminal output and click-backed prompts.
"""

import pytest

from macsetup.ui.cli import prompts as prompts_module
from macsetup.ui.cli.prompts import Choice, ClickPrompts, parse_selection

# ── parse_selection ──────────────────────────────────────────────────


class TestParseSelection:
    def test_blank(self):
        assert parse_selection("", 3) == []
        assert parse_selection("   ", 3) == []

    def test_all(self):
        assert parse_selection("all", 3) == [0, 1, 2]
        assert parse_selection(" ALL ", 2) == [0, 1]

    def test_separators(self):
        assert parse_selection("1,3", 3) == [0, 2]
        assert parse_selection("3 1", 3) == [0, 2]
        assert parse_selection("1, 2 ,3", 3) == [0, 1, 2]

    def test_duplicates(self):
        assert parse_selection("2,2,2", 3) == [1]

    def test_out_of_range(self):
        with pytest.raises(ValueError, match="Out of range"):
            parse_selection("4", 3)
        with pytest.raises(ValueError, match="Out of range"):
            parse_selection("0", 3)

    def test_not_a_number(self):
        with pytest.raises(ValueError, match="Not a number"):
            parse_selection("vscode", 3)
        with pytest.raises(ValueError):
            parse_selection("-1", 3)


# ── ClickPrompts.select ──────────────────────────────────────────────


CHOICES = [
    Choice("chrome", "Google Chrome"),
    Choice("slack", "Slack"),
    Choice("vscode", "Visual Studio Code", disabled="Already installed"),
]


def _answers(monkeypatch, *replies):
    remaining = list(replies)

    def fake_prompt(*args, **kwargs):
        return remaining.pop(0)

    monkeypatch.setattr(prompts_module.click, "prompt", fake_prompt)
    return remaining


class TestClickSelect:
    def test_renders_both_sections(self, terminal, output, monkeypatch):
        _answers(monkeypatch, "")
        ClickPrompts(terminal).select("Select applications to install:", CHOICES)
        text = output()

        assert "Select applications to install:" in text
        assert "--- Available ---" in text
        assert "--- Already Installed ---" in text
        assert "Visual Studio Code" in text
        assert "(Already installed)" in text

    def test_picks_enabled_choices_only(self, terminal, monkeypatch):
        _answers(monkeypatch, "2")
        assert ClickPrompts(terminal).select("Pick", CHOICES) == ["slack"]

    def test_all(self, terminal, monkeypatch):
        _answers(monkeypatch, "all")
        assert ClickPrompts(terminal).select("Pick", CHOICES) == ["chrome", "slack"]

    def test_reprompts_on_bad_input(self, terminal, monkeypatch):
        remaining = _answers(monkeypatch, "3", "nope", "1")
        assert ClickPrompts(terminal).select("Pick", CHOICES) == ["chrome"]
        assert remaining == []

    def test_nothing_enabled(self, terminal, monkeypatch):
        _answers(monkeypatch)
        choices = [Choice("slack", "Slack", disabled="Already installed")]
        assert ClickPrompts(terminal).select("Pick", choices) == []


class TestClickConfirmAndText:
    def test_confirm_passes_default(self, terminal, monkeypatch):
        seen = {}

        def fake_confirm(message, default=False):
            seen["message"], seen["default"] = message, default
            return True

        monkeypatch.setattr(prompts_module.click, "confirm", fake_confirm)
        assert ClickPrompts(terminal).confirm("Install it?", default=True)
        assert seen == {"message": "Install it?", "default": True}

    def test_text(self, terminal, monkeypatch):
        _answers(monkeypatch, "Ada")
        assert ClickPrompts(terminal).text("Git user.name") == "Ada"


# ── Terminal ─────────────────────────────────────────────────────────


class TestTerminal:
    def test_banner(self, terminal, output):
        terminal.banner("Mac Setup CLI", "[DRY RUN MODE]")
        assert "Mac Setup CLI" in output()
        assert "[DRY RUN MODE]" in output()

    def test_status_lines(self, terminal, output):
        terminal.success("Slack is installed")
        terminal.failure("Docker failed", "line one\nline two")
        terminal.warning("Careful")
        terminal.info("Installing...")
        text = output()
        assert "✓ Slack is installed" in text
        assert "✗ Docker failed" in text
        assert "│ line two" in text
        assert "⚠ Careful" in text
        assert "Installing..." in text

    def test_failure_detail_truncated(self, terminal, output):
        terminal.failure("Boom", "\n".join(f"detail {n}" for n in range(10)))
        assert "detail 4" in output()
        assert "detail 5" not in output()

    def test_instructions(self, terminal, output):
        terminal.instructions("Do this", ["Open the app", ("Run:", ["chmod 700 ~/.ssh"])])
        text = output()
        assert "1. Open the app" in text
        assert "2. Run:" in text
        assert "chmod 700 ~/.ssh" in text

    def test_summary(self, terminal, output):
        terminal.summary("Installation Summary:", [("✓ Installed: 3 apps", "green")])
        assert "Installation Summary:" in output()
        assert "Installed: 3 apps" in output()

    def test_status_context(self, terminal):
        with terminal.status("Checking..."):
            pass
