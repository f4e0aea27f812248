"""Tests for the interactive collector and console prompt (fullkek.wizard.collector)."""

from __future__ import annotations

import io

import pytest
from rich.console import Console

from fullkek.wizard.collector import Collector, ConsolePrompter
from fullkek.wizard.state import (
    Back,
    Cancel,
    Cancelled,
    StepKind,
    Submit,
    WizardOptions,
    WizardResult,
)

pytestmark = pytest.mark.unit

CATEGORY_STEPS = 5


@pytest.fixture
def collector(registry):
    return Collector(
        registry,
        WizardOptions(default_selection=registry.default_selection()),
        working_dir="/work",
    )


class TestCollectorRun:
    def test_completes_with_defaults(self, collector, scripted_prompt):
        prompt = scripted_prompt(
            [Submit("Demo App"), Submit("example.com/demo")]
            + [Submit()] * 4  # frontend, styling, http, database
            + [Submit(), Submit()]  # confirm, review
        )
        result = collector.run(prompt)

        assert isinstance(result, WizardResult)
        assert result.app_name == "Demo App"
        assert result.output_dir == "demo-app"
        assert "auth" not in result.selection
        assert [v.step.kind for v in prompt.views][-2:] == [
            StepKind.CONFIRM_OVERWRITE,
            StepKind.REVIEW,
        ]

    def test_cancel_returns_cancelled(self, collector, scripted_prompt):
        result = collector.run(scripted_prompt([Submit("Demo"), Cancel()]))
        assert isinstance(result, Cancelled)

    def test_validation_error_reprompts(self, collector, scripted_prompt):
        prompt = scripted_prompt([Submit(""), Cancel()])
        collector.run(prompt)
        first, second = prompt.views
        assert first.error is None
        assert second.step.kind is StepKind.APP_NAME
        assert second.error == "app name cannot be empty"

    def test_back_redisplays_previous_value(self, collector, scripted_prompt):
        prompt = scripted_prompt([Submit("Demo"), Back(), Cancel()])
        collector.run(prompt)
        assert prompt.views[2].step.kind is StepKind.APP_NAME
        assert prompt.views[2].value == "Demo"

    def test_review_view_has_summary(self, collector, scripted_prompt):
        prompt = scripted_prompt(
            [Submit("Demo"), Submit("mod")] + [Submit()] * 5 + [Cancel()]
        )
        collector.run(prompt)
        review = prompt.views[-1]
        assert review.step.kind is StepKind.REVIEW
        assert "  Destination : /work/demo" in review.details

    def test_confirm_view_shows_destination(self, collector, scripted_prompt):
        prompt = scripted_prompt([Submit("Demo"), Submit("mod")] + [Submit()] * 4 + [Cancel()])
        collector.run(prompt)
        confirm = prompt.views[-1]
        assert confirm.step.kind is StepKind.CONFIRM_OVERWRITE
        assert confirm.details == ["The project will be scaffolded at /work/demo."]

    def test_positions_count_visible_steps(self, collector, scripted_prompt):
        prompt = scripted_prompt([Submit("Demo"), Cancel()])
        collector.run(prompt)
        first, second = prompt.views
        # auth is hidden while the database is "none"
        assert first.total == 2 + CATEGORY_STEPS - 1 + 2
        assert (first.position, second.position) == (1, 2)

    def test_hidden_auth_binding_dropped(self, collector, scripted_prompt):
        assert collector.state.bindings["auth"] == "auth-github-oauth2"
        prompt = scripted_prompt(
            [Submit("Demo"), Submit("mod")] + [Submit()] * 4 + [Submit(), Submit()]
        )
        result = collector.run(prompt)
        assert "auth" not in result.selection


def _view_at(collector, cursor):
    collector.state = collector.state.model_copy(update={"cursor": cursor})
    return collector.view()


class TestConsolePrompter:
    @pytest.fixture
    def console(self):
        return Console(file=io.StringIO(), force_terminal=False, width=100)

    def _answer(self, monkeypatch, console, answer):
        def _input(*args):
            if isinstance(answer, BaseException):
                raise answer
            return answer

        monkeypatch.setattr("builtins.input", _input)

    def test_back_and_cancel_commands(self, monkeypatch, console, collector):
        prompter = ConsolePrompter(console)
        view = collector.view()
        self._answer(monkeypatch, console, "<")
        assert prompter(view) == Back()
        self._answer(monkeypatch, console, ":q")
        assert prompter(view) == Cancel()

    def test_interrupt_cancels(self, monkeypatch, console, collector):
        self._answer(monkeypatch, console, KeyboardInterrupt())
        assert ConsolePrompter(console)(collector.view()) == Cancel()

    def test_empty_answer_keeps_value(self, monkeypatch, console, collector):
        self._answer(monkeypatch, console, "   ")
        assert ConsolePrompter(console)(collector.view()) == Submit()

    def test_text_answer(self, monkeypatch, console, collector):
        self._answer(monkeypatch, console, " My App ")
        assert ConsolePrompter(console)(collector.view()) == Submit("My App")

    def test_numbered_choice(self, monkeypatch, console, collector):
        view = _view_at(collector, 2)
        self._answer(monkeypatch, console, "1")
        assert ConsolePrompter(console)(view) == Submit("frontend-fixi")
        output = console.file.getvalue()
        assert "1. Fixi.js" in output
        assert "* 2. HTMX" in output

    def test_confirm_answer(self, monkeypatch, console, collector):
        view = _view_at(collector, 7)
        self._answer(monkeypatch, console, "y")
        assert ConsolePrompter(console)(view) == Submit(True)
        self._answer(monkeypatch, console, "no")
        assert ConsolePrompter(console)(view) == Submit(False)

    def test_error_is_printed(self, monkeypatch, console, collector):
        self._answer(monkeypatch, console, "x")
        ConsolePrompter(console)(collector.view("app name cannot be empty"))
        assert "app name cannot be empty" in console.file.getvalue()

    def test_confirm_prompt_shows_hint(self, monkeypatch, console, collector):
        self._answer(monkeypatch, console, "")
        ConsolePrompter(console)(_view_at(collector, 7))
        assert "[y/n] (No):" in console.file.getvalue()

    def test_unrecognised_confirm_answer_passed_through(self, monkeypatch, console, collector):
        self._answer(monkeypatch, console, "ye s")
        assert ConsolePrompter(console)(_view_at(collector, 7)) == Submit("ye s")

    def test_unrecognised_confirm_answer_rejected_inline(self, monkeypatch, console, registry):
        collector = Collector(
            registry,
            WizardOptions(
                app_name="demo",
                module_path="mod",
                default_selection=registry.default_selection(),
            ),
            working_dir="/w",
        )
        answers = iter(["", "", "", "", "", "", "ye s", ":q"])
        monkeypatch.setattr("builtins.input", lambda *args: next(answers))
        assert isinstance(collector.run(ConsolePrompter(console)), Cancelled)
        assert "answer y or n" in console.file.getvalue()

    def test_markup_in_values_is_literal(self, monkeypatch, console, registry):
        collector = Collector(registry, WizardOptions(app_name="my[/]app"), working_dir="/w")
        self._answer(monkeypatch, console, "")
        assert ConsolePrompter(console)(collector.view()) == Submit()
        assert "(my[/]app):" in console.file.getvalue()
