"""Tests for request planning (fullkek.planner).

Covers:
- Non-interactive planning from an app name and config
- Flag-style feature overrides and their errors
- Wizard results merged over flag selections
- The interactive path, including cancellation
- Next-steps reporting
"""

from __future__ import annotations

from pathlib import Path

import pytest

from fullkek.config import Config, FeatureDefaults
from fullkek.planner import (
    PlanError,
    ScaffoldRequest,
    base_selection,
    next_steps,
    plan,
    plan_interactive,
    plan_project,
    print_plan,
)
from fullkek.stacks.errors import FeatureCategoryMismatch, UnknownFeatureID
from fullkek.utils import console
from fullkek.wizard.state import Cancel, Cancelled, Submit, WizardResult

pytestmark = pytest.mark.unit


class TestBaseSelection:
    def test_registry_defaults(self, registry):
        assert base_selection(registry, Config()) == registry.default_selection()

    def test_flag_override(self, registry):
        config = Config(features=FeatureDefaults(http="http-chi"))
        selection = base_selection(registry, config)
        assert selection["http"] == ["http-chi"]
        assert selection["frontend"] == ["frontend-htmx"]


class TestPlanProject:
    def test_defaults(self):
        request = plan_project("My App")
        assert request.app_name == "My App"
        assert request.module_path == "my-app"
        assert request.destination == "my-app"
        assert request.force is False
        assert request.blueprint.id == "frontend-htmx+styling-tailwind+http-standard+database-none"
        assert "cmd/server" in request.layout.directories

    def test_app_name_required(self):
        with pytest.raises(PlanError, match="app name required"):
            plan_project("   ")

    def test_explicit_values(self):
        request = plan_project(
            " Demo ",
            module_path="example.com/demo",
            output_dir="./build/demo",
            config=Config(output_root=Path("/srv"), force=True),
        )
        assert request.app_name == "Demo"
        assert request.module_path == "example.com/demo"
        assert request.destination == "/srv/build/demo"
        assert request.force is True

    def test_module_prefix(self):
        request = plan_project("My App", config=Config(module_prefix="github.com/me/"))
        assert request.module_path == "github.com/me/my-app"

    def test_feature_override(self):
        config = Config(features=FeatureDefaults(styling="styling-daisyui"))
        request = plan_project("demo", config=config)
        assert request.blueprint.has_feature("styling-daisyui")
        assert not request.blueprint.has_feature("styling-tailwind")

    def test_unknown_feature_override(self):
        config = Config(features=FeatureDefaults(frontend="frontend-react"))
        with pytest.raises(UnknownFeatureID):
            plan_project("demo", config=config)

    def test_mismatched_feature_override(self):
        config = Config(features=FeatureDefaults(http="styling-daisyui"))
        with pytest.raises(FeatureCategoryMismatch):
            plan_project("demo", config=config)

    def test_wizard_result_wins(self):
        result = WizardResult(
            app_name="Wizard App",
            module_path="example.com/wizard",
            output_dir="wizard-app",
            force=True,
            selection={
                "frontend": ["frontend-fixi"],
                "styling": ["styling-tailwind"],
                "http": ["http-chi"],
                "database": ["database-sqlite"],
                "auth": ["auth-github-oauth2"],
            },
        )
        request = plan_project("ignored", wizard_result=result)
        assert request.app_name == "Wizard App"
        assert request.module_path == "example.com/wizard"
        assert request.destination == "wizard-app"
        assert request.force is True
        assert request.blueprint.has_feature("auth-github-oauth2")
        assert request.blueprint.has_feature("frontend-fixi")


class TestPlanInteractive:
    def test_cancelled(self, scripted_prompt):
        outcome = plan_interactive(scripted_prompt([Cancel()]), working_dir="/work")
        assert isinstance(outcome, Cancelled)

    def test_completed(self, scripted_prompt):
        prompt = scripted_prompt(
            [Submit("Shop"), Submit("example.com/shop")]
            + [Submit(), Submit(), Submit(), Submit("database-sqlite")]
            + [Submit(), Submit(), Submit()]  # auth, confirm, review
        )
        outcome = plan_interactive(
            prompt,
            config=Config(features=FeatureDefaults(http="http-chi")),
            working_dir="/work",
        )
        assert isinstance(outcome, ScaffoldRequest)
        assert outcome.destination == "shop"
        assert outcome.blueprint.id == (
            "frontend-htmx+styling-tailwind+http-chi+database-sqlite+auth-github-oauth2"
        )

    def test_flag_defaults_seed_wizard(self, scripted_prompt):
        prompt = scripted_prompt([Submit("Shop"), Submit("m"), Cancel()])
        plan_interactive(
            prompt,
            config=Config(features=FeatureDefaults(frontend="frontend-fixi")),
            working_dir="/work",
        )
        assert prompt.views[-1].value == "frontend-fixi"


class TestPlan:
    def test_interactive_uses_prompt(self, scripted_prompt):
        prompt = scripted_prompt([Cancel()])
        assert isinstance(plan(prompt=prompt, working_dir="/work"), Cancelled)
        assert len(prompt.views) == 1

    def test_non_interactive_skips_prompt(self, scripted_prompt):
        prompt = scripted_prompt([Cancel()])
        request = plan("My App", config=Config(interactive=False), prompt=prompt)
        assert isinstance(request, ScaffoldRequest)
        assert request.destination == "my-app"
        assert prompt.views == []

    def test_no_terminal_falls_back(self, monkeypatch):
        monkeypatch.setattr(type(console), "is_terminal", property(lambda self: False))
        with pytest.raises(PlanError, match="app name required"):
            plan()
        assert plan("My App").app_name == "My App"


class TestReporting:
    def test_next_steps(self):
        lines = next_steps(plan_project("My App"))
        assert lines[0] == "Project scaffolded at my-app"
        assert "Stack: HTMX + Tailwind CSS + net/http + None" in lines
        assert "  - HTMX" in lines
        assert "  1. cd my-app" in lines
        assert lines[-1] == "Review my-app/README.md for detailed guidance."

    def test_print_plan(self, capsys):
        print_plan(plan_project("My App"))
        out = capsys.readouterr().out
        assert "Scaffold plan" in out
        assert "go mod tidy" in out

    def test_print_plan_warns_on_force(self, capsys):
        print_plan(plan_project("My App", config=Config(force=True)))
        out = capsys.readouterr().out
        assert "will be overwritten" in out
