"""Shared pytest fixtures for the fullkek test suite.

Provides reusable fixtures for:
- The built-in feature registry
- Small hand-built registries for composition edge cases
- Scripted wizard prompts
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

import pytest

from fullkek.stacks.models import Category, Feature, Template
from fullkek.stacks.registry import Registry, default_registry
from fullkek.wizard.collector import StepView
from fullkek.wizard.state import Event


# ---------------------------------------------------------------------------
# Registries
# ---------------------------------------------------------------------------

@pytest.fixture
def registry() -> Registry:
    """The built-in catalog (frontend, styling, http, database, auth)."""
    return default_registry()


@pytest.fixture
def conflict_registry() -> Registry:
    """Two required categories whose features both write ``d1``."""
    return Registry(
        category_list=(
            Category(id="frontend", name="Frontend", required=True),
            Category(id="styling", name="Styling", required=True),
        ),
        feature_list=(
            Feature(
                id="frontend-a",
                category_id="frontend",
                name="Frontend A",
                templates=(Template(source="A", destination="d1"),),
            ),
            Feature(
                id="styling-b",
                category_id="styling",
                name="Styling B",
                templates=(Template(source="B", destination="d1"),),
            ),
        ),
    )


@pytest.fixture
def shared_registry() -> Registry:
    """Features that share identical templates, directories and tags."""
    shared = Template(source="shared/README.md.tmpl", destination="README.md")
    return Registry(
        category_list=(
            Category(id="frontend", name="Frontend", required=True),
            Category(id="plugins", name="Plugins", allow_multiple=True),
        ),
        feature_list=(
            Feature(
                id="frontend-a",
                category_id="frontend",
                name="Frontend A",
                directories=frozenset({"web", "public"}),
                tags=frozenset({"web"}),
                templates=(shared, Template(source="a/app.js.tmpl", destination="web/app.js")),
            ),
            Feature(
                id="plugin-x",
                category_id="plugins",
                name="Plugin X",
                directories=frozenset({"web"}),
                tags=frozenset({"web", "x"}),
                templates=(shared,),
            ),
            Feature(
                id="plugin-y",
                category_id="plugins",
                name="Plugin Y",
                tags=frozenset({"y"}),
                templates=(Template(source="y/y.txt.tmpl", destination="y.txt"),),
            ),
        ),
    )


@pytest.fixture
def optional_registry() -> Registry:
    """A registry without any required category."""
    return Registry(
        category_list=(Category(id="database", name="Database"),),
        feature_list=(
            Feature(
                id="database-sqlite",
                category_id="database",
                name="SQLite",
                directories=frozenset({"db"}),
                templates=(Template(source="db.tmpl", destination="db/db.go"),),
            ),
        ),
    )


# ---------------------------------------------------------------------------
# Wizard helpers
# ---------------------------------------------------------------------------

@pytest.fixture
def scripted_prompt() -> Callable[[Iterable[Event]], Callable[[StepView], Event]]:
    """Factory for prompts that replay a fixed list of events.

    The returned prompt records every view it was shown on its ``views``
    attribute.
    """

    def _factory(events: Iterable[Event]) -> Callable[[StepView], Event]:
        pending = list(events)
        views: list[StepView] = []

        def _prompt(view: StepView) -> Event:
            views.append(view)
            if not pending:
                raise AssertionError(f"prompt exhausted at step {view.step.kind.value}")
            return pending.pop(0)

        _prompt.views = views  # type: ignore[attr-defined]
        return _prompt

    return _factory
