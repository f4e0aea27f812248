"""Wizard state and pure step transitions.

The wizard is an explicit state value plus :func:`advance`, which maps
``(state, event)`` to ``(next_state, validation_error)``.  Step visibility is
a predicate evaluated against the live state right before a step is shown,
so changing an earlier answer can reveal or hide a later step.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from fullkek.stacks.composer import compose
from fullkek.stacks.errors import StackError
from fullkek.stacks.models import Category, Feature, Selection
from fullkek.stacks.registry import Registry
from fullkek.stacks.selection import clone_selection, selection_from_values
from fullkek.utils import (
    humanize_bool,
    resolve_output_dir,
    scaffold_destination_path,
    value_or_placeholder,
)

logger = logging.getLogger(__name__)


class WizardError(ValueError):
    """Raised when the wizard cannot be set up from the supplied catalog."""


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------

class StepKind(str, Enum):
    APP_NAME = "app_name"
    MODULE_PATH = "module_path"
    CATEGORY = "category"
    CONFIRM_OVERWRITE = "confirm_overwrite"
    REVIEW = "review"


class Status(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Step(BaseModel):
    """A single screen of the wizard."""
    model_config = ConfigDict(frozen=True)

    kind: StepKind
    title: str
    description: str = ""
    category: Optional[Category] = None
    choices: tuple[Feature, ...] = Field(default_factory=tuple)

    def choice_name(self, feature_id: str) -> Optional[str]:
        for feature in self.choices:
            if feature.id == feature_id:
                return feature.name
        return None


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Submit:
    """Confirm the current step.  ``value=None`` keeps the bound value."""
    value: Any = None


@dataclass(frozen=True)
class Back:
    """Return to the previous visible step."""


@dataclass(frozen=True)
class Cancel:
    """Abort the whole wizard."""


Event = Union[Submit, Back, Cancel]


# ---------------------------------------------------------------------------
# Options, state and results
# ---------------------------------------------------------------------------

class WizardOptions(BaseModel):
    """Defaults the wizard is seeded with."""

    app_name: str = ""
    module_path: str = ""
    output_dir: str = ""
    force: bool = False
    default_selection: Selection = Field(default_factory=dict)


class WizardState(BaseModel):
    """Live field bindings and the position within the step list."""
    model_config = ConfigDict(frozen=True)

    steps: tuple[Step, ...]
    cursor: int = 0
    app_name: str = ""
    module_path: str = ""
    output_dir: str = ""
    force: bool = False
    bindings: dict[str, str] = Field(default_factory=dict)
    status: Status = Status.ACTIVE

    @property
    def current_step(self) -> Step:
        return self.steps[self.cursor]


class WizardResult(BaseModel):
    """Answers collected by a completed wizard run."""
    model_config = ConfigDict(frozen=True)

    app_name: str
    module_path: str
    output_dir: str
    force: bool
    selection: Selection


@dataclass(frozen=True)
class Cancelled:
    """Outcome of a wizard run the user aborted.  Callers should do nothing."""


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

def build_steps(registry: Registry) -> tuple[Step, ...]:
    """Build the fixed step list for *registry*."""
    categories = registry.categories()
    if not categories:
        raise WizardError("no feature categories available for interactive wizard")

    steps: list[Step] = [
        Step(
            kind=StepKind.APP_NAME,
            title="Application name",
            description="Used to derive default module and destination names.",
        ),
        Step(
            kind=StepKind.MODULE_PATH,
            title="Go module path",
            description="Enter the Go module path (e.g. github.com/username/project).",
        ),
    ]
    for category in categories:
        choices = tuple(registry.features_for(category.id))
        if not choices:
            raise WizardError(f"no features registered for category {category.name!r}")
        steps.append(
            Step(
                kind=StepKind.CATEGORY,
                title=category.name,
                description=category.description.strip(),
                category=category,
                choices=choices,
            )
        )
    steps.append(
        Step(
            kind=StepKind.CONFIRM_OVERWRITE,
            title="Overwrite destination if it already exists?",
        )
    )
    steps.append(Step(kind=StepKind.REVIEW, title="Review configuration"))
    return tuple(steps)


def initial_state(registry: Registry, options: WizardOptions) -> WizardState:
    """Seed the wizard from *options*.

    Each category binding starts from the first default id that is one of the
    category's choices, falling back to the first available feature.
    """
    steps = build_steps(registry)
    defaults = clone_selection(options.default_selection)

    bindings: dict[str, str] = {}
    for step in steps:
        if step.kind is not StepKind.CATEGORY:
            continue
        assert step.category is not None
        ids = defaults.get(step.category.id, [])
        default_id = ids[0] if ids else ""
        if default_id and step.choice_name(default_id) is not None:
            bindings[step.category.id] = default_id
        else:
            bindings[step.category.id] = step.choices[0].id

    return WizardState(
        steps=steps,
        app_name=options.app_name.strip(),
        module_path=options.module_path.strip(),
        output_dir=options.output_dir.strip(),
        force=options.force,
        bindings=bindings,
    )


# ---------------------------------------------------------------------------
# Visibility
# ---------------------------------------------------------------------------

def is_visible(step: Step, state: WizardState) -> bool:
    """Return whether *step* is shown given the current bindings."""
    if step.kind is not StepKind.CATEGORY or step.category is None:
        return True
    requirement = step.category.requires
    if requirement is None:
        return True
    return state.bindings.get(requirement.category_id) == requirement.feature_id


def visible_steps(state: WizardState) -> list[Step]:
    return [step for step in state.steps if is_visible(step, state)]


def _next_visible(state: WizardState, start: int, direction: int) -> Optional[int]:
    index = start + direction
    while 0 <= index < len(state.steps):
        if is_visible(state.steps[index], state):
            return index
        index += direction
    return None


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------

def current_value(state: WizardState) -> Any:
    """Return the value currently bound to the active step."""
    step = state.current_step
    if step.kind is StepKind.APP_NAME:
        return state.app_name
    if step.kind is StepKind.MODULE_PATH:
        return state.module_path
    if step.kind is StepKind.CATEGORY:
        assert step.category is not None
        return state.bindings.get(step.category.id, "")
    if step.kind is StepKind.CONFIRM_OVERWRITE:
        return state.force
    return None


def _bind(state: WizardState, value: Any) -> tuple[WizardState, Optional[str]]:
    """Store *value* on the active step and validate it."""
    step = state.current_step

    if step.kind in (StepKind.APP_NAME, StepKind.MODULE_PATH):
        text = "" if value is None else str(value)
        field = "app_name" if step.kind is StepKind.APP_NAME else "module_path"
        state = state.model_copy(update={field: text})
        if not text.strip():
            label = "app name" if step.kind is StepKind.APP_NAME else "module path"
            return state, f"{label} cannot be empty"
        return state, None

    if step.kind is StepKind.CATEGORY:
        assert step.category is not None
        feature_id = str(value).strip()
        if step.choice_name(feature_id) is None:
            return state, f"select a feature for {step.category.name}"
        bindings = {**state.bindings, step.category.id: feature_id}
        return state.model_copy(update={"bindings": bindings}), None

    if step.kind is StepKind.CONFIRM_OVERWRITE:
        if not isinstance(value, bool):
            return state, "answer y or n"
        return state.model_copy(update={"force": value}), None

    return state, None


def advance(state: WizardState, event: Event) -> tuple[WizardState, Optional[str]]:
    """Apply *event* to *state*.

    Returns:
        ``(next_state, error)``.  A non-``None`` error means validation
        failed and the cursor did not move.
    """
    if state.status is not Status.ACTIVE:
        return state, None

    if isinstance(event, Cancel):
        logger.debug("Wizard cancelled at step %s", state.current_step.kind.value)
        return state.model_copy(update={"status": Status.CANCELLED}), None

    if isinstance(event, Back):
        previous = _next_visible(state, state.cursor, -1)
        if previous is None:
            return state, None
        return state.model_copy(update={"cursor": previous}), None

    if state.current_step.kind is StepKind.REVIEW:
        logger.debug("Wizard completed")
        return state.model_copy(update={"status": Status.COMPLETED}), None

    value = current_value(state) if event.value is None else event.value
    state, error = _bind(state, value)
    if error is not None:
        return state, error

    following = _next_visible(state, state.cursor, 1)
    if following is None:
        return state.model_copy(update={"status": Status.COMPLETED}), None
    return state.model_copy(update={"cursor": following}), None


# ---------------------------------------------------------------------------
# Summary and result
# ---------------------------------------------------------------------------

def _visible_selection(state: WizardState) -> Selection:
    values: dict[str, str] = {}
    for step in visible_steps(state):
        if step.kind is StepKind.CATEGORY and step.category is not None:
            values[step.category.id] = state.bindings.get(step.category.id, "")
    return selection_from_values(values)


def summary_lines(state: WizardState, registry: Registry, working_dir: str = "") -> list[str]:
    """Render the review summary from the live bindings."""
    destination = scaffold_destination_path(working_dir, state.app_name, state.output_dir)

    lines = [
        "Project Details",
        f"  App name    : {value_or_placeholder(state.app_name)}",
        f"  Module path : {value_or_placeholder(state.module_path)}",
        f"  Destination : {destination or '(not set)'}",
        f"  Overwrite   : {humanize_bool(state.force)}",
    ]

    try:
        stack = compose(_visible_selection(state), registry).name
    except StackError as exc:
        stack = f"invalid ({exc})"
    lines.append(f"  Stack       : {stack}")

    features: list[str] = []
    for step in visible_steps(state):
        if step.kind is not StepKind.CATEGORY or step.category is None:
            continue
        name = step.choice_name(state.bindings.get(step.category.id, ""))
        if name and name.lower() != "none":
            features.append(f"  - {step.category.name} -> {name}")
    if features:
        lines.append("")
        lines.append("Selected features:")
        lines.extend(features)
    return lines


def build_result(state: WizardState) -> WizardResult:
    """Build the result of a completed run.

    Only steps visible at completion contribute to the selection, so a
    hidden category's stale binding is dropped.
    """
    app_name = state.app_name.strip()
    return WizardResult(
        app_name=app_name,
        module_path=state.module_path.strip(),
        output_dir=resolve_output_dir(app_name, state.output_dir),
        force=state.force,
        selection=_visible_selection(state),
    )
