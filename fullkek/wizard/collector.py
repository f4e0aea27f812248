"""Interactive collector that drives the wizard state machine.

The collector owns the loop: it renders a :class:`StepView` for the active
step, hands it to a prompt callable, and applies the returned event.  Any
prompt works as long as it maps a view to ``Submit``/``Back``/``Cancel``;
:class:`ConsolePrompter` reads answers from a Rich console.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from rich.console import Console
from rich.markup import escape

from fullkek.stacks.registry import Registry
from fullkek.utils import humanize_bool, scaffold_destination_path

from .state import (
    Back,
    Cancel,
    Cancelled,
    Event,
    Status,
    Step,
    StepKind,
    Submit,
    WizardOptions,
    WizardResult,
    WizardState,
    advance,
    build_result,
    current_value,
    initial_state,
    is_visible,
    summary_lines,
    visible_steps,
)

logger = logging.getLogger(__name__)


class StepView(BaseModel):
    """What a prompt needs to display the active step."""
    model_config = ConfigDict(frozen=True)

    step: Step
    value: Any = None
    error: Optional[str] = None
    position: int = 1
    total: int = 1
    details: list[str] = Field(default_factory=list)


Prompt = Callable[[StepView], Event]


class Collector:
    """Collect an application name, module path and feature selection.

    Attributes:
        registry: Catalog the category steps are built from.
        state: The live wizard state.
    """

    def __init__(
        self,
        registry: Registry,
        options: Optional[WizardOptions] = None,
        working_dir: Optional[str] = None,
    ) -> None:
        self.registry = registry
        self.state: WizardState = initial_state(registry, options or WizardOptions())
        self.working_dir = os.getcwd() if working_dir is None else working_dir

    def view(self, error: Optional[str] = None) -> StepView:
        """Build the view of the active step from the live bindings."""
        step = self.state.current_step
        shown = visible_steps(self.state)
        position = sum(
            1 for candidate in self.state.steps[: self.state.cursor + 1]
            if is_visible(candidate, self.state)
        )

        details: list[str] = []
        if step.kind is StepKind.CONFIRM_OVERWRITE:
            destination = scaffold_destination_path(
                self.working_dir, self.state.app_name, self.state.output_dir
            )
            if destination:
                details.append(f"The project will be scaffolded at {destination}.")
        elif step.kind is StepKind.REVIEW:
            details = summary_lines(self.state, self.registry, self.working_dir)

        return StepView(
            step=step,
            value=current_value(self.state),
            error=error,
            position=position,
            total=len(shown),
            details=details,
        )

    def handle(self, event: Event) -> Optional[str]:
        """Apply one event and return the validation error, if any."""
        self.state, error = advance(self.state, event)
        return error

    def run(self, prompt: Prompt) -> Union[WizardResult, Cancelled]:
        """Run until the user completes or cancels the wizard.

        Returns:
            ``WizardResult`` on completion, ``Cancelled`` if the user aborted.
        """
        error: Optional[str] = None
        while self.state.status is Status.ACTIVE:
            error = self.handle(prompt(self.view(error)))
            if error:
                logger.debug("Validation failed on %s: %s", self.state.current_step.kind.value, error)

        if self.state.status is Status.CANCELLED:
            return Cancelled()
        return build_result(self.state)


# ---------------------------------------------------------------------------
# Console prompt
# ---------------------------------------------------------------------------

BACK_COMMAND = "<"
CANCEL_COMMAND = ":q"
YES_ANSWERS = ("y", "yes", "true", "1")
NO_ANSWERS = ("n", "no", "false", "0")


class ConsolePrompter:
    """Prompt for wizard answers on a Rich console.

    Type ``<`` to go back, ``:q`` (or Ctrl-C) to cancel.  An empty answer
    keeps the current value.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def __call__(self, view: StepView) -> Event:
        step = view.step
        self.console.print()
        self.console.print(f"[bold]{escape(step.title)}[/bold] ({view.position}/{view.total})")
        if step.description:
            self.console.print(escape(step.description))
        for line in view.details:
            self.console.print(line, markup=False)
        if view.error:
            self.console.print(f"[bold red]{escape(view.error)}[/bold red]")

        if step.kind is StepKind.CATEGORY:
            for number, feature in enumerate(step.choices, start=1):
                marker = "*" if feature.id == view.value else " "
                self.console.print(f" {marker} {number}. {feature.name}", markup=False)

        try:
            answer = self.console.input(self._prompt_text(view), markup=False).strip()
        except (EOFError, KeyboardInterrupt):
            return Cancel()

        if answer == CANCEL_COMMAND:
            return Cancel()
        if answer == BACK_COMMAND:
            return Back()
        if not answer:
            return Submit()
        return Submit(self._parse(view, answer))

    @staticmethod
    def _prompt_text(view: StepView) -> str:
        kind = view.step.kind
        if kind is StepKind.REVIEW:
            return "Press Enter to scaffold or < to adjust previous answers: "
        if kind is StepKind.CONFIRM_OVERWRITE:
            return f"[y/n] ({humanize_bool(bool(view.value))}): "
        if kind is StepKind.CATEGORY:
            return "Choice: "
        return f"({view.value}): " if view.value else "> "

    @staticmethod
    def _parse(view: StepView, answer: str) -> Any:
        kind = view.step.kind
        if kind is StepKind.CONFIRM_OVERWRITE:
            lowered = answer.lower()
            if lowered in YES_ANSWERS:
                return True
            if lowered in NO_ANSWERS:
                return False
            return answer
        if kind is StepKind.CATEGORY and answer.isdigit():
            index = int(answer) - 1
            if 0 <= index < len(view.step.choices):
                return view.step.choices[index].id
        return answer
