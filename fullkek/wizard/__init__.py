"""Interactive wizard that collects a project name, module path and features.

Quick usage::

    from fullkek.stacks import default_registry
    from fullkek.wizard import Cancelled, Collector, ConsolePrompter, WizardOptions

    collector = Collector(default_registry(), WizardOptions(app_name="demo"))
    outcome = collector.run(ConsolePrompter())
    if isinstance(outcome, Cancelled):
        ...  # the user aborted; do nothing
"""

from fullkek.wizard.collector import Collector, ConsolePrompter, StepView
from fullkek.wizard.state import (
    Back,
    Cancel,
    Cancelled,
    Status,
    Step,
    StepKind,
    Submit,
    WizardError,
    WizardOptions,
    WizardResult,
    WizardState,
    advance,
    build_result,
    initial_state,
    is_visible,
    summary_lines,
)

__all__ = [
    "Back",
    "Cancel",
    "Cancelled",
    "Collector",
    "ConsolePrompter",
    "Status",
    "Step",
    "StepKind",
    "StepView",
    "Submit",
    "WizardError",
    "WizardOptions",
    "WizardResult",
    "WizardState",
    "advance",
    "build_result",
    "initial_state",
    "is_visible",
    "summary_lines",
]
