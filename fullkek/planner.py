"""Turn user input into a validated scaffold request.

The planner joins the pieces: registry defaults, flag-style overrides from
``Config``, an optional wizard result, and the composer.  The returned
``ScaffoldRequest`` is everything an external generator needs; nothing here
touches the filesystem.

Usage::

    from fullkek.config import Config
    from fullkek.planner import plan_project

    request = plan_project("My App", config=Config())
"""

from __future__ import annotations

import logging
import os
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

from fullkek.config import Config
from fullkek.stacks.composer import compose
from fullkek.stacks.layout import ProjectLayout, project_layout
from fullkek.stacks.models import Blueprint, Selection
from fullkek.stacks.registry import Registry, default_registry
from fullkek.stacks.selection import (
    clone_selection,
    merge_selections,
    selection_from_values,
)
from fullkek.utils import (
    console,
    derive_module_path,
    humanize_bool,
    print_success,
    print_summary_table,
    print_warning,
    resolve_output_dir,
)
from fullkek.wizard.collector import Collector, ConsolePrompter, Prompt
from fullkek.wizard.state import Cancelled, WizardOptions, WizardResult

logger = logging.getLogger(__name__)


class PlanError(ValueError):
    """Raised when the request cannot be planned from the given input."""


class ScaffoldRequest(BaseModel):
    """A fully resolved request handed to the external generator."""
    model_config = ConfigDict(frozen=True)

    app_name: str
    module_path: str
    destination: str
    force: bool
    blueprint: Blueprint
    layout: ProjectLayout


def base_selection(registry: Registry, config: Config) -> Selection:
    """Registry defaults overridden by the feature values in *config*."""
    return merge_selections(
        registry.default_selection(),
        selection_from_values(config.flag_values()),
    )


def _module_path(app_name: str, override: str, prefix: str) -> str:
    module_path = derive_module_path(app_name, override)
    if override.strip() or not prefix.strip():
        return module_path
    return f"{prefix.strip().rstrip('/')}/{module_path}"


def plan_project(
    app_name: str = "",
    *,
    config: Optional[Config] = None,
    registry: Optional[Registry] = None,
    module_path: str = "",
    output_dir: str = "",
    wizard_result: Optional[WizardResult] = None,
) -> ScaffoldRequest:
    """Build a ``ScaffoldRequest``.

    Without a wizard result the app name is mandatory and the module path
    and destination are derived from it unless given explicitly.  With a
    wizard result its answers win, and its selection is merged over the
    flag-style selection.

    Raises:
        PlanError: The app name is missing.
        StackError: The merged selection does not compose.
    """
    config = config or Config()
    registry = registry or default_registry()

    selection = base_selection(registry, config)
    force = config.force

    if wizard_result is not None:
        selection = merge_selections(selection, wizard_result.selection)
        app_name = wizard_result.app_name
        module_path = wizard_result.module_path
        output_dir = wizard_result.output_dir
        force = wizard_result.force
    elif not app_name.strip():
        raise PlanError("app name required when not using interactive mode")

    app_name = app_name.strip()
    if not app_name:
        raise PlanError("app name cannot be empty")

    module_path = _module_path(app_name, module_path, config.module_prefix)
    destination = resolve_output_dir(app_name, output_dir)
    destination = os.path.normpath(config.output_root / destination)

    blueprint = compose(selection, registry)
    logger.debug("Planned %s at %s using %s", app_name, destination, blueprint.name)

    return ScaffoldRequest(
        app_name=app_name,
        module_path=module_path,
        destination=destination,
        force=force,
        blueprint=blueprint,
        layout=project_layout(blueprint),
    )


def plan_interactive(
    prompt: Prompt,
    app_name: str = "",
    *,
    config: Optional[Config] = None,
    registry: Optional[Registry] = None,
    module_path: str = "",
    output_dir: str = "",
    working_dir: Optional[str] = None,
) -> Union[ScaffoldRequest, Cancelled]:
    """Collect answers with the wizard, then plan the project.

    Returns ``Cancelled`` unchanged when the user aborts.
    """
    config = config or Config()
    registry = registry or default_registry()

    options = WizardOptions(
        app_name=app_name,
        module_path=module_path,
        output_dir=output_dir,
        force=config.force,
        default_selection=clone_selection(base_selection(registry, config)),
    )
    outcome = Collector(registry, options, working_dir=working_dir).run(prompt)
    if isinstance(outcome, Cancelled):
        return outcome
    return plan_project(config=config, registry=registry, wizard_result=outcome)


def plan(
    app_name: str = "",
    *,
    config: Optional[Config] = None,
    registry: Optional[Registry] = None,
    module_path: str = "",
    output_dir: str = "",
    prompt: Optional[Prompt] = None,
    working_dir: Optional[str] = None,
) -> Union[ScaffoldRequest, Cancelled]:
    """Plan with the wizard when ``config.interactive`` allows it.

    The wizard runs only if interaction is enabled and there is someone to
    answer: an explicit *prompt*, or a terminal on the shared console.
    Otherwise the request is planned from *app_name* and the config alone.
    """
    config = config or Config()
    if config.interactive and (prompt is not None or console.is_terminal):
        return plan_interactive(
            prompt or ConsolePrompter(console),
            app_name,
            config=config,
            registry=registry,
            module_path=module_path,
            output_dir=output_dir,
            working_dir=working_dir,
        )
    return plan_project(
        app_name,
        config=config,
        registry=registry,
        module_path=module_path,
        output_dir=output_dir,
    )


# ---------------------------------------------------------------------------
# Reporting
# ---------------------------------------------------------------------------


def next_steps(request: ScaffoldRequest) -> list[str]:
    """Describe the generated project and the commands to run next."""
    blueprint = request.blueprint
    lines = [f"Project scaffolded at {request.destination}", f"Stack: {blueprint.name}"]
    if blueprint.tags:
        lines.append(f"Tags: {', '.join(blueprint.tags)}")
    if blueprint.features:
        lines.append("Features:")
        lines.extend(f"  - {feature.name}" for feature in blueprint.features)

    lines.append("")
    lines.append("Next steps:")
    lines.append(f"  1. cd {request.destination}")
    lines.append("  2. go mod tidy")
    lines.append("  3. go run ./cmd/server")
    lines.append("")
    lines.append(f"Review {request.destination}/README.md for detailed guidance.")
    return lines


def print_plan(request: ScaffoldRequest) -> None:
    """Print a summary table of *request* followed by the next steps."""
    print_summary_table(
        {
            "App name": request.app_name,
            "Module path": request.module_path,
            "Destination": request.destination,
            "Overwrite": humanize_bool(request.force),
            "Stack": request.blueprint.name,
            "Directories": str(len(request.layout.directories)),
            "Templates": str(len(request.layout.templates)),
        },
        title="Scaffold plan",
    )
    print_success(request.blueprint.description)
    if request.force:
        print_warning(f"Existing files in {request.destination} will be overwritten")
    for line in next_steps(request):
        console.print(line, markup=False)
