"""Base project layout shared by every generated project.

A generator creates :data:`BASE_DIRECTORIES` and renders
:data:`BASE_TEMPLATES` before the blueprint's own files.  Blueprint templates
win over base templates that target the same destination.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .models import Blueprint, Template


BASE_DIRECTORIES: tuple[str, ...] = (
    "cmd/server",
    "internal/app",
    "internal/transport/http",
    "web/templates/pages",
    "web/assets/styles",
    "web/assets/scripts",
    "bin",
)

BASE_TEMPLATES: tuple[Template, ...] = tuple(
    Template(source=f"base/{destination}.tmpl", destination=destination)
    for destination in (
        "go.mod",
        "README.md",
        "Makefile",
        ".gitignore",
        "cmd/server/main.go",
        "internal/app/app.go",
        "internal/transport/http/server.go",
        "internal/transport/http/router.go",
        "web/templates/README.md",
        "web/assets/styles/README.md",
        "web/assets/scripts/README.md",
    )
)


class ProjectLayout(BaseModel):
    """Everything a generator has to create for one project."""
    model_config = ConfigDict(frozen=True)

    directories: tuple[str, ...] = Field(default_factory=tuple)
    templates: tuple[Template, ...] = Field(default_factory=tuple)


def project_layout(blueprint: Blueprint) -> ProjectLayout:
    """Merge the base layout with *blueprint*.

    Directories are unioned and sorted.  Templates are keyed by destination;
    a blueprint template replaces the base template at the same path.
    """
    directories = sorted(set(BASE_DIRECTORIES) | set(blueprint.directories))

    templates: dict[str, Template] = {t.destination: t for t in BASE_TEMPLATES}
    for template in blueprint.templates:
        templates[template.destination] = template

    return ProjectLayout(
        directories=tuple(directories),
        templates=tuple(templates[key] for key in sorted(templates)),
    )
