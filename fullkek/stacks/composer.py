"""Compose resolved features into a single project blueprint.

Composition is pure: the same selection always yields an equal blueprint,
so it is safe to call repeatedly for live previews.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Optional

from .errors import ConflictingTemplateDestination
from .models import Blueprint, Template
from .registry import Registry, default_registry
from .resolver import resolve

logger = logging.getLogger(__name__)

BASE_ID = "base"
BASE_NAME = "Base"
BASE_DESCRIPTION = "Modular stack"


def compose(
    selection: Mapping[str, Sequence[str]],
    registry: Optional[Registry] = None,
) -> Blueprint:
    """Build a blueprint from *selection*.

    Args:
        selection: Category id -> chosen feature ids.
        registry: Catalog to resolve against.  Defaults to the built-in
            catalog.

    Returns:
        The composed, deduplicated blueprint.

    Raises:
        StackError: Any resolver error, unchanged, or
            ``ConflictingTemplateDestination`` when two different template
            sources target the same destination.
    """
    if registry is None:
        registry = default_registry()

    resolved = resolve(selection, registry)

    directories: set[str] = set()
    tags: set[str] = set()
    templates: dict[str, Template] = {}
    id_parts: list[str] = []
    name_parts: list[str] = []
    description_parts: list[str] = []

    for category, feature in resolved:
        id_parts.append(feature.id)
        name_parts.append(feature.name)
        description_parts.append(f"{category.name}: {feature.name}")

        directories.update(feature.directories)
        tags.update(feature.tags)
        for template in feature.templates:
            existing = templates.get(template.destination)
            if existing is None:
                templates[template.destination] = template
            elif existing.source != template.source:
                raise ConflictingTemplateDestination(
                    template.destination, existing.source, template.source
                )

    description = BASE_DESCRIPTION
    if description_parts:
        description = f"{BASE_DESCRIPTION} composed of {', '.join(description_parts)}"

    blueprint = Blueprint(
        id="+".join(id_parts) or BASE_ID,
        name=" + ".join(name_parts) or BASE_NAME,
        description=description,
        directories=tuple(sorted(directories)),
        tags=tuple(sorted(tags)),
        templates=tuple(templates[key] for key in sorted(templates)),
        features=tuple(r.feature for r in resolved),
    )
    logger.debug(
        "Composed stack %s (%d directories, %d templates)",
        blueprint.id,
        len(blueprint.directories),
        len(blueprint.templates),
    )
    return blueprint
