"""Feature catalog, selection resolution and stack composition.

Quick usage::

    from fullkek.stacks import compose, default_registry

    registry = default_registry()
    blueprint = compose(registry.default_selection(), registry)
"""

from fullkek.stacks.composer import compose
from fullkek.stacks.errors import (
    CardinalityViolation,
    ConflictingTemplateDestination,
    ErrorKind,
    FeatureCategoryMismatch,
    MissingRequiredCategory,
    StackError,
    UnknownFeatureID,
)
from fullkek.stacks.layout import ProjectLayout, project_layout
from fullkek.stacks.models import (
    Blueprint,
    Category,
    CategoryId,
    CategoryRequirement,
    Feature,
    ResolvedFeature,
    Selection,
    Template,
)
from fullkek.stacks.registry import Registry, default_registry
from fullkek.stacks.resolver import resolve
from fullkek.stacks.selection import (
    clone_selection,
    merge_selections,
    selection_from_values,
)

__all__ = [
    "Blueprint",
    "CardinalityViolation",
    "Category",
    "CategoryId",
    "CategoryRequirement",
    "ConflictingTemplateDestination",
    "ErrorKind",
    "Feature",
    "FeatureCategoryMismatch",
    "MissingRequiredCategory",
    "ProjectLayout",
    "Registry",
    "ResolvedFeature",
    "Selection",
    "StackError",
    "Template",
    "UnknownFeatureID",
    "clone_selection",
    "compose",
    "default_registry",
    "merge_selections",
    "project_layout",
    "resolve",
    "selection_from_values",
]
