"""Pydantic v2 models for the feature catalog and composed blueprints.

Every model is frozen: catalog values are shared between callers and must
never change after the registry has been built.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


DEFAULT_FILE_MODE = 0o644

# Keys of an unordered mapping from category id to chosen feature ids.
Selection = dict[str, list[str]]


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class CategoryId(str, Enum):
    """Identifiers of the built-in feature categories."""
    FRONTEND = "frontend"
    STYLING = "styling"
    HTTP = "http"
    DATABASE = "database"
    AUTH = "auth"


# ---------------------------------------------------------------------------
# Catalog models
# ---------------------------------------------------------------------------

class Template(BaseModel):
    """A templated file rendered into the generated project."""
    model_config = ConfigDict(frozen=True)

    source: str = Field(..., description="Locator inside the external template store")
    destination: str = Field(..., description="Relative path inside the generated project")
    mode: int = Field(default=DEFAULT_FILE_MODE, ge=0, description="File permission bits")

    @field_validator("mode")
    @classmethod
    def default_mode_when_zero(cls, value: int) -> int:
        return value or DEFAULT_FILE_MODE


class CategoryRequirement(BaseModel):
    """Another category's selection that must hold for a category to be offered."""
    model_config = ConfigDict(frozen=True)

    category_id: str
    feature_id: str


class Category(BaseModel):
    """A named axis of choice with required/cardinality rules."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique category key")
    name: str = Field(..., description="Human-readable category name")
    description: str = Field(default="")
    required: bool = Field(default=False, description="At least one feature must be chosen")
    allow_multiple: bool = Field(default=False, description="More than one feature may be chosen")
    requires: Optional[CategoryRequirement] = Field(
        default=None,
        description="Only offered interactively while this selection is active",
    )


class Feature(BaseModel):
    """One selectable option within a category."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique feature key")
    category_id: str = Field(..., description="Owning category id")
    name: str
    description: str = Field(default="")
    directories: frozenset[str] = Field(default_factory=frozenset)
    templates: tuple[Template, ...] = Field(default_factory=tuple)
    tags: frozenset[str] = Field(default_factory=frozenset)


class ResolvedFeature(NamedTuple):
    """A validated ``(category, feature)`` pair produced by the resolver."""
    category: Category
    feature: Feature


# ---------------------------------------------------------------------------
# Blueprint
# ---------------------------------------------------------------------------

class Blueprint(BaseModel):
    """The composed project blueprint built from modular features."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    directories: tuple[str, ...] = Field(default_factory=tuple)
    tags: tuple[str, ...] = Field(default_factory=tuple)
    templates: tuple[Template, ...] = Field(default_factory=tuple)
    features: tuple[Feature, ...] = Field(default_factory=tuple)

    def has_feature(self, feature_id: str) -> bool:
        """Return ``True`` if the blueprint includes the feature *feature_id*."""
        return any(feature.id == feature_id for feature in self.features)
