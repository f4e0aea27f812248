"""Immutable catalog of feature categories and modular features.

The built-in catalog is static data; :func:`default_registry` builds it once
per process.  Hand-built registries (used by tests and embedders) are
validated on construction so that every feature references an existing
category and no id is registered twice.
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .models import (
    Category,
    CategoryId,
    CategoryRequirement,
    Feature,
    Selection,
    Template,
)
from .selection import clone_selection


class Registry(BaseModel):
    """Immutable catalog exposed only through copy-returning accessors."""
    model_config = ConfigDict(frozen=True)

    category_list: tuple[Category, ...] = Field(default_factory=tuple)
    feature_list: tuple[Feature, ...] = Field(default_factory=tuple)
    defaults: tuple[tuple[str, tuple[str, ...]], ...] = Field(default_factory=tuple)

    @field_validator("defaults", mode="before")
    @classmethod
    def freeze_defaults(cls, value: Any) -> Any:
        if isinstance(value, Mapping):
            return tuple((key, tuple(ids)) for key, ids in value.items())
        return value

    @model_validator(mode="after")
    def check_references(self) -> "Registry":
        category_ids: set[str] = set()
        for category in self.category_list:
            if category.id in category_ids:
                raise ValueError(f"duplicate category id {category.id!r}")
            category_ids.add(category.id)

        feature_ids: set[str] = set()
        for feature in self.feature_list:
            if feature.id in feature_ids:
                raise ValueError(f"duplicate feature id {feature.id!r}")
            if feature.category_id not in category_ids:
                raise ValueError(
                    f"feature {feature.id!r} references unknown category "
                    f"{feature.category_id!r}"
                )
            feature_ids.add(feature.id)

        for category_id, ids in self.defaults:
            if category_id not in category_ids:
                raise ValueError(f"default selection for unknown category {category_id!r}")
            for feature_id in ids:
                if feature_id not in feature_ids:
                    raise ValueError(f"default selection references unknown feature {feature_id!r}")
        return self

    # -- Accessors ---------------------------------------------------------

    def categories(self) -> list[Category]:
        """Return the registered categories in registration order."""
        return list(self.category_list)

    def category_by_id(self, category_id: str) -> Optional[Category]:
        for category in self.category_list:
            if category.id == category_id:
                return category
        return None

    def features_for(self, category_id: str) -> list[Feature]:
        """List the features of *category_id* ordered by name."""
        features = [f for f in self.feature_list if f.category_id == category_id]
        return sorted(features, key=lambda f: f.name)

    def feature_by_id(self, feature_id: str) -> Optional[Feature]:
        """Return the feature registered as *feature_id*, or ``None``."""
        for feature in self.feature_list:
            if feature.id == feature_id:
                return feature
        return None

    def default_selection(self) -> Selection:
        """Return a fresh copy of the curated baseline selection."""
        return clone_selection({key: list(ids) for key, ids in self.defaults})


# ---------------------------------------------------------------------------
# Built-in catalog
# ---------------------------------------------------------------------------

_FRONTEND = CategoryId.FRONTEND.value
_STYLING = CategoryId.STYLING.value
_HTTP = CategoryId.HTTP.value
_DATABASE = CategoryId.DATABASE.value
_AUTH = CategoryId.AUTH.value

SQLITE_FEATURE_ID = "database-sqlite"

_CATEGORIES: tuple[Category, ...] = (
    Category(
        id=_FRONTEND,
        name="Frontend runtime",
        description="Choose the hypermedia enhancement layer.",
        required=True,
    ),
    Category(
        id=_STYLING,
        name="Styling system",
        description="Pick the preferred CSS framework or utility approach.",
        required=True,
    ),
    Category(
        id=_HTTP,
        name="Web framework",
        description="Choose the HTTP framework powering the transport.",
        required=True,
    ),
    Category(
        id=_DATABASE,
        name="Database",
        description="Select the database adapter for persistence needs.",
    ),
    Category(
        id=_AUTH,
        name="Authentication",
        description="Optional authentication providers.",
        requires=CategoryRequirement(category_id=_DATABASE, feature_id=SQLITE_FEATURE_ID),
    ),
)


def _templates(prefix: str, destinations: list[str]) -> tuple[Template, ...]:
    """Build templates whose source mirrors the destination under *prefix*."""
    return tuple(
        Template(source=f"{prefix}/{destination}.tmpl", destination=destination)
        for destination in destinations
    )


_GITHUB_OAUTH_PREFIX = "features/auth/github-oauth2"

_FEATURES: tuple[Feature, ...] = (
    Feature(
        id="frontend-htmx",
        category_id=_FRONTEND,
        name="HTMX",
        description="Server-driven interactions with HTMX requests and swaps.",
        tags=frozenset({"HTMX"}),
        directories=frozenset({"public/assets/scripts"}),
        templates=(
            Template(
                source="features/frontend/htmx/web/templates/pages/home.html.tmpl",
                destination="web/templates/pages/home.html",
            ),
            Template(
                source="features/frontend/htmx/assets/scripts/htmx.min.js.tmpl",
                destination="public/assets/scripts/htmx.min.js",
            ),
        ),
    ),
    Feature(
        id="frontend-fixi",
        category_id=_FRONTEND,
        name="Fixi.js",
        description="Composable DOM bindings using the Fixi.js micro-library.",
        tags=frozenset({"Fixi.js"}),
        templates=_templates(
            "features/frontend/fixi",
            ["web/templates/pages/home.html", "public/assets/scripts/fixi.js"],
        ),
    ),
    Feature(
        id="styling-tailwind",
        category_id=_STYLING,
        name="Tailwind CSS",
        description="Utility-first styling powered by standalone Tailwind CLI binary.",
        tags=frozenset({"Tailwind"}),
        directories=frozenset({"web/assets/styles/tokens"}),
        templates=_templates(
            "features/styling/tailwind",
            [
                "web/assets/styles/input.css",
                "public/assets/styles/output.css",
                "web/templates/pages/index.html",
            ],
        ),
    ),
    Feature(
        id="styling-tailwind-basecoat",
        category_id=_STYLING,
        name="Tailwind CSS + Basecoat",
        description="Tailwind standalone CLI with Basecoat component library via CDN.",
        tags=frozenset({"Tailwind", "Basecoat"}),
        directories=frozenset({"web/assets/styles/tokens"}),
        templates=_templates(
            "features/styling/tailwind_basecoat",
            [
                "web/assets/styles/input.css",
                "public/assets/styles/output.css",
                "web/templates/pages/index.html",
            ],
        ),
    ),
    Feature(
        id="styling-daisyui",
        category_id=_STYLING,
        name="DaisyUI standalone",
        description="Tailwind standalone CLI plus DaisyUI fast script generated bundle.",
        tags=frozenset({"DaisyUI"}),
        directories=frozenset({"public/assets/styles"}),
        templates=_templates(
            "features/styling/daisyui",
            [
                "public/assets/styles/custom.css",
                "public/assets/styles/output.css",
                "web/assets/styles/input.css",
                "web/templates/pages/index.html",
            ],
        ),
    ),
    Feature(
        id="http-standard",
        category_id=_HTTP,
        name="net/http",
        description="Standard library HTTP server with a ServeMux and HTML response.",
        tags=frozenset({"net/http"}),
        templates=_templates(
            "features/http/standard",
            ["internal/transport/http/server.go", "internal/transport/http/router.go"],
        ),
    ),
    Feature(
        id="http-chi",
        category_id=_HTTP,
        name="Chi",
        description="Go-chi router with middleware-ready structure.",
        tags=frozenset({"chi"}),
        templates=_templates(
            "features/http/chi",
            ["internal/transport/http/server.go", "internal/transport/http/router.go"],
        ),
    ),
    Feature(
        id="database-none",
        category_id=_DATABASE,
        name="None",
        description="Skip bundling a database integration.",
        tags=frozenset({"database"}),
    ),
    Feature(
        id=SQLITE_FEATURE_ID,
        category_id=_DATABASE,
        name="SQLite",
        description="Preconfigured SQLite helper powered by sqlx.",
        tags=frozenset({"database", "SQLite", "sqlx"}),
        directories=frozenset({"internal/infrastructure/persistence"}),
        templates=_templates(
            "features/database/sqlite",
            ["internal/infrastructure/persistence/sqlite.go"],
        ),
    ),
    Feature(
        id="auth-github-oauth2",
        category_id=_AUTH,
        name="GitHub (oauth2)",
        description="Login with GitHub using x/oauth2 and server-side sessions.",
        tags=frozenset({"auth", "oauth2", "github"}),
        directories=frozenset({
            "db/migrations",
            "internal/app/auth",
            "internal/domain/session",
            "internal/domain/user",
            "internal/infrastructure/auth",
            "internal/infrastructure/http",
            "internal/infrastructure/persistence",
            "internal/transport/http",
            "web/templates/pages",
        }),
        templates=_templates(
            _GITHUB_OAUTH_PREFIX,
            [
                "internal/transport/http/oauth_handlers.go",
                "internal/transport/http/render.go",
                "internal/transport/http/auth_middleware.go",
                "web/templates/pages/profile.html",
                "web/templates/pages/login.html",
                "internal/domain/user/model.go",
                "internal/domain/user/repository.go",
                "internal/domain/session/model.go",
                "internal/domain/session/repository.go",
            ],
        )
        # Application sources live under "application" in the template store.
        + tuple(
            Template(
                source=f"{_GITHUB_OAUTH_PREFIX}/internal/application/auth/{name}.tmpl",
                destination=f"internal/app/auth/{name}",
            )
            for name in ("service.go", "type.go", "ports.go")
        )
        + _templates(
            _GITHUB_OAUTH_PREFIX,
            [
                "internal/infrastructure/auth/github_oauth.go",
                "internal/infrastructure/persistence/user_repository_sqlite.go",
                "internal/infrastructure/persistence/tx.go",
                "internal/infrastructure/persistence/session_repository_sqlite.go",
                "internal/transport/http/cookies.go",
                "db/migrations/0001_create_users.sql",
                "db/migrations/0002_create_sessions.sql",
                "db/migrations/0003_create_user_identities.sql",
            ],
        ),
    ),
)

_DEFAULTS: dict[str, tuple[str, ...]] = {
    _FRONTEND: ("frontend-htmx",),
    _STYLING: ("styling-tailwind",),
    _HTTP: ("http-standard",),
    _DATABASE: ("database-none",),
}


@lru_cache(maxsize=1)
def default_registry() -> Registry:
    """Return the process-wide built-in catalog."""
    return Registry(category_list=_CATEGORIES, feature_list=_FEATURES, defaults=_DEFAULTS)
