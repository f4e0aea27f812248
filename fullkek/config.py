"""fullkek configuration.

Typed configuration for project planning.  Settings use Pydantic v2 models so
they are validated at construction time and can be serialised to/from JSON or
read from environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field

from fullkek.stacks.models import CategoryId


class FeatureDefaults(BaseModel):
    """Per-category feature ids that override the registry defaults.

    Empty values leave the registry default in place.
    """

    frontend: str = Field(default="", description="Frontend runtime feature id")
    styling: str = Field(default="", description="Styling feature id")
    http: str = Field(default="", description="HTTP framework feature id")

    def as_values(self) -> dict[str, str]:
        """Return a flag-style ``{category_id: feature_id}`` mapping."""
        return {
            CategoryId.FRONTEND.value: self.frontend,
            CategoryId.STYLING.value: self.styling,
            CategoryId.HTTP.value: self.http,
        }


class Config(BaseModel):
    """Global fullkek configuration.

    Instances are created once by the caller and passed to
    :func:`fullkek.planner.plan_project`.
    """

    output_root: Path = Field(
        default=Path("."), description="Directory relative destinations are resolved against"
    )
    module_prefix: str = Field(
        default="", description="Prefix joined to derived module paths, e.g. 'github.com/me'"
    )
    force: bool = Field(default=False, description="Overwrite a non-empty destination")
    interactive: bool = Field(default=True, description="Collect the selection with the wizard")
    features: FeatureDefaults = Field(default_factory=FeatureDefaults)

    def flag_values(self) -> dict[str, str]:
        """Feature overrides in the flag-style shape accepted by ``selection_from_values``."""
        return self.features.as_values()

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            FULLKEK_OUTPUT_ROOT, FULLKEK_MODULE_PREFIX, FULLKEK_FORCE,
            FULLKEK_INTERACTIVE, FULLKEK_FRONTEND, FULLKEK_STYLING,
            FULLKEK_HTTP.
        """
        kwargs: dict[str, object] = {}
        if os.environ.get("FULLKEK_OUTPUT_ROOT"):
            kwargs["output_root"] = Path(os.environ["FULLKEK_OUTPUT_ROOT"])
        if os.environ.get("FULLKEK_MODULE_PREFIX"):
            kwargs["module_prefix"] = os.environ["FULLKEK_MODULE_PREFIX"]
        if os.environ.get("FULLKEK_FORCE"):
            kwargs["force"] = _env_flag(os.environ["FULLKEK_FORCE"])
        if os.environ.get("FULLKEK_INTERACTIVE"):
            kwargs["interactive"] = _env_flag(os.environ["FULLKEK_INTERACTIVE"])

        features = FeatureDefaults(
            frontend=os.environ.get("FULLKEK_FRONTEND", ""),
            styling=os.environ.get("FULLKEK_STYLING", ""),
            http=os.environ.get("FULLKEK_HTTP", ""),
        )
        return cls(features=features, **kwargs)


def _env_flag(raw: str) -> bool:
    return raw.strip().lower() in ("1", "true", "yes", "on")
