"""Errors raised while resolving and composing a feature selection.

Every error is terminal: no partial blueprint is ever returned.  Callers
branch on ``StackError.kind`` (or the concrete subclass) rather than on the
message text.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of composition failure kinds, in pipeline order."""
    MISSING_REQUIRED_CATEGORY = "missing_required_category"
    CARDINALITY_VIOLATION = "cardinality_violation"
    UNKNOWN_FEATURE_ID = "unknown_feature_id"
    FEATURE_CATEGORY_MISMATCH = "feature_category_mismatch"
    CONFLICTING_TEMPLATE_DESTINATION = "conflicting_template_destination"


class StackError(Exception):
    """Base class for every resolution/composition failure."""

    kind: ErrorKind


class MissingRequiredCategory(StackError):
    """A required category has no selected feature."""

    kind = ErrorKind.MISSING_REQUIRED_CATEGORY

    def __init__(self, category: str) -> None:
        self.category = category
        super().__init__(f"no selection provided for required category {category!r}")


class CardinalityViolation(StackError):
    """More than one feature was chosen for a single-choice category."""

    kind = ErrorKind.CARDINALITY_VIOLATION

    def __init__(self, category: str) -> None:
        self.category = category
        super().__init__(
            f"multiple selections provided for single-choice category {category!r}"
        )


class UnknownFeatureID(StackError):
    """A selected id is not present in the registry."""

    kind = ErrorKind.UNKNOWN_FEATURE_ID

    def __init__(self, feature_id: str) -> None:
        self.feature_id = feature_id
        super().__init__(f"unknown feature {feature_id!r}")


class FeatureCategoryMismatch(StackError):
    """A selected id belongs to a different category than the key it was found under."""

    kind = ErrorKind.FEATURE_CATEGORY_MISMATCH

    def __init__(self, feature_id: str, expected_category: str) -> None:
        self.feature_id = feature_id
        self.expected_category = expected_category
        super().__init__(
            f"feature {feature_id!r} does not belong to category {expected_category!r}"
        )


class ConflictingTemplateDestination(StackError):
    """Two different template sources target the same destination path."""

    kind = ErrorKind.CONFLICTING_TEMPLATE_DESTINATION

    def __init__(self, destination: str, source_a: str, source_b: str) -> None:
        self.destination = destination
        self.source_a = source_a
        self.source_b = source_b
        super().__init__(
            f"conflicting template destination {destination!r} "
            f"between {source_a} and {source_b}"
        )
