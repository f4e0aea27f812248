"""Validate a selection against the registry's category rules."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from .errors import (
    CardinalityViolation,
    FeatureCategoryMismatch,
    MissingRequiredCategory,
    UnknownFeatureID,
)
from .models import ResolvedFeature
from .registry import Registry
from .selection import clone_selection

logger = logging.getLogger(__name__)


def resolve(
    selection: Mapping[str, Sequence[str]],
    registry: Registry,
) -> list[ResolvedFeature]:
    """Resolve *selection* into ordered ``(category, feature)`` pairs.

    Categories are walked in registration order, never in the selection's
    own key order, and ids keep their selection-list order within a
    category.  Keys that do not name a registered category are ignored.

    Raises:
        MissingRequiredCategory: A required category has no ids.
        CardinalityViolation: A single-choice category has several ids.
        UnknownFeatureID: An id is not registered.
        FeatureCategoryMismatch: An id belongs to another category.
    """
    sel = clone_selection(selection)
    index = {feature.id: feature for feature in registry.feature_list}
    resolved: list[ResolvedFeature] = []

    for category in registry.categories():
        ids = sel.get(category.id, [])
        if not ids:
            if category.required:
                raise MissingRequiredCategory(category.id)
            continue
        if not category.allow_multiple and len(ids) > 1:
            raise CardinalityViolation(category.id)

        for feature_id in ids:
            feature = index.get(feature_id)
            if feature is None:
                raise UnknownFeatureID(feature_id)
            if feature.category_id != category.id:
                raise FeatureCategoryMismatch(feature_id, category.id)
            resolved.append(ResolvedFeature(category=category, feature=feature))

    logger.debug(
        "Resolved %d feature(s): %s",
        len(resolved),
        ", ".join(r.feature.id for r in resolved),
    )
    return resolved
