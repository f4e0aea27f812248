"""Helpers for building and combining feature selections."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from .models import Selection


def clone_selection(selection: Mapping[str, Sequence[str]]) -> Selection:
    """Return a deep copy of *selection* with new backing lists."""
    return {key: list(values) for key, values in selection.items()}


def merge_selections(
    base: Mapping[str, Sequence[str]],
    override: Mapping[str, Sequence[str]],
) -> Selection:
    """Merge *override* into *base*.

    Each category present in *override* replaces the whole id list from
    *base*; categories absent from *override* keep the base value.
    """
    merged = clone_selection(base)
    for key, values in override.items():
        merged[key] = list(values)
    return merged


def selection_from_values(values: Mapping[str, str | None]) -> Selection:
    """Adapt flag-style input (at most one id per category) to a selection.

    Blank and whitespace-only values mean "no selection" and are omitted.
    """
    selection: Selection = {}
    for key, value in values.items():
        if value is None or not value.strip():
            continue
        selection[key] = [value.strip()]
    return selection
