"""
Optional-field helpers shared by every node builder.

Schema validators reject empty properties, so an absent source value must
leave no key behind. ``compact`` is the one place that rule lives.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping


def present(value: Any) -> bool:
    """True unless *value* is None, an empty string or an empty container."""
    if value is None:
        return False
    if isinstance(value, (str, list, tuple, dict)) and len(value) == 0:
        return False
    return True


def compact(mapping: Mapping[str, Any], required: Iterable[str] = ()) -> dict[str, Any]:
    """Return a copy of *mapping* without absent entries.

    Keys listed in *required* are kept as given, empty or not.
    """
    keep = set(required)
    return {k: v for k, v in mapping.items() if k in keep or present(v)}


def ref(node_id: str | None) -> dict[str, str] | None:
    """``{"@id": node_id}``, or None when there is no id to point at."""
    if node_id is None:
        return None
    return {"@id": node_id}


def refs(node_ids: Iterable[str] | None) -> list[dict[str, str]]:
    return [{"@id": node_id} for node_id in node_ids or ()]
