"""
Graph inspection: node lookup by type and dangling ``@id`` reference checks.
"""

from __future__ import annotations

from typing import Any


def extract_graph(data: dict | list | None) -> list[dict]:
    """Top-level nodes of a parsed block; these are the nodes whose references get checked."""
    if isinstance(data, list):
        return list(data)
    if isinstance(data, dict):
        if "@graph" in data:
            return list(data["@graph"])
        return [data]
    return []


def node_types(node: dict) -> list[str]:
    t = node.get("@type", "")
    if isinstance(t, str):
        return [t] if t else []
    return [x for x in t if isinstance(x, str)]


def find_nodes_by_type(graph: list[dict], *type_names: str) -> list[dict]:
    """Nodes carrying at least one of *type_names*, in graph order."""
    return [node for node in graph if any(tn in node_types(node) for tn in type_names)]


def defined_ids(graph: list[dict]) -> set[str]:
    """Every ``@id`` a node in *graph* defines, including embedded nodes."""
    found: set[str] = set()

    def walk(obj: Any) -> None:
        if isinstance(obj, dict):
            node_id = obj.get("@id")
            if node_id and len(obj) > 1:
                found.add(node_id)
            for v in obj.values():
                walk(v)
        elif isinstance(obj, list):
            for v in obj:
                walk(v)

    for node in graph:
        walk(node)
        # A top-level node defines its id even when it carries nothing else.
        if node.get("@id"):
            found.add(node["@id"])
    return found


def find_dangling_refs(data: dict | list) -> list[dict]:
    """Report every ``{"@id": X}`` reference whose X no node in the graph defines.

    Each entry is ``{"ref": X, "path": "<node id>.<key>[i]..."}``. Fragments the
    site layout defines elsewhere (the brand node, for instance) show up here
    too; whether that is a problem is up to the caller.
    """
    graph = extract_graph(data)
    known = defined_ids(graph)
    dangling: list[dict] = []

    def check_refs(obj: Any, parent_path: str) -> None:
        if isinstance(obj, dict):
            if list(obj.keys()) == ["@id"] and obj["@id"] not in known:
                dangling.append({"ref": obj["@id"], "path": parent_path})
            for k, v in obj.items():
                check_refs(v, f"{parent_path}.{k}")
        elif isinstance(obj, list):
            for i, v in enumerate(obj):
                check_refs(v, f"{parent_path}[{i}]")

    for node in graph:
        check_refs(node, node.get("@id", "root"))

    return dangling
