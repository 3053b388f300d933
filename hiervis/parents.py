from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

import numpy as np

from hiervis.errors import ConfigurationError, MissingFieldError, StructuralError
from hiervis.options import STATS
from hiervis.records import Record, numeric_field
from hiervis.tree import TreeNode, aggregate

logger = logging.getLogger(__name__)


def node_key(value: object) -> str:
    """Name used to match ids with parents; whole-number floats compare as ints."""
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def _find_cycle(parent_of: Dict[str, Optional[str]]) -> Optional[List[str]]:
    """Return the names on the first parent-pointer cycle found, if any."""
    state: Dict[str, int] = {}  # 1 = on the current walk, 2 = known to reach a root
    for start in parent_of:
        walk: List[str] = []
        name: Optional[str] = start
        while name is not None and state.get(name) != 2:
            if state.get(name) == 1:
                return walk[walk.index(name):]
            state[name] = 1
            walk.append(name)
            name = parent_of[name]
        for seen in walk:
            state[seen] = 2
    return None


def build_from_parent_links(
    records: Iterable[Record],
    name_field: str = "name",
    parent_field: str = "parent",
    stat: str = "count",
    value_field: str = "value",
) -> TreeNode:
    """Build a tree from records that name themselves and their parent.

    The single record without a parent becomes the root. With
    ``stat="count"`` every node counts itself plus its descendants; with
    ``stat="sum"`` every node holds its own ``value_field`` (required on
    leaves, 0 when absent on internal nodes) plus its children's totals.
    """
    if stat not in STATS:
        raise ConfigurationError(f"stat must be one of {', '.join(STATS)}", {"stat": repr(stat)})

    by_name: Dict[str, Record] = {}
    position: Dict[str, int] = {}
    parent_of: Dict[str, Optional[str]] = {}
    children_of: Dict[str, List[str]] = {}

    for i, record in enumerate(records):
        if name_field not in record:
            raise MissingFieldError(name_field, i)
        name = node_key(record[name_field])
        if name in by_name:
            raise StructuralError(
                "duplicate node name",
                kind="duplicate_name",
                details={"name": name, "record": i, "first_record": position[name]},
            )
        by_name[name] = record
        position[name] = i
        parent = record.get(parent_field)
        parent_of[name] = node_key(parent) if parent is not None else None
        children_of[name] = []

    for name, parent in parent_of.items():
        if parent is None:
            continue
        if parent not in by_name:
            raise StructuralError(
                "parent does not match any record",
                kind="missing_parent",
                details={"name": name, "parent": parent, "record": position[name]},
            )
        children_of[parent].append(name)

    cycle = _find_cycle(parent_of)
    if cycle:
        raise StructuralError(
            "cycle in parent links", kind="cycle", details={"nodes": " -> ".join(cycle + cycle[:1])}
        )

    roots = [name for name, parent in parent_of.items() if parent is None]
    if not roots:
        raise StructuralError("no root found", kind="no_root", details={"parent_field": parent_field})
    if len(roots) > 1:
        raise StructuralError(
            "ambiguous root", kind="ambiguous_root", details={"roots": ", ".join(roots)}
        )

    nodes: Dict[str, TreeNode] = {}
    for name in by_name:
        node = TreeNode(name=name)
        if stat == "sum":
            if children_of[name]:
                own = by_name[name].get(value_field)
                node.value = numeric_field(by_name[name], value_field, position[name]) if own is not None else 0
            else:
                node.value = numeric_field(by_name[name], value_field, position[name])
        nodes[name] = node

    # Depth-first from the root, children in input order.
    root = nodes[roots[0]]
    stack = [roots[0]]
    while stack:
        name = stack.pop()
        nodes[name].children = [nodes[c] for c in children_of[name]]
        stack.extend(children_of[name])

    aggregate(root, node_weight=1 if stat == "count" else 0)
    logger.debug("parent-link tree built: %d nodes, root %r", len(nodes), root.name)
    return root
