from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Tuple

from hiervis.errors import ConfigurationError, MissingFieldError, StructuralError
from hiervis.options import STATS
from hiervis.records import Record, numeric_field
from hiervis.tree import Number, TreeNode, aggregate

logger = logging.getLogger(__name__)


def split_path(path: object, sep: str, index: int) -> List[str]:
    """Split a path into segments; empty paths and empty segments are rejected."""
    text = str(path)
    segments = text.split(sep)
    if not text or any(s == "" for s in segments):
        raise StructuralError(
            "path contains an empty segment", kind="empty_segment", details={"record": index, "path": repr(text)}
        )
    return segments


def build_from_paths(
    records: Iterable[Record],
    name_field: str = "name",
    path_sep: str = "/",
    value_field: str = "value",
    stat: str = "count",
    root_name: str = "root",
) -> TreeNode:
    """Build a tree from path-encoded records (e.g. ``"A/B/C"``) under an implicit root.

    Records sharing a prefix share the nodes of that prefix. Every record
    contributes to the node its last segment names: 1 for ``stat="count"``,
    the numeric ``value_field`` for ``stat="sum"``. Records with identical
    paths are summed. Internal nodes carry the sum of their children.
    """
    if stat not in STATS:
        raise ConfigurationError(f"stat must be one of {', '.join(STATS)}", {"stat": repr(stat)})
    if not path_sep:
        raise ConfigurationError("path_sep must be a non-empty string", {"path_sep": repr(path_sep)})

    root = TreeNode(name=root_name)
    # (id of parent node, child name) -> child; keeps lookups flat for wide levels
    index_by_parent: Dict[Tuple[int, str], TreeNode] = {}
    terminal: Dict[int, Number] = {}
    count = 0

    for i, record in enumerate(records):
        count += 1
        if name_field not in record:
            raise MissingFieldError(name_field, i)
        segments = split_path(record[name_field], path_sep, i)
        amount: Number = 1 if stat == "count" else numeric_field(record, value_field, i)

        node = root
        for depth, segment in enumerate(segments):
            if id(node) in terminal:
                raise StructuralError(
                    "path continues below a node that already holds a value",
                    kind="conflict",
                    details={"record": i, "path": record[name_field], "segment": segments[depth - 1]},
                )
            child = index_by_parent.get((id(node), segment))
            if child is None:
                child = TreeNode(name=segment)
                node.children.append(child)
                index_by_parent[(id(node), segment)] = child
            node = child

        if node.children:
            raise StructuralError(
                "path ends on a node that already has children",
                kind="conflict",
                details={"record": i, "path": record[name_field]},
            )
        terminal[id(node)] = terminal.get(id(node), 0) + amount
        node.value = terminal[id(node)]

    if count == 0:
        raise StructuralError("no records to build a tree from", kind="no_root")

    aggregate(root)
    logger.debug("path tree built: %d records, %d nodes", count, root.node_count())
    return root
