from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

import numpy as np

Number = Union[int, float]


def as_number(value: object) -> Number:
    """Plain Python int/float for numpy scalars; integral floats stay floats."""
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    return float(value)  # type: ignore[arg-type]


@dataclass
class TreeNode:
    name: str
    value: Optional[Number] = None
    children: List["TreeNode"] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def find_child(self, name: str) -> Optional["TreeNode"]:
        for child in self.children:
            if child.name == name:
                return child
        return None

    def iter_nodes(self) -> Iterator["TreeNode"]:
        """Pre-order traversal, children in stored order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def leaves(self) -> List["TreeNode"]:
        return [n for n in self.iter_nodes() if n.is_leaf]

    def node_count(self) -> int:
        return sum(1 for _ in self.iter_nodes())

    def depth(self) -> int:
        best = 0
        stack: List[Tuple[TreeNode, int]] = [(self, 0)]
        while stack:
            node, d = stack.pop()
            best = max(best, d)
            stack.extend((c, d + 1) for c in node.children)
        return best

    def leaf_paths(self, sep: str = "/") -> List[str]:
        """Names from below the root down to each leaf, joined with ``sep``."""
        out: List[str] = []
        stack: List[Tuple[TreeNode, Tuple[str, ...]]] = [(c, (c.name,)) for c in reversed(self.children)]
        while stack:
            node, names = stack.pop()
            if node.is_leaf:
                out.append(sep.join(names))
                continue
            stack.extend((c, names + (c.name,)) for c in reversed(node.children))
        return out

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"name": self.name}
        if self.value is not None:
            out["value"] = as_number(self.value)
        if self.children:
            out["children"] = [c.to_dict() for c in self.children]
        return out

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "TreeNode":
        value = payload.get("value")
        return cls(
            name=str(payload["name"]),
            value=as_number(value) if value is not None else None,
            children=[cls.from_dict(c) for c in payload.get("children") or []],
        )

    def to_json(self, **kwargs: Any) -> str:
        return json.dumps(self.to_dict(), **kwargs)

    @classmethod
    def from_json(cls, text: str) -> "TreeNode":
        return cls.from_dict(json.loads(text))


def aggregate(node: TreeNode, node_weight: Number = 0) -> None:
    """Post-order fill: each node's value becomes its own value plus its children's.

    ``node_weight`` is added for every node whose own value is unset.
    """
    order: List[TreeNode] = list(node.iter_nodes())
    for n in reversed(order):
        own = n.value if n.value is not None else node_weight
        n.value = own + sum(c.value for c in n.children)  # type: ignore[misc]


def find_aggregate_mismatches(tree: TreeNode, node_weight: Number = 0, tol: float = 1e-9) -> List[str]:
    """Describe internal nodes whose value != node_weight + sum(children)."""
    problems: List[str] = []
    for node in tree.iter_nodes():
        if node.is_leaf:
            continue
        if node.value is None or any(c.value is None for c in node.children):
            problems.append(f"{node.name}: missing value")
            continue
        expected = node_weight + sum(c.value for c in node.children)  # type: ignore[misc]
        if abs(node.value - expected) > tol:
            problems.append(f"{node.name}: value {node.value} != {expected}")
    return problems


def prune_zero(tree: TreeNode) -> TreeNode:
    """Copy of ``tree`` without zero-valued subtrees; the root is always kept."""

    def _copy(node: TreeNode) -> TreeNode:
        kept = [_copy(c) for c in node.children if c.value != 0]
        return TreeNode(name=node.name, value=node.value, children=kept)

    return _copy(tree)
