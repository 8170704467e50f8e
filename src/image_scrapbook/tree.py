"""Nested value tree addressed by dotted keys."""

from dataclasses import dataclass, field
from typing import Any, Union

from .exceptions import KeyConflictError, MalformedSpecError


@dataclass
class Leaf:
    """A scalar value in the tree."""

    value: Any


@dataclass
class Branch:
    """A mapping of key segments to nodes."""

    children: dict[str, "Node"] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            key: node.to_dict() if isinstance(node, Branch) else node.value
            for key, node in self.children.items()
        }


Node = Union[Leaf, Branch]


def split_key(dotted_key: str) -> list[str]:
    """Split a dotted key into its segments.

    Raises:
        MalformedSpecError: If the key or any of its segments is empty
    """
    segments = dotted_key.split(".")
    if not all(segments):
        raise MalformedSpecError(f"Invalid dotted key {dotted_key!r}")
    return segments


class ValueTree:
    """Write-only tree of values built from dotted keys.

    Examples:
        tree = ValueTree()
        tree.insert("image.tag", "sha256:abcd")
        tree.insert("image.repository", "docker.io/example")
        tree.to_dict()
        # {"image": {"tag": "sha256:abcd", "repository": "docker.io/example"}}
    """

    def __init__(self) -> None:
        self.root = Branch()

    def insert(self, dotted_key: str, value: Any) -> None:
        """Set `value` at `dotted_key`, creating intermediate branches.

        A value already at the exact key is overwritten, whether it is a
        scalar or a whole subtree.

        Raises:
            MalformedSpecError: If the key has empty segments
            KeyConflictError: If an intermediate segment already holds a scalar
        """
        *parents, last = split_key(dotted_key)

        branch = self.root
        for depth, segment in enumerate(parents):
            node = branch.children.get(segment)
            if node is None:
                node = branch.children[segment] = Branch()
            elif isinstance(node, Leaf):
                path = ".".join(parents[: depth + 1])
                raise KeyConflictError(
                    f"Cannot set {dotted_key!r}: {path!r} already holds value {node.value!r}"
                )
            branch = node

        branch.children[last] = Leaf(value)

    def get(self, dotted_key: str) -> Any:
        """Return the value or subtree (as a dict) stored at `dotted_key`.

        Raises:
            KeyError: If nothing is stored there
        """
        node: Node = self.root
        for segment in split_key(dotted_key):
            if not isinstance(node, Branch) or segment not in node.children:
                raise KeyError(dotted_key)
            node = node.children[segment]
        return node.to_dict() if isinstance(node, Branch) else node.value

    def to_dict(self) -> dict[str, Any]:
        """Plain nested dict view, in insertion order."""
        return self.root.to_dict()

    def __len__(self) -> int:
        return len(self.root.children)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ValueTree):
            return self.to_dict() == other.to_dict()
        if isinstance(other, dict):
            return self.to_dict() == other
        return NotImplemented
