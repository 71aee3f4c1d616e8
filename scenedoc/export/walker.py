"""Graph walker — deterministic pre-order enumeration with export-local ids."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from scenedoc.scene.graph import SceneNode


@dataclass(frozen=True)
class WalkEntry:
    """A visited node with its allocated id and its parent's id."""

    node: SceneNode
    node_id: int
    parent_id: int | None


def walk(root: SceneNode | None) -> Iterator[WalkEntry]:
    """Yield every node under *root*, including inactive ones.

    Nodes are visited in pre-order: a node before its children, siblings in
    their defined order.  Ids are allocated sequentially from 0 in visit
    order; engine-side identities are never used.  The walk is lazy and
    single-pass.
    """
    if root is None:
        return

    assigned: dict[int, int] = {}
    stack: list[tuple[SceneNode, SceneNode | None]] = [(root, None)]
    next_id = 0

    while stack:
        node, container = stack.pop()
        node_id = next_id
        next_id += 1
        assigned[id(node)] = node_id
        parent_id = assigned[id(container)] if container is not None else None

        yield WalkEntry(node=node, node_id=node_id, parent_id=parent_id)

        # Reversed so the first child is popped first
        for child in reversed(list(node.iter_children())):
            stack.append((child, node))
