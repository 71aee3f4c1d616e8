"""Scene graph nodes and their local transforms."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TypeVar

from scenedoc.scene.components import Component

C = TypeVar("C", bound=Component)


@dataclass
class Transform:
    """Local transform relative to the parent node.

    ``local_rotation`` is a unit quaternion stored as ``(x, y, z, w)``.
    """

    local_position: tuple[float, float, float] = (0.0, 0.0, 0.0)
    local_rotation: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 1.0)
    local_scale: tuple[float, float, float] = (1.0, 1.0, 1.0)


@dataclass(eq=False)
class SceneNode:
    """A named node in the containment hierarchy.

    Nodes are compared by identity; two nodes with equal fields are still
    distinct positions in the graph.
    """

    name: str
    transform: Transform = field(default_factory=Transform)
    is_static: bool = False
    active_self: bool = True
    components: list[Component] = field(default_factory=list)
    children: list[SceneNode] = field(default_factory=list)
    parent: SceneNode | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        for child in self.children:
            child.parent = self

    def add_child(self, child: SceneNode) -> SceneNode:
        """Attach *child* as the last child of this node and return it."""
        if child.parent is not None:
            child.parent.children.remove(child)
        child.parent = self
        self.children.append(child)
        return child

    def add_component(self, component: C) -> C:
        self.components.append(component)
        return component

    def get_component(self, kind: type[C]) -> C | None:
        """Return the first attachment that is an instance of *kind*."""
        for component in self.components:
            if isinstance(component, kind):
                return component
        return None

    def iter_children(self) -> Iterator[SceneNode]:
        return iter(self.children)
