"""Attachments a scene node may carry."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from scenedoc.scene.assets import Material, Mesh


@dataclass
class Bounds:
    """World-space axis-aligned bounding box."""

    min: tuple[float, float, float] = (0.0, 0.0, 0.0)
    max: tuple[float, float, float] = (0.0, 0.0, 0.0)


class Component:
    """Marker base class for node attachments."""


# ---------------------------------------------------------------------------
# Colliders
# ---------------------------------------------------------------------------


@dataclass(eq=False)
class Collider(Component):
    bounds: Bounds = field(default_factory=Bounds)
    enabled: bool = True


@dataclass(eq=False)
class BoxCollider(Collider):
    pass


@dataclass(eq=False)
class SphereCollider(Collider):
    radius: float = 0.5


@dataclass(eq=False)
class CapsuleCollider(Collider):
    radius: float = 0.5
    height: float = 2.0


@dataclass(eq=False)
class MeshCollider(Collider):
    shared_mesh: Mesh | None = None


# ---------------------------------------------------------------------------
# Lights
# ---------------------------------------------------------------------------


class LightType(enum.Enum):
    DIRECTIONAL = "directional"
    POINT = "point"
    SPOT = "spot"
    AREA = "area"
    DISC = "disc"


class LightShadows(enum.Enum):
    NONE = "none"
    HARD = "hard"
    SOFT = "soft"


@dataclass(eq=False)
class Light(Component):
    light_type: LightType = LightType.POINT
    intensity: float = 1.0
    range: float = 10.0
    color: tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0)
    spot_angle: float = 30.0
    shadows: LightShadows = LightShadows.NONE
    enabled: bool = True


# ---------------------------------------------------------------------------
# Reflection probes
# ---------------------------------------------------------------------------


class ReflectionProbeRefreshMode(enum.Enum):
    ON_AWAKE = "on_awake"
    EVERY_FRAME = "every_frame"
    VIA_SCRIPTING = "via_scripting"


@dataclass(eq=False)
class ReflectionProbe(Component):
    size: tuple[float, float, float] = (10.0, 10.0, 10.0)
    bounds: Bounds = field(default_factory=Bounds)
    intensity: float = 1.0
    near_clip_plane: float = 0.3
    far_clip_plane: float = 1000.0
    enabled: bool = True
    refresh_mode: ReflectionProbeRefreshMode = ReflectionProbeRefreshMode.ON_AWAKE
    resolution: int = 128


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


@dataclass(eq=False)
class MeshFilter(Component):
    shared_mesh: Mesh | None = None


@dataclass(eq=False)
class MeshRenderer(Component):
    """Draws the sibling :class:`MeshFilter` mesh with one material per slot.

    A slot may hold ``None`` when no material is bound to it.
    """

    name: str = ""
    shared_materials: list[Material | None] = field(default_factory=list)
    enabled: bool = True
