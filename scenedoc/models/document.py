"""Document models — the portable, engine-independent description of a scene.

One :class:`NodeDescriptor` per exported scene node.  The serialized field
names (``Id``, ``Transform.Parent``, ``MeshFilters``...) are the nested
document layout, version 2; see :data:`scenedoc.config.LAYOUT_VERSION`.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ColliderKind(enum.IntEnum):
    BOX = 0
    SPHERE = 1
    CAPSULE = 2
    MESH = 3


class LightKind(enum.IntEnum):
    UNKNOWN = -1
    DIRECTIONAL = 0
    POINT = 1
    SPOT = 2


class MeshFormat(enum.IntEnum):
    """Index width of a mesh fragment, copied from the source mesh."""

    UINT16 = 0
    UINT32 = 1


class _DocumentModel(BaseModel):
    # Non-finite floats are kept as-is so the serializer can reject them.
    model_config = ConfigDict(populate_by_name=True, ser_json_inf_nan="constants")


class TransformDescriptor(_DocumentModel):
    """Local transform plus the weak reference to the parent node."""

    parent: Optional[str] = Field(default=None, alias="Parent")
    local_position: list[float] = Field(alias="LocalPosition")
    local_rotation: list[float] = Field(alias="LocalRotation")
    local_scale: list[float] = Field(alias="LocalScale")


class ColliderDescriptor(_DocumentModel):
    min: list[float] = Field(alias="Min")
    max: list[float] = Field(alias="Max")
    enabled: bool = Field(alias="Enabled")
    radius: float = Field(default=0.0, alias="Radius")
    type: ColliderKind = Field(alias="Type")


class LightDescriptor(_DocumentModel):
    intensity: float = Field(alias="Intensity")
    radius: float = Field(alias="Radius")
    color: list[float] = Field(alias="Color")
    angle: float = Field(alias="Angle")
    shadows_enabled: bool = Field(alias="ShadowsEnabled")
    enabled: bool = Field(alias="Enabled")
    type: LightKind = Field(alias="Type")


class ReflectionProbeDescriptor(_DocumentModel):
    box_size: list[float] = Field(alias="BoxSize")
    box_min: list[float] = Field(alias="BoxMin")
    box_max: list[float] = Field(alias="BoxMax")
    intensity: float = Field(alias="Intensity")
    clip_planes: list[float] = Field(alias="ClipPlanes")
    enabled: bool = Field(alias="Enabled")
    is_backed: bool = Field(alias="IsBacked")
    resolution: int = Field(alias="Resolution")


class MaterialDescriptor(_DocumentModel):
    """Portable material: UV transform, shader name and texture references.

    Texture fields hold texture *names*; ``None`` means the slot is unbound.
    """

    scale: list[float] = Field(default_factory=lambda: [1.0, 1.0], alias="Scale")
    offset: list[float] = Field(default_factory=lambda: [0.0, 0.0], alias="Offset")
    shader_name: Optional[str] = Field(default=None, alias="ShaderName")
    main_texture: Optional[str] = Field(default=None, alias="MainTexture")
    normal_map: Optional[str] = Field(default=None, alias="NormalMap")
    ao_map: Optional[str] = Field(default=None, alias="AOMap")
    emission_map: Optional[str] = Field(default=None, alias="EmissionMap")
    emission_color: list[float] = Field(
        default_factory=lambda: [0.0, 0.0, 0.0], alias="EmissionColor",
    )
    metallic_map: Optional[str] = Field(default=None, alias="MetalicMap")
    cutout: float = Field(default=0.0, alias="Cutout")


class MeshFragment(_DocumentModel):
    """Geometry of one submesh with indices local to its own vertices."""

    positions: list[float] = Field(default_factory=list, alias="Positions")
    normals: list[float] = Field(default_factory=list, alias="Normals")
    uvs: list[float] = Field(default_factory=list, alias="UVs")
    indices: list[int] = Field(default_factory=list, alias="Indices")
    mesh_format: MeshFormat = Field(default=MeshFormat.UINT16, alias="MeshFormat")


class RendererDescriptor(_DocumentModel):
    name: str = Field(alias="Name")
    enabled: bool = Field(default=True, alias="Enabled")
    materials: list[MaterialDescriptor] = Field(default_factory=list, alias="Materials")
    mesh_filters: Optional[list[MeshFragment]] = Field(default=None, alias="MeshFilters")


class NodeDescriptor(_DocumentModel):
    """One exported scene-graph entry."""

    id: str = Field(alias="Id")
    name: str = Field(alias="Name")
    is_static: bool = Field(default=False, alias="IsStatic")
    is_active: bool = Field(default=True, alias="IsActive")
    transform: TransformDescriptor = Field(alias="Transform")
    collider: Optional[ColliderDescriptor] = Field(default=None, alias="Collider")
    light: Optional[LightDescriptor] = Field(default=None, alias="Light")
    reflection_probe: Optional[ReflectionProbeDescriptor] = Field(
        default=None, alias="ReflectionProbe",
    )
    renderer: Optional[RendererDescriptor] = Field(default=None, alias="Renderer")

    def to_dict(self) -> dict[str, Any]:
        """Return the document record for this node.

        Absent blocks and unbound texture slots are omitted; the transform's
        ``Parent`` is always written, as ``null`` for roots.
        """
        data = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        data["Transform"] = self.transform.model_dump(mode="json", by_alias=True)
        return data
