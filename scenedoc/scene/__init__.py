"""In-memory scene graph — the read-only data source for exports."""

from scenedoc.scene.assets import (
    IndexFormat,
    Material,
    Mesh,
    Shader,
    SubMeshDescriptor,
    Texture,
)
from scenedoc.scene.components import (
    Bounds,
    BoxCollider,
    CapsuleCollider,
    Collider,
    Component,
    Light,
    LightShadows,
    LightType,
    MeshCollider,
    MeshFilter,
    MeshRenderer,
    ReflectionProbe,
    ReflectionProbeRefreshMode,
    SphereCollider,
)
from scenedoc.scene.graph import SceneNode, Transform

__all__ = [
    "Bounds",
    "BoxCollider",
    "CapsuleCollider",
    "Collider",
    "Component",
    "IndexFormat",
    "Light",
    "LightShadows",
    "LightType",
    "Material",
    "Mesh",
    "MeshCollider",
    "MeshFilter",
    "MeshRenderer",
    "ReflectionProbe",
    "ReflectionProbeRefreshMode",
    "SceneNode",
    "Shader",
    "SphereCollider",
    "SubMeshDescriptor",
    "Texture",
    "Transform",
]
