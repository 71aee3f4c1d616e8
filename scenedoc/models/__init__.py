"""Pydantic models for the exported document."""

from scenedoc.models.document import (
    ColliderDescriptor,
    ColliderKind,
    LightDescriptor,
    LightKind,
    MaterialDescriptor,
    MeshFormat,
    MeshFragment,
    NodeDescriptor,
    ReflectionProbeDescriptor,
    RendererDescriptor,
    TransformDescriptor,
)

__all__ = [
    "ColliderDescriptor",
    "ColliderKind",
    "LightDescriptor",
    "LightKind",
    "MaterialDescriptor",
    "MeshFormat",
    "MeshFragment",
    "NodeDescriptor",
    "ReflectionProbeDescriptor",
    "RendererDescriptor",
    "TransformDescriptor",
]
