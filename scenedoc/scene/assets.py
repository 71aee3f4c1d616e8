"""Shared assets referenced by scene attachments: textures, materials, meshes."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

from scenedoc.errors import PropertyNotFoundError


@dataclass(eq=False)
class Texture:
    """A 2D texture with raw RGBA8 pixel data.

    ``key`` is the deduplication identity.  When unset, the texture name is
    used, so two distinct assets sharing a name count as one texture.
    """

    name: str
    width: int = 0
    height: int = 0
    pixels: bytes | None = None
    is_readable: bool = True
    key: str | None = None

    @property
    def identity(self) -> str:
        return self.key if self.key is not None else self.name


@dataclass
class Shader:
    name: str


@dataclass(eq=False)
class Material:
    """A shader-bound material.

    ``properties`` maps shader property names (``_BumpMap``, ``_Cutoff``...)
    to values: a :class:`Texture` (or ``None`` for an unbound slot), a colour
    tuple, or a float.  Only names present in the mapping are defined by the
    bound shader; the getters raise :class:`PropertyNotFoundError` for the
    rest.
    """

    name: str = ""
    shader: Shader | None = None
    main_texture: Texture | None = None
    main_texture_scale: tuple[float, float] = (1.0, 1.0)
    main_texture_offset: tuple[float, float] = (0.0, 0.0)
    properties: dict[str, Any] = field(default_factory=dict)

    def has_property(self, name: str) -> bool:
        return name in self.properties

    def _get(self, name: str) -> Any:
        try:
            return self.properties[name]
        except KeyError:
            shader = self.shader.name if self.shader else "<none>"
            raise PropertyNotFoundError(
                f"Material '{self.name}' with shader '{shader}' "
                f"has no property '{name}'"
            ) from None

    def get_texture(self, name: str) -> Texture | None:
        value = self._get(name)
        if value is not None and not isinstance(value, Texture):
            raise TypeError(f"Property '{name}' is not a texture")
        return value

    def get_color(self, name: str) -> tuple[float, ...]:
        return tuple(float(c) for c in self._get(name))

    def get_float(self, name: str) -> float:
        return float(self._get(name))


class IndexFormat(enum.IntEnum):
    """Width of a mesh's native index buffer."""

    UINT16 = 0
    UINT32 = 1


@dataclass
class SubMeshDescriptor:
    """A slice of the mesh index buffer drawn as one partition."""

    index_start: int
    index_count: int


@dataclass(eq=False)
class Mesh:
    """Indexed triangle mesh with shared vertex attributes.

    ``triangles`` is the whole index buffer; each submesh addresses a
    contiguous range of it.
    """

    name: str = ""
    vertices: list[tuple[float, float, float]] = field(default_factory=list)
    normals: list[tuple[float, float, float]] = field(default_factory=list)
    uv: list[tuple[float, float]] = field(default_factory=list)
    triangles: list[int] = field(default_factory=list)
    submeshes: list[SubMeshDescriptor] = field(default_factory=list)
    index_format: IndexFormat = IndexFormat.UINT16

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def submesh_count(self) -> int:
        return len(self.submeshes)

    def get_indices(self, submesh: int) -> list[int]:
        desc = self.submeshes[submesh]
        return self.triangles[desc.index_start:desc.index_start + desc.index_count]
