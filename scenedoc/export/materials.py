"""Material resolver — portable descriptors from shader-bound materials."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from scenedoc.config import CUTOFF_PROPERTY, EMISSION_COLOR_PROPERTY, TEXTURE_SLOTS
from scenedoc.errors import PropertyNotFoundError
from scenedoc.export.codec import color_to_float3, to_float2
from scenedoc.export.textures import TextureNames
from scenedoc.models.document import MaterialDescriptor
from scenedoc.scene.assets import Material, Texture

logger = logging.getLogger(__name__)


@dataclass
class ResolvedMaterial:
    """A material descriptor plus the distinct textures it references."""

    descriptor: MaterialDescriptor
    textures: list[Texture] = field(default_factory=list)


def _probe_texture(material: Material, name: str) -> Texture | None:
    if not name or not material.has_property(name):
        return None
    try:
        return material.get_texture(name)
    except (PropertyNotFoundError, TypeError):
        logger.debug(
            "Material %s: property %s is not a readable texture",
            material.name,
            name,
        )
        return None


def _resolve_slot(
    material: Material,
    primary: str,
    fallback: str,
) -> Texture | None:
    """Try *primary*, then *fallback*; ``None`` when neither is bound."""
    texture = _probe_texture(material, primary)
    if texture is None:
        texture = _probe_texture(material, fallback)
    return texture


class MaterialResolver:
    """Extract :class:`MaterialDescriptor` objects from bound materials.

    Texture slots and named scalars are probed; a property the shader does
    not define leaves that field at its default and never aborts the rest
    of the extraction.  UV scale and offset are always read.

    Texture fields carry the export name allocated by *names*, so two
    distinct textures sharing a name never share a file.
    """

    def __init__(self, names: TextureNames | None = None) -> None:
        self.names = names or TextureNames()

    def resolve(self, material: Material | None) -> ResolvedMaterial:
        if material is None:
            return ResolvedMaterial(descriptor=MaterialDescriptor())

        slots: dict[str, Texture | None] = {}
        for field_name, primary, fallback in TEXTURE_SLOTS:
            if field_name == "main_texture" and material.main_texture is not None:
                slots[field_name] = material.main_texture
            else:
                slots[field_name] = _resolve_slot(material, primary, fallback)

        descriptor = MaterialDescriptor(
            scale=to_float2(material.main_texture_scale),
            offset=to_float2(material.main_texture_offset),
            shader_name=material.shader.name if material.shader else None,
            main_texture=self._name(slots["main_texture"]),
            normal_map=self._name(slots["normal_map"]),
            ao_map=self._name(slots["ao_map"]),
            emission_map=self._name(slots["emission_map"]),
            metallic_map=self._name(slots["metallic_map"]),
        )

        try:
            descriptor.emission_color = color_to_float3(
                material.get_color(EMISSION_COLOR_PROPERTY)
            )
        except (PropertyNotFoundError, ValueError, TypeError):
            logger.debug("Material %s has no emission colour", material.name)

        try:
            descriptor.cutout = material.get_float(CUTOFF_PROPERTY)
        except (PropertyNotFoundError, ValueError, TypeError):
            logger.debug("Material %s has no alpha cutoff", material.name)

        textures: list[Texture] = []
        seen: set[str] = set()
        for texture in slots.values():
            if texture is not None and texture.identity not in seen:
                seen.add(texture.identity)
                textures.append(texture)

        return ResolvedMaterial(descriptor=descriptor, textures=textures)

    def _name(self, texture: Texture | None) -> str | None:
        return self.names.name_for(texture) if texture is not None else None
