"""Node descriptor builder — per-node attribute extraction.

Every optional block is capability-probed: the block is emitted only when
the node carries the matching attachment.
"""

from __future__ import annotations

import logging

from scenedoc.errors import MeshEncodingError
from scenedoc.export.codec import (
    color_to_float4,
    quaternion_to_euler,
    to_float3,
)
from scenedoc.export.materials import MaterialResolver
from scenedoc.export.mesh import MeshEncoder
from scenedoc.export.textures import TextureExportCache, TextureNames
from scenedoc.export.walker import WalkEntry
from scenedoc.models.document import (
    ColliderDescriptor,
    ColliderKind,
    LightDescriptor,
    LightKind,
    MeshFragment,
    NodeDescriptor,
    ReflectionProbeDescriptor,
    RendererDescriptor,
    TransformDescriptor,
)
from scenedoc.scene.components import (
    CapsuleCollider,
    Collider,
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
from scenedoc.scene.graph import SceneNode

logger = logging.getLogger(__name__)

# Checked in order; the first match wins, anything else is a box.
_COLLIDER_PRIORITY: tuple[tuple[type[Collider], ColliderKind], ...] = (
    (SphereCollider, ColliderKind.SPHERE),
    (CapsuleCollider, ColliderKind.CAPSULE),
    (MeshCollider, ColliderKind.MESH),
)

_LIGHT_KINDS: dict[LightType, LightKind] = {
    LightType.DIRECTIONAL: LightKind.DIRECTIONAL,
    LightType.POINT: LightKind.POINT,
    LightType.SPOT: LightKind.SPOT,
}


def collider_kind(collider: Collider) -> ColliderKind:
    for cls, kind in _COLLIDER_PRIORITY:
        if isinstance(collider, cls):
            return kind
    return ColliderKind.BOX


def light_kind(light: Light) -> LightKind:
    return _LIGHT_KINDS.get(light.light_type, LightKind.UNKNOWN)


class NodeDescriptorBuilder:
    """Build :class:`NodeDescriptor` objects for walked scene nodes.

    Parameters
    ----------
    export_mesh_data:
        Encode mesh geometry for nodes with a renderer.
    texture_cache:
        Cache receiving every texture a material references.  ``None``
        disables texture export.
    material_resolver:
        Resolver whose name allocator also names the exported texture
        files.  One builder, and so one allocator, serves one export.
    """

    def __init__(
        self,
        *,
        export_mesh_data: bool = True,
        texture_cache: TextureExportCache | None = None,
        material_resolver: MaterialResolver | None = None,
        mesh_encoder: MeshEncoder | None = None,
    ) -> None:
        self.export_mesh_data = export_mesh_data
        self.texture_cache = texture_cache
        self._materials = material_resolver or MaterialResolver(TextureNames())
        self._meshes = mesh_encoder or MeshEncoder()

    def build(self, entry: WalkEntry) -> NodeDescriptor:
        node = entry.node
        transform = node.transform

        descriptor = NodeDescriptor(
            id=str(entry.node_id),
            name=node.name,
            is_static=node.is_static,
            is_active=node.active_self,
            transform=TransformDescriptor(
                parent=str(entry.parent_id) if entry.parent_id is not None else None,
                local_position=to_float3(transform.local_position),
                local_rotation=quaternion_to_euler(transform.local_rotation),
                local_scale=to_float3(transform.local_scale),
            ),
        )

        collider = node.get_component(Collider)
        if collider is not None:
            descriptor.collider = self._build_collider(collider)

        light = node.get_component(Light)
        if light is not None:
            descriptor.light = self._build_light(light)

        probe = node.get_component(ReflectionProbe)
        if probe is not None:
            descriptor.reflection_probe = self._build_probe(probe)

        renderer = node.get_component(MeshRenderer)
        if renderer is not None:
            descriptor.renderer = self._build_renderer(node, renderer)

        return descriptor

    # -- attachment blocks ----------------------------------------------------

    def _build_collider(self, collider: Collider) -> ColliderDescriptor:
        kind = collider_kind(collider)
        radius = float(collider.radius) if kind is ColliderKind.SPHERE else 0.0
        return ColliderDescriptor(
            min=to_float3(collider.bounds.min),
            max=to_float3(collider.bounds.max),
            enabled=collider.enabled,
            radius=radius,
            type=kind,
        )

    def _build_light(self, light: Light) -> LightDescriptor:
        return LightDescriptor(
            intensity=float(light.intensity),
            radius=float(light.range),
            color=color_to_float4(light.color),
            angle=float(light.spot_angle),
            shadows_enabled=light.shadows is not LightShadows.NONE,
            enabled=light.enabled,
            type=light_kind(light),
        )

    def _build_probe(self, probe: ReflectionProbe) -> ReflectionProbeDescriptor:
        return ReflectionProbeDescriptor(
            box_size=to_float3(probe.size),
            box_min=to_float3(probe.bounds.min),
            box_max=to_float3(probe.bounds.max),
            intensity=float(probe.intensity),
            clip_planes=[float(probe.near_clip_plane), float(probe.far_clip_plane)],
            enabled=probe.enabled,
            is_backed=probe.refresh_mode is not ReflectionProbeRefreshMode.EVERY_FRAME,
            resolution=int(probe.resolution),
        )

    def _build_renderer(self, node: SceneNode, renderer: MeshRenderer) -> RendererDescriptor:
        name = renderer.name or node.name
        descriptor = RendererDescriptor(name=name, enabled=renderer.enabled)

        for material in renderer.shared_materials:
            resolved = self._materials.resolve(material)
            descriptor.materials.append(resolved.descriptor)
            if self.texture_cache is not None:
                for texture in resolved.textures:
                    self.texture_cache.request(
                        texture, name, self._materials.names.name_for(texture),
                    )

        if self.export_mesh_data:
            descriptor.mesh_filters = self._build_mesh_filters(node)

        return descriptor

    def _build_mesh_filters(self, node: SceneNode) -> list[MeshFragment] | None:
        mesh_filter = node.get_component(MeshFilter)
        mesh = mesh_filter.shared_mesh if mesh_filter is not None else None
        if mesh is None:
            logger.debug("Renderer on %s has no mesh, skipping geometry", node.name)
            return None

        try:
            return self._meshes.encode(mesh)
        except MeshEncodingError:
            logger.warning(
                "Skipping geometry of %s: mesh could not be encoded",
                node.name,
                exc_info=True,
            )
            return None
