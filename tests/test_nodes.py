"""Tests for the node descriptor builder."""

from __future__ import annotations

import logging
import math
from pathlib import Path

import pytest

from scenedoc.export.nodes import NodeDescriptorBuilder, collider_kind, light_kind
from scenedoc.export.textures import TextureExportCache
from scenedoc.export.walker import WalkEntry
from scenedoc.models.document import ColliderKind, LightKind
from scenedoc.scene import (
    Bounds,
    BoxCollider,
    CapsuleCollider,
    Light,
    LightShadows,
    LightType,
    Material,
    Mesh,
    MeshCollider,
    MeshFilter,
    MeshRenderer,
    ReflectionProbe,
    ReflectionProbeRefreshMode,
    SceneNode,
    Shader,
    SphereCollider,
    SubMeshDescriptor,
    Texture,
    Transform,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _entry(node: SceneNode, node_id: int = 0, parent_id: int | None = None) -> WalkEntry:
    return WalkEntry(node=node, node_id=node_id, parent_id=parent_id)


def _make_quad_mesh() -> Mesh:
    return Mesh(
        name="Quad",
        vertices=[(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)],
        normals=[(0, 0, -1)] * 4,
        uv=[(0, 0), (1, 0), (1, 1), (0, 1)],
        triangles=[0, 2, 1, 0, 3, 2],
        submeshes=[SubMeshDescriptor(0, 6)],
    )


def _make_rendered_node(name: str = "Quad", mesh: Mesh | None = None, **material_props) -> SceneNode:
    node = SceneNode(name)
    node.add_component(MeshFilter(shared_mesh=mesh or _make_quad_mesh()))
    node.add_component(MeshRenderer(
        name=name,
        shared_materials=[
            Material(
                name="Mat",
                shader=Shader("Standard"),
                main_texture=Texture("Albedo", 1, 1, b"\xff\xff\xff\xff"),
                properties=material_props,
            ),
        ],
    ))
    return node


class _SphericalMesh(SphereCollider, MeshCollider):
    """Collider claiming to be both a sphere and a mesh collider."""


# ---------------------------------------------------------------------------
# Identity and transform
# ---------------------------------------------------------------------------


class TestIdentity:
    def test_ids_are_strings(self):
        desc = NodeDescriptorBuilder().build(_entry(SceneNode("A"), 3, 1))
        assert desc.id == "3"
        assert desc.transform.parent == "1"

    def test_root_parent_is_none(self):
        desc = NodeDescriptorBuilder().build(_entry(SceneNode("Root")))
        assert desc.transform.parent is None

    def test_flags(self):
        node = SceneNode("Static", is_static=True, active_self=False)
        desc = NodeDescriptorBuilder().build(_entry(node))
        assert desc.name == "Static"
        assert desc.is_static is True
        assert desc.is_active is False


class TestTransform:
    def test_local_transform(self):
        node = SceneNode("T", transform=Transform(
            local_position=(1, 2, 3),
            local_rotation=(0.0, math.sqrt(0.5), 0.0, math.sqrt(0.5)),
            local_scale=(2, 2, 2),
        ))
        desc = NodeDescriptorBuilder().build(_entry(node))
        assert desc.transform.local_position == [1.0, 2.0, 3.0]
        assert desc.transform.local_rotation == pytest.approx([0.0, 90.0, 0.0], abs=1e-4)
        assert desc.transform.local_scale == [2.0, 2.0, 2.0]


# ---------------------------------------------------------------------------
# Optional blocks
# ---------------------------------------------------------------------------


class TestNoAttachments:
    def test_all_blocks_absent(self):
        desc = NodeDescriptorBuilder().build(_entry(SceneNode("Empty")))
        assert desc.collider is None
        assert desc.light is None
        assert desc.reflection_probe is None
        assert desc.renderer is None

    def test_blocks_omitted_from_record(self):
        record = NodeDescriptorBuilder().build(_entry(SceneNode("Empty"))).to_dict()
        assert set(record) == {"Id", "Name", "IsStatic", "IsActive", "Transform"}
        assert record["Transform"]["Parent"] is None


class TestCollider:
    def test_box(self):
        node = SceneNode("Box")
        node.add_component(BoxCollider(bounds=Bounds((-1, -1, -1), (1, 1, 1))))
        desc = NodeDescriptorBuilder().build(_entry(node)).collider
        assert desc.type is ColliderKind.BOX
        assert desc.min == [-1.0, -1.0, -1.0]
        assert desc.max == [1.0, 1.0, 1.0]
        assert desc.radius == 0.0
        assert desc.enabled is True

    def test_sphere_radius(self):
        node = SceneNode("Ball")
        node.add_component(SphereCollider(radius=1.5, enabled=False))
        desc = NodeDescriptorBuilder().build(_entry(node)).collider
        assert desc.type is ColliderKind.SPHERE
        assert desc.radius == 1.5
        assert desc.enabled is False

    def test_capsule_has_no_radius(self):
        node = SceneNode("Pill")
        node.add_component(CapsuleCollider(radius=0.4))
        desc = NodeDescriptorBuilder().build(_entry(node)).collider
        assert desc.type is ColliderKind.CAPSULE
        assert desc.radius == 0.0

    def test_mesh(self):
        assert collider_kind(MeshCollider()) is ColliderKind.MESH

    def test_priority_sphere_over_mesh(self):
        assert collider_kind(_SphericalMesh()) is ColliderKind.SPHERE


class TestLight:
    @pytest.mark.parametrize(
        ("light_type", "expected"),
        [
            (LightType.DIRECTIONAL, LightKind.DIRECTIONAL),
            (LightType.POINT, LightKind.POINT),
            (LightType.SPOT, LightKind.SPOT),
            (LightType.AREA, LightKind.UNKNOWN),
            (LightType.DISC, LightKind.UNKNOWN),
        ],
    )
    def test_kind_mapping(self, light_type, expected):
        assert light_kind(Light(light_type=light_type)) is expected

    def test_fields(self):
        node = SceneNode("Lamp")
        node.add_component(Light(
            light_type=LightType.SPOT,
            intensity=2.5,
            range=12.0,
            color=(1.0, 0.9, 0.8, 1.0),
            spot_angle=45.0,
            shadows=LightShadows.SOFT,
        ))
        desc = NodeDescriptorBuilder().build(_entry(node)).light
        assert desc.type is LightKind.SPOT
        assert desc.intensity == 2.5
        assert desc.radius == 12.0
        assert desc.color == [1.0, 0.9, 0.8, 1.0]
        assert desc.angle == 45.0
        assert desc.shadows_enabled is True

    def test_no_shadows(self):
        node = SceneNode("Lamp")
        node.add_component(Light(shadows=LightShadows.NONE))
        assert NodeDescriptorBuilder().build(_entry(node)).light.shadows_enabled is False


class TestReflectionProbe:
    def test_fields(self):
        node = SceneNode("Probe")
        node.add_component(ReflectionProbe(
            size=(4, 4, 4),
            bounds=Bounds((-2, -2, -2), (2, 2, 2)),
            intensity=0.8,
            near_clip_plane=0.1,
            far_clip_plane=500.0,
            resolution=256,
        ))
        desc = NodeDescriptorBuilder().build(_entry(node)).reflection_probe
        assert desc.box_size == [4.0, 4.0, 4.0]
        assert desc.box_min == [-2.0, -2.0, -2.0]
        assert desc.box_max == [2.0, 2.0, 2.0]
        assert desc.clip_planes == [0.1, 500.0]
        assert desc.intensity == 0.8
        assert desc.resolution == 256
        assert desc.is_backed is True

    def test_realtime_probe_not_baked(self):
        node = SceneNode("Probe")
        node.add_component(ReflectionProbe(refresh_mode=ReflectionProbeRefreshMode.EVERY_FRAME))
        assert NodeDescriptorBuilder().build(_entry(node)).reflection_probe.is_backed is False


# ---------------------------------------------------------------------------
# Renderer
# ---------------------------------------------------------------------------


class TestRenderer:
    def test_materials_and_fragments(self):
        desc = NodeDescriptorBuilder().build(_entry(_make_rendered_node())).renderer
        assert desc.name == "Quad"
        assert len(desc.materials) == 1
        assert desc.materials[0].main_texture == "Albedo"
        assert len(desc.mesh_filters) == 1
        assert desc.mesh_filters[0].indices == [0, 1, 2, 0, 3, 1]

    def test_one_descriptor_per_slot(self):
        node = _make_rendered_node()
        renderer = node.get_component(MeshRenderer)
        renderer.shared_materials.append(None)
        renderer.shared_materials.append(Material(name="Second", shader=Shader("Unlit")))
        desc = NodeDescriptorBuilder().build(_entry(node)).renderer
        assert len(desc.materials) == 3
        assert desc.materials[1].shader_name is None
        assert desc.materials[2].shader_name == "Unlit"

    def test_renderer_name_defaults_to_node_name(self):
        node = _make_rendered_node()
        node.get_component(MeshRenderer).name = ""
        assert NodeDescriptorBuilder().build(_entry(node)).renderer.name == "Quad"

    def test_mesh_export_disabled(self):
        builder = NodeDescriptorBuilder(export_mesh_data=False)
        desc = builder.build(_entry(_make_rendered_node())).renderer
        assert desc.mesh_filters is None
        assert len(desc.materials) == 1

    def test_no_mesh_filter(self):
        node = SceneNode("Bare")
        node.add_component(MeshRenderer(name="Bare"))
        desc = NodeDescriptorBuilder().build(_entry(node))
        assert desc.renderer is not None
        assert desc.renderer.mesh_filters is None
        assert "MeshFilters" not in desc.to_dict()["Renderer"]

    def test_mesh_filter_without_mesh(self):
        node = SceneNode("Bare")
        node.add_component(MeshFilter())
        node.add_component(MeshRenderer(name="Bare"))
        assert NodeDescriptorBuilder().build(_entry(node)).renderer.mesh_filters is None

    def test_broken_mesh_keeps_node(self, caplog):
        mesh = _make_quad_mesh()
        mesh.triangles[0] = 42
        node = _make_rendered_node(mesh=mesh)
        with caplog.at_level(logging.WARNING, logger="scenedoc"):
            desc = NodeDescriptorBuilder().build(_entry(node))
        assert desc.renderer.mesh_filters is None
        assert len(desc.renderer.materials) == 1
        assert "Quad" in caplog.text


class TestTextureRequests:
    def test_textures_sent_to_cache(self, tmp_path: Path):
        cache = TextureExportCache(tmp_path)
        builder = NodeDescriptorBuilder(texture_cache=cache)
        builder.build(_entry(_make_rendered_node()))
        assert (tmp_path / "Quad" / "Albedo.png").is_file()

    def test_no_cache_no_textures(self, tmp_path: Path):
        NodeDescriptorBuilder().build(_entry(_make_rendered_node()))
        assert list(tmp_path.rglob("*.png")) == []

    def test_unreadable_texture_keeps_reference(self, tmp_path: Path):
        node = _make_rendered_node(_BumpMap=Texture("Locked", is_readable=False))
        cache = TextureExportCache(tmp_path)
        desc = NodeDescriptorBuilder(texture_cache=cache).build(_entry(node))
        assert desc.renderer.materials[0].normal_map == "Locked"
        assert [p.name for p in cache.written] == ["Albedo.png"]

    def test_renderer_name_used_as_safe_folder(self, tmp_path: Path):
        node = _make_rendered_node()
        node.get_component(MeshRenderer).name = "../Quad"
        cache = TextureExportCache(tmp_path / "Textures")
        desc = NodeDescriptorBuilder(texture_cache=cache).build(_entry(node))

        assert desc.renderer.name == "../Quad"
        assert cache.written == [tmp_path / "Textures" / ".._Quad" / "Albedo.png"]
