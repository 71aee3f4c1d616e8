"""Tests for the in-memory scene graph model."""

from __future__ import annotations

import pytest

from scenedoc.errors import PropertyNotFoundError
from scenedoc.scene import (
    BoxCollider,
    Collider,
    Light,
    Material,
    Mesh,
    SceneNode,
    Shader,
    SphereCollider,
    SubMeshDescriptor,
    Texture,
)


class TestSceneNode:
    def test_add_child_sets_parent(self):
        root = SceneNode("root")
        child = root.add_child(SceneNode("child"))
        assert child.parent is root
        assert root.children == [child]

    def test_constructor_children_get_parent(self):
        child = SceneNode("child")
        root = SceneNode("root", children=[child])
        assert child.parent is root

    def test_reparent_moves_child(self):
        a = SceneNode("a")
        b = SceneNode("b")
        child = a.add_child(SceneNode("child"))
        b.add_child(child)
        assert a.children == []
        assert child.parent is b

    def test_get_component_by_base_class(self):
        node = SceneNode("n")
        sphere = node.add_component(SphereCollider(radius=2.0))
        assert node.get_component(Collider) is sphere
        assert node.get_component(BoxCollider) is None
        assert node.get_component(Light) is None

    def test_get_component_returns_first(self):
        node = SceneNode("n")
        first = node.add_component(BoxCollider())
        node.add_component(SphereCollider())
        assert node.get_component(Collider) is first


class TestMaterial:
    def test_getters(self):
        tex = Texture("Bricks")
        mat = Material(
            name="m",
            shader=Shader("Standard"),
            properties={"_BumpMap": tex, "_Cutoff": 0.25, "_EmissionColor": (1, 0, 0, 1)},
        )
        assert mat.get_texture("_BumpMap") is tex
        assert mat.get_float("_Cutoff") == 0.25
        assert mat.get_color("_EmissionColor") == (1.0, 0.0, 0.0, 1.0)

    def test_missing_property_raises(self):
        mat = Material(name="m", shader=Shader("Unlit"))
        assert not mat.has_property("_Cutoff")
        with pytest.raises(PropertyNotFoundError):
            mat.get_float("_Cutoff")

    def test_missing_property_is_key_error(self):
        with pytest.raises(KeyError):
            Material().get_texture("_MainTex")

    def test_non_texture_property_rejected(self):
        mat = Material(properties={"_Cutoff": 0.5})
        with pytest.raises(TypeError):
            mat.get_texture("_Cutoff")


class TestTexture:
    def test_identity_defaults_to_name(self):
        assert Texture("Wood").identity == "Wood"

    def test_identity_uses_key(self):
        assert Texture("Wood", key="guid-1").identity == "guid-1"


class TestMesh:
    def test_get_indices_slices_submesh(self):
        mesh = Mesh(
            vertices=[(0, 0, 0)] * 4,
            triangles=[0, 1, 2, 0, 2, 3],
            submeshes=[SubMeshDescriptor(0, 3), SubMeshDescriptor(3, 3)],
        )
        assert mesh.submesh_count == 2
        assert mesh.vertex_count == 4
        assert mesh.get_indices(1) == [0, 2, 3]
