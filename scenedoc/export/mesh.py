"""Mesh encoder — one self-contained fragment per submesh.

Each fragment carries only the vertices its own triangles reference, and
its indices address that local vertex list.  Vertices are numbered in order
of first use, so triangle order and winding are unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from scenedoc.errors import MeshEncodingError
from scenedoc.export.codec import flatten_float2, flatten_float3
from scenedoc.models.document import MeshFormat, MeshFragment
from scenedoc.scene.assets import Mesh

logger = logging.getLogger(__name__)


class MeshEncoder:
    """Encode a :class:`Mesh` into :class:`MeshFragment` objects."""

    def encode(self, mesh: Mesh) -> list[MeshFragment]:
        """Return one fragment per submesh of *mesh*.

        A mesh without submesh descriptors is encoded as a single fragment
        spanning its whole index buffer.

        Raises
        ------
        MeshEncodingError
            If an index lies outside the mesh's vertex range.
        """
        mesh_format = MeshFormat(int(mesh.index_format))

        if mesh.submesh_count == 0:
            index_lists = [list(mesh.triangles)]
        else:
            index_lists = [mesh.get_indices(i) for i in range(mesh.submesh_count)]

        fragments = [
            self._encode_submesh(mesh, indices, mesh_format, i)
            for i, indices in enumerate(index_lists)
        ]
        logger.debug(
            "Encoded mesh %s: %d vertices, %d fragment(s)",
            mesh.name,
            mesh.vertex_count,
            len(fragments),
        )
        return fragments

    def _encode_submesh(
        self,
        mesh: Mesh,
        indices: Sequence[int],
        mesh_format: MeshFormat,
        submesh: int,
    ) -> MeshFragment:
        vertex_count = mesh.vertex_count
        remap: dict[int, int] = {}
        local_indices: list[int] = []

        for index in indices:
            if index < 0 or index >= vertex_count:
                raise MeshEncodingError(
                    f"Mesh '{mesh.name}' submesh {submesh}: index {index} "
                    f"out of range for {vertex_count} vertices"
                )
            local = remap.get(index)
            if local is None:
                local = len(remap)
                remap[index] = local
            local_indices.append(local)

        # dicts keep insertion order: keys are source indices by local index
        used = list(remap)

        return MeshFragment(
            positions=flatten_float3(mesh.vertices[i] for i in used),
            normals=_gather3(mesh.normals, used, vertex_count),
            uvs=_gather2(mesh.uv, used, vertex_count),
            indices=local_indices,
            mesh_format=mesh_format,
        )


def _gather3(values: Sequence, used: list[int], vertex_count: int) -> list[float]:
    if len(values) != vertex_count:
        return []
    return flatten_float3(values[i] for i in used)


def _gather2(values: Sequence, used: list[int], vertex_count: int) -> list[float]:
    if len(values) != vertex_count:
        return []
    return flatten_float2(values[i] for i in used)
