"""Export pipeline — scene graph to portable JSON document."""

from scenedoc.export.encoders import ImageEncoder, PillowImageEncoder
from scenedoc.export.exporter import ExportResult, SceneExporter
from scenedoc.export.materials import MaterialResolver, ResolvedMaterial
from scenedoc.export.mesh import MeshEncoder
from scenedoc.export.nodes import NodeDescriptorBuilder
from scenedoc.export.serializer import DocumentSerializer
from scenedoc.export.textures import TextureExportCache, TextureRequestStatus
from scenedoc.export.walker import WalkEntry, walk

__all__ = [
    "DocumentSerializer",
    "ExportResult",
    "ImageEncoder",
    "MaterialResolver",
    "MeshEncoder",
    "NodeDescriptorBuilder",
    "PillowImageEncoder",
    "ResolvedMaterial",
    "SceneExporter",
    "TextureExportCache",
    "TextureRequestStatus",
    "WalkEntry",
    "walk",
]
