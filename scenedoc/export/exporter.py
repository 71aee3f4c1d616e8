"""SceneExporter — the "export now" entry point."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from scenedoc.config import LAYOUT_VERSION, ExportSettings, configure_logging
from scenedoc.export.encoders import ImageEncoder
from scenedoc.export.nodes import NodeDescriptorBuilder
from scenedoc.export.serializer import DocumentSerializer
from scenedoc.export.textures import TextureExportCache
from scenedoc.export.walker import walk
from scenedoc.models.document import NodeDescriptor
from scenedoc.scene.graph import SceneNode

logger = logging.getLogger(__name__)


@dataclass
class ExportResult:
    """Summary of one export invocation."""

    document_path: Path
    node_count: int
    textures_written: list[Path] = field(default_factory=list)
    textures_skipped: int = 0
    textures_failed: int = 0
    layout_version: int = LAYOUT_VERSION

    def to_dict(self) -> dict[str, Any]:
        return {
            "document_path": str(self.document_path),
            "node_count": self.node_count,
            "textures_written": [str(p) for p in self.textures_written],
            "textures_skipped": self.textures_skipped,
            "textures_failed": self.textures_failed,
            "layout_version": self.layout_version,
        }


class SceneExporter:
    """Export a scene graph to a JSON document and optional PNG textures.

    The export is a single synchronous pass: walk, build each node, then
    write the document.  Texture writes are best-effort; a document write
    failure raises :class:`~scenedoc.errors.DocumentWriteError`.

    Parameters
    ----------
    settings:
        Export settings.  Defaults to :class:`ExportSettings` defaults.
    image_encoder:
        Encoder used for texture export.  Defaults to Pillow.
    """

    def __init__(
        self,
        settings: ExportSettings | None = None,
        *,
        image_encoder: ImageEncoder | None = None,
    ) -> None:
        self.settings = settings or ExportSettings()
        self._image_encoder = image_encoder

    def export(self, root: SceneNode | None) -> ExportResult:
        """Export every node under *root* and return a summary."""
        settings = self.settings
        configure_logging(settings)
        cache = self._new_texture_cache()

        nodes = self._build_nodes(root, cache)

        serializer = DocumentSerializer(settings.formatting)
        path = serializer.write(nodes, settings.document_path)

        if settings.log_enabled:
            logger.info("Exported: %d objects", len(nodes))

        return ExportResult(
            document_path=path,
            node_count=len(nodes),
            textures_written=list(cache.written) if cache is not None else [],
            textures_skipped=cache.skipped if cache is not None else 0,
            textures_failed=cache.failed if cache is not None else 0,
        )

    def export_nodes(self, root: SceneNode | None) -> list[NodeDescriptor]:
        """Build the node descriptors without writing anything."""
        return self._build_nodes(root, None)

    def _new_texture_cache(self) -> TextureExportCache | None:
        if not self.settings.export_textures:
            return None
        return TextureExportCache(self.settings.textures_path, self._image_encoder)

    def _build_nodes(
        self,
        root: SceneNode | None,
        cache: TextureExportCache | None,
    ) -> list[NodeDescriptor]:
        builder = NodeDescriptorBuilder(
            export_mesh_data=self.settings.export_mesh_data,
            texture_cache=cache,
        )

        nodes: list[NodeDescriptor] = []
        for entry in walk(root):
            nodes.append(builder.build(entry))
            if self.settings.log_enabled:
                logger.info("Exporter: %s", entry.node.name)
        return nodes
