"""scenedoc — export in-memory scene graphs to portable JSON documents."""

__version__ = "1.0.0"

from scenedoc.config import (
    LAYOUT_NAME,
    LAYOUT_VERSION,
    ExportSettings,
    Formatting,
    configure_logging,
)
from scenedoc.errors import (
    DocumentWriteError,
    MeshEncodingError,
    PropertyNotFoundError,
    SceneExportError,
    TextureReadError,
)
from scenedoc.export.exporter import ExportResult, SceneExporter
from scenedoc.export.walker import walk
from scenedoc.models.document import NodeDescriptor
from scenedoc.scene.graph import SceneNode, Transform

__all__ = [
    "__version__",
    "LAYOUT_NAME",
    "LAYOUT_VERSION",
    # Configuration
    "ExportSettings",
    "Formatting",
    "configure_logging",
    # Errors
    "DocumentWriteError",
    "MeshEncodingError",
    "PropertyNotFoundError",
    "SceneExportError",
    "TextureReadError",
    # Pipeline
    "ExportResult",
    "NodeDescriptor",
    "SceneExporter",
    "walk",
    # Scene
    "SceneNode",
    "Transform",
]
