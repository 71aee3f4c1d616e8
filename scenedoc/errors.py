"""Exception types raised by the scene export pipeline."""

from __future__ import annotations


class SceneExportError(Exception):
    """Base class for all scene export failures."""


class DocumentWriteError(SceneExportError):
    """Raised when the output document cannot be written.

    This is the only error that aborts an export.  No partial document is
    left behind when it is raised.
    """


class TextureReadError(SceneExportError):
    """Raised when a texture's pixel data is not accessible."""


class MeshEncodingError(SceneExportError):
    """Raised when a mesh's index data references missing vertices."""


class PropertyNotFoundError(SceneExportError, KeyError):
    """Raised when a material's shader does not define a property."""
