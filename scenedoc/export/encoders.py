"""Image encoders — rasterize a texture's pixel data to PNG bytes."""

from __future__ import annotations

import abc
import io

from PIL import Image

from scenedoc.errors import TextureReadError
from scenedoc.scene.assets import Texture


class ImageEncoder(abc.ABC):
    """Base class for texture-to-image encoders."""

    @abc.abstractmethod
    def encode(self, texture: Texture) -> bytes:
        """Return *texture* encoded as PNG bytes.

        Raises
        ------
        TextureReadError
            If the texture's pixel data is not accessible.
        """


class PillowImageEncoder(ImageEncoder):
    """Encode RGBA8 textures with Pillow.

    Pixel rows are stored bottom-up in the texture and written top-down in
    the PNG.
    """

    def __init__(self, *, flip_vertical: bool = True) -> None:
        self._flip_vertical = flip_vertical

    def encode(self, texture: Texture) -> bytes:
        if not texture.is_readable or texture.pixels is None:
            raise TextureReadError(
                f"Texture '{texture.name}' pixel data is not readable"
            )

        expected = texture.width * texture.height * 4
        if texture.width <= 0 or texture.height <= 0 or len(texture.pixels) != expected:
            raise TextureReadError(
                f"Texture '{texture.name}' has {len(texture.pixels)} bytes of "
                f"pixel data, expected {expected} for "
                f"{texture.width}x{texture.height} RGBA"
            )

        image = Image.frombytes("RGBA", (texture.width, texture.height), texture.pixels)
        if self._flip_vertical:
            image = image.transpose(Image.Transpose.FLIP_TOP_BOTTOM)

        buf = io.BytesIO()
        image.save(buf, format="PNG")
        return buf.getvalue()
