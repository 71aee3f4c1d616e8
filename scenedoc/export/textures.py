"""Texture export cache — writes each distinct texture at most once per export."""

from __future__ import annotations

import enum
import logging
import re
import threading
from pathlib import Path

from scenedoc.config import TEXTURE_SUFFIX
from scenedoc.errors import TextureReadError
from scenedoc.export.encoders import ImageEncoder, PillowImageEncoder
from scenedoc.scene.assets import Texture

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


def safe_path_component(name: str) -> str:
    """Return *name* usable as a single file or folder name.

    Path separators and reserved characters become ``_``; empty names and
    the ``.``/``..`` entries are replaced outright.
    """
    cleaned = _UNSAFE_CHARS.sub("_", name).strip()
    if cleaned in ("", ".", ".."):
        return "_"
    return cleaned


class TextureNames:
    """Allocate export names, unique per texture identity, for one export.

    The first identity seen under a name keeps it (made path-safe); later
    identities sharing that name get a ``_1``, ``_2``... suffix.
    """

    def __init__(self) -> None:
        self._by_identity: dict[str, str] = {}
        self._taken: set[str] = set()
        self._lock = threading.Lock()

    def name_for(self, texture: Texture) -> str:
        with self._lock:
            name = self._by_identity.get(texture.identity)
            if name is not None:
                return name

            base = safe_path_component(texture.name)
            name = base
            suffix = 1
            while name in self._taken:
                name = f"{base}_{suffix}"
                suffix += 1
            if name != texture.name:
                logger.debug(
                    "Texture %s (identity %s) exported as %s",
                    texture.name,
                    texture.identity,
                    name,
                )

            self._taken.add(name)
            self._by_identity[texture.identity] = name
            return name


class TextureRequestStatus(str, enum.Enum):
    WRITTEN = "written"
    ALREADY_EXPORTED = "already_exported"
    UNREADABLE = "unreadable"
    FAILED = "failed"
    NO_TEXTURE = "no_texture"

    @property
    def persisted(self) -> bool:
        return self is TextureRequestStatus.WRITTEN


class TextureExportCache:
    """Persist textures referenced by materials, deduplicated by identity.

    The cache is best-effort: unreadable textures and write failures are
    logged and reported through the returned status, never raised.  An
    identity is claimed before it is encoded, so a texture that failed is
    not attempted again later in the same export.  A file path is owned by
    the first identity written to it; another identity targeting the same
    path is refused rather than overwriting it.

    Parameters
    ----------
    root:
        Directory beneath which per-folder texture directories are created.
    encoder:
        Image encoder used to rasterize textures.  Defaults to
        :class:`PillowImageEncoder`.
    """

    def __init__(self, root: str | Path, encoder: ImageEncoder | None = None) -> None:
        self.root = Path(root)
        self._encoder = encoder or PillowImageEncoder()
        self._claimed: set[str] = set()
        self._paths: dict[Path, str] = {}
        self._lock = threading.Lock()
        self.written: list[Path] = []
        self.skipped = 0
        self.failed = 0

    def __contains__(self, identity: str) -> bool:
        with self._lock:
            return identity in self._claimed

    def __len__(self) -> int:
        with self._lock:
            return len(self._claimed)

    def _claim(self, identity: str) -> bool:
        with self._lock:
            if identity in self._claimed:
                self.skipped += 1
                return False
            self._claimed.add(identity)
            return True

    def _claim_path(self, path: Path, identity: str) -> str | None:
        """Reserve *path* for *identity*; return the current owner on conflict."""
        with self._lock:
            owner = self._paths.setdefault(path, identity)
            return owner if owner != identity else None

    def path_for(self, texture: Texture, folder: str, name: str | None = None) -> Path:
        """Return ``<root>/<folder>/<name>.png`` with path-safe components."""
        stem = safe_path_component(name if name is not None else texture.name)
        return self.root / safe_path_component(folder) / f"{stem}{TEXTURE_SUFFIX}"

    def request(
        self,
        texture: Texture | None,
        folder: str,
        name: str | None = None,
    ) -> TextureRequestStatus:
        """Write *texture* as ``<root>/<folder>/<name>.png`` unless already done.

        Parameters
        ----------
        texture:
            Texture to persist.  ``None`` (an unbound slot) is a no-op.
        folder:
            Sub-folder name, normally the owning renderer's name.
        name:
            File stem, normally the name allocated by :class:`TextureNames`.
            Defaults to the texture name.

        Returns
        -------
        TextureRequestStatus
            What happened to this request.
        """
        if texture is None:
            return TextureRequestStatus.NO_TEXTURE

        if not self._claim(texture.identity):
            logger.debug("Texture %s already exported, skipping", texture.name)
            return TextureRequestStatus.ALREADY_EXPORTED

        path = self.path_for(texture, folder, name)
        owner = self._claim_path(path, texture.identity)
        if owner is not None:
            logger.warning(
                "Skipping texture %s (identity %s): %s already holds identity %s",
                texture.name,
                texture.identity,
                path,
                owner,
            )
            self.failed += 1
            return TextureRequestStatus.FAILED

        try:
            data = self._encoder.encode(texture)
        except TextureReadError as exc:
            logger.warning("Skipping texture %s: %s", texture.name, exc)
            self.skipped += 1
            return TextureRequestStatus.UNREADABLE

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError:
            logger.warning(
                "Could not write texture %s to %s",
                texture.name,
                path,
                exc_info=True,
            )
            self.failed += 1
            return TextureRequestStatus.FAILED

        logger.debug("Wrote texture %s -> %s", texture.name, path)
        self.written.append(path)
        return TextureRequestStatus.WRITTEN
