"""Document serializer — writes the node list as one JSON document."""

from __future__ import annotations

import json
import logging
import os
import stat
import tempfile
from collections.abc import Iterable
from pathlib import Path

from scenedoc.config import DOCUMENT_SUFFIX, Formatting
from scenedoc.errors import DocumentWriteError
from scenedoc.models.document import NodeDescriptor

logger = logging.getLogger(__name__)


def _target_mode(path: Path) -> int:
    """Mode for the document: the existing file's, else 0o666 less the umask."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


class DocumentSerializer:
    """Serialize :class:`NodeDescriptor` sequences.

    The document is a JSON array of node records in walk order.
    *formatting* only changes whitespace.
    """

    def __init__(self, formatting: Formatting = Formatting.INDENTED) -> None:
        self.formatting = Formatting(formatting)

    def dumps(self, nodes: Iterable[NodeDescriptor]) -> str:
        """Return the document text.

        Raises
        ------
        DocumentWriteError
            If a value is NaN or infinite; strict JSON has no spelling for it.
        """
        records = [node.to_dict() for node in nodes]
        if self.formatting is Formatting.COMPACT:
            options = {"separators": (",", ":")}
        else:
            options = {"indent": 2}
        try:
            return json.dumps(records, ensure_ascii=False, allow_nan=False, **options)
        except ValueError as exc:
            logger.error("Cannot serialize document: %s", exc)
            raise DocumentWriteError(f"Cannot serialize document: {exc}") from exc

    def write(self, nodes: Iterable[NodeDescriptor], path: str | Path) -> Path:
        """Atomically write the document to *path*.

        Raises
        ------
        DocumentWriteError
            If the document cannot be written.  Any temporary file is
            removed and an existing document at *path* is left untouched.
        """
        path = Path(path)
        text = self.dumps(nodes)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(
                dir=path.parent, prefix=f".{path.stem}_", suffix=DOCUMENT_SUFFIX,
            )
        except OSError as exc:
            logger.error("Cannot write document %s: %s", path, exc)
            raise DocumentWriteError(f"Cannot write document {path}: {exc}") from exc

        try:
            with open(fd, "w", encoding="utf-8") as fh:
                fh.write(text)
            os.chmod(tmp, _target_mode(path))
            Path(tmp).replace(path)
        except OSError as exc:
            Path(tmp).unlink(missing_ok=True)
            logger.error("Cannot write document %s: %s", path, exc)
            raise DocumentWriteError(f"Cannot write document {path}: {exc}") from exc
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

        logger.debug("Wrote document %s (%d bytes)", path, len(text))
        return path
