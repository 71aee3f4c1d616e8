"""Global configuration: paths, constants, export settings."""

from __future__ import annotations

import enum
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

# Default output location and document base name
DEFAULT_EXPORT_PATH = Path.home() / "Documents"
DEFAULT_EXPORT_FILENAME = "GameMap"
DOCUMENT_SUFFIX = ".json"

# Sub-folder (beneath the export path) receiving per-renderer texture folders
TEXTURES_DIR = "Textures"
TEXTURE_SUFFIX = ".png"

# Document layout emitted by this package: string ids, nested Transform
# holding the Parent reference.
LAYOUT_VERSION = 2
LAYOUT_NAME = "nested"

# Texture slots probed on every material: (field, primary, fallback).
# MainTexture's primary source is the material's main texture binding.
TEXTURE_SLOTS: tuple[tuple[str, str, str], ...] = (
    ("main_texture", "", "_MainTex"),
    ("normal_map", "_NormalMap", "_BumpMap"),
    ("emission_map", "_EmissionMap", "_EmissiveMap"),
    ("metallic_map", "_MetallicGlossMap", "_MetallicRoughnessMap"),
    ("ao_map", "_OcclusionMap", "_AOMap"),
)

EMISSION_COLOR_PROPERTY = "_EmissionColor"
CUTOFF_PROPERTY = "_Cutoff"

ENV_PREFIX = "SCENEDOC_"

_TRUTHY = {"1", "true", "yes", "on"}


class Formatting(str, enum.Enum):
    """Document text layout.  Has no effect on semantic content."""

    COMPACT = "compact"
    INDENTED = "indented"


class ExportSettings(BaseModel):
    """Settings for one "export now" invocation."""

    export_path: Path = Field(default_factory=lambda: DEFAULT_EXPORT_PATH)
    export_filename: str = DEFAULT_EXPORT_FILENAME
    export_mesh_data: bool = True
    export_textures: bool = False
    formatting: Formatting = Formatting.INDENTED
    log_enabled: bool = True
    log_level: str = "INFO"

    @property
    def document_path(self) -> Path:
        return Path(self.export_path) / f"{self.export_filename}{DOCUMENT_SUFFIX}"

    @property
    def textures_path(self) -> Path:
        return Path(self.export_path) / TEXTURES_DIR

    @classmethod
    def from_env(cls, **overrides: Any) -> ExportSettings:
        """Build settings from ``SCENEDOC_*`` environment variables.

        Explicit keyword *overrides* take precedence over the environment,
        which takes precedence over the defaults.
        """
        values: dict[str, Any] = {}
        for name, field_info in cls.model_fields.items():
            raw = os.environ.get(f"{ENV_PREFIX}{name.upper()}")
            if raw is None:
                continue
            if field_info.annotation is bool:
                values[name] = raw.strip().lower() in _TRUTHY
            else:
                values[name] = raw.strip()
        values.update(overrides)
        return cls(**values)


def configure_logging(settings: ExportSettings) -> None:
    """Apply *settings.log_level* to the package logger."""
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.getLogger("scenedoc").setLevel(level)
