"""Runtime configuration for the attach-and-convert pipeline.

The ICC profile and the fonts directory ship inside the package under
``resources/``. Both locations can be overridden per converter instance, or
process-wide through the ``PDFATTACH_ICC_PROFILE`` and ``PDFATTACH_FONTS_DIR``
environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

RESOURCES_DIR = Path(__file__).resolve().parent / "resources"
DEFAULT_ICC_PROFILE = RESOURCES_DIR / "sRGB_CS_profile.icm"
DEFAULT_FONTS_DIR = RESOURCES_DIR / "fonts"

ICC_PROFILE_ENV = "PDFATTACH_ICC_PROFILE"
FONTS_DIR_ENV = "PDFATTACH_FONTS_DIR"


@dataclass(frozen=True)
class ResourceLocator:
    """Locations of the fixed, read-only resources used by a conversion."""

    icc_profile: Path = DEFAULT_ICC_PROFILE
    fonts_dir: Path = DEFAULT_FONTS_DIR

    def __post_init__(self) -> None:
        object.__setattr__(self, "icc_profile", Path(self.icc_profile).expanduser())
        object.__setattr__(self, "fonts_dir", Path(self.fonts_dir).expanduser())

    @classmethod
    def from_environment(cls, environ: Mapping[str, str] | None = None) -> "ResourceLocator":
        env = os.environ if environ is None else environ
        return cls(
            icc_profile=Path(env.get(ICC_PROFILE_ENV) or DEFAULT_ICC_PROFILE),
            fonts_dir=Path(env.get(FONTS_DIR_ENV) or DEFAULT_FONTS_DIR),
        )


@dataclass(frozen=True)
class ConverterConfig:
    """Settings applied to every document produced by a converter."""

    resources: ResourceLocator = field(default_factory=ResourceLocator.from_environment)
    language: str = "it-IT"
    title_prefix: str = "Tesi"
    producer: str = "pdfattach"


__all__ = [
    "RESOURCES_DIR",
    "DEFAULT_ICC_PROFILE",
    "DEFAULT_FONTS_DIR",
    "ICC_PROFILE_ENV",
    "FONTS_DIR_ENV",
    "ResourceLocator",
    "ConverterConfig",
]
