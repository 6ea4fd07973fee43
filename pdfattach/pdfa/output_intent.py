"""Output intent (ICC colour characterisation) for PDF/A documents."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pypdf import PdfWriter
from pypdf.generic import (
    ArrayObject,
    DecodedStreamObject,
    DictionaryObject,
    IndirectObject,
    NameObject,
    NumberObject,
    TextStringObject,
)

from ..core.utils import get_logger
from .conformance import ConformanceLevel
from .exceptions import MissingColorProfileError

LOGGER = get_logger("pdfattach.pdfa.output_intent")

OUTPUT_INTENT_IDENTIFIER = "Custom"
OUTPUT_INTENT_INFO = "sRGB IEC61966-2.1"

_ICC_COLOR_SPACES = {
    b"RGB ": (3, "/DeviceRGB"),
    b"GRAY": (1, "/DeviceGray"),
    b"CMYK": (4, "/DeviceCMYK"),
}


@dataclass(frozen=True)
class OutputIntentSpec:
    """Declaration of the intended output colour characterisation."""

    profile: bytes
    identifier: str = OUTPUT_INTENT_IDENTIFIER
    registry: str = ""
    condition: str = ""
    info: str = OUTPUT_INTENT_INFO

    @property
    def color_space(self) -> bytes:
        return self.profile[16:20]

    @property
    def components(self) -> int:
        return _ICC_COLOR_SPACES.get(self.color_space, (3, "/DeviceRGB"))[0]

    @property
    def alternate(self) -> str:
        return _ICC_COLOR_SPACES.get(self.color_space, (3, "/DeviceRGB"))[1]


def load_color_profile(path: Path) -> bytes:
    """Read the ICC profile at *path* and check it carries an ICC signature."""

    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise MissingColorProfileError(f"Unable to open ICC profile: {path}") from exc
    if len(data) < 128 or data[36:40] != b"acsp":
        raise MissingColorProfileError(f"File is not an ICC profile: {path}")
    return data


def build_output_intent(level: ConformanceLevel, profile_path: Path) -> OutputIntentSpec | None:
    """Return the output intent for *level*, or ``None`` for plain PDF output."""

    if not level.requires_output_intent:
        LOGGER.debug("No output intent required for %s", level.label)
        return None
    profile = load_color_profile(profile_path)
    LOGGER.debug("Loaded %d byte ICC profile from %s", len(profile), profile_path)
    return OutputIntentSpec(profile=profile)


def apply_output_intent(writer: PdfWriter, spec: OutputIntentSpec) -> IndirectObject:
    """Write *spec* into the catalog ``/OutputIntents`` of *writer*."""

    profile_stream = DecodedStreamObject()
    profile_stream.set_data(spec.profile)
    profile_stream[NameObject("/N")] = NumberObject(spec.components)
    profile_stream[NameObject("/Alternate")] = NameObject(spec.alternate)
    profile_ref = writer._add_object(profile_stream)

    intent = DictionaryObject(
        {
            NameObject("/Type"): NameObject("/OutputIntent"),
            NameObject("/S"): NameObject("/GTS_PDFA1"),
            NameObject("/OutputConditionIdentifier"): TextStringObject(spec.identifier),
            NameObject("/OutputCondition"): TextStringObject(spec.condition),
            NameObject("/RegistryName"): TextStringObject(spec.registry),
            NameObject("/Info"): TextStringObject(spec.info),
            NameObject("/DestOutputProfile"): profile_ref,
        }
    )
    intent_ref = writer._add_object(intent)
    writer._root_object[NameObject("/OutputIntents")] = ArrayObject([intent_ref])
    return intent_ref


__all__ = [
    "OUTPUT_INTENT_IDENTIFIER",
    "OUTPUT_INTENT_INFO",
    "OutputIntentSpec",
    "load_color_profile",
    "build_output_intent",
    "apply_output_intent",
]
