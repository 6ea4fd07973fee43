"""Mapping between requested output formats and PDF/A conformance levels."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from .exceptions import UnknownFormatError


class PdfFormat(str, Enum):
    """Output formats accepted by the converter."""

    PDF_A_1A = "PDF_A_1A"
    PDF_A_1B = "PDF_A_1B"
    PDF_A_2A = "PDF_A_2A"
    PDF_A_2B = "PDF_A_2B"
    PDF_A_2U = "PDF_A_2U"
    PDF_A_3A = "PDF_A_3A"
    PDF_A_3B = "PDF_A_3B"
    PDF_A_3U = "PDF_A_3U"
    PDF = "PDF"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ConformanceLevel:
    """Structural rule-set a target document has to satisfy.

    ``part`` and ``conformance`` are ``None`` for the plain PDF passthrough,
    which carries no archival constraint.
    """

    token: str
    part: int | None
    conformance: str | None
    pdf_version: str

    @property
    def archival(self) -> bool:
        return self.part is not None

    @property
    def requires_output_intent(self) -> bool:
        return self.archival

    @property
    def requires_structure(self) -> bool:
        """Level A documents must carry a logical structure tree."""

        return self.conformance == "A"

    @property
    def label(self) -> str:
        if not self.archival:
            return "PDF"
        return f"PDF/A-{self.part}{self.conformance}"


def _level(token: str, part: int | None, conformance: str | None) -> ConformanceLevel:
    version = "1.4" if part == 1 else "1.7"
    return ConformanceLevel(token=token, part=part, conformance=conformance, pdf_version=version)


CONFORMANCE_LEVELS: Mapping[PdfFormat, ConformanceLevel] = MappingProxyType(
    {
        PdfFormat.PDF_A_1A: _level("PDF_A_1A", 1, "A"),
        PdfFormat.PDF_A_1B: _level("PDF_A_1B", 1, "B"),
        PdfFormat.PDF_A_2A: _level("PDF_A_2A", 2, "A"),
        PdfFormat.PDF_A_2B: _level("PDF_A_2B", 2, "B"),
        PdfFormat.PDF_A_2U: _level("PDF_A_2U", 2, "U"),
        PdfFormat.PDF_A_3A: _level("PDF_A_3A", 3, "A"),
        PdfFormat.PDF_A_3B: _level("PDF_A_3B", 3, "B"),
        PdfFormat.PDF_A_3U: _level("PDF_A_3U", 3, "U"),
        PdfFormat.PDF: _level("PDF", None, None),
    }
)


def parse_format(value: PdfFormat | str) -> PdfFormat:
    """Return the :class:`PdfFormat` matching *value*.

    Strings are matched case-insensitively and ``-``/space separators are
    accepted in place of underscores (``"pdf-a-3b"`` → ``PDF_A_3B``).
    """

    if isinstance(value, PdfFormat):
        return value
    if not isinstance(value, str) or not value.strip():
        raise UnknownFormatError(f"Unknown PDF format: {value!r}")
    token = value.strip().upper().replace("-", "_").replace(" ", "_").replace("/", "_")
    try:
        return PdfFormat(token)
    except ValueError as exc:
        raise UnknownFormatError(f"Unknown PDF format: {value!r}") from exc


def resolve_conformance(value: PdfFormat | str) -> ConformanceLevel:
    """Return the :class:`ConformanceLevel` for the requested format."""

    pdf_format = parse_format(value)
    try:
        return CONFORMANCE_LEVELS[pdf_format]
    except KeyError as exc:  # pragma: no cover - table covers the enum
        raise UnknownFormatError(f"Unknown PDF format: {value!r}") from exc


__all__ = [
    "PdfFormat",
    "ConformanceLevel",
    "CONFORMANCE_LEVELS",
    "parse_format",
    "resolve_conformance",
]
