"""PDF/A attach-and-convert utilities for the :mod:`pdfattach` toolkit."""

from __future__ import annotations

from .attachments import AttachmentDescriptor, embed_attachment
from .conformance import CONFORMANCE_LEVELS, ConformanceLevel, PdfFormat, parse_format, resolve_conformance
from .content import DocumentContent
from .converter import (
    DEFAULT_FORMAT,
    ConversionRequest,
    ConversionResult,
    ConversionStage,
    PdfAConverter,
    attach_and_convert,
)
from .document import SourceDocument, TargetDocument
from .exceptions import (
    DocumentCreationError,
    FontLoadError,
    FontNotFoundError,
    InvalidArgumentError,
    MissingColorProfileError,
    PageCopyError,
    PdfAConversionError,
    UnknownFormatError,
    UnsupportedAttachmentTypeError,
)
from .fonts import embed_fonts
from .merger import merge_pages
from .mime import MIME_TYPES, resolve_mime_type
from .output_intent import OutputIntentSpec, build_output_intent
from .paths import date_stamp, derive_output_path, is_file_path

__all__ = [
    "attach_and_convert",
    "PdfAConverter",
    "ConversionRequest",
    "ConversionResult",
    "ConversionStage",
    "DEFAULT_FORMAT",
    "DocumentContent",
    "PdfFormat",
    "ConformanceLevel",
    "CONFORMANCE_LEVELS",
    "parse_format",
    "resolve_conformance",
    "OutputIntentSpec",
    "build_output_intent",
    "AttachmentDescriptor",
    "embed_attachment",
    "embed_fonts",
    "merge_pages",
    "SourceDocument",
    "TargetDocument",
    "MIME_TYPES",
    "resolve_mime_type",
    "is_file_path",
    "derive_output_path",
    "date_stamp",
    "PdfAConversionError",
    "InvalidArgumentError",
    "UnknownFormatError",
    "UnsupportedAttachmentTypeError",
    "MissingColorProfileError",
    "DocumentCreationError",
    "FontNotFoundError",
    "FontLoadError",
    "PageCopyError",
]
