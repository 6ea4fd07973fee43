"""Custom exceptions for the :mod:`pdfattach.pdfa` package.

Every failure aborts the current conversion. Callers branch on the exception
class (or its :attr:`~PdfAConversionError.kind`) rather than on message text.
"""

from __future__ import annotations


class PdfAConversionError(Exception):
    """Base exception for all attach-and-convert errors."""

    kind = "ConversionError"

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        self.stage: str | None = None

    @property
    def default_message(self) -> str:
        return "PDF/A conversion failed."


class InvalidArgumentError(PdfAConversionError, ValueError):
    """Raised when a required input is missing, empty or malformed."""

    kind = "InvalidArgument"

    @property
    def default_message(self) -> str:
        return "Invalid or missing argument."


class UnknownFormatError(PdfAConversionError):
    """Raised when a requested format token is not a known conformance level."""

    kind = "UnknownFormat"

    @property
    def default_message(self) -> str:
        return "Unknown PDF format."


class UnsupportedAttachmentTypeError(PdfAConversionError):
    """Raised when the attachment extension has no known MIME type."""

    kind = "UnsupportedAttachmentType"

    @property
    def default_message(self) -> str:
        return "Attachment file type is not supported."


class MissingColorProfileError(PdfAConversionError):
    """Raised when the ICC colour profile for the output intent cannot be read."""

    kind = "MissingColorProfile"

    @property
    def default_message(self) -> str:
        return "ICC colour profile is missing or unreadable."


class DocumentCreationError(PdfAConversionError):
    """Raised when the target document cannot be created or written."""

    kind = "DocumentCreationError"

    @property
    def default_message(self) -> str:
        return "Unable to create the target PDF document."


class FontNotFoundError(PdfAConversionError):
    """Raised when a requested font file does not exist."""

    kind = "FontNotFound"

    @property
    def default_message(self) -> str:
        return "Font file not found."


class FontLoadError(PdfAConversionError):
    """Raised when a font file exists but cannot be parsed or embedded."""

    kind = "FontLoadError"

    @property
    def default_message(self) -> str:
        return "Font file could not be loaded."


class PageCopyError(PdfAConversionError):
    """Raised when source pages cannot be copied into the target document."""

    kind = "PageCopyError"

    @property
    def default_message(self) -> str:
        return "Unable to copy pages from the source PDF."


__all__ = [
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
