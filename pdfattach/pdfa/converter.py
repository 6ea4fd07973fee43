"""Attach a file to a PDF and rebuild it as a PDF/A document.

:class:`PdfAConverter` runs every conversion through the same sequence of
stages::

    VALIDATING -> CREATING -> EMBEDDING -> MERGING -> FINALIZED

Any error moves the conversion to ``FAILED``. The target and source documents,
and any handle opened for them, are released on every exit path, and no output
file is written unless all stages succeed.

The three entry points differ only in how the source PDF and the attachment are
supplied (file paths, byte buffers or open binary streams). The path entry point
names derived output files after the source file; the other two use a
``YYYYMMDD`` date stamp because no source name is available.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Callable, Sequence

from ..config import ConverterConfig
from ..core.utils import get_logger
from .attachments import AttachmentDescriptor, embed_attachment
from .conformance import ConformanceLevel, PdfFormat, parse_format, resolve_conformance
from .content import DocumentContent
from .document import SourceDocument, TargetDocument
from .exceptions import (
    DocumentCreationError,
    InvalidArgumentError,
    PageCopyError,
    PdfAConversionError,
)
from .fonts import embed_fonts
from .merger import merge_pages
from .output_intent import build_output_intent
from .paths import PathLike, date_stamp, derive_output_path, is_pdf_file_path

LOGGER = get_logger("pdfattach.pdfa.converter")

DEFAULT_FORMAT = PdfFormat.PDF_A_3A


class ConversionStage(str, Enum):
    VALIDATING = "validating"
    CREATING = "creating"
    EMBEDDING = "embedding"
    MERGING = "merging"
    FINALIZED = "finalized"
    FAILED = "failed"


_STAGE_ERRORS: dict[ConversionStage, type[PdfAConversionError]] = {
    ConversionStage.VALIDATING: InvalidArgumentError,
    ConversionStage.CREATING: DocumentCreationError,
    ConversionStage.EMBEDDING: DocumentCreationError,
    ConversionStage.MERGING: PageCopyError,
    ConversionStage.FINALIZED: DocumentCreationError,
}


@dataclass
class ConversionRequest:
    """Everything needed for one attach-and-convert run.

    ``disambiguator`` completes directory-like output paths; when ``None`` the
    current date (``YYYYMMDD``) is used.
    """

    source: DocumentContent
    attachment: DocumentContent
    output_path: PathLike
    format: PdfFormat | str = DEFAULT_FORMAT
    fonts: Sequence[str] | None = None
    disambiguator: str | None = None


@dataclass
class ConversionResult:
    """Outcome of a successful conversion."""

    output_path: Path
    format: PdfFormat
    level: ConformanceLevel
    page_count: int
    attachment_name: str
    mime_type: str
    fonts: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        return (
            f"ConversionResult(output={self.output_path}, format={self.format.value}, "
            f"pages={self.page_count}, attachment={self.attachment_name})"
        )


class PdfAConverter:
    """Attach a file to a PDF and write it as the requested PDF/A level.

    :attr:`stage` is ``FINALIZED`` or ``FAILED`` once a conversion has run.
    """

    def __init__(
        self,
        config: ConverterConfig | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.config = config or ConverterConfig()
        self._clock = clock or datetime.now
        self.stage: ConversionStage | None = None

    # -- entry points --------------------------------------------------------

    def convert_path(
        self,
        pdf_path: PathLike,
        attachment_path: PathLike,
        output_path: PathLike,
        pdf_format: PdfFormat | str = DEFAULT_FORMAT,
        fonts: Sequence[str] | None = None,
    ) -> ConversionResult:
        """Convert the PDF at *pdf_path*, embedding the file at *attachment_path*."""

        if not pdf_path or not attachment_path or not output_path:
            raise self._reject(
                InvalidArgumentError("One or more mandatory paths is null or empty"),
                pdf_path,
                attachment_path,
                output_path,
                pdf_format,
                fonts,
            )

        request = ConversionRequest(
            source=DocumentContent.from_path(pdf_path),
            attachment=DocumentContent.from_path(attachment_path),
            output_path=output_path,
            format=pdf_format,
            fonts=fonts,
            disambiguator=Path(pdf_path).stem,
        )
        return self.convert(request)

    def convert_bytes(
        self,
        pdf: bytes | bytearray,
        attachment: bytes | bytearray,
        output_path: PathLike,
        pdf_format: PdfFormat | str = DEFAULT_FORMAT,
        fonts: Sequence[str] | None = None,
        *,
        attachment_name: str,
    ) -> ConversionResult:
        """Convert an in-memory PDF, embedding *attachment* as *attachment_name*."""

        if pdf is None or attachment is None:
            raise self._reject(
                InvalidArgumentError("pdf and attachment byte arrays must be not null!"),
                "<bytes>" if pdf is not None else None,
                attachment_name,
                output_path,
                pdf_format,
                fonts,
            )
        request = ConversionRequest(
            source=DocumentContent.from_bytes(pdf),
            attachment=DocumentContent.from_bytes(attachment, name=attachment_name),
            output_path=output_path,
            format=pdf_format,
            fonts=fonts,
        )
        return self.convert(request)

    def convert_stream(
        self,
        pdf: BinaryIO,
        attachment: BinaryIO,
        output_path: PathLike,
        pdf_format: PdfFormat | str = DEFAULT_FORMAT,
        fonts: Sequence[str] | None = None,
        *,
        attachment_name: str | None = None,
    ) -> ConversionResult:
        """Convert a PDF read from *pdf*, embedding the content of *attachment*.

        The attachment name defaults to the base name of ``attachment.name``.
        Streams are read but not closed.
        """

        if pdf is None or attachment is None:
            raise self._reject(
                InvalidArgumentError("pdf and attachment file stream must be not null!"),
                "<stream>" if pdf is not None else None,
                attachment_name,
                output_path,
                pdf_format,
                fonts,
            )
        request = ConversionRequest(
            source=DocumentContent.from_stream(pdf),
            attachment=DocumentContent.from_stream(attachment, name=attachment_name),
            output_path=output_path,
            format=pdf_format,
            fonts=fonts,
        )
        return self.convert(request)

    # -- pipeline ------------------------------------------------------------

    def convert(self, request: ConversionRequest) -> ConversionResult:
        """Run *request* through every stage and return the result."""

        stage = ConversionStage.VALIDATING
        target: TargetDocument | None = None
        source: SourceDocument | None = None
        output_path: Path | None = None

        try:
            LOGGER.info("Checking parameters validity...")
            pdf_format, output_path = self._validate(request)
            descriptor = self._load_attachment(request.attachment)

            stage = ConversionStage.CREATING
            LOGGER.info("Creating pdf document in %s format...", pdf_format.value)
            level = resolve_conformance(pdf_format)
            target = self._create_target(level)

            stage = ConversionStage.EMBEDDING
            LOGGER.info("Adding attachment %s...", descriptor.name)
            embed_attachment(target, descriptor)
            fonts = embed_fonts(target, request.fonts, self.config.resources.fonts_dir)

            stage = ConversionStage.MERGING
            LOGGER.info(
                "Saving converted pdf in %s from original pdf %s...",
                output_path,
                request.source.describe(),
            )
            source = SourceDocument.open(request.source)
            page_count = merge_pages(source, target)

            stage = ConversionStage.FINALIZED
            target.save(output_path)
        except Exception as exc:
            error = self._as_conversion_error(exc, stage)
            self._record_failure(
                error,
                stage,
                request.source.describe(),
                request.attachment.describe(),
                output_path or request.output_path,
                request.format,
                request.fonts,
            )
            if error is exc:
                raise
            raise error from exc
        finally:
            if target is not None:
                target.close()
            if source is not None:
                source.close()

        self.stage = ConversionStage.FINALIZED
        LOGGER.info("Converted %s into %s (%s)", request.source.describe(), output_path, level.label)
        return ConversionResult(
            output_path=output_path,
            format=pdf_format,
            level=level,
            page_count=page_count,
            attachment_name=descriptor.name,
            mime_type=descriptor.mime_type or "",
            fonts=fonts,
        )

    def _validate(self, request: ConversionRequest) -> tuple[PdfFormat, Path]:
        if request.output_path is None or not str(request.output_path).strip():
            raise InvalidArgumentError("Converted pdf path is null or empty")

        source = request.source
        if source.path is not None:
            if not is_pdf_file_path(source.path):
                raise InvalidArgumentError(f"pdf_path = {source.path} must be a pdf file path!")
            if not source.path.is_file():
                raise InvalidArgumentError(f"Source pdf file not found: {source.path}")
        elif source.data is not None and not source.data:
            raise InvalidArgumentError("Source pdf byte array is empty")

        attachment = request.attachment
        if attachment.path is not None and not attachment.path.is_file():
            raise InvalidArgumentError(f"Attachment file not found: {attachment.path}")
        if not attachment.name or not attachment.name.strip():
            raise InvalidArgumentError("attachment name is null or empty")
        if not Path(attachment.name.strip()).suffix:
            raise InvalidArgumentError("attachment name with extension is not a file name!")

        pdf_format = parse_format(request.format)
        disambiguator = request.disambiguator or date_stamp(self._clock())
        output_path = derive_output_path(request.output_path, disambiguator, pdf_format)
        return pdf_format, output_path

    @staticmethod
    def _load_attachment(content: DocumentContent) -> AttachmentDescriptor:
        try:
            if content.path is not None:
                return AttachmentDescriptor.from_path(content.path)
            return AttachmentDescriptor.from_bytes(content.read_bytes(), content.name or "")
        except OSError as exc:
            raise InvalidArgumentError(f"Unable to read attachment: {content.describe()}") from exc

    def _create_target(self, level: ConformanceLevel) -> TargetDocument:
        intent = build_output_intent(level, self.config.resources.icc_profile)
        return TargetDocument(
            level,
            intent,
            title=f"{self.config.title_prefix} {level.token}",
            language=self.config.language,
            producer=self.config.producer,
        )

    def _record_failure(
        self,
        error: PdfAConversionError,
        stage: ConversionStage,
        source: object,
        attachment: object,
        output_path: object,
        pdf_format: object,
        fonts: Sequence[str] | None,
    ) -> None:
        error.stage = stage.value
        self.stage = ConversionStage.FAILED
        LOGGER.error(
            "ERROR: convert --- source = %s, attachment = %s, output = %s, format = %s, "
            "fonts %s, stage = %s, exception = %s",
            source,
            attachment,
            output_path,
            pdf_format,
            "is null" if fonts is None else "is not null",
            stage.value,
            error.message,
        )

    def _reject(
        self,
        error: PdfAConversionError,
        source: object,
        attachment: object,
        output_path: object,
        pdf_format: object,
        fonts: Sequence[str] | None,
    ) -> PdfAConversionError:
        """Fail a conversion whose arguments are rejected before a request exists."""

        self._record_failure(
            error, ConversionStage.VALIDATING, source, attachment, output_path, pdf_format, fonts
        )
        return error

    @staticmethod
    def _as_conversion_error(exc: Exception, stage: ConversionStage) -> PdfAConversionError:
        if isinstance(exc, PdfAConversionError):
            return exc
        error_class = _STAGE_ERRORS.get(stage, DocumentCreationError)
        return error_class(f"{type(exc).__name__}: {exc}")


def attach_and_convert(
    pdf_path: PathLike,
    attachment_path: PathLike,
    output_path: PathLike,
    pdf_format: PdfFormat | str = DEFAULT_FORMAT,
    fonts: Sequence[str] | None = None,
    *,
    config: ConverterConfig | None = None,
) -> ConversionResult:
    """Convenience wrapper around :meth:`PdfAConverter.convert_path`."""

    return PdfAConverter(config).convert_path(pdf_path, attachment_path, output_path, pdf_format, fonts)


__all__ = [
    "DEFAULT_FORMAT",
    "ConversionStage",
    "ConversionRequest",
    "ConversionResult",
    "PdfAConverter",
    "attach_and_convert",
]
