"""Source and target document wrappers around :mod:`pypdf`.

:class:`TargetDocument` owns the in-progress PDF/A output. It is created with
its conformance level and output intent, receives the attachment, fonts and
pages, and is written once by :meth:`TargetDocument.save`. :class:`SourceDocument`
is a read-only view over the original PDF.
"""

from __future__ import annotations

import hashlib
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import BinaryIO
from xml.sax.saxutils import escape

from pypdf import PdfReader, PdfWriter
from pypdf.generic import (
    ArrayObject,
    BooleanObject,
    ByteStringObject,
    DecodedStreamObject,
    DictionaryObject,
    IndirectObject,
    NameObject,
    NumberObject,
    PdfObject,
    TextStringObject,
)

from ..core.utils import get_logger
from .conformance import ConformanceLevel
from .content import DocumentContent
from .exceptions import DocumentCreationError, PageCopyError
from .output_intent import OutputIntentSpec, apply_output_intent

LOGGER = get_logger("pdfattach.pdfa.document")


def pdf_date(moment: datetime) -> str:
    """Format *moment* as a PDF date string (``D:YYYYMMDDHHmmSS+HH'mm'``)."""

    stamp = moment.strftime("D:%Y%m%d%H%M%S")
    offset = moment.utcoffset()
    if offset is None:
        return stamp
    minutes = int(offset.total_seconds() // 60)
    sign = "+" if minutes >= 0 else "-"
    minutes = abs(minutes)
    return f"{stamp}{sign}{minutes // 60:02d}'{minutes % 60:02d}'"


def xmp_date(moment: datetime) -> str:
    return moment.isoformat(timespec="seconds")


def build_xmp_metadata(
    level: ConformanceLevel,
    *,
    title: str,
    language: str,
    producer: str,
    created: datetime,
) -> bytes:
    """Return the XMP packet describing the document and its PDF/A claim."""

    identification = ""
    if level.archival:
        identification = (
            "  <rdf:Description rdf:about=\"\" xmlns:pdfaid=\"http://www.aiim.org/pdfa/ns/id/\">\n"
            f"   <pdfaid:part>{level.part}</pdfaid:part>\n"
            f"   <pdfaid:conformance>{level.conformance}</pdfaid:conformance>\n"
            "  </rdf:Description>\n"
        )
    timestamp = xmp_date(created)
    packet = (
        "<?xpacket begin=\"\ufeff\" id=\"W5M0MpCehiHzreSzNTczkc9d\"?>\n"
        "<x:xmpmeta xmlns:x=\"adobe:ns:meta/\">\n"
        " <rdf:RDF xmlns:rdf=\"http://www.w3.org/1999/02/22-rdf-syntax-ns#\">\n"
        f"{identification}"
        "  <rdf:Description rdf:about=\"\" xmlns:dc=\"http://purl.org/dc/elements/1.1/\">\n"
        "   <dc:format>application/pdf</dc:format>\n"
        f"   <dc:title><rdf:Alt><rdf:li xml:lang=\"x-default\">{escape(title)}</rdf:li></rdf:Alt></dc:title>\n"
        f"   <dc:language><rdf:Bag><rdf:li>{escape(language)}</rdf:li></rdf:Bag></dc:language>\n"
        "  </rdf:Description>\n"
        "  <rdf:Description rdf:about=\"\" xmlns:xmp=\"http://ns.adobe.com/xap/1.0/\">\n"
        f"   <xmp:CreateDate>{timestamp}</xmp:CreateDate>\n"
        f"   <xmp:ModifyDate>{timestamp}</xmp:ModifyDate>\n"
        f"   <xmp:MetadataDate>{timestamp}</xmp:MetadataDate>\n"
        "  </rdf:Description>\n"
        "  <rdf:Description rdf:about=\"\" xmlns:pdf=\"http://ns.adobe.com/pdf/1.3/\">\n"
        f"   <pdf:Producer>{escape(producer)}</pdf:Producer>\n"
        "  </rdf:Description>\n"
        " </rdf:RDF>\n"
        "</x:xmpmeta>\n"
        "<?xpacket end=\"w\"?>"
    )
    return packet.encode("utf-8")


class TargetDocument:
    """The PDF document being assembled for one conversion."""

    def __init__(
        self,
        level: ConformanceLevel,
        output_intent: OutputIntentSpec | None,
        *,
        title: str,
        language: str,
        producer: str,
        created: datetime | None = None,
    ) -> None:
        if level.requires_output_intent and output_intent is None:
            raise DocumentCreationError(f"{level.label} requires an output intent")

        self.level = level
        self.title = title
        self.language = language
        self.producer = producer
        self.created = created or datetime.now(timezone.utc).replace(microsecond=0)
        self.fonts: dict[str, IndirectObject] = {}
        self.attachments: dict[str, IndirectObject] = {}
        self._closed = False
        self.writer = PdfWriter()

        self._header = f"%PDF-{level.pdf_version}".encode("ascii")
        self.writer.pdf_header = self._header
        if output_intent is not None:
            apply_output_intent(self.writer, output_intent)
        self._mark_tagged()
        self._set_catalog_preferences()
        self._set_document_info()
        self._set_file_identifier()

    # -- document shell ------------------------------------------------------

    @property
    def catalog(self) -> DictionaryObject:
        return self.writer._root_object

    @property
    def page_count(self) -> int:
        return len(self.writer.pages)

    @property
    def closed(self) -> bool:
        return self._closed

    def add_object(self, obj: PdfObject) -> IndirectObject:
        return self.writer._add_object(obj)

    def _mark_tagged(self) -> None:
        catalog = self.catalog
        catalog[NameObject("/MarkInfo")] = DictionaryObject(
            {NameObject("/Marked"): BooleanObject(True)}
        )
        struct_root = DictionaryObject({NameObject("/Type"): NameObject("/StructTreeRoot")})
        struct_root_ref = self.add_object(struct_root)
        document_element = DictionaryObject(
            {
                NameObject("/Type"): NameObject("/StructElem"),
                NameObject("/S"): NameObject("/Document"),
                NameObject("/P"): struct_root_ref,
                NameObject("/Lang"): TextStringObject(self.language),
                NameObject("/K"): ArrayObject(),
            }
        )
        struct_root[NameObject("/K")] = self.add_object(document_element)
        if self.level.requires_structure:
            struct_root[NameObject("/ParentTree")] = self.add_object(
                DictionaryObject({NameObject("/Nums"): ArrayObject()})
            )
            struct_root[NameObject("/ParentTreeNextKey")] = NumberObject(0)
        catalog[NameObject("/StructTreeRoot")] = struct_root_ref

    def _set_catalog_preferences(self) -> None:
        catalog = self.catalog
        catalog[NameObject("/Lang")] = TextStringObject(self.language)
        catalog[NameObject("/ViewerPreferences")] = DictionaryObject(
            {NameObject("/DisplayDocTitle"): BooleanObject(True)}
        )

    def _set_document_info(self) -> None:
        stamp = pdf_date(self.created)
        self.writer.add_metadata(
            {
                "/Title": self.title,
                "/Producer": self.producer,
                "/CreationDate": stamp,
                "/ModDate": stamp,
            }
        )
        metadata = DecodedStreamObject()
        metadata.set_data(
            build_xmp_metadata(
                self.level,
                title=self.title,
                language=self.language,
                producer=self.producer,
                created=self.created,
            )
        )
        metadata[NameObject("/Type")] = NameObject("/Metadata")
        metadata[NameObject("/Subtype")] = NameObject("/XML")
        self.catalog[NameObject("/Metadata")] = self.add_object(metadata)

    def _set_file_identifier(self) -> None:
        seed = f"{self.title}|{self.created.isoformat()}|{id(self)}".encode("utf-8")
        identifier = ByteStringObject(hashlib.md5(seed).digest())
        self.writer._ID = ArrayObject([identifier, ByteStringObject(bytes(identifier))])

    # -- registrations -------------------------------------------------------

    def register_font(self, resource_name: str, font_ref: IndirectObject) -> None:
        if not resource_name.startswith("/"):
            resource_name = f"/{resource_name}"
        self.fonts[resource_name] = font_ref

    def _install_fonts(self) -> None:
        if not self.fonts:
            return
        for page in self.writer.pages:
            resources = page.get("/Resources")
            resources = resources.get_object() if resources is not None else None
            if not isinstance(resources, DictionaryObject):
                resources = DictionaryObject()
                page[NameObject("/Resources")] = resources
            font_dict = resources.get("/Font")
            font_dict = font_dict.get_object() if font_dict is not None else None
            if not isinstance(font_dict, DictionaryObject):
                font_dict = DictionaryObject()
                resources[NameObject("/Font")] = font_dict
            for name, ref in self.fonts.items():
                if name not in font_dict:
                    font_dict[NameObject(name)] = ref

    # -- finalisation --------------------------------------------------------

    def save(self, output_path: Path) -> Path:
        """Write the document to *output_path* atomically.

        The content is written to a temporary file in the destination directory
        and renamed into place, so a failed write never leaves a truncated PDF
        at *output_path*.
        """

        if self._closed:
            raise DocumentCreationError("Target document is already closed")
        if self.level.requires_output_intent and "/OutputIntents" not in self.catalog:
            raise DocumentCreationError(f"{self.level.label} document has no output intent")

        self._install_fonts()
        # pypdf raises the header to the highest version among copied pages
        self.writer.pdf_header = self._header
        destination = Path(output_path)
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DocumentCreationError(f"Unable to create output directory for {destination}") from exc

        handle = tempfile.NamedTemporaryFile(
            dir=destination.parent, prefix=f".{destination.stem}.", suffix=".tmp", delete=False
        )
        temp_path = Path(handle.name)
        try:
            with handle:
                self.writer.write(handle)
            os.replace(temp_path, destination)
        except Exception as exc:
            LOGGER.error("Failed to write PDF to %s: %s", destination, exc)
            temp_path.unlink(missing_ok=True)
            raise DocumentCreationError(f"Unable to write PDF to {destination}") from exc

        LOGGER.debug("Wrote %s with %d page(s) to %s", self.level.label, self.page_count, destination)
        return destination

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.fonts.clear()
        self.attachments.clear()


class SourceDocument:
    """Read-only view over the original PDF."""

    def __init__(self, handle: BinaryIO, *, name: str, owns_handle: bool) -> None:
        self.name = name
        self._handle = handle
        self._owns_handle = owns_handle
        self._closed = False
        try:
            self.reader = PdfReader(handle)
        except Exception as exc:
            self.close()
            raise PageCopyError(f"Unable to read source PDF: {name}") from exc

        if self.reader.is_encrypted:
            LOGGER.debug("Attempting to decrypt encrypted PDF %s", name)
            try:
                self.reader.decrypt("")
            except Exception as exc:  # pragma: no cover - decrypt errors vary
                self.close()
                raise PageCopyError(f"Unable to decrypt encrypted PDF: {name}") from exc

    @classmethod
    def open(cls, content: DocumentContent) -> "SourceDocument":
        try:
            handle, owns = content.open()
        except OSError as exc:
            raise PageCopyError(f"Unable to open source PDF: {content.describe()}") from exc
        return cls(handle, name=content.describe(), owns_handle=owns)

    @property
    def page_count(self) -> int:
        return len(self.reader.pages)

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owns_handle:
            self._handle.close()

    def __enter__(self) -> "SourceDocument":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


__all__ = [
    "TargetDocument",
    "SourceDocument",
    "build_xmp_metadata",
    "pdf_date",
    "xmp_date",
]
