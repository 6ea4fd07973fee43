"""Embedded file declarations for PDF/A documents.

An attachment is written as an ``/EmbeddedFile`` stream wrapped in a
``/Filespec`` dictionary. The file specification is registered in the
``/Names /EmbeddedFiles`` name tree and referenced from the catalog ``/AF``
array with ``/AFRelationship /Data``. PDF/A-3 validators reject embedded files
that are not disclosed through ``/AF``.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from pypdf.generic import (
    ArrayObject,
    ByteStringObject,
    DecodedStreamObject,
    DictionaryObject,
    IndirectObject,
    NameObject,
    NumberObject,
    TextStringObject,
)

from ..core.utils import get_logger
from .document import TargetDocument, pdf_date
from .exceptions import InvalidArgumentError
from .mime import resolve_mime_type

LOGGER = get_logger("pdfattach.pdfa.attachments")

ATTACHMENT_KEY = "ATTACHMENT"
ATTACHMENT_DESCRIPTION = "ATTACHMENT"
DATA_RELATIONSHIP = "Data"


@dataclass
class AttachmentDescriptor:
    """Binary content and naming of a file to embed."""

    content: bytes
    name: str
    mime_type: str | None = None
    relationship: str = DATA_RELATIONSHIP
    modified: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc).replace(microsecond=0)
    )

    @classmethod
    def from_path(cls, path: str | Path) -> "AttachmentDescriptor":
        file_path = Path(path).expanduser()
        if not file_path.is_file():
            raise InvalidArgumentError(f"Attachment file not found: {file_path}")
        modified = datetime.fromtimestamp(file_path.stat().st_mtime, tz=timezone.utc)
        return cls(
            content=file_path.read_bytes(),
            name=file_path.name,
            modified=modified.replace(microsecond=0),
        )

    @classmethod
    def from_bytes(cls, content: bytes | bytearray, name: str) -> "AttachmentDescriptor":
        return cls(content=bytes(content), name=name)


def _name_tree_insert(names: ArrayObject, key: str, value: IndirectObject) -> None:
    """Insert *key* into a flat name tree ``/Names`` array, keeping it sorted."""

    for index in range(0, len(names), 2):
        existing = str(names[index])
        if existing == key:
            names[index + 1] = value
            return
        if existing > key:
            names.insert(index, value)
            names.insert(index, TextStringObject(key))
            return
    names.append(TextStringObject(key))
    names.append(value)


def _register_embedded_file(target: TargetDocument, key: str, filespec_ref: IndirectObject) -> None:
    catalog = target.catalog
    names = catalog.get("/Names")
    names = names.get_object() if names is not None else None
    if not isinstance(names, DictionaryObject):
        names = DictionaryObject()
        catalog[NameObject("/Names")] = target.add_object(names)

    embedded = names.get("/EmbeddedFiles")
    embedded = embedded.get_object() if embedded is not None else None
    if not isinstance(embedded, DictionaryObject):
        embedded = DictionaryObject({NameObject("/Names"): ArrayObject()})
        names[NameObject("/EmbeddedFiles")] = target.add_object(embedded)

    tree = embedded.get("/Names")
    tree = tree.get_object() if tree is not None else None
    if not isinstance(tree, ArrayObject):
        tree = ArrayObject()
        embedded[NameObject("/Names")] = tree
    _name_tree_insert(tree, key, filespec_ref)


def embed_attachment(
    target: TargetDocument,
    descriptor: AttachmentDescriptor,
    *,
    key: str = ATTACHMENT_KEY,
) -> IndirectObject:
    """Embed *descriptor* into *target* and link it from the catalog ``/AF``.

    Returns the indirect reference to the file specification dictionary.

    Raises:
        InvalidArgumentError: If the attachment content or name is empty.
        UnsupportedAttachmentTypeError: If the name has no known MIME type.
    """

    if not descriptor.content:
        raise InvalidArgumentError("Attachment content must not be empty")
    if not descriptor.name or not descriptor.name.strip():
        raise InvalidArgumentError("Attachment name must not be empty")

    mime_type = descriptor.mime_type or resolve_mime_type(descriptor.name)
    descriptor.mime_type = mime_type

    if target.level.archival and target.level.part in (1, 2):
        LOGGER.warning(
            "%s restricts embedded files; %s is embedded as declared data anyway",
            target.level.label,
            descriptor.name,
        )

    params = DictionaryObject(
        {
            NameObject("/ModDate"): TextStringObject(pdf_date(descriptor.modified)),
            NameObject("/Size"): NumberObject(len(descriptor.content)),
            NameObject("/CheckSum"): ByteStringObject(hashlib.md5(descriptor.content).digest()),
        }
    )
    file_stream = DecodedStreamObject()
    file_stream.set_data(descriptor.content)
    file_stream[NameObject("/Type")] = NameObject("/EmbeddedFile")
    file_stream[NameObject("/Subtype")] = NameObject(f"/{mime_type}")
    file_stream[NameObject("/Params")] = params
    file_ref = target.add_object(file_stream)

    relationship = NameObject(f"/{descriptor.relationship}")
    filespec = DictionaryObject(
        {
            NameObject("/Type"): NameObject("/Filespec"),
            NameObject("/F"): TextStringObject(descriptor.name),
            NameObject("/UF"): TextStringObject(descriptor.name),
            NameObject("/Desc"): TextStringObject(ATTACHMENT_DESCRIPTION),
            NameObject("/EF"): DictionaryObject(
                {NameObject("/F"): file_ref, NameObject("/UF"): file_ref}
            ),
            NameObject("/AFRelationship"): relationship,
        }
    )
    filespec_ref = target.add_object(filespec)

    _register_embedded_file(target, key, filespec_ref)
    target.catalog[NameObject("/AF")] = ArrayObject([filespec_ref])
    target.attachments[key] = filespec_ref

    LOGGER.debug(
        "Embedded %s (%d bytes, %s) as %s",
        descriptor.name,
        len(descriptor.content),
        mime_type,
        key,
    )
    return filespec_ref


__all__ = [
    "ATTACHMENT_KEY",
    "ATTACHMENT_DESCRIPTION",
    "DATA_RELATIONSHIP",
    "AttachmentDescriptor",
    "embed_attachment",
]
