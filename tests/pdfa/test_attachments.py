from __future__ import annotations

import hashlib
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

import pytest
from pypdf import PdfReader

from pdfattach.pdfa.attachments import (
    ATTACHMENT_DESCRIPTION,
    ATTACHMENT_KEY,
    AttachmentDescriptor,
    embed_attachment,
)
from pdfattach.pdfa.exceptions import InvalidArgumentError, UnsupportedAttachmentTypeError


def _save(target, tmp_path: Path) -> PdfReader:
    target.writer.add_blank_page(width=72, height=72)
    output = target.save(tmp_path / "attached.pdf")
    return PdfReader(str(output))


def test_descriptor_from_path(notes: Path) -> None:
    descriptor = AttachmentDescriptor.from_path(notes)
    assert descriptor.name == "notes.txt"
    assert descriptor.content == notes.read_bytes()
    assert descriptor.modified.tzinfo is not None
    assert descriptor.mime_type is None


def test_descriptor_from_missing_path(tmp_path: Path) -> None:
    with pytest.raises(InvalidArgumentError):
        AttachmentDescriptor.from_path(tmp_path / "missing.txt")


def test_embedded_file_is_declared_in_af(target_factory: Callable, notes: Path, tmp_path: Path) -> None:
    target = target_factory("PDF_A_3B")
    descriptor = AttachmentDescriptor.from_path(notes)
    filespec_ref = embed_attachment(target, descriptor)

    assert descriptor.mime_type == "text/plain"
    assert target.attachments == {ATTACHMENT_KEY: filespec_ref}

    reader = _save(target, tmp_path)
    root = reader.trailer["/Root"]
    af = root["/AF"]
    assert len(af) == 1
    filespec = af[0].get_object()
    assert filespec["/Type"] == "/Filespec"
    assert filespec["/F"] == "notes.txt"
    assert filespec["/UF"] == "notes.txt"
    assert filespec["/Desc"] == ATTACHMENT_DESCRIPTION
    assert filespec["/AFRelationship"] == "/Data"

    embedded = filespec["/EF"]["/F"].get_object()
    assert embedded["/Type"] == "/EmbeddedFile"
    assert embedded["/Subtype"] == "/text/plain"
    assert embedded.get_data() == notes.read_bytes()
    params = embedded["/Params"]
    assert params["/Size"] == len(notes.read_bytes())
    assert params["/CheckSum"] == hashlib.md5(notes.read_bytes()).digest()


def test_embedded_file_is_registered_in_name_tree(target_factory: Callable, notes: Path, tmp_path: Path) -> None:
    target = target_factory("PDF_A_3A")
    embed_attachment(target, AttachmentDescriptor.from_path(notes))

    reader = _save(target, tmp_path)
    names = reader.trailer["/Root"]["/Names"]["/EmbeddedFiles"]["/Names"]
    assert len(names) == 2
    assert names[0] == ATTACHMENT_KEY
    assert names[1].get_object()["/F"] == "notes.txt"


def test_bytes_descriptor_keeps_given_name(target_factory: Callable) -> None:
    target = target_factory("PDF")
    moment = datetime(2024, 5, 17, 12, 0, tzinfo=timezone.utc)
    descriptor = AttachmentDescriptor(content=b"{}", name="data.json", modified=moment)
    embed_attachment(target, descriptor)

    filespec = target.catalog["/AF"][0].get_object()
    embedded = filespec["/EF"]["/F"].get_object()
    assert embedded["/Subtype"] == "/application/json"
    assert embedded["/Params"]["/ModDate"] == "D:20240517120000+00'00'"


def test_unsupported_extension_leaves_catalog_untouched(target_factory: Callable) -> None:
    target = target_factory("PDF_A_3B")
    descriptor = AttachmentDescriptor.from_bytes(b"payload", "payload.xyz")
    with pytest.raises(UnsupportedAttachmentTypeError):
        embed_attachment(target, descriptor)
    assert "/AF" not in target.catalog
    assert target.attachments == {}


@pytest.mark.parametrize(("content", "name"), [(b"", "notes.txt"), (b"data", ""), (b"data", "  ")])
def test_empty_content_or_name_is_invalid(target_factory: Callable, content: bytes, name: str) -> None:
    target = target_factory("PDF_A_3B")
    with pytest.raises(InvalidArgumentError):
        embed_attachment(target, AttachmentDescriptor.from_bytes(content, name))
