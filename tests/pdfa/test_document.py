from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable

import pytest
from pypdf import PdfReader

from pdfattach.pdfa.conformance import resolve_conformance
from pdfattach.pdfa.document import TargetDocument, build_xmp_metadata, pdf_date
from pdfattach.pdfa.exceptions import DocumentCreationError


def test_pdf_date_with_offset() -> None:
    moment = datetime(2024, 5, 17, 8, 30, 15, tzinfo=timezone(timedelta(hours=2)))
    assert pdf_date(moment) == "D:20240517083015+02'00'"


def test_pdf_date_without_offset() -> None:
    assert pdf_date(datetime(2024, 1, 2, 3, 4, 5)) == "D:20240102030405"


def test_xmp_identifies_archival_level() -> None:
    packet = build_xmp_metadata(
        resolve_conformance("PDF_A_2U"),
        title="Tesi <PDF_A_2U>",
        language="it-IT",
        producer="tests",
        created=datetime(2024, 5, 17, tzinfo=timezone.utc),
    )
    assert b"<pdfaid:part>2</pdfaid:part>" in packet
    assert b"<pdfaid:conformance>U</pdfaid:conformance>" in packet
    assert b"Tesi &lt;PDF_A_2U&gt;" in packet
    assert b"<xmp:CreateDate>2024-05-17T00:00:00+00:00</xmp:CreateDate>" in packet


def test_xmp_for_plain_pdf_has_no_identification() -> None:
    packet = build_xmp_metadata(
        resolve_conformance("PDF"),
        title="Tesi PDF",
        language="it-IT",
        producer="tests",
        created=datetime(2024, 5, 17, tzinfo=timezone.utc),
    )
    assert b"pdfaid" not in packet


def test_archival_target_requires_output_intent() -> None:
    with pytest.raises(DocumentCreationError):
        TargetDocument(
            resolve_conformance("PDF_A_3A"),
            None,
            title="Tesi PDF_A_3A",
            language="it-IT",
            producer="tests",
        )


def test_target_catalog(target_factory: Callable, tmp_path: Path) -> None:
    target = target_factory("PDF_A_1A")
    target.writer.add_blank_page(width=72, height=72)
    reader = PdfReader(str(target.save(tmp_path / "target.pdf")))

    assert reader.pdf_header == "%PDF-1.4"
    root = reader.trailer["/Root"]
    assert root["/MarkInfo"]["/Marked"].value is True
    assert root["/Lang"] == "it-IT"
    assert root["/ViewerPreferences"]["/DisplayDocTitle"].value is True
    assert root["/StructTreeRoot"]["/Type"] == "/StructTreeRoot"
    assert root["/StructTreeRoot"]["/K"]["/S"] == "/Document"
    assert b"<pdfaid:part>1</pdfaid:part>" in root["/Metadata"].get_data()
    assert reader.metadata.title == "Tesi PDF_A_1A"
    assert reader.metadata["/Producer"] == "pdfattach-tests"
    assert len(reader.trailer["/ID"]) == 2


def test_save_creates_missing_directories(target_factory: Callable, tmp_path: Path) -> None:
    target = target_factory("PDF_A_3B")
    target.writer.add_blank_page(width=72, height=72)
    output = target.save(tmp_path / "nested" / "dir" / "out.pdf")
    assert output.is_file()
    assert [p.name for p in output.parent.iterdir()] == ["out.pdf"]


def test_closed_target_cannot_be_saved(target_factory: Callable, tmp_path: Path) -> None:
    target = target_factory("PDF_A_3B")
    target.close()
    target.close()
    assert target.closed is True
    with pytest.raises(DocumentCreationError):
        target.save(tmp_path / "out.pdf")
    assert not (tmp_path / "out.pdf").exists()


def test_level_a_structure_has_parent_tree(target_factory: Callable) -> None:
    struct_root = target_factory("PDF_A_3A").catalog["/StructTreeRoot"]
    assert struct_root["/ParentTree"]["/Nums"] == []
    assert struct_root["/ParentTreeNextKey"] == 0


@pytest.mark.parametrize("token", ["PDF_A_3B", "PDF_A_2U", "PDF"])
def test_other_levels_skip_parent_tree(target_factory: Callable, token: str) -> None:
    catalog = target_factory(token).catalog
    struct_root = catalog["/StructTreeRoot"]
    assert "/ParentTree" not in struct_root
    assert "/MarkInfo" in catalog
