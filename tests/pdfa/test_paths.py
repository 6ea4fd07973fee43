from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from pdfattach.pdfa.conformance import PdfFormat
from pdfattach.pdfa.exceptions import InvalidArgumentError
from pdfattach.pdfa.paths import (
    date_stamp,
    derive_output_path,
    has_pdf_extension,
    is_file_path,
    is_pdf_file_path,
)


def test_existing_file_and_directory(tmp_path: Path, notes: Path) -> None:
    assert is_file_path(notes) is True
    assert is_file_path(tmp_path) is False


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("out/result.pdf", True),
        ("out/report.TXT", True),
        ("out/", False),
        ("out/report", False),
        ("out\\", False),
    ],
)
def test_non_existing_paths(value: str, expected: bool) -> None:
    assert is_file_path(value) is expected


@pytest.mark.parametrize("value", [None, "", "  "])
def test_empty_path_is_invalid(value: str | None) -> None:
    with pytest.raises(InvalidArgumentError):
        is_file_path(value)


def test_pdf_extension_checks() -> None:
    assert has_pdf_extension("thesis.PDF") is True
    assert has_pdf_extension("thesis.txt") is False
    assert is_pdf_file_path("out/thesis.pdf") is True
    assert is_pdf_file_path("out/thesis") is False


def test_existing_directory_named_like_a_pdf(tmp_path: Path) -> None:
    folder = tmp_path / "folder.pdf"
    folder.mkdir()
    assert is_pdf_file_path(folder) is False


def test_pdf_output_path_is_kept() -> None:
    assert derive_output_path("out/result.pdf", "thesis", PdfFormat.PDF_A_3A) == Path("out/result.pdf")


def test_directory_prefix_is_completed() -> None:
    derived = derive_output_path("out/", "thesis", PdfFormat.PDF_A_3A)
    assert derived == Path("out/thesis_PDF_A_3A.pdf")
    assert derived.name.endswith("thesis_PDF_A_3A.pdf")


def test_prefix_is_concatenated_verbatim() -> None:
    assert derive_output_path("out/final-", "20240517", "pdf_a_2b") == Path("out/final-20240517_PDF_A_2B.pdf")


def test_non_pdf_file_name_is_treated_as_prefix() -> None:
    assert derive_output_path("out/result.txt", "thesis", PdfFormat.PDF) == Path("out/result.txtthesis_PDF.pdf")


def test_missing_disambiguator_is_invalid() -> None:
    with pytest.raises(InvalidArgumentError):
        derive_output_path("out/", "", PdfFormat.PDF_A_3A)


def test_date_stamp() -> None:
    assert date_stamp(datetime(2024, 3, 9, 23, 59)) == "20240309"
    assert len(date_stamp()) == 8
