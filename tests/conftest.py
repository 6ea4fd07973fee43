from __future__ import annotations

from pathlib import Path
from typing import Callable
import sys

import pytest
from pypdf import PdfWriter

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pdfattach.config import DEFAULT_FONTS_DIR, DEFAULT_ICC_PROFILE, ConverterConfig, ResourceLocator  # noqa: E402
from pdfattach.pdfa.conformance import resolve_conformance  # noqa: E402
from pdfattach.pdfa.document import TargetDocument  # noqa: E402
from pdfattach.pdfa.output_intent import build_output_intent  # noqa: E402

PAGE_WIDTHS = (100, 200, 300)


@pytest.fixture()
def page_widths() -> tuple[int, ...]:
    return PAGE_WIDTHS


@pytest.fixture()
def sample_pdf(tmp_path: Path) -> Path:
    pdf_path = tmp_path / "sample.pdf"
    writer = PdfWriter()
    for width in PAGE_WIDTHS:
        writer.add_blank_page(width=width, height=200)
    writer.add_metadata({"/Producer": "pdfattach-tests", "/Title": "Sample"})
    with pdf_path.open("wb") as stream:
        writer.write(stream)
    return pdf_path


@pytest.fixture()
def empty_pdf(tmp_path: Path) -> Path:
    pdf_path = tmp_path / "empty.pdf"
    writer = PdfWriter()
    with pdf_path.open("wb") as stream:
        writer.write(stream)
    return pdf_path


@pytest.fixture()
def pdf_factory(tmp_path: Path) -> Callable[[str, int], Path]:
    def _create(filename: str, pages: int = 1) -> Path:
        path = tmp_path / filename
        writer = PdfWriter()
        for _ in range(pages):
            writer.add_blank_page(width=72, height=72)
        with path.open("wb") as handle:
            writer.write(handle)
        return path

    return _create


@pytest.fixture()
def notes(tmp_path: Path) -> Path:
    path = tmp_path / "notes.txt"
    path.write_bytes(b"thesis attachment\n")
    return path


@pytest.fixture()
def converter_config() -> ConverterConfig:
    return ConverterConfig(resources=ResourceLocator(DEFAULT_ICC_PROFILE, DEFAULT_FONTS_DIR))


@pytest.fixture()
def target_factory() -> Callable[[str], TargetDocument]:
    created: list[TargetDocument] = []

    def _create(token: str) -> TargetDocument:
        level = resolve_conformance(token)
        target = TargetDocument(
            level,
            build_output_intent(level, DEFAULT_ICC_PROFILE),
            title=f"Tesi {token}",
            language="it-IT",
            producer="pdfattach-tests",
        )
        created.append(target)
        return target

    yield _create
    for target in created:
        target.close()
