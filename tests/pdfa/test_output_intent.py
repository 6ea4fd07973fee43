from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
from pypdf import PdfWriter

from pdfattach.config import DEFAULT_ICC_PROFILE
from pdfattach.pdfa.conformance import resolve_conformance
from pdfattach.pdfa.exceptions import MissingColorProfileError
from pdfattach.pdfa.output_intent import (
    OUTPUT_INTENT_IDENTIFIER,
    OUTPUT_INTENT_INFO,
    OutputIntentSpec,
    apply_output_intent,
    build_output_intent,
    load_color_profile,
)


def test_bundled_profile_is_rgb() -> None:
    profile = load_color_profile(DEFAULT_ICC_PROFILE)
    spec = OutputIntentSpec(profile=profile)
    assert profile[36:40] == b"acsp"
    assert spec.color_space == b"RGB "
    assert spec.components == 3
    assert spec.alternate == "/DeviceRGB"


def test_missing_profile(tmp_path: Path) -> None:
    with pytest.raises(MissingColorProfileError):
        load_color_profile(tmp_path / "missing.icm")


def test_file_without_icc_signature(tmp_path: Path) -> None:
    bogus = tmp_path / "bogus.icm"
    bogus.write_bytes(b"\0" * 200)
    with pytest.raises(MissingColorProfileError):
        load_color_profile(bogus)


def test_plain_pdf_needs_no_profile(tmp_path: Path) -> None:
    assert build_output_intent(resolve_conformance("PDF"), tmp_path / "missing.icm") is None


def test_archival_level_needs_profile(tmp_path: Path) -> None:
    with pytest.raises(MissingColorProfileError):
        build_output_intent(resolve_conformance("PDF_A_1B"), tmp_path / "missing.icm")


def test_apply_output_intent_writes_catalog_entry() -> None:
    writer = PdfWriter()
    spec = build_output_intent(resolve_conformance("PDF_A_3B"), DEFAULT_ICC_PROFILE)
    apply_output_intent(writer, spec)

    intents = writer._root_object["/OutputIntents"]
    assert len(intents) == 1
    intent = intents[0].get_object()
    assert intent["/S"] == "/GTS_PDFA1"
    assert intent["/OutputConditionIdentifier"] == OUTPUT_INTENT_IDENTIFIER
    assert intent["/Info"] == OUTPUT_INTENT_INFO
    profile = intent["/DestOutputProfile"].get_object()
    assert profile["/N"] == 3
    assert profile.get_data() == DEFAULT_ICC_PROFILE.read_bytes()


def test_target_document_carries_single_intent(target_factory: Callable) -> None:
    target = target_factory("PDF_A_2B")
    assert len(target.catalog["/OutputIntents"]) == 1


def test_plain_target_has_no_intent(target_factory: Callable) -> None:
    target = target_factory("PDF")
    assert "/OutputIntents" not in target.catalog
