"""Path helpers used to validate inputs and derive output file names."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Union

from .conformance import PdfFormat, parse_format
from .exceptions import InvalidArgumentError

PathLike = Union[str, Path]

PDF_EXTENSION = ".pdf"


def _as_text(path: PathLike | None) -> str:
    if path is None:
        raise InvalidArgumentError("Path must not be None")
    text = str(path)
    if not text.strip():
        raise InvalidArgumentError("Path must not be empty")
    return text


def is_file_path(path: PathLike | None) -> bool:
    """Return ``True`` when *path* names a file rather than a directory.

    Existing paths are classified by what is on disk. Paths that do not exist
    yet are treated as files only when they carry an extension; extensionless
    values are directory-like prefixes.
    """

    text = _as_text(path)
    candidate = Path(text).expanduser()
    if candidate.exists():
        return not candidate.is_dir()
    if text.endswith(("/", "\\")):
        return False
    return bool(candidate.suffix)


def has_pdf_extension(path: PathLike | None) -> bool:
    text = _as_text(path)
    return Path(text.strip()).suffix.lower() == PDF_EXTENSION


def is_pdf_file_path(path: PathLike | None) -> bool:
    """Return ``True`` when *path* classifies as a file with a ``.pdf`` extension."""

    return is_file_path(path) and has_pdf_extension(path)


def date_stamp(moment: datetime | None = None) -> str:
    """Return *moment* (default: now) formatted as ``YYYYMMDD``."""

    return (moment or datetime.now()).strftime("%Y%m%d")


def derive_output_path(
    candidate: PathLike | None,
    disambiguator: str,
    pdf_format: PdfFormat | str,
) -> Path:
    """Return the final output path for a conversion.

    A *candidate* that already names a ``.pdf`` file is returned unchanged.
    Anything else is used as a prefix and completed with
    ``<disambiguator>_<FORMAT>.pdf`` by plain concatenation, so directory
    prefixes are expected to end with a separator.
    """

    text = _as_text(candidate)
    if is_pdf_file_path(text):
        return Path(text)
    if not disambiguator:
        raise InvalidArgumentError("An output name disambiguator is required")
    token = parse_format(pdf_format).value
    return Path(f"{text}{disambiguator}_{token}{PDF_EXTENSION}")


__all__ = [
    "PathLike",
    "PDF_EXTENSION",
    "is_file_path",
    "has_pdf_extension",
    "is_pdf_file_path",
    "date_stamp",
    "derive_output_path",
]
