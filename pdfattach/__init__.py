"""Attach files to PDFs and convert them to PDF/A."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from .config import ConverterConfig, ResourceLocator
from .pdfa import (
    DEFAULT_FORMAT,
    ConversionResult,
    PdfAConversionError,
    PdfAConverter,
    PdfFormat,
    attach_and_convert,
)
from .tools import load_builtin_plugins
from .tools.common.interfaces import ConversionContext
from .tools.common.pipeline import ToolRegistry, register_tool, registry

__version__ = "1.0.0"

load_builtin_plugins()

__all__ = [
    "__version__",
    "attach_document",
    "attach_and_convert",
    "PdfAConverter",
    "ConversionResult",
    "PdfAConversionError",
    "PdfFormat",
    "DEFAULT_FORMAT",
    "ConverterConfig",
    "ResourceLocator",
    "ConversionContext",
    "ToolRegistry",
    "registry",
    "register_tool",
]


def attach_document(
    input: str | Path,
    attachment: str | Path,
    output: str | Path,
    *,
    pdf_format: PdfFormat | str = DEFAULT_FORMAT,
    fonts: Sequence[str] | None = None,
    config: ConverterConfig | None = None,
) -> ConversionResult:
    """Convenience wrapper around the pdfa plugin."""

    context = ConversionContext(
        input_path=input,
        output_path=output,
        config={
            "attachment": attachment,
            "format": pdf_format,
            "fonts": fonts,
            "converter_config": config,
        },
    )
    tool = registry.create("pdfa", context)
    return tool.run()
