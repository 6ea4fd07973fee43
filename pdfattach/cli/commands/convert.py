"""CLI helpers for attach-and-convert."""

from __future__ import annotations

from argparse import ArgumentParser

from ...pdfa.conformance import PdfFormat
from ...pdfa.converter import DEFAULT_FORMAT
from ...tools.common.interfaces import ConversionContext


def configure_parser(parser: ArgumentParser) -> None:
    parser.add_argument("source", help="PDF file to convert")
    parser.add_argument("attachment", help="File to embed in the converted PDF")
    parser.add_argument(
        "output",
        help="Output PDF path, or a directory prefix completed with a generated name",
    )
    parser.add_argument(
        "--format",
        choices=[pdf_format.value for pdf_format in PdfFormat],
        default=DEFAULT_FORMAT.value,
        help="Target conformance level (default: %(default)s)",
    )
    parser.add_argument(
        "--font",
        dest="fonts",
        action="append",
        help="Font file name to embed from the fonts directory (repeatable)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.set_defaults(tool_name="pdfa", build_context=_build_context)


def _build_context(args) -> ConversionContext:
    return ConversionContext(
        input_path=args.source,
        output_path=args.output,
        config={
            "attachment": args.attachment,
            "format": args.format,
            "fonts": args.fonts,
        },
    )
