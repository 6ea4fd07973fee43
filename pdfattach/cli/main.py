"""Command line interface for pdfattach."""

from __future__ import annotations

import argparse
import logging
from typing import Sequence

from ..core.utils import get_logger, set_log_level
from ..pdfa.converter import ConversionResult
from ..pdfa.exceptions import PdfAConversionError
from ..tools import load_builtin_plugins
from ..tools.common.interfaces import ConversionContext
from ..tools.common.pipeline import registry
from .commands import convert

LOGGER = get_logger("pdfattach.cli")


def _create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pdfattach",
        description="Attach a file to a PDF and convert it to PDF/A",
    )
    convert.configure_parser(parser)
    return parser


def main(argv: Sequence[str] | None = None) -> ConversionResult | None:
    """Run one conversion from command line arguments.

    Conversion errors are logged and ``None`` is returned.
    """

    load_builtin_plugins()
    parser = _create_parser()
    args = parser.parse_args(argv)
    set_log_level(logging.DEBUG if args.verbose else logging.INFO)

    context: ConversionContext = args.build_context(args)
    tool = registry.create(args.tool_name, context)
    try:
        result = tool.run()
    except PdfAConversionError as exc:
        LOGGER.error("Conversion failed (%s): %s", exc.kind, exc.message)
        return None
    LOGGER.info("Written %s", result.output_path)
    return result


def run() -> int:
    main()
    return 0


if __name__ == "__main__":  # pragma: no cover
    run()
