"""Plugin exposing PDF/A attach-and-convert through the registry."""

from __future__ import annotations

from typing import Sequence

from ...config import ConverterConfig
from ...core.utils import get_logger
from ...pdfa.converter import DEFAULT_FORMAT, ConversionResult, PdfAConverter
from ...pdfa.exceptions import InvalidArgumentError
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool

LOGGER = get_logger("pdfattach.tools.pdfa")


@register_tool("pdfa")
class PdfATool(BaseTool):
    def run(self) -> ConversionResult:
        context = self.context
        if context.input_path is None:
            raise InvalidArgumentError("PDF/A conversion requires a source PDF path")
        if context.output_path is None:
            raise InvalidArgumentError("PDF/A conversion requires an output path")

        attachment = context.config.get("attachment")
        if not attachment:
            raise InvalidArgumentError("PDF/A conversion requires an attachment path")

        pdf_format = context.config.get("format") or DEFAULT_FORMAT
        fonts: Sequence[str] | None = context.config.get("fonts")
        converter_config: ConverterConfig | None = context.config.get("converter_config")

        LOGGER.debug(
            "%s: converting %s to %s with attachment %s into %s",
            self.name,
            context.input_path,
            pdf_format,
            attachment,
            context.output_path,
        )
        converter = PdfAConverter(converter_config)
        result = converter.convert_path(
            context.input_path,
            attachment,
            context.output_path,
            pdf_format,
            fonts,
        )
        context.resources["result"] = result
        return result
