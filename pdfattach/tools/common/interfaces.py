"""Core interfaces and context objects shared by pdfattach tools."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ...core.utils import resolve_path


@dataclass
class ConversionContext:
    """Holds shared execution state for a tool invocation.

    ``output_path`` is kept exactly as supplied: a trailing separator marks a
    directory prefix that the converter completes with a generated file name.
    """

    input_path: Path | None = None
    output_path: str | Path | None = None
    resources: dict[str, Any] = field(default_factory=dict)
    config: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.input_path, (str, Path)):
            self.input_path = resolve_path(self.input_path)


class BaseTool:
    """Base class for all pluggable pdfattach tools."""

    name: str

    def __init__(self, context: ConversionContext) -> None:
        self.context = context

    def run(self) -> Any:  # pragma: no cover - to be implemented by subclasses
        raise NotImplementedError
