"""Namespace for pluggable pdfattach tools."""

from __future__ import annotations

from .common.pipeline import registry


def load_builtin_plugins() -> None:
    from .pdfa import convert  # noqa: F401  # register the pdfa tool


__all__ = ["registry", "load_builtin_plugins"]
