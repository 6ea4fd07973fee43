"""Name to tool lookup used by the CLI and :func:`pdfattach.attach_document`."""

from __future__ import annotations

from .interfaces import BaseTool, ConversionContext


class ToolRegistry:
    """Maps a tool name to the :class:`BaseTool` subclass that runs it."""

    def __init__(self) -> None:
        self._tools: dict[str, type[BaseTool]] = {}

    def register(self, name: str, tool_class: type[BaseTool]) -> None:
        if name in self._tools and self._tools[name] is not tool_class:
            raise ValueError(f"Tool '{name}' is already registered to {self._tools[name].__name__}")
        tool_class.name = name
        self._tools[name] = tool_class

    def create(self, name: str, context: ConversionContext) -> BaseTool:
        tool_class = self._tools.get(name)
        if tool_class is None:
            available = ", ".join(sorted(self._tools)) or "none"
            raise KeyError(f"Tool '{name}' is not registered (available: {available})")
        return tool_class(context)


registry = ToolRegistry()


def register_tool(name: str):
    """Class decorator adding a tool to the shared :data:`registry` under *name*."""

    def decorator(cls: type[BaseTool]) -> type[BaseTool]:
        registry.register(name, cls)
        return cls

    return decorator


__all__ = ["ToolRegistry", "registry", "register_tool"]
