from __future__ import annotations

import logging
from typing import Iterable, Iterator

from .tool import Tool
from ..types.core import FunctionSchema

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Name -> Tool lookup, built once and read-only afterwards.

    If two tools share a name, the one registered last wins.

    Examples
    --------
    >>> registry = ToolRegistry([read_file, write_file])
    >>> registry.get("read_file") is read_file
    True
    >>> registry.get("missing") is None
    True
    """

    def __init__(self, tools: Iterable[Tool] = ()):
        tb: dict[str, Tool] = {}
        for tool in tools:
            if not isinstance(tool, Tool):
                raise TypeError(f"ToolRegistry requires Tool objects. Received {tool}: {type(tool)}")
            if tool.name in tb:
                logger.warning(f"Duplicate tool name '{tool.name}'; the last registered tool wins")
            if not tool.description:
                logger.warning(f"Tool {tool.name} should have a description for proper schema export.")
            tb[tool.name] = tool
        self._tools = tb

    def __len__(self) -> int:
        return len(self._tools)

    def __bool__(self) -> bool:
        return bool(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[Tool]:
        return iter(self._tools.values())

    def get(self, name: str) -> Tool | None:
        """Return the tool registered under ``name``, or None."""
        return self._tools.get(name)

    @property
    def names(self) -> list[str]:
        return list(self._tools)

    def schemas(self) -> list[FunctionSchema] | None:
        """Return the schemas of all tools, or None when no tools are registered."""
        if not self._tools:
            return None
        return [tool.describe() for tool in self._tools.values()]
