"""Ready-made tools."""

from .builtin import (
    DateTimeTool,
    FileReaderTool,
    FileWriterTool,
    ShellTool,
    WebFetchTool,
    builtin_tools,
)

__all__ = [
    "DateTimeTool",
    "FileReaderTool",
    "FileWriterTool",
    "ShellTool",
    "WebFetchTool",
    "builtin_tools",
]
