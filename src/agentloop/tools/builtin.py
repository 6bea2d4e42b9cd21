"""Built-in tools commonly used by agents.

Expected failures (missing parameters, missing files, non-zero exit codes) are returned as
failed ToolResults rather than raised.
"""

from __future__ import annotations

import asyncio
from datetime import datetime
import logging
from pathlib import Path
from typing import Any

import requests

from ..core.tool import Tool
from ..types.core import ToolResult
from ..utilities import detect_encoding

logger = logging.getLogger(__name__)


def _string_param(parameters: dict[str, Any], name: str) -> str | None:
    value = parameters.get(name)
    return value if isinstance(value, str) else None


class FileReaderTool(Tool):
    name = "read_file"
    description = "Read contents of a file from the filesystem"
    parameters = {
        "type": "object",
        "properties": {
            "path": {"type": "string", "description": "Path to the file to read"},
        },
        "required": ["path"],
    }

    async def run(self, parameters: dict[str, Any]) -> ToolResult:
        path = _string_param(parameters, "path")
        if path is None:
            return ToolResult.failure("Missing 'path' parameter")

        file = Path(path).expanduser()
        if not file.exists():
            return ToolResult.failure(f"File not found: {path}")
        if not file.is_file():
            return ToolResult.failure(f"Path is not a file: {path}")

        try:
            rawdata = await asyncio.to_thread(file.read_bytes)
            content = rawdata.decode(detect_encoding(rawdata)) if rawdata else ""
        except (OSError, UnicodeDecodeError, LookupError) as e:
            return ToolResult.failure(f"Error reading file: {e}")
        return ToolResult.ok(content)


class FileWriterTool(Tool):
    name = "write_file"
    description = "Write content to a file on the filesystem"
    parameters = {
        "type": "object",
        "properties": {
            "path": {"type": "string", "description": "Path where the file should be written"},
            "content": {"type": "string", "description": "Content to write to the file"},
        },
        "required": ["path", "content"],
    }

    @staticmethod
    def _write(file: Path, content: str) -> None:
        file.parent.mkdir(parents=True, exist_ok=True)
        file.write_text(content, encoding="utf-8")

    async def run(self, parameters: dict[str, Any]) -> ToolResult:
        path = _string_param(parameters, "path")
        if path is None:
            return ToolResult.failure("Missing 'path' parameter")
        content = _string_param(parameters, "content")
        if content is None:
            return ToolResult.failure("Missing 'content' parameter")

        try:
            await asyncio.to_thread(self._write, Path(path).expanduser(), content)
        except OSError as e:
            return ToolResult.failure(f"Error writing file: {e}")
        return ToolResult.ok(f"File written successfully to {path}")


class WebFetchTool(Tool):
    name = "fetch_url"
    description = "Fetch content from a URL"
    parameters = {
        "type": "object",
        "properties": {
            "url": {"type": "string", "description": "URL to fetch content from"},
        },
        "required": ["url"],
    }

    def __init__(self, timeout: int = 30):
        self.timeout = timeout

    def _fetch(self, url: str) -> str:
        logger.debug(f"Requesting page content from {url}...")
        with requests.get(url, timeout=self.timeout) as response:
            _ = response.raise_for_status()
            return response.text

    async def run(self, parameters: dict[str, Any]) -> ToolResult:
        url = _string_param(parameters, "url")
        if url is None:
            return ToolResult.failure("Missing 'url' parameter")

        try:
            content = await asyncio.to_thread(self._fetch, url)
        except requests.exceptions.RequestException as e:
            logger.debug(f"Failed to fetch {url}: {e}")
            return ToolResult.failure(f"Error fetching URL: {e}")
        return ToolResult.ok(content)


class DateTimeTool(Tool):
    name = "get_datetime"
    description = "Get the current date and time"
    parameters = {
        "type": "object",
        "properties": {
            "format": {
                "type": "string",
                "description": "strftime format pattern (default: %Y-%m-%d %H:%M:%S)",
            },
        },
    }

    default_format = "%Y-%m-%d %H:%M:%S"

    async def run(self, parameters: dict[str, Any]) -> ToolResult:
        fmt = _string_param(parameters, "format") or self.default_format
        try:
            return ToolResult.ok(datetime.now().strftime(fmt))
        except ValueError as e:
            return ToolResult.failure(f"Error formatting date: {e}")


class ShellTool(Tool):
    """Run a command without a shell; the command line is split on whitespace."""

    name = "execute_shell"
    description = "Execute a shell command"
    parameters = {
        "type": "object",
        "properties": {
            "command": {"type": "string", "description": "Shell command to execute"},
        },
        "required": ["command"],
    }

    async def run(self, parameters: dict[str, Any]) -> ToolResult:
        command = _string_param(parameters, "command")
        if not command or not command.split():
            return ToolResult.failure("Missing 'command' parameter")

        try:
            process = await asyncio.create_subprocess_exec(
                *command.split(),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
            stdout, _ = await process.communicate()
        except OSError as e:
            return ToolResult.failure(f"Error executing command: {e}")

        output = stdout.decode(errors="replace")
        if process.returncode == 0:
            return ToolResult.ok(output)
        return ToolResult.failure(f"Command failed with exit code {process.returncode}: {output}")


def builtin_tools() -> list[Tool]:
    """Return one instance of every built-in tool."""
    return [FileReaderTool(), FileWriterTool(), WebFetchTool(), DateTimeTool(), ShellTool()]
