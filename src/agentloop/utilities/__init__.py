from datetime import datetime, timezone
import json
import textwrap

from .log_helpers import LOG_FMT, basic_log_config

__all__ = [
    "LOG_FMT",
    "basic_log_config",
    "now_utc",
    "detect_encoding",
    "format_json",
]


def now_utc() -> datetime:
    return datetime.now(tz=timezone.utc)


def detect_encoding(rawdata: bytes) -> str:
    """Detect the encoding of a byte string."""
    import chardet

    encoding = chardet.detect(rawdata)
    return encoding["encoding"] or "utf-8"


def format_json(data, width: int = 100, indent: int = 2, level: int = 0) -> str:
    """Format JSON data with proper indentation and line wrapping."""
    prefix = " " * (level * indent)

    if isinstance(data, dict):
        if not data:
            return "{}"

        lines = ["{"]
        items = list(data.items())
        for i, (key, value) in enumerate(items):
            key_prefix = f'{prefix}  "{key}": '
            key_indent = " " * len(key_prefix)

            formatted_value = format_json(value, width=width, indent=indent, level=level + 1)

            if isinstance(value, str):
                # Handle each line segment separately
                segments = []
                for segment in value.split("\n"):
                    wrapped = textwrap.fill(
                        segment,
                        width=max(width - len(key_prefix), 1),
                        initial_indent=key_indent,
                        subsequent_indent=key_indent + " ",
                        drop_whitespace=False,
                    )
                    segments.append(wrapped)
                formatted_value = '"{}"'.format(("\n" + key_indent).join(s.strip() for s in segments))

            comma = "," if i < len(items) - 1 else ""
            lines.append(f"{key_prefix}{formatted_value}{comma}")

        lines.append(prefix + "}")
        return "\n".join(lines)

    elif isinstance(data, list):
        if not data:
            return "[]"

        lines = ["["]
        for i, item in enumerate(data):
            formatted_item = format_json(item, width, indent, level + 1)
            comma = "," if i < len(data) - 1 else ""
            lines.append(f"{prefix}  {formatted_item}{comma}")

        lines.append(prefix + "]")
        return "\n".join(lines)

    elif isinstance(data, str):
        try:
            return format_json(json.loads(data), width, indent, level)
        except json.JSONDecodeError:
            return '"{}"'.format(data)
    elif data is None:
        return "null"
    else:
        return str(data).lower()
