"""Conversion of model-issued tool arguments into native parameters.

Arguments arrive as a parsed JSON tree. Containers are converted recursively; primitives are
mapped by their literal form:

- strings stay strings, unconditionally
- ``true`` / ``false`` become booleans (checked before numbers)
- integral numbers without a fractional part become ``int``
- any other number becomes ``float``
- anything else falls back to its literal string form
"""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any

from ..types.base import JSON

logger = logging.getLogger(__name__)


def _literal(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _coerce_primitive(value: Any) -> Any:
    if isinstance(value, str):
        return value

    text = _literal(value)
    if text in ("true", "false"):
        return text == "true"

    try:
        return int(text)
    except ValueError:
        pass

    try:
        return float(text)
    except ValueError:
        return text


def coerce_value(value: JSON | Any) -> Any:
    """Recursively convert a JSON value into native python values."""
    if isinstance(value, Mapping):
        return {str(k): coerce_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [coerce_value(v) for v in value]
    if value is None:
        return None
    return _coerce_primitive(value)


def coerce_arguments(arguments: JSON | Any) -> dict[str, Any]:
    """Convert tool-call arguments into a parameter mapping.

    Non-object arguments yield an empty mapping, so dispatch always has parameters to pass.

    Examples
    --------
    >>> coerce_arguments({"n": 3, "x": 3.5, "b": True, "s": "3"})
    {'n': 3, 'x': 3.5, 'b': True, 's': '3'}
    >>> coerce_arguments('{"n": 3}')
    {}
    """
    if not isinstance(arguments, Mapping):
        logger.debug(f"Discarding non-object tool arguments of type {type(arguments).__name__}")
        return {}
    return coerce_value(arguments)
