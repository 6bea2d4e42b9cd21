"""Functions and helpers for tool use.

A Tool is any named capability the model can invoke with keyword parameters.
Tools report their outcome as a ToolResult and describe themselves with a FunctionSchema.

ref: https://github.com/openai/openai-agents-python/blob/8d906f88f02d30b3cf6068e5de88a5f1e4bafd82/src/agents/function_schema.py
"""

from __future__ import annotations

from abc import ABC, abstractmethod
import asyncio
import contextlib
import inspect
import json
import logging
import re
from typing import Any, Callable, ClassVar, Literal, Type, get_args, get_origin, get_type_hints

from pydantic import BaseModel, Field, create_model

from ..types.core import FunctionSchema, ToolResult

logger = logging.getLogger(__name__)


DocstringStyle = Literal["google", "numpy", "sphinx"]


def _detect_docstring_style(doc: str) -> DocstringStyle:
    """Detect the style of a docstring.

    As of Feb 2025, the automatic style detection in griffe is an Insiders feature. This code approximates it.

    Ref: https://github.com/openai/openai-agents-python/blob/8d906f88f02d30b3cf6068e5de88a5f1e4bafd82/src/agents/function_schema.py#L87-L129
    """
    scores: dict[DocstringStyle, int] = {"sphinx": 0, "numpy": 0, "google": 0}

    sphinx_patterns = [r"^:param\s", r"^:type\s", r"^:return:", r"^:rtype:"]
    for pattern in sphinx_patterns:
        if re.search(pattern, doc, re.MULTILINE):
            scores["sphinx"] += 1

    numpy_patterns = [
        r"^Parameters\s*\n\s*-{3,}",
        r"^Returns\s*\n\s*-{3,}",
        r"^Yields\s*\n\s*-{3,}",
    ]
    for pattern in numpy_patterns:
        if re.search(pattern, doc, re.MULTILINE):
            scores["numpy"] += 1

    google_patterns = [r"^(Args|Arguments):", r"^(Returns):", r"^(Raises):"]
    for pattern in google_patterns:
        if re.search(pattern, doc, re.MULTILINE):
            scores["google"] += 1

    max_score = max(scores.values())
    if max_score == 0:
        return "google"

    # Priority order: sphinx > numpy > google in case of tie
    styles: list[DocstringStyle] = ["sphinx", "numpy", "google"]
    for style in styles:
        if scores[style] == max_score:
            return style

    return "google"


@contextlib.contextmanager
def _suppress_griffe_logging():
    """Suppresses warnings about missing annotations for params."""
    griffe_logger = logging.getLogger("griffe")
    previous_level = griffe_logger.getEffectiveLevel()
    griffe_logger.setLevel(logging.ERROR)
    try:
        yield
    finally:
        griffe_logger.setLevel(previous_level)


def _parse_docstring(fn: Callable) -> list:
    from griffe import Docstring

    doc = inspect.getdoc(fn)
    if not doc:
        return []

    with _suppress_griffe_logging():
        docstring = Docstring(doc, lineno=1, parser=_detect_docstring_style(doc))
        return docstring.parse()


def extract_function_description(fn: Callable) -> str | None:
    """Extract the description from a function's docstring."""
    from griffe import DocstringSectionKind

    return next(
        (section.value for section in _parse_docstring(fn) if section.kind == DocstringSectionKind.text),
        None,
    )


def extract_param_descriptions(fn: Callable) -> dict[str, Any]:
    """Extract the parameter descriptions from a function's docstring."""
    from griffe import DocstringSectionKind

    return {
        param.name: param.description
        for section in _parse_docstring(fn)
        if section.kind == DocstringSectionKind.parameters
        for param in section.value
    }


def pydantic_to_schema(model: Type[BaseModel]) -> dict[str, Any]:
    """Convert a Pydantic model to an OpenAPI-compatible JSON schema, without the model title and description."""
    schema = model.model_json_schema()
    schema.pop("title", None)
    schema.pop("description", None)
    return schema


def signature_model(fn: Callable) -> Type[BaseModel]:
    """Given a python function, generate a Pydantic model of its keyword parameters.

    Extracts type hints and default values (ignoring 'self' and 'cls').
    Requires type hints and docstrings for accurate schema.
    Ref:
      - https://github.com/pydantic/pydantic-ai/blob/b8d71369d5d7ab1b6b08fe020bfaf67cd6259ba4/pydantic_ai_slim/pydantic_ai/_pydantic.py#L41-L170
      - https://github.com/openai/openai-agents-python/blob/8d906f88f02d30b3cf6068e5de88a5f1e4bafd82/src/agents/function_schema.py#L186-L344
    """
    if inspect.getdoc(fn) is None:
        logger.warning(f"Function {fn.__name__} requires docstrings for viable signature.")
        description = ""
    else:
        description = extract_function_description(fn) or ""

    # Handle bound methods by getting the original function
    if inspect.ismethod(fn):
        fn = fn.__func__

    sig = inspect.signature(fn)
    type_hints = get_type_hints(fn)
    param_descs = extract_param_descriptions(fn)

    fields = {}
    for param_name, param in sig.parameters.items():
        if param_name in ("self", "cls"):
            continue

        param_annotation = type_hints.get(param_name, param.annotation)
        if param_annotation == inspect.Parameter.empty:
            param_annotation = Any

        field_description = param_descs.get(param_name, None)

        if param.kind == param.VAR_POSITIONAL:
            raise TypeError(f"Tool functions take keyword parameters only; '*{param_name}' is not supported")

        elif param.kind == param.VAR_KEYWORD:
            # e.g. def foo(**kwargs: int) -> dict[str, int]
            if get_origin(param_annotation) is dict and len(get_args(param_annotation)) == 2:
                pass
            else:
                param_annotation = dict[str, param_annotation]  # type: ignore
            fields[param_name] = (
                param_annotation,
                Field(default_factory=dict, description=field_description),  # type: ignore
            )

        elif param.default == inspect.Parameter.empty:
            fields[param_name] = (param_annotation, Field(..., description=field_description))

        else:
            fields[param_name] = (param_annotation, Field(default=param.default, description=field_description))

    return create_model(
        fn.__name__,
        __doc__=description,
        __base__=BaseModel,
        **fields,
    )


def function_schema(fn: Callable, name: str | None = None, description: str | None = None) -> FunctionSchema:
    """Given a python function, generate a FunctionSchema."""
    model = signature_model(fn)
    return FunctionSchema(
        name=name or model.__name__,
        description=description if description is not None else (model.__doc__ or ""),
        parameters=pydantic_to_schema(model),
    )


def stringify_result(result: Any) -> str | None:
    """Serialize a tool's return value into text the model can consume."""
    if result is None:
        return None
    if isinstance(result, str):
        return result
    if isinstance(result, BaseModel):
        return result.model_dump_json()
    try:
        return json.dumps(result)
    except (TypeError, ValueError) as e:
        logger.debug(f"Could not serialize result as json string: {e}")
        return str(result)


class Tool(ABC):
    """A named capability the model can invoke.

    Subclasses set ``name``, ``description`` and (usually) a JSON-schema ``parameters``
    object, and implement ``run``. Override ``describe`` for dynamic schemas.
    """

    name: str
    description: str = ""
    parameters: ClassVar[dict[str, Any]] = {"type": "object", "properties": {}}

    @abstractmethod
    async def run(self, parameters: dict[str, Any]) -> ToolResult:
        """Invoke the tool with named parameters."""
        ...

    def describe(self) -> FunctionSchema:
        """Return the schema presented to the model."""
        return FunctionSchema(name=self.name, description=self.description, parameters=self.parameters)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


class FunctionTool(Tool):
    """Wrap a python callable as a Tool.

    The callable is invoked with the parameters as keyword arguments. Unless an explicit
    JSON schema is given, parameters are validated against a model derived from the
    callable's signature. Synchronous callables run in a worker thread.
    Any exception raised by the callable becomes a failed ToolResult.
    """

    def __init__(
        self,
        func: Callable[..., Any],
        name: str | None = None,
        description: str | None = None,
        parameters: dict[str, Any] | None = None,
    ) -> None:
        self._func = func
        if parameters is None:
            self._model: Type[BaseModel] | None = signature_model(func)
            schema = function_schema(func, name=name, description=description)
        else:
            self._model = None
            schema = FunctionSchema(
                name=name or func.__name__,
                description=description or extract_function_description(func) or "",
                parameters=parameters,
            )

        self._schema = schema
        self.name = schema.name
        self.description = schema.description
        self.__doc__ = func.__doc__

    def describe(self) -> FunctionSchema:
        return self._schema

    def _call_kwargs(self, parameters: dict[str, Any]) -> dict[str, Any]:
        if self._model is None:
            return dict(parameters)

        data = self._model.model_validate(parameters)
        kwargs: dict[str, Any] = {}
        for name, param in inspect.signature(self._func).parameters.items():
            if name in ("self", "cls"):
                continue
            value = getattr(data, name, None)
            if param.kind == param.VAR_KEYWORD:
                kwargs.update(value or {})
            else:
                kwargs[name] = value
        return kwargs

    async def run(self, parameters: dict[str, Any]) -> ToolResult:
        try:
            kwargs = self._call_kwargs(parameters)
            if inspect.iscoroutinefunction(self._func):
                result = await self._func(**kwargs)
            else:
                result = await asyncio.to_thread(self._func, **kwargs)
        except Exception as e:
            logger.debug(f"Function tool {self.name} raised: {e}")
            return ToolResult.failure(str(e))

        return ToolResult.ok(stringify_result(result))

    async def __call__(self, **kwargs: Any) -> ToolResult:
        return await self.run(kwargs)


def tool(
    func: Callable[..., Any] | None = None,
    *,
    name: str | None = None,
    description: str | None = None,
    parameters: dict[str, Any] | None = None,
) -> FunctionTool | Callable[[Callable[..., Any]], FunctionTool]:
    """Decorate a function into a FunctionTool.

    Can be used either as a bare decorator (@tool) or with parameters (@tool(name=...)).

    Examples
    --------
    >>> @tool
    ... def add(x: int, y: int) -> int:
    ...     "Add two numbers."
    ...     return x + y
    >>> add.describe().name
    'add'

    >>> @tool(name="shout")
    ... def upper(text: str) -> str:
    ...     "Uppercase the text."
    ...     return text.upper()
    >>> upper.name
    'shout'
    """

    def decorator(f: Callable[..., Any]) -> FunctionTool:
        return FunctionTool(f, name=name, description=description, parameters=parameters)

    if func is not None:
        return decorator(func)
    return decorator
