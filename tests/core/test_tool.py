import asyncio
import json
from typing import Any, Optional

from pydantic import BaseModel
import pytest
from typing_extensions import TypedDict

from agentloop.core.tool import (
    FunctionTool,
    Tool,
    extract_function_description,
    extract_param_descriptions,
    function_schema,
    signature_model,
    stringify_result,
    tool,
)
from agentloop.types.core import FunctionSchema, ToolResult


class TestExtractFunctionDescription:
    def test_no_docstring(self):
        def no_doc(a: int):
            return a

        # No docstring returns None
        assert extract_function_description(no_doc) is None

    def test_google_style_docstring(self):
        def fn(a: int) -> int:
            """
            This function adds a number.

            Args:
                a: number to be added.
            """
            return a

        desc = extract_function_description(fn)
        assert desc is not None
        assert desc.strip() == "This function adds a number."

    def test_sphinx_style_docstring(self):
        def fn(a: int) -> int:
            """
            This function multiplies a number.

            :param a: integer to multiply.
            """
            return a

        desc = extract_function_description(fn)
        assert desc is not None
        assert desc.strip() == "This function multiplies a number."

    def test_numpy_style_docstring(self):
        def fn(a: int) -> int:
            """
            Multiply a number by two.

            Parameters
            ----------
            a : int
                The number to be multiplied.
            """
            return a

        desc = extract_function_description(fn)
        assert desc is not None
        assert desc.strip() == "Multiply a number by two."


class TestExtractParamDescriptions:
    def test_no_docstring(self):
        def no_doc(a: int):
            return a

        assert extract_param_descriptions(no_doc) == {}

    def test_google_style_parameters(self):
        def fn(a: int, b: str) -> int:
            """
            Concatenate parameter descriptions.

            Args:
                a: description for parameter a.
                b: description for parameter b.
            """
            return a

        params = extract_param_descriptions(fn)
        assert params["a"].strip() == "description for parameter a."
        assert params["b"].strip() == "description for parameter b."

    def test_numpy_style_parameters(self):
        def fn(a: int) -> int:
            """
            Numpy style parameter description.

            Parameters
            ----------
            a : int
                The parameter a to be processed.
            """
            return a

        params = extract_param_descriptions(fn)
        assert "to be processed" in params["a"]


class TestFunctionSchema:
    def test_no_args_function(self):
        def no_args_function():
            """This function has no args."""
            return "ok"

        fs = function_schema(no_args_function)

        assert isinstance(fs, FunctionSchema)
        assert fs.name == "no_args_function"
        assert fs.description == "This function has no args."
        assert fs.parameters["type"] == "object"
        assert fs.parameters.get("properties", {}) == {}

    def test_simple_function(self):
        def simple_function(a: int, b: int = 5):
            """
            Add two numbers.

            Args:
                a: The first argument
                b: The second argument
            """
            return a + b

        fs = function_schema(simple_function)
        properties = fs.parameters["properties"]

        assert properties["a"]["type"] == "integer"
        assert properties["a"]["description"] == "The first argument"
        assert properties["b"]["default"] == 5
        assert fs.parameters["required"] == ["a"]

    def test_optional_parameter(self):
        def optional_fn(x: Optional[int] = None, y: str = "default") -> None:
            """Optional parameters."""

        fs = function_schema(optional_fn)
        properties = fs.parameters["properties"]
        assert len(properties["x"]["anyOf"]) == 2
        assert properties["y"]["default"] == "default"
        assert "required" not in fs.parameters

    def test_name_and_description_overrides(self):
        def fn(a: int) -> int:
            """Original description."""
            return a

        fs = function_schema(fn, name="renamed", description="New description")
        assert fs.name == "renamed"
        assert fs.description == "New description"

    def test_nested_data_function(self):
        class Foo(TypedDict):
            a: int
            b: str

        class InnerModel(BaseModel):
            a: int
            b: str

        def complex_args_function(inner: InnerModel, foo: Foo) -> str:
            """Format nested data."""
            return f"{inner.a}, {inner.b}, {foo['a']}, {foo['b']}"

        fs = function_schema(complex_args_function)
        assert set(fs.parameters["properties"]) == {"inner", "foo"}

        model = signature_model(complex_args_function)
        data = model.model_validate({"inner": {"a": 1, "b": "hello"}, "foo": {"a": 2, "b": "world"}})
        assert complex_args_function(data.inner, data.foo) == "1, hello, 2, world"

    def test_class_method(self):
        class SampleClass:
            def method(self, x: int) -> None:
                """Do something with x."""

        fs = function_schema(SampleClass().method)
        assert fs.name == "method"
        assert "x" in fs.parameters["properties"]
        assert "self" not in fs.parameters["properties"]

    def test_varargs_not_supported(self):
        def variadic_fn(*args: int) -> None:
            """Variadic."""

        with pytest.raises(TypeError, match="keyword parameters only"):
            function_schema(variadic_fn)


class TestStringifyResult:
    def test_string(self):
        assert stringify_result("bob") == "bob"

    def test_none(self):
        assert stringify_result(None) is None

    def test_json(self):
        assert stringify_result(6) == "6"
        assert json.loads(stringify_result({"a": [1, 2]})) == {"a": [1, 2]}

    def test_pydantic(self):
        class User(BaseModel):
            name: str

        assert stringify_result(User(name="Alice")) == '{"name":"Alice"}'

    def test_unserializable(self):
        class Thing:
            def __str__(self):
                return "thing"

        assert stringify_result(Thing()) == "thing"


class TestToolBase:
    def test_describe_uses_class_attributes(self):
        class Greeter(Tool):
            name = "greet"
            description = "Greet someone"
            parameters = {"type": "object", "properties": {"who": {"type": "string"}}, "required": ["who"]}

            async def run(self, parameters: dict[str, Any]) -> ToolResult:
                return ToolResult.ok(f"hello {parameters['who']}")

        greeter = Greeter()
        schema = greeter.describe()
        assert schema == FunctionSchema(name="greet", description="Greet someone", parameters=Greeter.parameters)
        assert asyncio.run(greeter.run({"who": "bob"})).output == "hello bob"

    def test_abstract_run(self):
        class Incomplete(Tool):
            name = "incomplete"

        with pytest.raises(TypeError):
            Incomplete()


class TestFunctionTool:
    @pytest.mark.asyncio(loop_scope="function")
    async def test_sync_function(self):
        @tool
        def add(x: int, y: int) -> int:
            """Add two numbers."""
            return x + y

        assert isinstance(add, FunctionTool)
        assert add.name == "add"
        assert add.description == "Add two numbers."

        result = await add.run({"x": 1, "y": 2})
        assert result == ToolResult.ok("3")

    @pytest.mark.asyncio(loop_scope="function")
    async def test_async_function(self):
        @tool
        async def shout(text: str) -> str:
            """Uppercase the text."""
            await asyncio.sleep(0)
            return text.upper()

        assert (await shout.run({"text": "hi"})).output == "HI"

    @pytest.mark.asyncio(loop_scope="function")
    async def test_call_with_keywords(self):
        @tool
        def add(x: int, y: int = 1) -> int:
            """Add two numbers."""
            return x + y

        assert (await add(x=41)).output == "42"

    @pytest.mark.asyncio(loop_scope="function")
    async def test_decorator_with_arguments(self):
        @tool(name="shout", description="Shout the text")
        def upper(text: str) -> str:
            return text.upper()

        assert upper.name == "shout"
        assert upper.describe().description == "Shout the text"
        assert (await upper.run({"text": "a"})).output == "A"

    @pytest.mark.asyncio(loop_scope="function")
    async def test_explicit_parameter_schema(self):
        schema = {"type": "object", "properties": {"anything": {}}}

        @tool(parameters=schema)
        def passthrough(**kwargs):
            """Return the keyword arguments."""
            return kwargs

        assert passthrough.describe().parameters == schema
        result = await passthrough.run({"anything": [1, 2]})
        assert json.loads(result.output) == {"anything": [1, 2]}

    @pytest.mark.asyncio(loop_scope="function")
    async def test_none_result(self):
        @tool
        def noop() -> None:
            """Do nothing."""

        result = await noop.run({})
        assert result.success
        assert result.output is None
        assert result.content == "Tool execution completed"

    @pytest.mark.asyncio(loop_scope="function")
    async def test_exception_becomes_failure(self):
        @tool
        def divide(x: int, y: int) -> float:
            """Divide x by y."""
            return x / y

        result = await divide.run({"x": 1, "y": 0})
        assert result.success is False
        assert result.output is None
        assert "division by zero" in result.error

    @pytest.mark.asyncio(loop_scope="function")
    async def test_invalid_parameters_become_failure(self):
        @tool
        def add(x: int, y: int) -> int:
            """Add two numbers."""
            return x + y

        result = await add.run({"x": "not a number", "y": 1})
        assert result.success is False
        assert "x" in result.error

    @pytest.mark.asyncio(loop_scope="function")
    async def test_parameters_are_validated_into_types(self):
        class Point(BaseModel):
            x: int
            y: int

        @tool
        def norm(point: Point) -> int:
            """Manhattan norm of a point."""
            return abs(point.x) + abs(point.y)

        assert (await norm.run({"point": {"x": -2, "y": 3}})).output == "5"
