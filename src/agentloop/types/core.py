from __future__ import annotations

from typing import Any, Literal, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .base import JSON
from ..utilities import format_json

Role = Literal["assistant", "system", "tool", "user"]

TOOL_COMPLETED = "Tool execution completed"


class ToolCallRequest(BaseModel):
    """A model-issued request to invoke a tool."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Identifier of the call, unique within one completion.")
    name: str = Field(description="The name of the requested tool.")
    arguments: JSON = Field(default_factory=dict, description="The call arguments as a parsed JSON value.")


class Message(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Role = Field(description="The role of the message author.")
    content: str | None = Field(default=None, description="The contents of the message.")
    tool_calls: list[ToolCallRequest] | None = Field(
        default=None, description="The tool calls requested by the assistant."
    )
    tool_call_id: str | None = Field(default=None, description="The tool_call.id that requested this response.")

    @model_validator(mode="after")
    def _check_role_fields(self) -> Self:
        if self.tool_calls is not None and self.role != "assistant":
            raise ValueError("Only assistant messages may carry tool_calls")
        if self.role == "tool" and not self.tool_call_id:
            raise ValueError("Tool messages require a tool_call_id")
        if self.tool_call_id is not None and self.role != "tool":
            raise ValueError("Only tool messages may carry a tool_call_id")
        return self

    def __repr__(self):
        return format_json(self.model_dump(exclude_none=True))


# These messages are for composing Conversations (i.e., inputs to the LLM)
class SystemMessage(Message):
    role: Literal["system"] = "system"
    content: str = Field(description="The contents of the message.")


class UserMessage(Message):
    role: Literal["user"] = "user"
    content: str = Field(description="The contents of the message.")


class AssistantMessage(Message):
    role: Literal["assistant"] = "assistant"


class ToolResultMessage(Message):
    role: Literal["tool"] = "tool"
    content: str = Field(description="The result of the tool call.")
    tool_call_id: str = Field(description="The tool_call.id that requested this response.")


class ToolResult(BaseModel):
    """Outcome of a single tool invocation.

    ``output`` and ``error`` are mutually exclusive: a successful result never carries
    an error and a failed result never carries an output.
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    output: str | None = None
    error: str | None = None

    @model_validator(mode="after")
    def _check_exclusive(self) -> Self:
        if self.success and self.error:
            raise ValueError("A successful ToolResult cannot carry an error")
        if not self.success and self.output:
            raise ValueError("A failed ToolResult cannot carry an output")
        return self

    @classmethod
    def ok(cls, output: str | None = None) -> ToolResult:
        """Build a successful result."""
        return cls(success=True, output=output)

    @classmethod
    def failure(cls, error: str) -> ToolResult:
        """Build a failed result."""
        return cls(success=False, error=error)

    @property
    def content(self) -> str:
        """Text sent back to the model for this result."""
        if self.output is not None:
            return self.output
        if self.error is not None:
            return self.error
        return TOOL_COMPLETED


class FunctionSchema(BaseModel):
    """Declarative description of a tool, as presented to the model."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    parameters: dict[str, Any] = Field(default_factory=lambda: {"type": "object", "properties": {}})


class Usage(BaseModel, extra="ignore"):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class LLMResponse(BaseModel):
    """A single, complete model turn."""

    content: str | None = None
    tool_calls: list[ToolCallRequest] | None = None
    finish_reason: str | None = None
    usage: Usage | None = None

    @property
    def has_tool_calls(self) -> bool:
        return bool(self.tool_calls)


class Conversation(BaseModel):
    """Ordered message history exchanged with the model.

    The conversation only grows, except for ``clear()`` which drops everything but a
    leading system message.
    """

    messages: list[Message] = Field(default_factory=list, description="The messages of the conversation.")

    def __repr__(self):
        """Return a JSON-formatted string representation of the conversation."""
        return format_json(self.model_dump(exclude_none=True))

    def __len__(self) -> int:
        return len(self.messages)

    @classmethod
    def start(cls, system_prompt: str | None = None) -> Conversation:
        """Create a conversation, seeded with a system message if a prompt is given."""
        if system_prompt is None:
            return cls()
        return cls(messages=[SystemMessage(content=system_prompt)])

    def append(self, message: Message) -> Self:
        self.messages.append(message)
        return self

    def extend(self, messages: list[Message]) -> Self:
        self.messages.extend(messages)
        return self

    def clear(self) -> Self:
        """Drop all messages except the leading system message, if any."""
        self.messages[:] = [m for m in self.messages[:1] if m.role == "system"]
        return self

    def snapshot(self) -> tuple[Message, ...]:
        """Return an immutable view of the current messages."""
        return tuple(self.messages)
