from __future__ import annotations

import json
import logging
from typing import Any, Literal, Sequence

import json_repair
from pydantic import BaseModel

from aisuite.framework import ChatCompletionResponse as AISuiteChatCompletion
from openai.types.chat import ChatCompletion as OpenAIChatCompletion

from .core import FunctionSchema, LLMResponse, Message, ToolCallRequest, Usage
from ..core.exceptions import ResponseError

logger = logging.getLogger(__name__)


# OpenAI compatibility
class ChatCompletionMessageToolCallFunction(BaseModel, extra="ignore"):
    name: str
    arguments: str


class ChatCompletionMessageToolCall(BaseModel, extra="ignore"):
    id: str
    function: ChatCompletionMessageToolCallFunction
    type: Literal["function"] = "function"


class ChatCompletionMessage(BaseModel, extra="ignore"):
    role: Literal["assistant", "system", "tool", "user"] = "assistant"
    content: str | None = None
    tool_calls: list[ChatCompletionMessageToolCall] | None = None
    refusal: str | None = None


class ChatCompletionChoice(BaseModel, extra="ignore"):
    finish_reason: str | None = None
    message: ChatCompletionMessage


class ChatCompletion(BaseModel, extra="ignore"):
    id: int | str | None = None
    choices: list[ChatCompletionChoice]
    usage: Usage | None = None


def convert_response(response: OpenAIChatCompletion | AISuiteChatCompletion) -> ChatCompletion:
    """Unify openai and aisuite response object types."""
    if isinstance(response, OpenAIChatCompletion):
        return ChatCompletion(**response.model_dump())
    else:
        choices = []
        for choice in response.choices:
            message = ChatCompletionMessage(**choice.message.model_dump())

            choices.append(
                ChatCompletionChoice(
                    message=message,
                    finish_reason=choice.finish_reason if hasattr(choice, "finish_reason") else None,
                )
            )

        usage = getattr(response, "usage", None)
        completion_response = ChatCompletion(
            id=response.id if hasattr(response, "id") else None,
            choices=choices,
            usage=Usage.model_validate(usage, from_attributes=True) if usage is not None else None,
        )
        return completion_response


def parse_arguments(arguments: str) -> Any:
    """Parse a tool call's JSON arguments, repairing malformed JSON where possible."""
    if not arguments:
        return {}
    return json_repair.loads(arguments)


def to_llm_response(completion: ChatCompletion) -> LLMResponse:
    """Reduce a chat completion to the first choice, as seen by the agent."""
    if not completion.choices:
        raise ResponseError("No response from the model: completion has no choices")

    choice = completion.choices[0]
    msg = choice.message
    if msg.refusal and not msg.content:
        logger.warning(f"Model refused the request: {msg.refusal}")

    tool_calls = None
    if msg.tool_calls:
        tool_calls = [
            ToolCallRequest(
                id=call.id,
                name=call.function.name,
                arguments=parse_arguments(call.function.arguments),
            )
            for call in msg.tool_calls
        ]

    return LLMResponse(
        content=msg.content,
        tool_calls=tool_calls,
        finish_reason=choice.finish_reason,
        usage=completion.usage,
    )


def to_openai_message(message: Message) -> dict[str, Any]:
    """Serialize a Message into the OpenAI chat wire format."""
    payload: dict[str, Any] = {"role": message.role, "content": message.content}
    if message.tool_calls:
        payload["tool_calls"] = [
            {
                "id": call.id,
                "type": "function",
                "function": {"name": call.name, "arguments": json.dumps(call.arguments)},
            }
            for call in message.tool_calls
        ]
    if message.tool_call_id is not None:
        payload["tool_call_id"] = message.tool_call_id
    return payload


def to_openai_messages(messages: Sequence[Message]) -> list[dict[str, Any]]:
    return [to_openai_message(m) for m in messages]


def to_openai_tools(tools: Sequence[FunctionSchema]) -> list[dict[str, Any]]:
    """Serialize FunctionSchemas into the OpenAI ``tools`` request parameter."""
    return [
        {
            "type": "function",
            "function": {
                "name": schema.name,
                "description": schema.description,
                "parameters": schema.parameters,
            },
        }
        for schema in tools
    ]
