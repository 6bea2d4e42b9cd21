"""Core protocols for the reasoning/acting loop.

This module defines the capability contracts the Agent consumes.
An LLM turns a conversation (and the schemas of the available tools) into a single completion.
A Recorder is a passive, write-only sink for conversation and tool events.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol, Sequence

from typing_extensions import runtime_checkable

from ..types.core import FunctionSchema, LLMResponse, Message, Role

logger = logging.getLogger(__name__)


@runtime_checkable
class LLM(Protocol):
    """Protocol for language-model completion capabilities.

    Implementations own transport, authentication and response parsing.
    The call is atomic from the caller's point of view; errors propagate to the caller.
    """

    async def complete(
        self,
        messages: Sequence[Message],
        tools: Sequence[FunctionSchema] | None = None,
        temperature: float = 0.7,
    ) -> LLMResponse:
        """Request a completion.

        Parameters
        ----------
        messages : Sequence[Message]
            The full conversation, in order.
        tools : Sequence[FunctionSchema] or None
            Schemas of the tools the model may call. ``None`` means no tools are offered.
        temperature : float
            Sampling temperature.

        Returns
        -------
        LLMResponse
            Text content and/or requested tool calls, with finish reason and usage when available.
        """
        ...


@runtime_checkable
class Recorder(Protocol):
    """Protocol for behavior sinks that observe the agent without influencing it."""

    def record_message(self, role: Role, content: str) -> None: ...

    def record_tool_call(
        self,
        call_id: str,
        tool_name: str,
        parameters: dict[str, Any],
        success: bool,
        result: str | None,
    ) -> None: ...

    def save(self) -> None: ...
