"""Components for the reasoning/acting loop.

Agents let the LLM control the workflow -- the model decides which tools to call and when the task is done.

An Agent:
- owns one conversation (the full context sent to the model on every turn)
- calls the model, executes the requested tool calls concurrently, and feeds the results back
- stops when the model answers without tool calls, or when the iteration bound is reached
- records every message and tool call to a behavior log

"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Iterable

from .base import LLM, Recorder
from .coercion import coerce_arguments
from .registry import ToolRegistry
from .tool import Tool
from ..history import History
from ..types.core import (
    AssistantMessage,
    Conversation,
    Message,
    ToolCallRequest,
    ToolResult,
    ToolResultMessage,
    UserMessage,
)
from ..utilities.async_helpers import synchronize

if TYPE_CHECKING:
    from ..config import Settings

logger = logging.getLogger(__name__)


class Agent:
    """Drive a bounded loop between a language model and a set of tools.

    Parameters
    ----------
    name : str
        Identity of the agent, used for logging and the behavior log.
    llm : LLM
        The completion capability.
    tools : Iterable[Tool], optional
        Tools the model may call. Names must be unique; the last duplicate wins.
    system_prompt : str, optional
        Instruction kept as the first message of the conversation.
    temperature : float, optional
        Sampling temperature passed to the model, by default 0.7
    max_iterations : int, optional
        Maximum number of model calls per ``run``, by default 10
    history : Recorder, optional
        Behavior sink; defaults to ``History(name)``.

    Examples
    --------
    >>> agent = Agent("assistant", llm=OpenAILLM(api_key=...), tools=builtin_tools())
    >>> answer = await agent.run("What time is it?")
    """

    def __init__(
        self,
        name: str,
        llm: LLM,
        tools: Iterable[Tool] | None = None,
        system_prompt: str | None = None,
        temperature: float = 0.7,
        max_iterations: int = 10,
        history: Recorder | None = None,
    ):
        if max_iterations < 1:
            raise ValueError("max_iterations must be >= 1")

        self.name = name
        self.llm = llm
        self.tools = ToolRegistry(tools or [])
        self.system_prompt = system_prompt
        self.temperature = temperature
        self.max_iterations = max_iterations
        self.history = history if history is not None else History(name)

        self._conversation = Conversation.start(system_prompt)

        logger.info(f"Agent '{name}' initialized with {len(self.tools)} tools")

    @classmethod
    def from_settings(
        cls,
        name: str,
        llm: LLM,
        settings: Settings,
        tools: Iterable[Tool] | None = None,
        system_prompt: str | None = None,
    ) -> Agent:
        """Build an agent using loop and history settings loaded at the program boundary."""
        return cls(
            name=name,
            llm=llm,
            tools=tools,
            system_prompt=system_prompt,
            temperature=settings.temperature,
            max_iterations=settings.max_iterations,
            history=History(name, directory=settings.history_dir / name),
        )

    async def run(self, prompt: str) -> str:
        """Run the reasoning/acting loop for one user prompt.

        Parameters
        ----------
        prompt : str
            The user's input.

        Returns
        -------
        str
            The last text the model produced during this run, or "" if it produced none.
            If the iteration bound is hit while the model is still calling tools, this may
            predate the latest tool results.

        Raises
        ------
        Exception
            Any error raised by the LLM propagates unchanged and aborts the run.
        """
        self._append(UserMessage(content=prompt))
        self.history.record_message("user", prompt)

        schemas = self.tools.schemas()
        final_response = ""
        completed = False
        iterations = 0

        while iterations < self.max_iterations:
            iterations += 1

            response = await self.llm.complete(
                self._conversation.snapshot(),
                tools=schemas,
                temperature=self.temperature,
            )

            if response.content is not None:
                self._append(AssistantMessage(content=response.content))
                self.history.record_message("assistant", response.content)
                final_response = response.content

            if not response.has_tool_calls:
                completed = True
                break

            tool_calls = list(response.tool_calls)
            self._append(AssistantMessage(tool_calls=tool_calls))

            # fan out, then re-associate results with their calls by position
            results = await asyncio.gather(*(self._execute_tool_call(call) for call in tool_calls))
            self._conversation.extend(
                [ToolResultMessage(content=result.content, tool_call_id=call.id) for call, result in zip(tool_calls, results)]
            )

        if not completed:
            logger.warning(f"Agent '{self.name}' reached maximum iterations ({self.max_iterations})")

        self.history.save()
        return final_response

    def run_sync(self, prompt: str) -> str:
        """Run the loop from synchronous code."""
        return synchronize(self.run, prompt)

    async def _execute_tool_call(self, call: ToolCallRequest) -> ToolResult:
        logger.debug(f"Executing tool: {call.name}")

        tool = self.tools.get(call.name)
        if tool is None:
            error = f"Tool not found: {call.name}"
            logger.error(error)
            self.history.record_tool_call(call.id, call.name, {}, False, error)
            return ToolResult.failure(error)

        parameters: dict[str, Any] = coerce_arguments(call.arguments)
        try:
            result = await tool.run(parameters)
        except Exception as e:
            error = f"Tool execution failed: {e}"
            logger.exception(error)
            result = ToolResult.failure(error)

        self.history.record_tool_call(
            call.id,
            call.name,
            parameters,
            result.success,
            result.output if result.output is not None else result.error,
        )
        return result

    def _append(self, message: Message) -> None:
        self._conversation.append(message)

    def clear_messages(self) -> None:
        """Reset the conversation to just the system message, if one was configured."""
        self._conversation.clear()

    def get_messages(self) -> tuple[Message, ...]:
        """Return an immutable snapshot of the conversation."""
        return self._conversation.snapshot()
