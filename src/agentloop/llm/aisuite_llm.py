from __future__ import annotations

import asyncio
import logging
from typing import Any, Sequence

from aisuite import Client

from ..types.core import FunctionSchema, LLMResponse, Message
from ..types.openai_compat import convert_response, to_llm_response, to_openai_messages, to_openai_tools

logger = logging.getLogger(__name__)


class AISuiteLLM:
    """LLM capability backed by an aisuite client, for any provider aisuite supports.

    The aisuite client is synchronous; requests run in a worker thread.
    """

    def __init__(self, client: Client, model: str, request_params: dict[str, Any] | None = None):
        self.client = client
        self.model = model
        self.request_params = request_params or {}

    @property
    def model(self) -> str:
        """Get the model identifier in 'provider:name' format."""
        return self._model

    @model.setter
    def model(self, model: str):
        if not model or not isinstance(model, str):
            raise ValueError("Model must be a non-empty string")
        if ":" not in model:
            raise ValueError(
                "Model must be in format 'provider:identifier' (e.g., 'openai:gpt-4o' or 'anthropic:claude-3-5-haiku-latest')"
            )
        self._model = model

    @property
    def request_params(self) -> dict[str, Any]:
        """Request parameters used for every execution."""
        return self._request_params

    @request_params.setter
    def request_params(self, request_params: dict[str, Any]):
        for reserved in ("model", "messages", "tools", "temperature"):
            if reserved in request_params:
                raise ValueError(f"'{reserved}' should be set separately")
        self._request_params = dict(request_params)
        logger.debug(f"All API requests for {self.__class__.__name__} will use params : {self._request_params}")

    async def complete(
        self,
        messages: Sequence[Message],
        tools: Sequence[FunctionSchema] | None = None,
        temperature: float = 0.7,
    ) -> LLMResponse:
        params: dict[str, Any] = {"temperature": temperature, **self.request_params}
        if tools:
            params["tools"] = to_openai_tools(tools)

        response = await asyncio.to_thread(
            self.client.chat.completions.create,
            model=self.model,
            messages=to_openai_messages(messages),
            **params,
        )
        return to_llm_response(convert_response(response))
