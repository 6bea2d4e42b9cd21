from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Sequence

from openai import AsyncOpenAI

from ..types.core import FunctionSchema, LLMResponse, Message
from ..types.openai_compat import convert_response, to_llm_response, to_openai_messages, to_openai_tools

if TYPE_CHECKING:
    from ..config import Settings

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openai.com/v1"


class OpenAILLM:
    """LLM capability backed by the OpenAI chat completions API.

    Parameters
    ----------
    api_key : str, optional
        OpenAI API key. Ignored when ``client`` is given.
    model : str, optional
        Model to use, by default "gpt-4"
    base_url : str, optional
        Base URL of the API, by default the public OpenAI endpoint.
    max_tokens : int, optional
        Maximum tokens in the response.
    client : AsyncOpenAI, optional
        A preconfigured client.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gpt-4",
        base_url: str = DEFAULT_BASE_URL,
        max_tokens: int | None = None,
        client: AsyncOpenAI | None = None,
    ):
        self.model = model
        self.max_tokens = max_tokens
        self.client = client if client is not None else AsyncOpenAI(api_key=api_key, base_url=base_url, timeout=60.0)

    @classmethod
    def from_settings(cls, settings: Settings) -> OpenAILLM:
        return cls(
            api_key=settings.require_openai_key(),
            model=settings.openai_model,
            base_url=settings.openai_base_url,
            max_tokens=settings.max_tokens,
        )

    def _request_params(
        self,
        messages: Sequence[Message],
        tools: Sequence[FunctionSchema] | None,
        temperature: float,
    ) -> dict[str, Any]:
        params: dict[str, Any] = {
            "model": self.model,
            "messages": to_openai_messages(messages),
            "temperature": temperature,
        }
        if tools:
            params["tools"] = to_openai_tools(tools)
        if self.max_tokens is not None:
            params["max_tokens"] = self.max_tokens
        return params

    async def complete(
        self,
        messages: Sequence[Message],
        tools: Sequence[FunctionSchema] | None = None,
        temperature: float = 0.7,
    ) -> LLMResponse:
        logger.debug(f"Sending request to OpenAI with {len(messages)} messages")
        response = await self.client.chat.completions.create(**self._request_params(messages, tools, temperature))
        return to_llm_response(convert_response(response))

    async def close(self) -> None:
        await self.client.close()
