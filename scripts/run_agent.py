#! /usr/bin/env python

"""Run a single prompt through an agent equipped with the built-in tools.

Reads OPENAI_API_KEY (and optional AGENTLOOP_* settings) from the environment or a .env file.

Usage:
    python scripts/run_agent.py "What is today's date?"
"""

import asyncio
import logging
import sys

from agentloop.config import Settings
from agentloop.core.agent import Agent
from agentloop.llm import OpenAILLM
from agentloop.tools import builtin_tools
from agentloop.utilities import basic_log_config

logger = logging.getLogger(__name__)


async def main(prompt: str) -> None:
    settings = Settings()
    llm = OpenAILLM.from_settings(settings)
    agent = Agent.from_settings(
        "assistant",
        llm,
        settings,
        tools=builtin_tools(),
        system_prompt="You are a helpful assistant. Use the available tools when they help.",
    )
    try:
        response = await agent.run(prompt)
    finally:
        await llm.close()
    print(response)


if __name__ == "__main__":
    basic_log_config(level=logging.INFO)
    if len(sys.argv) < 2:
        logger.error("Usage: run_agent.py <prompt>")
        sys.exit(1)
    asyncio.run(main(" ".join(sys.argv[1:])))
