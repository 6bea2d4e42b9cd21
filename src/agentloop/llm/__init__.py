"""LLM capability implementations."""

from .aisuite_llm import AISuiteLLM
from .openai_llm import OpenAILLM

__all__ = ["AISuiteLLM", "OpenAILLM"]
