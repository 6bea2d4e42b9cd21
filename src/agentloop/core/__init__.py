"""Core components of the reasoning/acting loop.

This module provides the capability contracts (LLM, Tool), the tool registry,
argument coercion, and the Agent that orchestrates them.
"""

from .agent import Agent
from .base import LLM, Recorder
from .coercion import coerce_arguments, coerce_value
from .exceptions import AgentError, ConfigurationError, ResponseError
from .registry import ToolRegistry
from .tool import FunctionTool, Tool, function_schema, tool

__all__ = [
    # Capability protocols
    "LLM",
    "Recorder",
    # Tools
    "Tool",
    "FunctionTool",
    "ToolRegistry",
    "function_schema",
    "tool",
    # Arguments
    "coerce_arguments",
    "coerce_value",
    # Orchestration
    "Agent",
    # Exceptions
    "AgentError",
    "ConfigurationError",
    "ResponseError",
]
