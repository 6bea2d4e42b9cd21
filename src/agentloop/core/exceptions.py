class AgentError(Exception):
    """Base class for agentloop errors."""


class ConfigurationError(AgentError):
    """Required configuration is missing or invalid."""


class ResponseError(AgentError):
    """An LLM returned a response that cannot be used."""
