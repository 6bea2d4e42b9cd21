"""Settings for agent applications.

Settings are read once at the program boundary, from the environment and a ``.env`` file,
and passed explicitly into constructors. The core never reads the environment itself.

Example:
    settings = Settings()
    llm = OpenAILLM.from_settings(settings)
    agent = Agent.from_settings("assistant", llm, settings, tools=builtin_tools())
"""

from pathlib import Path
import textwrap

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.exceptions import ConfigurationError

# nearest file takes priority; the environment overrides all of them
ENV_FILES = ("../../.env", "../.env", ".env")


class Settings(BaseSettings):
    """Agent and OpenAI client configuration.

    Attributes:
        openai_api_key: key used by OpenAILLM (OPENAI_API_KEY)
        openai_model: chat model identifier (AGENTLOOP_MODEL)
        openai_base_url: API base url (OPENAI_BASE_URL)
        max_tokens: optional cap on generated tokens
        temperature: sampling temperature for agents
        max_iterations: iteration bound for agents
        history_dir: root directory of behavior logs
    """

    model_config = SettingsConfigDict(
        env_prefix="AGENTLOOP_",
        env_file=ENV_FILES,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    openai_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("OPENAI_API_KEY", "AGENTLOOP_OPENAI_API_KEY"),
    )
    openai_model: str = Field(
        default="gpt-4",
        validation_alias=AliasChoices("AGENTLOOP_MODEL", "AGENTLOOP_OPENAI_MODEL"),
    )
    openai_base_url: str = Field(
        default="https://api.openai.com/v1",
        validation_alias=AliasChoices("OPENAI_BASE_URL", "AGENTLOOP_OPENAI_BASE_URL"),
    )
    max_tokens: int | None = Field(default=None, ge=1)
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_iterations: int = Field(default=10, ge=1)
    history_dir: Path = Path("~/.agentloop/agents")

    def require_openai_key(self) -> str:
        """Return the OpenAI API key or raise ConfigurationError with setup instructions."""
        if not self.openai_api_key:
            raise ConfigurationError(
                textwrap.dedent(
                    """
                    OpenAI API key not found!
                    Please set OPENAI_API_KEY in one of these ways:
                    1. Set environment variable: export OPENAI_API_KEY=your-key
                    2. Create .env file in project root with: OPENAI_API_KEY=your-key
                    3. Pass it directly to the OpenAILLM constructor
                    """
                ).strip()
            )
        return self.openai_api_key
