"""Persistent behavior log for agents.

Every message and tool call an agent handles is appended to an in-memory list of entries.
``save()`` rewrites ``<directory>/behavior.json`` with the full list. The recorder is a
passive sink: persistence failures are logged, never raised.
"""

from __future__ import annotations

from enum import Enum
import json
import logging
from pathlib import Path
from typing import Any
import uuid

from pydantic import BaseModel, Field, ValidationError

from .types.core import Role
from .utilities import now_utc

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_ROOT = Path("~/.agentloop/agents")
BEHAVIOR_FILE = "behavior.json"


class BehaviorType(str, Enum):
    MESSAGE = "MESSAGE"
    TOOL_CALL = "TOOL_CALL"


class BehaviorEntry(BaseModel):
    id: str
    timestamp: str
    type: BehaviorType
    role: str | None = None
    content: str | None = None
    tool_name: str | None = None
    parameters: dict[str, str] | None = None
    success: bool | None = None
    result: str | None = None


class BehaviorHistory(BaseModel):
    agent_name: str
    entries: list[BehaviorEntry] = Field(default_factory=list)


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value)
    except (TypeError, ValueError):
        return str(value)


class History:
    """Behavior recorder for a single agent.

    Parameters
    ----------
    agent_name : str
        Identity of the agent; names the default history directory.
    directory : Path or str, optional
        Where ``behavior.json`` lives. Defaults to ``~/.agentloop/agents/<agent_name>``.
    """

    def __init__(self, agent_name: str, directory: Path | str | None = None):
        self.agent_name = agent_name
        if directory is None:
            directory = DEFAULT_HISTORY_ROOT / agent_name
        self.directory = Path(directory).expanduser()
        self.behavior_file = self.directory / BEHAVIOR_FILE
        self._behaviors: list[BehaviorEntry] = []
        self._load_existing()

    def _load_existing(self) -> None:
        if not self.behavior_file.is_file():
            return
        try:
            history = BehaviorHistory.model_validate_json(self.behavior_file.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            logger.warning(f"Could not load existing history: {e}")
            return
        self._behaviors.extend(history.entries)
        logger.debug(f"Loaded {len(history.entries)} existing behavior entries")

    def record_message(self, role: Role, content: str) -> None:
        self._behaviors.append(
            BehaviorEntry(
                id=str(uuid.uuid4()),
                timestamp=now_utc().isoformat(),
                type=BehaviorType.MESSAGE,
                role=role.upper(),
                content=content,
            )
        )

    def record_tool_call(
        self,
        call_id: str,
        tool_name: str,
        parameters: dict[str, Any],
        success: bool,
        result: str | None,
    ) -> None:
        self._behaviors.append(
            BehaviorEntry(
                id=call_id,
                timestamp=now_utc().isoformat(),
                type=BehaviorType.TOOL_CALL,
                tool_name=tool_name,
                parameters={k: _stringify(v) for k, v in parameters.items()},
                success=success,
                result=result,
            )
        )

    def save(self) -> None:
        """Rewrite the behavior file with every entry recorded so far."""
        history = BehaviorHistory(agent_name=self.agent_name, entries=list(self._behaviors))
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            self.behavior_file.write_text(history.model_dump_json(indent=2, exclude_none=True), encoding="utf-8")
        except Exception:
            logger.exception("Failed to save behavior history")
            return
        logger.debug(f"Saved {len(self._behaviors)} behavior entries for agent '{self.agent_name}'")

    def get_behaviors(self) -> list[BehaviorEntry]:
        return list(self._behaviors)

    def clear(self) -> None:
        """Forget all entries and delete the behavior file."""
        self._behaviors.clear()
        self.behavior_file.unlink(missing_ok=True)
