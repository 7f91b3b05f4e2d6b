import itertools
import os
import tempfile
import time
import uuid
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_TEMP_DIR = Path(tempfile.gettempdir()) / "premiere-mcp-bridge"
DEFAULT_TIMEOUT_MS = 30000

COMMAND_PREFIX = "cmd_"
RESPONSE_PREFIX = "res_"
COMMAND_SUFFIX = ".jsx"
RESPONSE_SUFFIX = ".json"

_sequence = itertools.count(1)


def next_epoch() -> int:
    """Process-wide, strictly increasing command sequence number."""
    return next(_sequence)


class BridgeConfig(BaseModel):
    """Where the bridge writes command files and how long it waits for replies."""

    model_config = ConfigDict(frozen=True)

    directory: Path = Field(default_factory=lambda: DEFAULT_TEMP_DIR)
    timeout_ms: int = Field(DEFAULT_TIMEOUT_MS, gt=0)

    def with_timeout(self, timeout_ms: Optional[int]) -> "BridgeConfig":
        if not timeout_ms:
            return self
        return self.model_copy(update={"timeout_ms": timeout_ms})


class CommandState(str, Enum):
    CREATED = "created"
    AWAITING = "awaiting"
    RESOLVED_SUCCESS = "resolved_success"
    RESOLVED_FAILURE = "resolved_failure"
    TIMED_OUT = "timed_out"


class Command(BaseModel):
    """One script dispatched to the host, identified by a never-reused id."""

    id: str
    script: str
    epoch: int
    slot: Optional[str] = None
    state: CommandState = CommandState.CREATED

    @classmethod
    def create(cls, script: str, slot: Optional[str] = None) -> "Command":
        epoch = next_epoch()
        command_id = f"{int(time.time() * 1000)}_{epoch}_{uuid.uuid4().hex[:8]}"
        return cls(id=command_id, script=script, epoch=epoch, slot=slot)

    @property
    def command_filename(self) -> str:
        return f"{COMMAND_PREFIX}{self.id}{COMMAND_SUFFIX}"

    @property
    def response_filename(self) -> str:
        return f"{RESPONSE_PREFIX}{self.id}{RESPONSE_SUFFIX}"

    def command_path(self, directory: os.PathLike) -> Path:
        return Path(directory) / self.command_filename

    def response_path(self, directory: os.PathLike) -> Path:
        return Path(directory) / self.response_filename


class CommandResult(BaseModel):
    """Wire shape of a response file: success flag plus data or error."""

    model_config = ConfigDict(extra="allow")

    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None

    @classmethod
    def failure(cls, error: str) -> "CommandResult":
        return cls(success=False, error=error)

    def to_dict(self) -> dict:
        # Only the keys the host actually wrote.
        return self.model_dump(exclude_unset=True)
