"""
File-based command channel to the Premiere Pro CEP panel.

Protocol:
1. Write the script to ``<dir>/cmd_<id>.jsx``.
2. The CEP panel picks it up, runs it through ``evalScript`` and writes the
   result to ``<dir>/res_<id>.json``.
3. We poll for the response file, parse it and remove both files.
"""

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from ppro_bridge.bridge.schemas import (
    COMMAND_PREFIX,
    BridgeConfig,
    Command,
    CommandResult,
    CommandState,
)
from ppro_bridge.utils.safety import validate_script

logger = logging.getLogger("ppro.bridge")

POLL_INTERVAL_S = 0.1
MAX_ABANDONED = 1000


class FileBridge:
    """
    Request/response channel over a directory shared with the host.

    Each instance carries a default ``BridgeConfig``; every call may pass its
    own. Instances share no state, so several can point at different
    directories in one process.
    """

    def __init__(self, config: Optional[BridgeConfig] = None, poll_interval: float = POLL_INTERVAL_S):
        self.config = config or BridgeConfig()
        self.poll_interval = poll_interval
        # slot -> epoch of the most recent command issued on it
        self._latest_epoch: Dict[str, int] = {}
        # id -> response path for commands whose caller gave up waiting
        self._abandoned: Dict[str, Path] = {}

    async def send_command(
        self,
        script: str,
        config: Optional[BridgeConfig] = None,
        *,
        validate: bool = True,
        slot: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Send a script to the host and wait for its response.

        Raises ScriptValidationError before touching the filesystem if the
        script is refused. Every other outcome (success, host error, timeout,
        unreadable response) is returned as ``{"success": ..., ...}``.

        Args:
            script: Complete ExtendScript source, usually from build_script().
            config: Directory/timeout for this call; defaults to the bridge's own.
            validate: Apply the blocked-pattern check. Size is always checked.
            slot: Optional logical slot. A response to an older command on the
                same slot is discarded once a newer one has been issued.

        Returns:
            The parsed response dict.
        """
        cfg = config or self.config
        validate_script(script, allow_unsafe=not validate)

        command = Command.create(script, slot=slot)

        directory = Path(cfg.directory)
        cmd_path = command.command_path(directory)
        res_path = command.response_path(directory)

        try:
            self._write_command(directory, command)
        except OSError as e:
            logger.error(f"Failed to write command {command.id} to {directory}: {e}")
            command.state = CommandState.RESOLVED_FAILURE
            _safe_unlink(cmd_path)
            return CommandResult.failure(f"Failed to dispatch command: {e}").to_dict()

        # A command that never reached the host does not take over its slot.
        if slot is not None:
            self._latest_epoch[slot] = command.epoch

        logger.info(f"Dispatched command {command.id} ({len(script)} chars, timeout {cfg.timeout_ms}ms)")
        command.state = CommandState.AWAITING

        try:
            result = await self._await_response(command, res_path, cfg.timeout_ms)
        finally:
            _safe_unlink(cmd_path)
            _safe_unlink(res_path)

        if command.state is CommandState.TIMED_OUT:
            self._abandon(command, res_path)

        logger.debug(f"Command {command.id} finished as {command.state.value}")
        return result.to_dict()

    async def send_raw_command(
        self,
        script: str,
        config: Optional[BridgeConfig] = None,
        *,
        slot: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Send a caller-authored script, skipping the blocked-pattern check.

        Only the raw scripting tool should use this. The size limit still applies.
        """
        return await self.send_command(script, config, validate=False, slot=slot)

    def collect_orphans(self) -> int:
        """
        Delete late responses written for commands that already timed out.

        Returns:
            Number of response files removed.
        """
        removed = 0
        for command_id, res_path in list(self._abandoned.items()):
            if res_path.exists():
                _safe_unlink(res_path)
                removed += 1
                del self._abandoned[command_id]
        if removed:
            logger.info(f"Removed {removed} late response file(s)")
        return removed

    @property
    def abandoned_ids(self) -> list:
        return list(self._abandoned)

    def _write_command(self, directory: Path, command: Command) -> None:
        if not directory.exists():
            directory.mkdir(mode=0o700, parents=True, exist_ok=True)
        # The panel only picks up *.jsx, so it never sees a half-written script.
        tmp_path = directory / f"{COMMAND_PREFIX}{command.id}.tmp"
        try:
            tmp_path.write_text(command.script, encoding="utf-8")
            os.replace(tmp_path, command.command_path(directory))
        except OSError:
            _safe_unlink(tmp_path)
            raise

    async def _await_response(self, command: Command, res_path: Path, timeout_ms: int) -> CommandResult:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout_ms / 1000

        while True:
            if res_path.exists():
                return self._read_response(command, res_path)

            remaining = deadline - loop.time()
            if remaining <= 0:
                command.state = CommandState.TIMED_OUT
                logger.warning(f"Command {command.id} timed out after {timeout_ms}ms")
                return CommandResult.failure(
                    f"Command timed out after {timeout_ms}ms. Is the CEP plugin running in Premiere Pro?"
                )

            await asyncio.sleep(min(self.poll_interval, remaining))

    def _read_response(self, command: Command, res_path: Path) -> CommandResult:
        try:
            raw = res_path.read_text(encoding="utf-8-sig")
            result = CommandResult.model_validate(json.loads(raw))
        except (OSError, ValueError) as e:
            command.state = CommandState.RESOLVED_FAILURE
            logger.warning(f"Unreadable response for command {command.id}: {e}")
            return CommandResult.failure(f"Failed to parse response: {e}")

        if command.slot is not None and self._latest_epoch.get(command.slot) != command.epoch:
            command.state = CommandState.RESOLVED_FAILURE
            logger.info(f"Discarding response for command {command.id}: superseded on slot '{command.slot}'")
            return CommandResult.failure(
                f"Response discarded: superseded by a newer command on slot '{command.slot}'"
            )

        command.state = CommandState.RESOLVED_SUCCESS if result.success else CommandState.RESOLVED_FAILURE
        return result

    def _abandon(self, command: Command, res_path: Path) -> None:
        self._abandoned[command.id] = res_path
        while len(self._abandoned) > MAX_ABANDONED:
            # dicts keep insertion order; drop the oldest
            self._abandoned.pop(next(iter(self._abandoned)))


def _safe_unlink(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.debug(f"Could not remove {path}: {e}")
