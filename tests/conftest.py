"""Test configuration and fixtures"""

import asyncio
import json
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Set

import pytest

from ppro_bridge.bridge.file_bridge import FileBridge
from ppro_bridge.bridge.schemas import BridgeConfig


class FakeHost:
    """
    Stands in for the CEP panel: watches the directory for command files and
    writes response files for them.
    """

    def __init__(self, directory: Path):
        self.directory = directory
        self.scripts: Dict[str, str] = {}
        self._handled: Set[str] = set()

    def pending(self) -> List[Path]:
        if not self.directory.exists():
            return []
        return sorted(
            p for p in self.directory.glob("cmd_*.jsx")
            if self._command_id(p) not in self._handled
        )

    async def wait_for_commands(self, count: int = 1, timeout: float = 2.0) -> List[Path]:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while loop.time() < deadline:
            found = self.pending()
            if len(found) >= count:
                return found[:count]
            await asyncio.sleep(0.005)
        raise AssertionError(f"expected {count} command file(s) in {self.directory}")

    async def serve(
        self,
        count: int = 1,
        payload: Optional[Callable[[str, str], Any]] = None,
        raw: Optional[str] = None,
        delay: float = 0.0,
    ) -> List[str]:
        """
        Answer ``count`` commands. ``payload(command_id, script)`` builds the
        response object; ``raw`` writes a literal body instead.
        """
        served = []
        while len(served) < count:
            for cmd_path in await self.wait_for_commands(1):
                command_id = self._command_id(cmd_path)
                self._handled.add(command_id)
                script = cmd_path.read_text(encoding="utf-8")
                self.scripts[command_id] = script
                if delay:
                    await asyncio.sleep(delay)
                if raw is not None:
                    body = raw
                elif payload is not None:
                    body = json.dumps(payload(command_id, script))
                else:
                    body = json.dumps({"success": True, "data": {"id": command_id}})
                self.response_path(command_id).write_text(body, encoding="utf-8")
                served.append(command_id)
        return served

    def response_path(self, command_id: str) -> Path:
        return self.directory / f"res_{command_id}.json"

    @staticmethod
    def _command_id(path: Path) -> str:
        return path.name[len("cmd_"):-len(".jsx")]


@pytest.fixture
def bridge_dir(tmp_path: Path) -> Path:
    return tmp_path / "premiere-mcp-bridge"


@pytest.fixture
def bridge_config(bridge_dir: Path) -> BridgeConfig:
    return BridgeConfig(directory=bridge_dir, timeout_ms=2000)


@pytest.fixture
def bridge(bridge_config: BridgeConfig) -> FileBridge:
    return FileBridge(bridge_config, poll_interval=0.01)


@pytest.fixture
def host(bridge_dir: Path) -> FakeHost:
    return FakeHost(bridge_dir)
