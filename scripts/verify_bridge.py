import asyncio
import json
import os
import sys
import tempfile
from pathlib import Path

# Add the project root to sys.path
sys.path.append(os.getcwd())

from ppro_bridge.bridge.file_bridge import FileBridge
from ppro_bridge.bridge.janitor import sweep
from ppro_bridge.bridge.schemas import BridgeConfig
from ppro_bridge.bridge.exceptions import ScriptValidationError
from ppro_bridge.tools.registry import build_tool_registry


# Mock CEP panel: answers every cmd_*.jsx it finds
async def mock_host(directory: Path, stop: asyncio.Event):
    handled = set()
    while not stop.is_set():
        for cmd in directory.glob("cmd_*.jsx"):
            if cmd.name in handled:
                continue
            handled.add(cmd.name)
            command_id = cmd.name[len("cmd_"):-len(".jsx")]
            script = cmd.read_text(encoding="utf-8")
            print(f"Mock host received {cmd.name} ({len(script)} chars)")
            if "app.version" in script:
                payload = {"success": True, "data": {"connected": True, "premiereVersion": "25.0"}}
            else:
                payload = {"success": True, "data": {"echo": command_id}}
            (directory / f"res_{command_id}.json").write_text(json.dumps(payload), encoding="utf-8")
        await asyncio.sleep(0.05)


async def run_bridge_test(directory: Path):
    print("\n--- Testing File Bridge ---")
    bridge = FileBridge(BridgeConfig(directory=directory, timeout_ms=3000))
    registry = build_tool_registry(bridge)

    try:
        print("1. Testing 'ping' tool...")
        res = await registry.get_tool("ping").execute()
        print(f"✅ Result: {res}")

        print("\n2. Testing concurrent raw commands...")
        results = await asyncio.gather(*(bridge.send_raw_command(f"var n = {i};") for i in range(5)))
        ids = {r["data"]["echo"] for r in results}
        print(f"✅ {len(ids)} distinct responses")

        print("\n3. Testing blocked pattern...")
        try:
            await bridge.send_command('eval("1")')
            print("❌ ERROR: script was not refused")
        except ScriptValidationError as e:
            print(f"✅ Refused: {e}")

    except Exception as e:
        print(f"❌ ERROR: {e}")


async def run_timeout_test(directory: Path):
    print("\n--- Testing Timeout (no host) ---")
    bridge = FileBridge(BridgeConfig(directory=directory, timeout_ms=500))
    res = await bridge.send_command("var x = 1;")
    print(f"✅ Result: {res}")


async def main():
    with tempfile.TemporaryDirectory() as tmp:
        directory = Path(tmp) / "premiere-mcp-bridge"
        print(f"Swept {sweep(directory)} stale file(s)")

        stop = asyncio.Event()
        host_task = asyncio.create_task(mock_host(directory, stop))
        await run_bridge_test(directory)
        stop.set()
        await host_task

        await run_timeout_test(Path(tmp) / "no-host")

if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
