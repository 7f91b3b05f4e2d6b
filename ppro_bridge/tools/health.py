from typing import Any, Dict, Optional

from ppro_bridge.bridge.script_builder import build_tool_script
from ppro_bridge.tools.base import PremiereTool, ToolCategory, ToolInput


class PingInput(ToolInput):
    """Ping takes no arguments."""


class PingTool(PremiereTool):
    """Verify the CEP panel is running and connected to Premiere Pro."""

    name: str = "ping"
    description: str = (
        "Health check: verify the CEP plugin is running and connected to Premiere Pro. "
        "Call this before other tools to confirm connectivity."
    )
    category: ToolCategory = ToolCategory.HEALTH
    timeout_ms: Optional[int] = 5000
    args_schema: type[PingInput] = PingInput

    async def _arun(self) -> Dict[str, Any]:
        script = build_tool_script("""
    var version = app.version;
    var projectName = app.project && app.project.name ? app.project.name : "No project open";
    var activeSeq = app.project && app.project.activeSequence ? app.project.activeSequence.name : "None";
    return __result({
      connected: true,
      premiereVersion: version,
      projectName: projectName,
      activeSequence: activeSeq
    });
        """)
        return await self.send(script)
