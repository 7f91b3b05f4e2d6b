"""
Scripting tools for caller-authored ExtendScript.

These are the only tools that send through the raw path: the caller writes
the code, so the blocked-pattern check cannot apply. The size limit still does.
"""

from typing import Any, Dict, Optional

from pydantic import Field

from ppro_bridge.bridge.script_builder import build_tool_script
from ppro_bridge.tools.base import PremiereTool, ToolCategory, ToolInput

EXECUTE_DESCRIPTION = """Execute custom ExtendScript code in Premiere Pro. The code runs inside a function with helper functions available.

IMPORTANT: write ES3 syntax (var instead of let/const, no arrow functions, no template literals, no destructuring).

Available helpers (auto-prepended):
- __ticksToSeconds(ticks) / __secondsToTicks(seconds): time conversion
- __ticksToTimecode(ticks, fps): timecode string
- __findSequence(idOrName): find sequence by name or ID
- __findProjectItem(nodeIdOrName): find project item recursively
- __findClip(nodeId): find clip in active sequence, returns {clip, trackIndex, clipIndex, trackType}
- __getAllClips(seq): get all clips in a sequence
- __result(data): return success with data (MUST call this or __error)
- __error(msg): return error message
- TICKS_PER_SECOND: constant 254016000000

Your code MUST end with: return __result({...}) or return __error("message")"""


class ExecuteScriptInput(ToolInput):
    """Input schema for execute_extendscript."""
    code: str = Field(..., description="ExtendScript code to execute (ES3 syntax). Must use return __result({...}) or return __error('...').")
    timeout_ms: Optional[int] = Field(None, gt=0, description="Custom timeout in milliseconds (default: 30000). Increase for long operations.")


class EvaluateExpressionInput(ToolInput):
    """Input schema for evaluate_expression."""
    expression: str = Field(..., description="ExtendScript expression to evaluate (e.g. 'app.project.name')")


class ExecuteScriptTool(PremiereTool):
    name: str = "execute_extendscript"
    description: str = EXECUTE_DESCRIPTION
    category: ToolCategory = ToolCategory.SCRIPTING
    raw: bool = True
    args_schema: type[ExecuteScriptInput] = ExecuteScriptInput

    async def _arun(self, code: str, timeout_ms: Optional[int] = None) -> Dict[str, Any]:
        return await self.send(build_tool_script(code), timeout_ms)


class EvaluateExpressionTool(PremiereTool):
    """Evaluate one expression and return its value and type."""

    name: str = "evaluate_expression"
    description: str = (
        "Evaluate a simple ExtendScript expression and return its value, e.g. "
        "'app.project.name' or 'app.project.activeSequence.videoTracks.numTracks'. "
        "Use for quick queries, not full scripts."
    )
    category: ToolCategory = ToolCategory.SCRIPTING
    raw: bool = True
    args_schema: type[EvaluateExpressionInput] = EvaluateExpressionInput

    async def _arun(self, expression: str) -> Dict[str, Any]:
        script = build_tool_script(f"""
    try {{
      var val = {expression};
      return __result({{ value: val, type: typeof val }});
    }} catch(e) {{
      return __error("Expression error: " + e.toString());
    }}
        """)
        return await self.send(script)
