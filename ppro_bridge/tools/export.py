from typing import Any, Dict, Optional

from pydantic import Field

from ppro_bridge.bridge.script_builder import build_tool_script, escape
from ppro_bridge.tools.base import PremiereTool, ToolCategory, ToolInput

# Rendering can take far longer than the default round trip.
EXPORT_TIMEOUT_MS = 120000


class ExportFrameInput(ToolInput):
    """Input schema for export_frame."""
    output_path: str = Field(..., description="Full output file path (e.g. '/Users/me/frame.png'). Extension determines format.")
    time_seconds: Optional[float] = Field(None, description="Time position in seconds to export. Uses current playhead if omitted.")


class ExportFrameTool(PremiereTool):
    """Export the frame under the playhead (or at a given time) as an image."""

    name: str = "export_frame"
    description: str = "Export the current frame of the active sequence as an image file."
    category: ToolCategory = ToolCategory.EXPORT
    timeout_ms: Optional[int] = EXPORT_TIMEOUT_MS
    args_schema: type[ExportFrameInput] = ExportFrameInput

    async def _arun(self, output_path: str, time_seconds: Optional[float] = None) -> Dict[str, Any]:
        seek = ""
        if time_seconds is not None:
            seek = f"seq.setPlayerPosition(__secondsToTicks({float(time_seconds)}).toString());"

        script = build_tool_script(f"""
    var seq = app.project.activeSequence;
    if (!seq) return __error("No active sequence");
    {seek}
    var outputPath = "{escape(output_path)}";
    seq.exportFramePNG(seq.getPlayerPosition().ticks, outputPath);
    return __result({{ exported: true, outputPath: outputPath }});
        """)
        return await self.send(script)
