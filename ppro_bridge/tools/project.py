"""
Project tools: inspect and save the open Premiere Pro project.
"""

from typing import Any, Dict

from pydantic import Field

from ppro_bridge.bridge.script_builder import build_tool_script, escape
from ppro_bridge.tools.base import PremiereTool, ToolCategory, ToolInput


class NoArgsInput(ToolInput):
    pass


class SaveProjectAsInput(ToolInput):
    """Input schema for save_project_as."""
    path: str = Field(..., description="Full file path to save the project to (e.g. '/Users/me/projects/MyProject.prproj')")


class GetProjectInfoTool(PremiereTool):
    """Name, path and sequences of the open project."""

    name: str = "get_project_info"
    description: str = "Get the open project's name, path, active sequence and list of sequences."
    category: ToolCategory = ToolCategory.PROJECT
    args_schema: type[NoArgsInput] = NoArgsInput

    async def _arun(self) -> Dict[str, Any]:
        script = build_tool_script("""
    var project = app.project;
    if (!project) return __error("No project is open");
    var sequences = [];
    for (var i = 0; i < project.sequences.numSequences; i++) {
      var seq = project.sequences[i];
      sequences.push({ id: seq.sequenceID, name: seq.name });
    }
    return __result({
      name: project.name,
      path: project.path,
      activeSequence: project.activeSequence ? project.activeSequence.name : null,
      sequences: sequences
    });
        """)
        return await self.send(script)


class SaveProjectTool(PremiereTool):
    name: str = "save_project"
    description: str = "Save the current Premiere Pro project."
    category: ToolCategory = ToolCategory.PROJECT
    args_schema: type[NoArgsInput] = NoArgsInput

    async def _arun(self) -> Dict[str, Any]:
        script = build_tool_script("""
    var project = app.project;
    if (!project) return __error("No project is open");
    project.save();
    return __result({ saved: true, name: project.name, path: project.path });
        """)
        return await self.send(script)


class SaveProjectAsTool(PremiereTool):
    name: str = "save_project_as"
    description: str = "Save the current project to a new location."
    category: ToolCategory = ToolCategory.PROJECT
    args_schema: type[SaveProjectAsInput] = SaveProjectAsInput

    async def _arun(self, path: str) -> Dict[str, Any]:
        target = escape(path)
        script = build_tool_script(f"""
    var project = app.project;
    if (!project) return __error("No project is open");
    project.saveAs("{target}");
    return __result({{ saved: true, path: "{target}" }});
        """)
        return await self.send(script)
