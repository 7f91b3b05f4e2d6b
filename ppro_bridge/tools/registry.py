"""
Tool registry for the Premiere Pro bridge.

Tools are bound to a FileBridge when registered, so two registries can talk
to two different bridge directories in one process.
"""

import logging
from typing import Any, Dict, List, Optional, Type

from ppro_bridge.bridge.file_bridge import FileBridge
from ppro_bridge.tools.base import PremiereTool
from ppro_bridge.tools.export import ExportFrameTool
from ppro_bridge.tools.health import PingTool
from ppro_bridge.tools.project import GetProjectInfoTool, SaveProjectAsTool, SaveProjectTool
from ppro_bridge.tools.scripting import EvaluateExpressionTool, ExecuteScriptTool

logger = logging.getLogger("ppro.tools")

BUILTIN_TOOLS: List[Type[PremiereTool]] = [
    PingTool,
    GetProjectInfoTool,
    SaveProjectTool,
    SaveProjectAsTool,
    ExportFrameTool,
    ExecuteScriptTool,
    EvaluateExpressionTool,
]


class ToolRegistry:
    """
    Registry for managing the tools exposed to clients.
    """

    def __init__(self, bridge: FileBridge):
        self.bridge = bridge
        self._tools: Dict[str, Type[PremiereTool]] = {}
        self._tool_instances: Dict[str, PremiereTool] = {}

    def register_tool(self, tool_class: Type[PremiereTool]) -> None:
        """
        Register a tool class, binding an instance to this registry's bridge.

        Raises:
            ValueError: If a tool with the same name is already registered.
        """
        metadata = tool_class.get_metadata()
        name = metadata["name"]
        if name in self._tools:
            raise ValueError(f"Tool '{name}' is already registered")

        self._tools[name] = tool_class
        self._tool_instances[name] = tool_class(bridge=self.bridge)
        logger.debug(f"Registered tool {name} ({metadata['class']})")

    def register_tools(self, tool_classes: List[Type[PremiereTool]]) -> None:
        for tool_class in tool_classes:
            self.register_tool(tool_class)

    def get_tool(self, tool_name: str) -> Optional[PremiereTool]:
        return self._tool_instances.get(tool_name)

    def get_tool_names(self) -> List[str]:
        return list(self._tools.keys())

    def tool_exists(self, tool_name: str) -> bool:
        return tool_name in self._tools

    def get_tools_by_category(self, category: str) -> List[str]:
        """
        Get all tool names in a category.

        Args:
            category: Category value to filter by (health, project, export, scripting)

        Returns:
            List of tool names in the category
        """
        return [
            name for name, tool_class in self._tools.items()
            if tool_class.get_metadata().get("category") == category
        ]

    def search_tools(self, query: str) -> List[str]:
        """Tool names whose name or description contains the query."""
        query_lower = query.lower()
        return [
            name for name, tool_class in self._tools.items()
            if query_lower in name.lower()
            or query_lower in tool_class.get_metadata()["description"].lower()
        ]

    def get_tool_schema(self, tool_name: str) -> Optional[Dict[str, Any]]:
        """
        Get the schema for a tool.

        Returns:
            Tool schema dictionary or None if tool not found
        """
        tool_class = self._tools.get(tool_name)
        if tool_class is None:
            return None

        metadata = tool_class.get_metadata()
        schema = {
            "name": metadata["name"],
            "description": metadata["description"],
            "category": metadata["category"],
            "timeout_ms": metadata["timeout_ms"],
            "raw": metadata["raw"],
        }
        args_schema = tool_class.model_fields["args_schema"].default
        if args_schema is not None:
            schema["input_schema"] = args_schema.model_json_schema()
        return schema

    def get_all_schemas(self) -> Dict[str, Dict[str, Any]]:
        return {name: self.get_tool_schema(name) for name in self.get_tool_names()}


def build_tool_registry(bridge: FileBridge) -> ToolRegistry:
    """Create a registry with every built-in tool bound to ``bridge``."""
    registry = ToolRegistry(bridge)
    registry.register_tools(BUILTIN_TOOLS)
    return registry
