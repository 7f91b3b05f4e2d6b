"""
Tools module for the Premiere Pro bridge.

Provides the tool registry and tool implementations.
"""

from ppro_bridge.tools.registry import ToolRegistry, build_tool_registry

__all__ = [
    "ToolRegistry",
    "build_tool_registry",
]
