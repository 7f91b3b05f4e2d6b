"""
Base tool class for Premiere Pro bridge tools.

Every tool builds an ExtendScript body and hands it to the file bridge.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Optional

from langchain_core.tools import BaseTool
from pydantic import BaseModel, Field

from ppro_bridge.bridge.exceptions import ScriptValidationError
from ppro_bridge.bridge.file_bridge import FileBridge
from ppro_bridge.bridge.schemas import BridgeConfig

logger = logging.getLogger("ppro.tools")


class ToolCategory(str, Enum):
    """Categories for organizing tools."""
    HEALTH = "health"           # Connectivity checks
    PROJECT = "project"         # Project open/save/info
    EXPORT = "export"           # Rendering and frame export
    SCRIPTING = "scripting"     # Caller-authored ExtendScript


class ToolInput(BaseModel):
    """Base class for tool input validation."""

    pass


class ToolError(BaseModel):
    """Structured error information from tool execution."""

    tool_name: str = Field(..., description="Name of the tool that failed")
    error_type: str = Field(..., description="Type of error (validation or execution)")
    error_message: str = Field(..., description="Human-readable error message")
    retryable: bool = Field(True, description="Whether the operation can be retried")
    suggested_fix: Optional[str] = Field(None, description="Suggested fix for the error")


class PremiereTool(BaseTool, ABC):
    """
    Base class for all Premiere Pro tools.

    Subclasses set ``name``, ``description``, ``category`` and ``args_schema``
    and implement ``_arun``, which usually reduces to::

        script = build_tool_script("... return __result({...});")
        return await self.bridge.send_command(script, self.bridge_config())

    Tools are async-only; the host round trip is a polling wait.
    """

    category: ToolCategory = ToolCategory.PROJECT
    timeout_ms: Optional[int] = None  # per-tool override of the bridge default
    raw: bool = False  # skips the blocked-pattern check
    bridge: FileBridge = Field(..., exclude=True)

    def bridge_config(self, timeout_ms: Optional[int] = None) -> BridgeConfig:
        """Bridge config for one call: explicit override, then tool default."""
        return self.bridge.config.with_timeout(timeout_ms or self.timeout_ms)

    async def send(self, script: str, timeout_ms: Optional[int] = None) -> Dict[str, Any]:
        return await self.bridge.send_command(
            script, self.bridge_config(timeout_ms), validate=not self.raw
        )

    def _run(self, *args: Any, **kwargs: Any) -> Any:
        raise NotImplementedError(f"{self.name} is async-only; use ainvoke()")

    @abstractmethod
    async def _arun(self, *args: Any, **kwargs: Any) -> Dict[str, Any]:
        pass

    async def execute(self, **kwargs: Any) -> Dict[str, Any] | ToolError:
        """
        Validate arguments and run the tool.

        Returns:
            The bridge result, or ToolError if the arguments or script were refused.
        """
        try:
            return await self.ainvoke(kwargs)
        except ScriptValidationError as e:
            logger.warning(f"Tool {self.name} refused script: {e}")
            return ToolError(
                tool_name=self.name,
                error_type="validation",
                error_message=str(e),
                retryable=False,
                suggested_fix=self.get_suggested_fix(e),
            )
        except ValueError as e:
            # pydantic ValidationError for bad arguments
            return ToolError(
                tool_name=self.name,
                error_type="validation",
                error_message=str(e),
                retryable=False,
            )

    def get_suggested_fix(self, error: ScriptValidationError) -> Optional[str]:
        if error.reason == "size":
            return "Split the work into smaller scripts"
        if error.reason == "pattern":
            return "Use execute_extendscript for scripts that need eval or system calls"
        return None

    @classmethod
    def get_metadata(cls) -> Dict[str, Any]:
        fields = cls.model_fields
        return {
            "name": fields["name"].default,
            "description": fields["description"].default,
            "category": fields["category"].default.value,
            "timeout_ms": fields["timeout_ms"].default,
            "raw": fields["raw"].default,
            "module": cls.__module__,
            "class": cls.__name__,
        }
