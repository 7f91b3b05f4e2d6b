"""
Tools API endpoints.

GET  /api/v1/tools                -> schemas of all registered tools
GET  /api/v1/tools/{name}         -> schema of one tool
POST /api/v1/tools/{name}/invoke  -> run a tool against Premiere Pro
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from ppro_bridge.api.deps import get_registry
from ppro_bridge.api.schemas import ToolInvokeRequest, ToolInvokeResponse, ToolListResponse
from ppro_bridge.tools.base import ToolError
from ppro_bridge.tools.registry import ToolRegistry

logger = logging.getLogger("ppro.api")

router = APIRouter()


@router.get("", response_model=ToolListResponse)
async def list_tools(registry: ToolRegistry = Depends(get_registry)):
    schemas = list(registry.get_all_schemas().values())
    return ToolListResponse(count=len(schemas), tools=schemas)


@router.get("/{tool_name}")
async def get_tool(tool_name: str, registry: ToolRegistry = Depends(get_registry)):
    schema = registry.get_tool_schema(tool_name)
    if schema is None:
        raise HTTPException(status_code=404, detail=f"Unknown tool: {tool_name}")
    return schema


@router.post("/{tool_name}/invoke", response_model=ToolInvokeResponse)
async def invoke_tool(
    tool_name: str,
    request: ToolInvokeRequest,
    registry: ToolRegistry = Depends(get_registry),
):
    """
    Run one tool.

    Host-side failures (including timeouts) come back as 200 with
    ``success: false``; refused arguments or scripts are a 400.
    """
    tool = registry.get_tool(tool_name)
    if tool is None:
        raise HTTPException(status_code=404, detail=f"Unknown tool: {tool_name}")

    logger.info(f"Invoking tool {tool_name}")
    result = await tool.execute(**request.arguments)

    if isinstance(result, ToolError):
        raise HTTPException(status_code=400, detail=result.model_dump())

    return ToolInvokeResponse(
        tool=tool_name,
        success=result.get("success", False),
        data=result.get("data"),
        error=result.get("error"),
    )
