from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional


class ToolInvokeRequest(BaseModel):
    arguments: Dict[str, Any] = Field(default_factory=dict)


class ToolInvokeResponse(BaseModel):
    tool: str
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None


class ToolListResponse(BaseModel):
    count: int
    tools: List[Dict[str, Any]]


class HealthResponse(BaseModel):
    status: str
    version: str
    bridge_dir: str
    timeout_ms: int
