from typing import Optional

from fastapi import Header, HTTPException, Request

from ppro_bridge.bridge.file_bridge import FileBridge
from ppro_bridge.tools.registry import ToolRegistry


async def verify_token(request: Request, authorization: Optional[str] = Header(None)):
    """Require ``Authorization: Bearer <MCP_AUTH_TOKEN>`` when a token is configured."""
    token = request.app.state.auth_token
    if not token:
        return
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Missing or invalid authorization header")
    if authorization[len("Bearer "):] != token:
        raise HTTPException(status_code=401, detail="Unauthorized")


def get_bridge(request: Request) -> FileBridge:
    return request.app.state.bridge


def get_registry(request: Request) -> ToolRegistry:
    return request.app.state.registry
