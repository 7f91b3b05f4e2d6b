from fastapi import APIRouter, Depends
from ppro_bridge.api.deps import verify_token
from ppro_bridge.api.v1 import health, tools

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(tools.router, prefix="/tools", tags=["tools"], dependencies=[Depends(verify_token)])
