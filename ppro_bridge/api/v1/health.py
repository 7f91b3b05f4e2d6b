from fastapi import APIRouter, Depends

from ppro_bridge import __version__
from ppro_bridge.api.deps import get_bridge
from ppro_bridge.api.schemas import HealthResponse
from ppro_bridge.bridge.file_bridge import FileBridge

router = APIRouter()


@router.get("", response_model=HealthResponse)
async def bridge_health(bridge: FileBridge = Depends(get_bridge)):
    """
    Report the bridge directory and default timeout.

    This does not contact Premiere Pro; use the ``ping`` tool for that.
    """
    return HealthResponse(
        status="ok",
        version=__version__,
        bridge_dir=str(bridge.config.directory),
        timeout_ms=bridge.config.timeout_ms,
    )
