import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from ppro_bridge import __version__
from ppro_bridge.api.router import api_router
from ppro_bridge.bridge.file_bridge import FileBridge
from ppro_bridge.bridge.janitor import sweep
from ppro_bridge.config import Settings, settings
from ppro_bridge.tools.registry import build_tool_registry

logger = logging.getLogger("ppro.api")


def configure_logging(level: str) -> None:
    # stderr only; stdout belongs to a stdio transport when one is attached
    logging.basicConfig(
        level=level.upper(),
        stream=sys.stderr,
        format="%(asctime)s [%(name)s] %(levelname)s %(message)s",
    )


def create_app(app_settings: Settings = settings) -> FastAPI:
    bridge_config = app_settings.bridge_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup and shutdown logic"""
        configure_logging(app_settings.LOG_LEVEL)
        logger.info(f"Premiere Pro bridge {__version__} starting up")
        logger.info(f"Temp directory: {bridge_config.directory}")

        # Clean up stale files from a previous session
        sweep(bridge_config.directory)

        bridge = FileBridge(bridge_config)
        app.state.bridge = bridge
        app.state.registry = build_tool_registry(bridge)
        app.state.auth_token = app_settings.MCP_AUTH_TOKEN
        if not app_settings.MCP_AUTH_TOKEN:
            logger.info("Auth: none (set MCP_AUTH_TOKEN to enable)")
        yield
        bridge.collect_orphans()
        logger.info("Premiere Pro bridge shutting down")

    app = FastAPI(
        title="Premiere Pro Bridge",
        description="Tool server driving Premiere Pro through a file-based ExtendScript bridge",
        version=__version__,
        lifespan=lifespan,
    )
    app.include_router(api_router, prefix="/api/v1")

    @app.get("/")
    async def root():
        return {
            "service": "Premiere Pro Bridge",
            "version": __version__,
            "status": "running",
        }

    @app.get("/health")
    async def health_check():
        return {"status": "ok", "service": "premiere-pro-bridge", "bridge_dir": str(bridge_config.directory)}

    return app


app = create_app()


def run() -> None:
    uvicorn.run(
        "ppro_bridge.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    run()
