from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from ppro_bridge.bridge.schemas import DEFAULT_TEMP_DIR, DEFAULT_TIMEOUT_MS, BridgeConfig


class Settings(BaseSettings):
    # API Settings
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    MCP_AUTH_TOKEN: Optional[str] = None

    # Bridge Settings
    PREMIERE_TEMP_DIR: Optional[str] = None
    PREMIERE_TIMEOUT_MS: int = DEFAULT_TIMEOUT_MS

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    def bridge_config(self) -> BridgeConfig:
        directory = Path(self.PREMIERE_TEMP_DIR) if self.PREMIERE_TEMP_DIR else DEFAULT_TEMP_DIR
        return BridgeConfig(directory=directory, timeout_ms=self.PREMIERE_TIMEOUT_MS)


settings = Settings()
