from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PORT = "8001"

ENTRY_FILE = "index.html"
HEALTH_PATH = "/health"

READ_TIMEOUT = 15.0
WRITE_TIMEOUT = 15.0
IDLE_TIMEOUT = 60.0
MAX_HEADER_BYTES = 1 << 20  # 1 MiB


class Settings(BaseSettings):
    PORT: str = DEFAULT_PORT

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @field_validator("PORT", mode="before")
    @classmethod
    def _empty_port_means_default(cls, v: object) -> object:
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_PORT
        return v.strip() if isinstance(v, str) else v
