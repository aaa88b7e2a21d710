from functools import lru_cache

from pydantic import Field
from pydantic_settings import SettingsConfigDict, BaseSettings


class ServiceSettings(BaseSettings):
    server_ip: str = Field("127.0.0.1", validation_alias="SERVER_IP")
    server_port: int = Field(10290, validation_alias="SERVER_PORT")

    log_ring_size: int = Field(200, validation_alias="LOG_RING_SIZE")
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")

    # Upper bound on decoded request bodies; the codec itself has no limit.
    max_request_bytes: int = Field(1_048_576, validation_alias="MAX_REQUEST_BYTES")
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", populate_by_name=True, extra="ignore")


@lru_cache
def get_settings() -> ServiceSettings:
    return ServiceSettings()
