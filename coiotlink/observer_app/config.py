from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import SettingsConfigDict, BaseSettings


class CoIoTSettings(BaseSettings):
    device_host: Optional[str] = Field(None, validation_alias="COIOT_DEVICE_HOST")
    coap_port: int = Field(5683, validation_alias="COIOT_COAP_PORT")
    request_timeout: float = Field(10.0, validation_alias="COIOT_REQUEST_TIMEOUT")

    multicast_group: str = Field("224.0.1.187", validation_alias="COIOT_MULTICAST_GROUP")
    multicast_port: int = Field(5683, validation_alias="COIOT_MULTICAST_PORT")
    listen_interface: str = Field("0.0.0.0", validation_alias="COIOT_LISTEN_INTERFACE")
    receive_timeout: float = Field(60.0, gt=0, validation_alias="COIOT_RECEIVE_TIMEOUT")

    cache_descriptors: bool = Field(True, validation_alias="COIOT_CACHE_DESCRIPTORS")
    log_ring_size: int = Field(200, validation_alias="COIOT_LOG_RING_SIZE")
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", populate_by_name=True, extra="ignore")


@lru_cache
def get_settings() -> CoIoTSettings:
    return CoIoTSettings()
