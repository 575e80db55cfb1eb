from pydantic import BaseModel, Field
from typing import Literal


class ServiceConfig(BaseModel):
    host: str = "https://na1.fusion.foxit.com"
    client_id_env: str = "CLIENT_ID"
    client_secret_env: str = "CLIENT_SECRET"
    timeout: float = Field(default=60.0, gt=0)


class PollingConfig(BaseModel):
    interval: float = Field(default=5.0, gt=0)
    max_wait: float | None = Field(default=None, gt=0)


class PipelineConfig(BaseModel):
    concurrent_uploads: bool = False


class PDFServicesConfig(BaseModel):
    service: ServiceConfig = Field(default_factory=ServiceConfig)
    polling: PollingConfig = Field(default_factory=PollingConfig)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
