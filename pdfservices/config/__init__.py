from .loader import load_config
from .models import (
    PDFServicesConfig,
    PipelineConfig,
    PollingConfig,
    ServiceConfig,
)

__all__ = [
    "PDFServicesConfig",
    "PipelineConfig",
    "PollingConfig",
    "ServiceConfig",
    "load_config",
]
