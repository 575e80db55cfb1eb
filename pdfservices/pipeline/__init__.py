"""Pipeline subsystem: end-to-end execution of remote operations."""

from pdfservices.config.models import PDFServicesConfig
from pdfservices.gateway import create_gateway
from pdfservices.jobs import JobPoller
from pdfservices.pipeline.executor import PipelineExecutor


def create_executor(config: PDFServicesConfig) -> PipelineExecutor:
    """Wire gateway, poller and executor from app-level config.

    The caller owns the returned executor's gateway and should close it
    with ``await executor.gateway.aclose()``.
    """
    gateway = create_gateway(config.service)
    poller = JobPoller(
        gateway,
        interval=config.polling.interval,
        max_wait=config.polling.max_wait,
    )
    return PipelineExecutor(
        gateway,
        poller,
        concurrent_uploads=config.pipeline.concurrent_uploads,
    )


__all__ = ["PipelineExecutor", "create_executor"]
