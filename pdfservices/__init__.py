"""pdfservices - async job orchestration client for a remote PDF conversion service."""

from pdfservices.config import PDFServicesConfig, load_config
from pdfservices.errors import (
    AuthenticationError,
    CatalogIncomplete,
    InputCountError,
    JobFailed,
    JobTimedOut,
    LocalIOError,
    PDFServicesError,
    TransportError,
    UnknownOperation,
    UnsupportedConversion,
)
from pdfservices.gateway import HttpGateway, RemoteGateway, create_gateway
from pdfservices.jobs import Job, JobPoller
from pdfservices.operations import (
    OperationDescriptor,
    list_operations,
    resolve_by_extension,
    resolve_by_name,
)
from pdfservices.pipeline import PipelineExecutor, create_executor

__version__ = "0.1.0"

__all__ = [
    "AuthenticationError",
    "CatalogIncomplete",
    "HttpGateway",
    "InputCountError",
    "Job",
    "JobFailed",
    "JobPoller",
    "JobTimedOut",
    "LocalIOError",
    "OperationDescriptor",
    "PDFServicesConfig",
    "PDFServicesError",
    "PipelineExecutor",
    "RemoteGateway",
    "TransportError",
    "UnknownOperation",
    "UnsupportedConversion",
    "create_executor",
    "create_gateway",
    "list_operations",
    "load_config",
    "resolve_by_extension",
    "resolve_by_name",
]
