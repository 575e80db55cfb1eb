"""Abstract remote service interface for pdfservices."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pdfservices.gateway.models import JobStatus, ResourceHandle


class RemoteGateway(ABC):
    """Transport-agnostic view of the document service.

    Every method raises ``TransportError`` when the service answers with a
    non-success response or cannot be reached.
    """

    @abstractmethod
    async def upload(self, content: bytes, filename: str) -> ResourceHandle:
        """Upload one document and return its handle."""
        ...

    @abstractmethod
    async def submit(self, endpoint_path: str, payload: dict[str, Any]) -> str:
        """Start a job on ``endpoint_path`` and return the job id."""
        ...

    @abstractmethod
    async def query_status(self, job_id: str) -> JobStatus:
        ...

    @abstractmethod
    async def download(self, handle: ResourceHandle) -> bytes:
        ...

    async def aclose(self) -> None:
        """Release transport resources. No-op by default."""

    async def __aenter__(self) -> RemoteGateway:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
