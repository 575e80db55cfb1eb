"""Shared test fixtures for pdfservices."""

from __future__ import annotations

import pytest

from pdfservices.config.models import PDFServicesConfig
from pdfservices.gateway.base import RemoteGateway
from pdfservices.gateway.models import JobStatus
from pdfservices.jobs.poller import JobPoller
from pdfservices.pipeline.executor import PipelineExecutor


class FakeGateway(RemoteGateway):
    """In-memory gateway that replays a scripted sequence of task statuses.

    Each entry in ``statuses`` is either a raw status payload or an
    exception to raise from ``query_status``. The last entry repeats.
    """

    def __init__(self, statuses=None, content: bytes = b"%PDF-1.7 result") -> None:
        self.statuses = list(
            statuses or [{"status": "COMPLETED", "resultDocumentId": "result-1"}]
        )
        self.content = content
        self.uploads: list[tuple[str, bytes]] = []
        self.submissions: list[tuple[str, dict]] = []
        self.status_queries: list[str] = []
        self.downloads: list[str] = []
        self.closed = False

    async def upload(self, content: bytes, filename: str) -> str:
        self.uploads.append((filename, content))
        return f"doc-{len(self.uploads)}"

    async def submit(self, endpoint_path: str, payload: dict) -> str:
        self.submissions.append((endpoint_path, payload))
        return f"task-{len(self.submissions)}"

    async def query_status(self, job_id: str) -> JobStatus:
        self.status_queries.append(job_id)
        item = self.statuses.pop(0) if len(self.statuses) > 1 else self.statuses[0]
        if isinstance(item, Exception):
            raise item
        return JobStatus.from_payload(item)

    async def download(self, handle: str) -> bytes:
        self.downloads.append(handle)
        return self.content

    async def aclose(self) -> None:
        self.closed = True


class SleepRecorder:
    """Stands in for asyncio.sleep and records every requested delay."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


PENDING = {"status": "PENDING"}
RUNNING = {"status": "RUNNING"}
COMPLETED = {"status": "COMPLETED", "resultDocumentId": "result-1"}
FAILED = {"status": "FAILED", "error": {"code": "CONVERSION_ERROR"}}


@pytest.fixture
def make_gateway():
    """Factory for FakeGateway instances with a custom status script."""
    return FakeGateway


@pytest.fixture
def fake_gateway():
    return FakeGateway([PENDING, RUNNING, COMPLETED])


@pytest.fixture
def sleeps():
    return SleepRecorder()


@pytest.fixture
def executor(fake_gateway, sleeps):
    return PipelineExecutor(fake_gateway, JobPoller(fake_gateway, sleep=sleeps))


@pytest.fixture
def make_executor(sleeps):
    """Factory wiring an executor whose poller records instead of sleeping."""

    def _make(gateway, **kwargs):
        return PipelineExecutor(gateway, JobPoller(gateway, sleep=sleeps), **kwargs)

    return _make


@pytest.fixture
def sample_config():
    return PDFServicesConfig()


@pytest.fixture
def input_docx(tmp_path):
    path = tmp_path / "input.docx"
    path.write_bytes(b"PK\x03\x04 fake docx")
    return path


@pytest.fixture
def two_pdfs(tmp_path):
    a = tmp_path / "a.pdf"
    b = tmp_path / "b.pdf"
    a.write_bytes(b"%PDF-1.4 first")
    b.write_bytes(b"%PDF-1.4 second")
    return a, b
