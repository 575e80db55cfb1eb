"""HTTP gateway for the PDF Services REST API, built on httpx."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urlparse

import httpx

from pdfservices.errors import AuthenticationError, TransportError
from pdfservices.gateway.base import RemoteGateway
from pdfservices.gateway.models import JobState, JobStatus, ResourceHandle

logger = logging.getLogger(__name__)

DEFAULT_HOST = "https://na1.fusion.foxit.com"
_API_ROOT = "/pdf-services/api"


def _validate_host(url: str) -> str:
    """Reject service hosts that are not plain http(s) URLs.

    Raises ValueError if the URL is malformed or contains injection patterns.
    """
    parsed = urlparse(url)

    if parsed.scheme not in ("http", "https"):
        raise ValueError(f"Service host must be http(s), got {parsed.scheme!r}")

    if "\r" in url or "\n" in url:
        raise ValueError("CRLF injection detected in service host")

    if not parsed.hostname:
        raise ValueError(f"Service host has no hostname: {url!r}")

    if parsed.scheme == "http":
        logger.warning(
            "Service host %s is not using TLS; credentials are sent in headers",
            parsed.hostname,
        )

    return url


class HttpGateway(RemoteGateway):
    """PDF Services gateway using an ``httpx.AsyncClient``.

    The client_id / client_secret pair is sent as headers on every call.
    Pass ``client`` to share a connection pool; it is then left open on
    ``aclose()``.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        host: str = DEFAULT_HOST,
        *,
        timeout: float = 60.0,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._host = _validate_host(host.rstrip("/"))
        self._headers = {"client_id": client_id, "client_secret": client_secret}
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout, transport=transport)

    @property
    def host(self) -> str:
        return self._host

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ------------------------------------------------------------------
    # RemoteGateway
    # ------------------------------------------------------------------

    async def upload(self, content: bytes, filename: str) -> ResourceHandle:
        resp = await self._request(
            "upload",
            "POST",
            "documents/upload",
            files={"file": (filename, content)},
        )
        return str(self._field(resp, "upload", "documentId"))

    async def submit(self, endpoint_path: str, payload: dict[str, Any]) -> str:
        resp = await self._request(
            f"submit {endpoint_path}",
            "POST",
            f"documents/{endpoint_path.lstrip('/')}",
            json=payload,
        )
        return str(self._field(resp, f"submit {endpoint_path}", "taskId"))

    async def query_status(self, job_id: str) -> JobStatus:
        resp = await self._request("query_status", "GET", f"tasks/{job_id}")
        payload = self._json(resp, "query_status")
        status = JobStatus.from_payload(payload)
        if status.state is JobState.COMPLETED and not status.result_handle:
            raise TransportError(
                "query_status",
                f"completed task {job_id} has no resultDocumentId",
                status_code=resp.status_code,
            )
        return status

    async def download(self, handle: ResourceHandle) -> bytes:
        resp = await self._request("download", "GET", f"documents/{handle}/download")
        return resp.content

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _url(self, path: str) -> str:
        return f"{self._host}{_API_ROOT}/{path}"

    async def _request(
        self, operation: str, method: str, path: str, **kwargs: Any
    ) -> httpx.Response:
        url = self._url(path)
        logger.debug("%s %s", method, url)
        try:
            resp = await self._client.request(method, url, headers=self._headers, **kwargs)
        except httpx.HTTPError as e:
            raise TransportError(operation, str(e) or type(e).__name__, cause=e) from e

        if resp.status_code in (401, 403):
            raise AuthenticationError(operation, resp.text, status_code=resp.status_code)
        if not resp.is_success:
            raise TransportError(operation, resp.text, status_code=resp.status_code)
        return resp

    @staticmethod
    def _json(resp: httpx.Response, operation: str) -> dict[str, Any]:
        try:
            data = resp.json()
        except ValueError as e:
            raise TransportError(
                operation, "response is not JSON", status_code=resp.status_code, cause=e
            ) from e
        if not isinstance(data, dict):
            raise TransportError(
                operation, f"unexpected response body: {data!r}", status_code=resp.status_code
            )
        return data

    @classmethod
    def _field(cls, resp: httpx.Response, operation: str, name: str) -> Any:
        data = cls._json(resp, operation)
        value = data.get(name)
        if value in (None, ""):
            raise TransportError(
                operation, f"response has no {name!r}: {data}", status_code=resp.status_code
            )
        return value
