"""Pipeline executor: upload, submit, poll, download, persist."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from pdfservices.errors import InputCountError
from pdfservices.gateway.base import RemoteGateway
from pdfservices.gateway.models import ResourceHandle
from pdfservices.jobs.poller import JobPoller
from pdfservices.operations.catalog import resolve_by_extension, resolve_by_name
from pdfservices.operations.models import OperationDescriptor
from pdfservices.output.files import read_input, write_atomic

logger = logging.getLogger(__name__)


class PipelineExecutor:
    """Runs one operation end to end against a remote gateway.

    Runs share no state beyond the gateway, so several may execute
    concurrently on one executor. Remote uploads are not cleaned up when a
    later step fails; the service's retention policy handles them.
    """

    def __init__(
        self,
        gateway: RemoteGateway,
        poller: JobPoller | None = None,
        *,
        concurrent_uploads: bool = False,
    ) -> None:
        self.gateway = gateway
        self.poller = poller or JobPoller(gateway)
        self.concurrent_uploads = concurrent_uploads

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def run(
        self,
        operation: str | OperationDescriptor,
        inputs: Sequence[str | Path],
        output_path: str | Path,
        options: Mapping[str, Any] | None = None,
    ) -> Path:
        """Run ``operation`` on ``inputs`` and write the result to ``output_path``.

        For url-to-pdf, ``inputs`` holds the URL instead of a path.
        """
        content = await self.fetch(operation, inputs, options)
        return await asyncio.to_thread(write_atomic, output_path, content)

    async def convert(
        self,
        input_path: str | Path,
        output_path: str | Path,
        options: Mapping[str, Any] | None = None,
    ) -> Path:
        """Convert between formats chosen by the two file extensions."""
        descriptor = resolve_by_extension(input_path, output_path)
        logger.info("%s -> %s via %s", input_path, output_path, descriptor.name)
        return await self.run(descriptor, [input_path], output_path, options)

    async def fetch(
        self,
        operation: str | OperationDescriptor,
        inputs: Sequence[str | Path],
        options: Mapping[str, Any] | None = None,
    ) -> bytes:
        """Like ``run`` but return the result bytes instead of writing them."""
        descriptor = (
            operation
            if isinstance(operation, OperationDescriptor)
            else resolve_by_name(operation)
        )
        inputs = list(inputs)
        if not descriptor.input_arity.accepts(len(inputs)):
            raise InputCountError(
                descriptor.name, descriptor.input_arity.describe(), len(inputs)
            )

        if descriptor.uploads_inputs:
            refs = await self._upload_all(inputs)
        else:
            refs = [str(i) for i in inputs]

        payload = descriptor.build_payload(refs, options)
        job_id = await self.gateway.submit(descriptor.endpoint_path, payload)
        logger.info("submitted %s as job %s", descriptor.name, job_id)

        result = await self.poller.wait(job_id, descriptor.name)
        logger.info("job %s completed, result %s", job_id, result)

        content = await self.gateway.download(result)
        logger.debug("downloaded %s (%d bytes)", result, len(content))
        return content

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _upload_all(self, paths: list[str | Path]) -> list[ResourceHandle]:
        # Read everything first so a bad path fails before any remote call.
        documents = [
            (Path(p).name, await asyncio.to_thread(read_input, p)) for p in paths
        ]

        if self.concurrent_uploads and len(documents) > 1:
            # The first failure cancels the remaining uploads.
            try:
                async with asyncio.TaskGroup() as tg:
                    tasks = [
                        tg.create_task(self.gateway.upload(data, name))
                        for name, data in documents
                    ]
            except ExceptionGroup as eg:
                raise eg.exceptions[0]
            return [task.result() for task in tasks]

        handles: list[ResourceHandle] = []
        for name, data in documents:
            handle = await self.gateway.upload(data, name)
            logger.debug("uploaded %s as %s", name, handle)
            handles.append(handle)
        return handles
