"""Job poller: drives a remote job from submission to a terminal state."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

from pdfservices.errors import JobFailed, JobTimedOut
from pdfservices.gateway.base import RemoteGateway
from pdfservices.gateway.models import JobState, ResourceHandle
from pdfservices.jobs.models import Job

DEFAULT_INTERVAL = 5.0


class JobPoller:
    """Queries job status at a fixed interval until COMPLETED or FAILED.

    With ``max_wait=None`` (the default) polling is unbounded. Status query
    failures are not retried. Cancelling the awaiting task stops polling at
    the next sleep.
    """

    def __init__(
        self,
        gateway: RemoteGateway,
        interval: float = DEFAULT_INTERVAL,
        max_wait: float | None = None,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        if max_wait is not None and max_wait <= 0:
            raise ValueError(f"max_wait must be positive, got {max_wait}")
        self.gateway = gateway
        self.interval = interval
        self.max_wait = max_wait
        self._sleep = sleep

    async def poll(self, job: Job) -> Job:
        """Refresh ``job`` with a single status query."""
        status = await self.gateway.query_status(job.id)
        return job.model_copy(update={"status": status})

    async def wait(self, job_id: str, operation: str = "") -> ResourceHandle:
        """Block until the job finishes and return its result handle.

        With ``max_wait`` set, the last sleep is shortened so the final status
        query lands exactly at the deadline; JobTimedOut follows if that query
        is still non-terminal. A ``max_wait`` below ``interval`` therefore
        still waits ``max_wait`` once before giving up.

        Raises JobFailed on a FAILED status and lets TransportError from the
        gateway through.
        """
        job = Job(id=job_id, operation=operation)
        waited = 0.0
        while True:
            job = await self.poll(job)
            if job.status.state is JobState.COMPLETED:
                return job.result_handle  # type: ignore[return-value]
            if job.status.state is JobState.FAILED:
                raise JobFailed(job_id, job.status.raw)
            delay = self.interval
            if self.max_wait is not None:
                remaining = self.max_wait - waited
                if remaining <= 0:
                    raise JobTimedOut(job_id, waited)
                delay = min(delay, remaining)
            await self._sleep(delay)
            waited += delay
