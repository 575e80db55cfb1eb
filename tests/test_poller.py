"""Tests for the job poller state machine."""

from __future__ import annotations

import asyncio

import pytest

from pdfservices.errors import JobFailed, JobTimedOut, TransportError
from pdfservices.gateway.models import JobState, JobStatus
from pdfservices.jobs import Job, JobPoller

PENDING = {"status": "PENDING"}
RUNNING = {"status": "RUNNING"}
COMPLETED = {"status": "COMPLETED", "resultDocumentId": "result-1"}
FAILED = {"status": "FAILED", "error": {"code": "CONVERSION_ERROR"}}


class TestJobState:
    @pytest.mark.parametrize("raw", ["COMPLETED", "completed", " Completed "])
    def test_parse_completed(self, raw):
        assert JobState.parse(raw) is JobState.COMPLETED

    @pytest.mark.parametrize("raw", ["PROCESSING", "IN_PROGRESS", "", None])
    def test_unknown_is_running(self, raw):
        assert JobState.parse(raw) is JobState.RUNNING

    def test_terminal_states(self):
        assert JobState.COMPLETED.is_terminal
        assert JobState.FAILED.is_terminal
        assert not JobState.PENDING.is_terminal
        assert not JobState.RUNNING.is_terminal

    def test_status_from_payload(self):
        status = JobStatus.from_payload(COMPLETED)
        assert status.result_handle == "result-1"
        assert status.raw == COMPLETED

    def test_result_handle_only_when_completed(self):
        status = JobStatus.from_payload({"status": "RUNNING", "resultDocumentId": "early"})
        assert status.result_handle is None


class TestJobPoller:
    @pytest.mark.asyncio
    async def test_completes_after_two_waits(self, make_gateway, sleeps):
        gateway = make_gateway([PENDING, RUNNING, COMPLETED])
        poller = JobPoller(gateway, sleep=sleeps)

        handle = await poller.wait("task-1")

        assert handle == "result-1"
        assert sleeps.calls == [5.0, 5.0]
        assert gateway.status_queries == ["task-1"] * 3

    @pytest.mark.asyncio
    async def test_failed_after_one_wait(self, make_gateway, sleeps):
        gateway = make_gateway([PENDING, FAILED])
        poller = JobPoller(gateway, sleep=sleeps)

        with pytest.raises(JobFailed) as exc_info:
            await poller.wait("task-9")

        assert sleeps.calls == [5.0]
        assert exc_info.value.job_id == "task-9"
        assert exc_info.value.raw_status == FAILED

    @pytest.mark.asyncio
    async def test_immediate_completion_never_sleeps(self, make_gateway, sleeps):
        poller = JobPoller(make_gateway([COMPLETED]), sleep=sleeps)
        assert await poller.wait("task-1") == "result-1"
        assert sleeps.calls == []

    @pytest.mark.asyncio
    async def test_transport_error_propagates_without_looping(self, make_gateway, sleeps):
        gateway = make_gateway([TransportError("query_status", "task not found", 404)])
        poller = JobPoller(gateway, sleep=sleeps)

        with pytest.raises(TransportError) as exc_info:
            await poller.wait("unknown-job")

        assert exc_info.value.status_code == 404
        assert gateway.status_queries == ["unknown-job"]
        assert sleeps.calls == []

    @pytest.mark.asyncio
    async def test_transport_error_mid_poll(self, make_gateway, sleeps):
        gateway = make_gateway([PENDING, TransportError("query_status", "boom", 502)])
        poller = JobPoller(gateway, sleep=sleeps)

        with pytest.raises(TransportError):
            await poller.wait("task-1")
        assert len(gateway.status_queries) == 2

    @pytest.mark.asyncio
    async def test_custom_interval(self, make_gateway, sleeps):
        poller = JobPoller(make_gateway([PENDING, COMPLETED]), interval=0.5, sleep=sleeps)
        await poller.wait("task-1")
        assert sleeps.calls == [0.5]

    @pytest.mark.asyncio
    async def test_unknown_status_keeps_polling(self, make_gateway, sleeps):
        gateway = make_gateway([{"status": "PROCESSING"}, COMPLETED])
        poller = JobPoller(gateway, sleep=sleeps)
        assert await poller.wait("task-1") == "result-1"
        assert sleeps.calls == [5.0]

    @pytest.mark.asyncio
    async def test_max_wait_bounds_polling(self, make_gateway, sleeps):
        gateway = make_gateway([PENDING])
        poller = JobPoller(gateway, interval=5.0, max_wait=12.0, sleep=sleeps)

        with pytest.raises(JobTimedOut) as exc_info:
            await poller.wait("stuck")

        # last sleep is clamped so the final query happens at the deadline
        assert sleeps.calls == [5.0, 5.0, 2.0]
        assert len(gateway.status_queries) == 4
        assert exc_info.value.waited == 12.0
        assert exc_info.value.job_id == "stuck"

    @pytest.mark.asyncio
    async def test_max_wait_shorter_than_interval_still_waits(self, make_gateway, sleeps):
        gateway = make_gateway([PENDING])
        poller = JobPoller(gateway, interval=5.0, max_wait=2.0, sleep=sleeps)

        with pytest.raises(JobTimedOut) as exc_info:
            await poller.wait("stuck")

        assert sleeps.calls == [2.0]
        assert gateway.status_queries == ["stuck", "stuck"]
        assert exc_info.value.waited == 2.0

    @pytest.mark.asyncio
    async def test_completion_at_deadline_succeeds(self, make_gateway, sleeps):
        poller = JobPoller(
            make_gateway([PENDING, COMPLETED]), interval=5.0, max_wait=2.0, sleep=sleeps
        )
        assert await poller.wait("task-1") == "result-1"
        assert sleeps.calls == [2.0]

    @pytest.mark.asyncio
    async def test_max_wait_allows_completion_within_budget(self, make_gateway, sleeps):
        poller = JobPoller(
            make_gateway([PENDING, RUNNING, COMPLETED]), max_wait=10.0, sleep=sleeps
        )
        assert await poller.wait("task-1") == "result-1"
        assert sleeps.calls == [5.0, 5.0]

    @pytest.mark.asyncio
    async def test_cancellation_stops_polling(self, make_gateway):
        gateway = make_gateway([PENDING])
        poller = JobPoller(gateway, interval=60.0)

        task = asyncio.create_task(poller.wait("task-1"))
        while not gateway.status_queries:
            await asyncio.sleep(0)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert gateway.status_queries == ["task-1"]

    @pytest.mark.asyncio
    async def test_poll_refreshes_job(self, make_gateway):
        poller = JobPoller(make_gateway([RUNNING]))
        job = await poller.poll(Job(id="task-1", operation="compress"))
        assert job.status.state is JobState.RUNNING
        assert job.operation == "compress"
        assert not job.is_terminal

    def test_rejects_non_positive_interval(self, fake_gateway):
        with pytest.raises(ValueError):
            JobPoller(fake_gateway, interval=0)

    def test_rejects_non_positive_max_wait(self, fake_gateway):
        with pytest.raises(ValueError):
            JobPoller(fake_gateway, max_wait=-1)
