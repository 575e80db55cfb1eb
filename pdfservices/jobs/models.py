"""Pydantic model for an in-flight remote job."""

from __future__ import annotations

from pydantic import BaseModel, Field

from pdfservices.gateway.models import JobState, JobStatus, ResourceHandle


class Job(BaseModel):
    """Ties a remote job id to the latest observed status.

    Lives only for one pipeline run; nothing is persisted.
    """

    id: str = Field(min_length=1)
    operation: str
    status: JobStatus = Field(default_factory=lambda: JobStatus(state=JobState.PENDING))

    @property
    def result_handle(self) -> ResourceHandle | None:
        return self.status.result_handle

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal
