"""Pydantic models for what the gateway observes of the remote service."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Server-issued document id. Opaque to the client and only valid for the
# lifetime of the remote session that produced it.
ResourceHandle = str


class JobState(str, Enum):
    """Lifecycle states of a remote task."""

    PENDING = "PENDING"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

    @classmethod
    def parse(cls, value: Any) -> JobState:
        """Map a remote status string onto a state.

        Unknown strings (PROCESSING, IN_PROGRESS, ...) are non-terminal.
        """
        text = str(value or "").strip().upper()
        try:
            return cls(text)
        except ValueError:
            return cls.RUNNING

    @property
    def is_terminal(self) -> bool:
        return self in (JobState.COMPLETED, JobState.FAILED)


class JobStatus(BaseModel):
    """One observation of a remote task's status."""

    model_config = ConfigDict(frozen=True)

    state: JobState
    raw: dict[str, Any] = Field(default_factory=dict)
    result_handle: ResourceHandle | None = None

    @property
    def is_terminal(self) -> bool:
        return self.state.is_terminal

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> JobStatus:
        state = JobState.parse(payload.get("status"))
        handle = payload.get("resultDocumentId") if state is JobState.COMPLETED else None
        return cls(state=state, raw=payload, result_handle=handle)
