"""Error taxonomy for pdfservices.

Every error the pipeline can raise propagates to the caller of the
executor. Nothing here is retried internally.
"""

from __future__ import annotations

from typing import Any


class PDFServicesError(Exception):
    """Base class for all user-facing pdfservices errors."""


class TransportError(PDFServicesError):
    """A remote call returned a non-success response or was unreachable."""

    def __init__(
        self,
        operation: str,
        detail: str,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.operation = operation
        self.detail = detail
        self.status_code = status_code
        status = f" (HTTP {status_code})" if status_code is not None else ""
        super().__init__(f"{operation} failed{status}: {detail}")
        if cause is not None:
            self.__cause__ = cause


class AuthenticationError(TransportError):
    """The service rejected the client_id / client_secret pair."""


class JobFailed(PDFServicesError):
    """The remote service reported the job as FAILED."""

    def __init__(self, job_id: str, raw_status: dict[str, Any]) -> None:
        self.job_id = job_id
        self.raw_status = raw_status
        super().__init__(f"Job {job_id} failed: {raw_status}")


class JobTimedOut(PDFServicesError):
    """The job did not reach a terminal state within the configured max wait."""

    def __init__(self, job_id: str, waited: float) -> None:
        self.job_id = job_id
        self.waited = waited
        super().__init__(f"Job {job_id} not finished after {waited:.1f}s")


class UnsupportedConversion(PDFServicesError):
    """No operation converts between the given extensions."""

    def __init__(self, input_ext: str, output_ext: str) -> None:
        self.input_ext = input_ext
        self.output_ext = output_ext
        super().__init__(
            f"Conversion from .{input_ext} to .{output_ext} is not supported."
        )


class UnknownOperation(PDFServicesError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown operation: {name!r}")


class InputCountError(PDFServicesError, ValueError):
    """Number of inputs does not match the operation's arity."""

    def __init__(self, operation: str, expected: str, got: int) -> None:
        self.operation = operation
        self.expected = expected
        self.got = got
        super().__init__(f"{operation} expects {expected}, got {got} input(s)")


class LocalIOError(PDFServicesError):
    """Reading an input or writing the result failed.

    For write failures ``content`` holds the fetched result bytes so the
    caller can retry persistence without re-running the job.
    """

    def __init__(
        self,
        path: str,
        action: str,
        cause: Exception,
        content: bytes | None = None,
    ) -> None:
        self.path = path
        self.action = action
        self.content = content
        super().__init__(f"Could not {action} {path}: {cause}")
        self.__cause__ = cause


class CatalogIncomplete(RuntimeError):
    """A valid extension pair has no dispatch table entry."""

    def __init__(self, direction: str, ext_class: str) -> None:
        self.direction = direction
        self.ext_class = ext_class
        super().__init__(f"No operation registered for {direction} / {ext_class}")
