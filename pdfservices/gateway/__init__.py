"""Remote service gateway for pdfservices."""

import os

from pdfservices.config.models import ServiceConfig
from pdfservices.gateway.base import RemoteGateway
from pdfservices.gateway.http import HttpGateway
from pdfservices.gateway.models import JobState, JobStatus, ResourceHandle


def create_gateway(config: ServiceConfig) -> HttpGateway:
    """Create an HTTP gateway from app-level config.

    Resolves client_id and client_secret from the environment variables
    named in config.client_id_env / config.client_secret_env.
    """
    client_id = os.environ.get(config.client_id_env, "")
    client_secret = os.environ.get(config.client_secret_env, "")
    missing = [
        name
        for name, value in (
            (config.client_id_env, client_id),
            (config.client_secret_env, client_secret),
        )
        if not value
    ]
    if missing:
        raise ValueError(
            "Missing credentials: set environment variable(s) "
            + ", ".join(repr(m) for m in missing)
        )
    return HttpGateway(
        client_id,
        client_secret,
        host=config.host,
        timeout=config.timeout,
    )


__all__ = [
    "HttpGateway",
    "JobState",
    "JobStatus",
    "RemoteGateway",
    "ResourceHandle",
    "create_gateway",
]
