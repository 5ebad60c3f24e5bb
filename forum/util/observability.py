"""Logfire setup and instrumentation hooks.

Everything the forum records (spans around vote and acceptance writes,
structured ``logfire.info`` events, request traces) goes through Logfire.
Without a token it only prints to the console.
"""

from typing import Any

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from forum.config import Settings

SERVICE_NAME = "forum-backend"


def _should_send(settings: Settings) -> bool:
    explicit = settings.observability.send_to_logfire
    if explicit is not None:
        return explicit
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once per process.

    ``OBSERVABILITY__LOGFIRE_TOKEN`` enables shipping to Logfire cloud;
    ``OBSERVABILITY__SEND_TO_LOGFIRE`` overrides that either way.
    """
    send = _should_send(settings)
    options: dict[str, Any] = {
        "service_name": SERVICE_NAME,
        "environment": settings.environment,
        "send_to_logfire": send,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    }
    if settings.observability.logfire_token:
        options["token"] = settings.observability.logfire_token

    logfire.configure(**options)
    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send,
    )


def _request_attributes(request: Any, attributes: dict[str, Any]) -> dict[str, Any]:
    # WebSocket scopes have no method
    extra = {"path": request.url.path}
    if getattr(request, "method", None):
        extra["method"] = request.method
    if request.client:
        extra["client_host"] = request.client.host
    return {**attributes, **extra}


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request handled by ``app``."""
    logfire.instrument_fastapi(
        app,
        capture_headers=True,
        request_attributes_mapper=_request_attributes,
    )
    logfire.info("FastAPI instrumented")


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace every statement run on ``engine``."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
    logfire.info("SQLAlchemy instrumented")
