"""Logfire setup for the engagement service.

Domain services log and trace with logfire directly:

    logfire.info("Vote toggled", story_id=str(story_id), action=action.value)

    with logfire.span("engagement_service.toggle_vote", story_id=str(story_id)):
        ...

This module only configures logfire at startup and instruments the
FastAPI app and the SQLAlchemy engine.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from vibe.config import ObservabilitySettings, Settings

# Path parameters copied onto request spans
TRACED_PATH_PARAMS = ("story_id", "comment_id", "report_id")


def _should_send(observability: ObservabilitySettings) -> bool:
    """Explicit setting wins; otherwise send only when a token is configured."""
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure logfire once per process.

    Console output is always on; cloud export is controlled by
    OBSERVABILITY__LOGFIRE_TOKEN and OBSERVABILITY__SEND_TO_LOGFIRE.

    Args:
        settings: Application settings
    """
    send_to_logfire = _should_send(settings.observability)

    logfire.configure(
        service_name="vibe-engage",
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        debug=settings.debug,
        send_to_logfire=send_to_logfire,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request except health checks.

    Story, comment and report IDs from the path are added to the request
    span so a single story's traffic can be filtered.
    """

    def _map_request_attributes(request, attributes):
        result = {**attributes}
        path_params = getattr(request, "path_params", None) or {}
        for key in TRACED_PATH_PARAMS:
            if key in path_params:
                result[key] = path_params[key]
        if getattr(request, "client", None):
            result["client_host"] = request.client.host
        return result

    logfire.instrument_fastapi(
        app,
        capture_headers=True,
        excluded_urls="/health",
        request_attributes_mapper=_map_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace SQL statements, including the row locks taken per story."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
