"""Best-effort request/response tracing.

Tracing must never change the outcome of a dispatch: every failure while
reading or formatting is caught and reported through the same logger.
"""

import contextlib
import traceback

import httpx

from loadstep_http._internal.dispatch.cancellation import run_cancellable
from loadstep_http._internal.dispatch.models import DispatchConfig
from loadstep_http._internal.dispatch.sizing import response_header_entries
from loadstep_http._internal.request import HttpRequest
from loadstep_http.exceptions import RequestCancelledError

REDACT_HEADERS: frozenset[str] = frozenset({
    "authorization",
    "proxy-authorization",
    "cookie",
    "set-cookie",
    "x-api-key",
    "x-auth-token",
})

REDACTED_VALUE = "[REDACTED]"

REQUEST_TEMPLATE = (
    "HTTP Request:\n TraceId: %s\n Method: %s\n RequestUri: %s\n HttpVersion: %s\n"
    " Headers: %s\n Content: %s\n"
)
RESPONSE_TEMPLATE = (
    "HTTP Response:\n TraceId: %s\n HttpVersion: %s\n StatusCode: %s\n ReasonPhrase: %s\n"
    " Headers: %s\n Content: %s\n"
)


def format_headers(headers: list[tuple[str, list[str]]], *, redact: bool = False) -> str:
    parts = []
    for name, values in headers:
        if redact and name.lower() in REDACT_HEADERS:
            values = [REDACTED_VALUE]
        parts.append(f"{name}: {', '.join(values)}")
    return ", ".join(parts)


def _report_failure(config: DispatchConfig) -> None:
    if config.logger is None:
        return
    with contextlib.suppress(Exception):
        config.logger.critical(traceback.format_exc())


async def log_request(config: DispatchConfig, request: HttpRequest) -> None:
    """Trace a request at debug level. No-op without a logger."""
    logger = config.logger
    if logger is None:
        return
    try:
        headers = format_headers(request.headers, redact=config.redact_headers)
        content = request.content.read_text() if request.content is not None else ""
        logger.debug(
            REQUEST_TEMPLATE,
            config.trace_id,
            request.method,
            request.url,
            request.version_string,
            headers,
            content,
        )
    except Exception:
        _report_failure(config)


async def log_response(config: DispatchConfig, response: httpx.Response) -> None:
    """Trace a response at debug level. No-op without a logger.

    The body is read in full; httpx keeps it buffered so it stays readable.
    """
    logger = config.logger
    if logger is None:
        return
    try:
        headers = format_headers(response_header_entries(response.headers), redact=config.redact_headers)
        await run_cancellable(response.aread(), config.cancel_event)
        logger.debug(
            RESPONSE_TEMPLATE,
            config.trace_id,
            response.http_version,
            response.status_code,
            response.reason_phrase,
            headers,
            response.text,
        )
    except RequestCancelledError:
        raise
    except Exception:
        _report_failure(config)
