"""Pydantic models for dispatch configuration and outcomes."""

import asyncio
import logging
import os
import uuid
from enum import Enum
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

import httpx
from pydantic import BaseModel, ConfigDict, model_validator

from loadstep_http._internal.json_codec import JsonOptions
from loadstep_http.exceptions import LoadstepConfigError

T = TypeVar("T")

TRACE_LOGGER_NAME = "loadstep_http.trace"

# =============================================================================
# Configuration
# =============================================================================


class HttpCompletion(str, Enum):
    """When the transport hands back the response."""

    CONTENT_READ = "content"  # buffer the full body
    HEADERS_READ = "headers"  # return as soon as headers arrive


@runtime_checkable
class DispatchLogger(Protocol):
    """Logger contract used for request/response tracing.

    ``logging.Logger`` satisfies it, as do structlog-style loggers.
    """

    def debug(self, msg: str, *args: Any) -> Any: ...

    def critical(self, msg: str, *args: Any) -> Any: ...


class DispatchConfig(BaseModel):
    """Per-call dispatch configuration.

    Optional fields:
        completion: Completion behavior (default: buffer the full body)
        cancel_event: Aborts the in-flight send or body read once set
        json_options: Decoding options, process-wide default when None
        logger: Enables request/response tracing when set
        trace_id: Correlation token, generated when a logger is set
        redact_headers: Mask sensitive header values in trace entries
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    completion: HttpCompletion = HttpCompletion.CONTENT_READ
    cancel_event: asyncio.Event | None = None
    json_options: JsonOptions | None = None
    logger: DispatchLogger | None = None
    trace_id: str = ""
    redact_headers: bool = False

    @model_validator(mode="before")
    @classmethod
    def assign_trace_id(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("logger") is not None and not data.get("trace_id"):
            data = {**data, "trace_id": uuid.uuid4().hex}
        return data

    @classmethod
    def create(
        cls,
        cancel_event: asyncio.Event | None = None,
        completion: HttpCompletion = HttpCompletion.CONTENT_READ,
        json_options: JsonOptions | None = None,
        logger: DispatchLogger | None = None,
        *,
        redact_headers: bool = False,
    ) -> "DispatchConfig":
        """Create a config; a trace id is generated only when a logger is given."""
        return cls(
            completion=completion,
            cancel_event=cancel_event,
            json_options=json_options,
            logger=logger,
            redact_headers=redact_headers,
        )

    @classmethod
    def from_env(cls, cancel_event: asyncio.Event | None = None) -> "DispatchConfig":
        """Create a config from environment variables.

        Optional environment variables:
            LOADSTEP_HTTP_TRACE: Set to "1" to trace through the
                ``loadstep_http.trace`` logger.
            LOADSTEP_HTTP_COMPLETION: "content" (default) or "headers".
            LOADSTEP_HTTP_REDACT_HEADERS: Set to "1" to mask sensitive headers.

        Raises:
            LoadstepConfigError: If LOADSTEP_HTTP_COMPLETION is not a known value.
        """
        raw_completion = os.environ.get("LOADSTEP_HTTP_COMPLETION", HttpCompletion.CONTENT_READ.value)
        try:
            completion = HttpCompletion(raw_completion.lower())
        except ValueError as e:
            raise LoadstepConfigError(
                f"LOADSTEP_HTTP_COMPLETION must be 'content' or 'headers', got {raw_completion!r}"
            ) from e

        logger = None
        if os.environ.get("LOADSTEP_HTTP_TRACE", "") == "1":
            logger = logging.getLogger(TRACE_LOGGER_NAME)

        return cls.create(
            cancel_event=cancel_event,
            completion=completion,
            logger=logger,
            redact_headers=os.environ.get("LOADSTEP_HTTP_REDACT_HEADERS", "") == "1",
        )

    @property
    def stream(self) -> bool:
        return self.completion is HttpCompletion.HEADERS_READ


# =============================================================================
# Outcomes
# =============================================================================


class Outcome(BaseModel):
    """Success/failure result of a dispatched call.

    Fields:
        is_error: True when the response status was outside 2xx
        status_code: Numeric status code as a string, e.g. "200"
        size_bytes: Request size plus response size
        payload: Raw response, typed wrapper, or None
        message: Optional free-form note for the harness
    """

    model_config = ConfigDict(frozen=True)

    is_error: bool
    status_code: str
    size_bytes: int = 0
    payload: Any = None
    message: str = ""

    @classmethod
    def ok(cls, status_code: str = "", size_bytes: int = 0, payload: Any = None, message: str = "") -> "Outcome":
        return cls(is_error=False, status_code=status_code, size_bytes=size_bytes, payload=payload, message=message)

    @classmethod
    def fail(
        cls, status_code: str = "", size_bytes: int = 0, payload: Any = None, message: str = ""
    ) -> "Outcome":
        return cls(is_error=True, status_code=status_code, size_bytes=size_bytes, payload=payload, message=message)

    @property
    def is_success(self) -> bool:
        return not self.is_error


class TypedResponse(BaseModel, Generic[T]):
    """Decoded response body paired with the response it came from."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    data: T
    response: httpx.Response
