"""Dispatch, size accounting and tracing."""

from loadstep_http._internal.dispatch.client import (
    send,
    send_typed,
    send_typed_with_args,
    send_with_args,
)
from loadstep_http._internal.dispatch.models import (
    DispatchConfig,
    DispatchLogger,
    HttpCompletion,
    Outcome,
    TypedResponse,
)
from loadstep_http._internal.dispatch.sizing import (
    body_size,
    dispatch_size,
    header_size,
    request_size,
    response_size,
)

__all__ = [
    "send",
    "send_with_args",
    "send_typed",
    "send_typed_with_args",
    "DispatchConfig",
    "DispatchLogger",
    "HttpCompletion",
    "Outcome",
    "TypedResponse",
    "header_size",
    "body_size",
    "request_size",
    "response_size",
    "dispatch_size",
]
