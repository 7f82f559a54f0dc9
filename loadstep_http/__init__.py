"""HTTP instrumentation layer for load-testing harnesses.

Builds requests, dispatches them through an ``httpx.AsyncClient``, measures
payload size, optionally traces request/response detail and classifies every
call as a success or failure ``Outcome``.

Public API:
    create_request / with_* - Request builder
    send / send_with_args - Untyped dispatch
    send_typed / send_typed_with_args - Dispatch with JSON body decoding
    DispatchConfig, Outcome, TypedResponse - Dispatch models
    JsonOptions - JSON codec options
"""

from loadstep_http._internal.dispatch import (
    DispatchConfig,
    HttpCompletion,
    Outcome,
    TypedResponse,
    send,
    send_typed,
    send_typed_with_args,
    send_with_args,
)
from loadstep_http._internal.http import create_http_client
from loadstep_http._internal.json_codec import (
    JsonOptions,
    get_default_json_options,
    set_default_json_options,
)
from loadstep_http._internal.request import (
    HttpContent,
    HttpRequest,
    create_request,
    with_body,
    with_header,
    with_headers,
    with_json_body,
    with_version,
)
from loadstep_http._version import __version__

__all__ = [
    "__version__",
    "create_http_client",
    "create_request",
    "with_header",
    "with_headers",
    "with_version",
    "with_body",
    "with_json_body",
    "HttpContent",
    "HttpRequest",
    "send",
    "send_with_args",
    "send_typed",
    "send_typed_with_args",
    "DispatchConfig",
    "HttpCompletion",
    "Outcome",
    "TypedResponse",
    "JsonOptions",
    "get_default_json_options",
    "set_default_json_options",
]
