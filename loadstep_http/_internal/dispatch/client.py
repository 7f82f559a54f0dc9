"""Request dispatch and outcome classification.

A dispatch sends exactly one request and turns the response into an
``Outcome``. Only a received response is classified: transport errors and
cancellation propagate to the caller as exceptions.
"""

from typing import TypeVar

import httpx
from pydantic import ValidationError

from loadstep_http._internal.dispatch.cancellation import run_cancellable
from loadstep_http._internal.dispatch.models import DispatchConfig, Outcome, TypedResponse
from loadstep_http._internal.dispatch.sizing import dispatch_size
from loadstep_http._internal.dispatch.tracing import log_request, log_response
from loadstep_http._internal.json_codec import deserialize_json
from loadstep_http._internal.request import HttpRequest
from loadstep_http.exceptions import RequestCancelledError, ResponseDecodeError

T = TypeVar("T")


async def _dispatch(
    client: httpx.AsyncClient, config: DispatchConfig, request: HttpRequest
) -> tuple[httpx.Response, int]:
    """Trace, send and measure a request. Returns the response and combined size."""
    if config.logger is not None:
        await log_request(config, request)

    http_request = request.build(client)
    response = await run_cancellable(client.send(http_request, stream=config.stream), config.cancel_event)

    if config.logger is not None:
        try:
            await log_response(config, response)
        except RequestCancelledError:
            await response.aclose()
            raise

    return response, dispatch_size(request, response)


async def send_with_args(client: httpx.AsyncClient, config: DispatchConfig, request: HttpRequest) -> Outcome:
    """Send a request and classify the response by status code.

    Args:
        client: Transport used for the single send attempt.
        config: Per-call configuration.
        request: Request to dispatch.

    Returns:
        ``Outcome.ok`` for a 2xx status, ``Outcome.fail`` otherwise. The raw
        response is the payload in both cases.

    Raises:
        httpx.HTTPError: On connection failures and transport timeouts.
        RequestCancelledError: If ``config.cancel_event`` fires mid-dispatch.
    """
    response, size_bytes = await _dispatch(client, config, request)
    status_code = str(response.status_code)

    if response.is_success:
        return Outcome.ok(status_code=status_code, size_bytes=size_bytes, payload=response)
    return Outcome.fail(status_code=status_code, size_bytes=size_bytes, payload=response)


async def send(client: httpx.AsyncClient, request: HttpRequest) -> Outcome:
    """Send a request with the default config (no cancellation, no tracing)."""
    return await send_with_args(client, DispatchConfig.create(), request)


async def _decode_body(response: httpx.Response, model_type: type[T], config: DispatchConfig) -> T:
    body = await run_cancellable(response.aread(), config.cancel_event)
    try:
        return deserialize_json(body, model_type, config.json_options)
    except ValidationError as e:
        raise ResponseDecodeError(
            f"Failed to decode response body as {getattr(model_type, '__name__', model_type)}: {e}",
            status_code=response.status_code,
        ) from e


async def send_typed_with_args(
    client: httpx.AsyncClient,
    config: DispatchConfig,
    request: HttpRequest,
    model_type: type[T],
) -> Outcome:
    """Send a request and decode a successful JSON body into ``model_type``.

    On a 2xx status the payload is a ``TypedResponse`` pairing the decoded
    value with the response. On any other status decoding is skipped and the
    failure carries no payload; its response is closed before returning.
    The response is also closed when decoding fails or is cancelled.

    Raises:
        httpx.HTTPError: On connection failures and transport timeouts.
        RequestCancelledError: If ``config.cancel_event`` fires mid-dispatch.
        ResponseDecodeError: If a 2xx body does not decode into ``model_type``.
    """
    response, size_bytes = await _dispatch(client, config, request)
    status_code = str(response.status_code)

    if not response.is_success:
        # not handed to the caller, release its connection
        await response.aclose()
        return Outcome.fail(status_code=status_code, size_bytes=size_bytes)

    try:
        data = await _decode_body(response, model_type, config)
    except (RequestCancelledError, ResponseDecodeError):
        await response.aclose()
        raise
    return Outcome.ok(
        status_code=status_code,
        size_bytes=size_bytes,
        payload=TypedResponse(data=data, response=response),
    )


async def send_typed(client: httpx.AsyncClient, request: HttpRequest, model_type: type[T]) -> Outcome:
    """Send a request with the default config and decode a successful JSON body."""
    return await send_typed_with_args(client, DispatchConfig.create(), request, model_type)
