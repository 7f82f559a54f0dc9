"""Size accounting for dispatched requests and their responses.

Sizes count characters of header names and values plus the declared
content length of the body. Bodies are never read to be measured.
"""

from collections.abc import Iterable

import httpx

from loadstep_http._internal.request import HttpContent, HttpRequest

# Headers describing the body; their weight is carried by the content length.
CONTENT_HEADERS: frozenset[str] = frozenset({
    "allow",
    "content-disposition",
    "content-encoding",
    "content-language",
    "content-length",
    "content-location",
    "content-md5",
    "content-range",
    "content-type",
    "expires",
    "last-modified",
})

HeaderEntries = Iterable[tuple[str, Iterable[str]]]


def header_size(headers: HeaderEntries) -> int:
    """Sum of name length plus all value lengths over every header entry."""
    total = 0
    for name, values in headers:
        if name.lower() in CONTENT_HEADERS:
            continue
        total += len(name) + sum(len(value) for value in values)
    return total


def body_size(content: HttpContent | httpx.Headers | None) -> int:
    """Declared content length, or 0 when there is no body or no declared length."""
    if content is None:
        return 0
    if isinstance(content, HttpContent):
        return content.content_length
    declared = content.get("content-length")
    if declared is None:
        return 0
    try:
        return int(declared)
    except ValueError:
        return 0


def response_header_entries(headers: httpx.Headers) -> list[tuple[str, list[str]]]:
    """Group response headers into ``(name, [values])`` entries."""
    return [(name, headers.get_list(name)) for name in headers.keys()]


def request_size(request: HttpRequest) -> int:
    return header_size(request.headers) + body_size(request.content)


def response_size(response: httpx.Response) -> int:
    return header_size(response_header_entries(response.headers)) + body_size(response.headers)


def dispatch_size(request: HttpRequest, response: httpx.Response) -> int:
    """Combined size of a request and the response it produced."""
    return request_size(request) + response_size(response)
