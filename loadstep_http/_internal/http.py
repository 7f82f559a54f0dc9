"""Shared transport for dispatches.

One ``httpx.AsyncClient`` is meant to serve every concurrent dispatch of a
load test, so its connection pool bounds the number of in-flight requests.
"""

import httpx

from loadstep_http._version import __version__

DEFAULT_TIMEOUT = 30.0


def create_http_client(
    *,
    timeout: float = DEFAULT_TIMEOUT,
    base_url: str | None = None,
    max_connections: int | None = None,
) -> httpx.AsyncClient:
    """Create the async client that dispatches share.

    Requests built with relative URLs resolve against ``base_url``. Every
    request carries a ``loadstep-http/<version>`` user agent. Those client
    headers are merged in at send time and do not count towards dispatch
    sizes.

    Args:
        timeout: Transport timeout in seconds. Dispatches enforce no other.
        base_url: Optional base URL for relative request URLs.
        max_connections: Pool size cap; httpx defaults apply when None.

    Returns:
        Configured httpx.AsyncClient instance.
    """
    limits = httpx.Limits() if max_connections is None else httpx.Limits(max_connections=max_connections)
    return httpx.AsyncClient(
        timeout=timeout,
        base_url=base_url or "",
        headers={"User-Agent": f"loadstep-http/{__version__}"},
        limits=limits,
    )
