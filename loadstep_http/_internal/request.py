"""Request builder.

Requests are mutated in place: every ``with_*`` call returns the same
instance so calls can be chained::

    request = (
        create_request("POST", "https://api.example.com/users")
        .with_header("Accept", "application/json")
        .with_json_body({"name": "Ada"})
    )
"""

import re
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field

from loadstep_http._internal.json_codec import JsonOptions, serialize_json
from loadstep_http.exceptions import VersionParseError

DEFAULT_VERSION = (1, 1)
JSON_MEDIA_TYPE = "application/json"
TEXT_MEDIA_TYPE = "text/plain"

_VERSION_RE = re.compile(r"[0-9]+(\.[0-9]+){1,3}")


class HttpContent(BaseModel):
    """Request body with its declared media type."""

    model_config = ConfigDict(frozen=True)

    data: bytes = b""
    media_type: str | None = None
    charset: str | None = None

    @classmethod
    def from_text(cls, text: str, media_type: str = TEXT_MEDIA_TYPE, charset: str = "utf-8") -> "HttpContent":
        return cls(data=text.encode(charset), media_type=media_type, charset=charset)

    @classmethod
    def from_bytes(cls, data: bytes, media_type: str | None = None) -> "HttpContent":
        return cls(data=data, media_type=media_type)

    @property
    def content_length(self) -> int:
        return len(self.data)

    @property
    def content_type(self) -> str | None:
        if self.media_type is None:
            return None
        if self.charset:
            return f"{self.media_type}; charset={self.charset}"
        return self.media_type

    def read_text(self) -> str:
        return self.data.decode(self.charset or "utf-8", errors="replace")


class HttpRequest(BaseModel):
    """Mutable HTTP request owned by the caller until dispatched.

    Headers are kept as ordered ``(name, [values])`` entries. Names are
    grouped case-insensitively but never validated.
    """

    method: str
    url: str
    headers: list[tuple[str, list[str]]] = Field(default_factory=list)
    version: tuple[int, ...] = DEFAULT_VERSION
    content: HttpContent | None = None

    @property
    def version_string(self) -> str:
        return ".".join(str(part) for part in self.version)

    def with_header(self, name: str, value: str) -> "HttpRequest":
        """Append a header value without validating its syntax."""
        lowered = name.lower()
        for existing_name, values in self.headers:
            if existing_name.lower() == lowered:
                values.append(value)
                return self
        self.headers.append((name, [value]))
        return self

    def with_headers(self, headers: list[tuple[str, str]]) -> "HttpRequest":
        for name, value in headers:
            self.with_header(name, value)
        return self

    def with_version(self, version: str) -> "HttpRequest":
        """Set the protocol version from a ``major.minor`` string.

        Raises:
            VersionParseError: If the string is not 2-4 dot-separated integers.
        """
        if not isinstance(version, str) or not _VERSION_RE.fullmatch(version):
            raise VersionParseError(version)
        self.version = tuple(int(part) for part in version.split("."))
        return self

    def with_body(self, content: HttpContent | bytes | str | None) -> "HttpRequest":
        """Replace the body. Text is encoded as UTF-8 ``text/plain``."""
        if isinstance(content, str):
            content = HttpContent.from_text(content)
        elif isinstance(content, bytes):
            content = HttpContent.from_bytes(content)
        self.content = content
        return self

    def with_json_body(self, value: Any, options: JsonOptions | None = None) -> "HttpRequest":
        """Serialize ``value`` to JSON and use it as an ``application/json`` body.

        Falls back to the process-wide default options when ``options`` is None.
        """
        json_text = serialize_json(value, options)
        self.content = HttpContent.from_text(json_text, media_type=JSON_MEDIA_TYPE)
        return self

    def build(self, client: httpx.AsyncClient) -> httpx.Request:
        """Convert to an ``httpx.Request`` bound to ``client``'s defaults."""
        header_items: list[tuple[str, str]] = []
        for name, values in self.headers:
            if self.content is not None and name.lower() == "content-type":
                continue
            header_items.extend((name, value) for value in values)

        data: bytes | None = None
        if self.content is not None:
            data = self.content.data
            if self.content.content_type is not None:
                header_items.append(("Content-Type", self.content.content_type))

        return client.build_request(self.method, self.url, headers=header_items, content=data)


def create_request(method: str, url: str) -> HttpRequest:
    """Create a request with no headers, no body and HTTP/1.1."""
    return HttpRequest(method=method.upper(), url=url)


def with_header(request: HttpRequest, name: str, value: str) -> HttpRequest:
    return request.with_header(name, value)


def with_headers(request: HttpRequest, headers: list[tuple[str, str]]) -> HttpRequest:
    return request.with_headers(headers)


def with_version(request: HttpRequest, version: str) -> HttpRequest:
    return request.with_version(version)


def with_body(request: HttpRequest, content: HttpContent | bytes | str | None) -> HttpRequest:
    return request.with_body(content)


def with_json_body(request: HttpRequest, value: Any, options: JsonOptions | None = None) -> HttpRequest:
    return request.with_json_body(value, options)
