"""JSON codec options and the process-wide default.

The default options are read on every dispatch that does not carry its own.
Set them once at startup. Readers take no lock, so callers replacing the
default at runtime must synchronize those writes themselves.
"""

import os
from functools import lru_cache
from typing import Any, TypeVar

import pydantic_core
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from loadstep_http.exceptions import LoadstepConfigError

T = TypeVar("T")


class JsonOptions(BaseModel):
    """Options for serializing request bodies and decoding response bodies.

    Fields:
        by_alias: Use field aliases when serializing models.
        exclude_none: Drop fields whose value is None when serializing.
        indent: Indentation for serialized output (compact when None).
        strict: Strict type validation when decoding (pydantic lax mode when None).
    """

    model_config = ConfigDict(frozen=True)

    by_alias: bool = False
    exclude_none: bool = False
    indent: int | None = Field(default=None, ge=0)
    strict: bool | None = None

    @classmethod
    def from_env(cls) -> "JsonOptions":
        """Create options from environment variables.

        Optional environment variables:
            LOADSTEP_HTTP_JSON_BY_ALIAS: Set to "1" to serialize by alias.
            LOADSTEP_HTTP_JSON_EXCLUDE_NONE: Set to "1" to drop None fields.
            LOADSTEP_HTTP_JSON_STRICT: Set to "1" for strict decoding.
            LOADSTEP_HTTP_JSON_INDENT: Indentation width (integer).

        Raises:
            LoadstepConfigError: If LOADSTEP_HTTP_JSON_INDENT is not a valid integer.
        """
        raw_indent = os.environ.get("LOADSTEP_HTTP_JSON_INDENT")
        indent: int | None = None
        if raw_indent:
            try:
                indent = int(raw_indent)
            except ValueError as e:
                raise LoadstepConfigError(
                    f"LOADSTEP_HTTP_JSON_INDENT must be an integer, got {raw_indent!r}"
                ) from e

        return cls(
            by_alias=os.environ.get("LOADSTEP_HTTP_JSON_BY_ALIAS", "") == "1",
            exclude_none=os.environ.get("LOADSTEP_HTTP_JSON_EXCLUDE_NONE", "") == "1",
            indent=indent,
            strict=True if os.environ.get("LOADSTEP_HTTP_JSON_STRICT", "") == "1" else None,
        )


_default_options = JsonOptions()


def get_default_json_options() -> JsonOptions:
    """Return the process-wide default JSON options."""
    return _default_options


def set_default_json_options(options: JsonOptions) -> None:
    """Replace the process-wide default JSON options.

    Not synchronized: call it at startup, or serialize concurrent writers.
    """
    global _default_options
    _default_options = options


def resolve_json_options(options: JsonOptions | None) -> JsonOptions:
    return options if options is not None else get_default_json_options()


def serialize_json(value: Any, options: JsonOptions | None = None) -> str:
    """Serialize a value (plain data, pydantic model or dataclass) to JSON text."""
    opts = resolve_json_options(options)
    return pydantic_core.to_json(
        value,
        indent=opts.indent,
        by_alias=opts.by_alias,
        exclude_none=opts.exclude_none,
    ).decode("utf-8")


@lru_cache(maxsize=256)
def _adapter_for(model_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(model_type)


def deserialize_json(data: str | bytes, model_type: type[T], options: JsonOptions | None = None) -> T:
    """Decode JSON text into ``model_type``.

    Raises:
        pydantic.ValidationError: If the data is malformed or does not match the type.
    """
    opts = resolve_json_options(options)
    return _adapter_for(model_type).validate_json(data, strict=opts.strict)
