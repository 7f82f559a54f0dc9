"""Public exceptions for the loadstep HTTP layer."""


class LoadstepError(Exception):
    """Base exception for all loadstep-http errors."""


class LoadstepConfigError(LoadstepError):
    """Configuration error (malformed env vars, invalid config)."""


class VersionParseError(LoadstepError, ValueError):
    """Malformed HTTP protocol version string."""

    def __init__(self, version: str) -> None:
        super().__init__(f"Invalid HTTP version: {version!r}")
        self.version = version


class ResponseDecodeError(LoadstepError):
    """Response body could not be decoded into the requested type."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RequestCancelledError(LoadstepError):
    """Dispatch was aborted by its cancellation signal."""
