"""Tests for public exceptions."""

import pytest

from loadstep_http.exceptions import (
    LoadstepConfigError,
    LoadstepError,
    RequestCancelledError,
    ResponseDecodeError,
    VersionParseError,
)


class TestLoadstepError:
    """Tests for base LoadstepError."""

    def test_is_exception(self):
        """LoadstepError should be an Exception."""
        assert issubclass(LoadstepError, Exception)

    def test_can_be_raised(self):
        """LoadstepError should be raisable with message."""
        with pytest.raises(LoadstepError) as exc_info:
            raise LoadstepError("test error")
        assert str(exc_info.value) == "test error"

    @pytest.mark.parametrize(
        "error_cls",
        [LoadstepConfigError, VersionParseError, ResponseDecodeError, RequestCancelledError],
    )
    def test_subclasses_inherit_from_base(self, error_cls):
        """Every SDK error should be catchable as LoadstepError."""
        assert issubclass(error_cls, LoadstepError)


class TestVersionParseError:
    """Tests for VersionParseError."""

    def test_is_value_error(self):
        """Should also be catchable as ValueError."""
        assert issubclass(VersionParseError, ValueError)

    def test_keeps_version(self):
        """Should expose the rejected version string."""
        error = VersionParseError("one.one")
        assert error.version == "one.one"
        assert "one.one" in str(error)


class TestResponseDecodeError:
    """Tests for ResponseDecodeError."""

    def test_with_message_only(self):
        """Should create error with message only."""
        error = ResponseDecodeError("bad body")
        assert str(error) == "bad body"
        assert error.status_code is None

    def test_with_status_code(self):
        """Should keep the status code of the undecodable response."""
        error = ResponseDecodeError("bad body", status_code=200)
        assert error.status_code == 200
