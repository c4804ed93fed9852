"""Tests for entsoe_dayahead.core.exceptions."""

import pytest

from entsoe_dayahead.core.exceptions import (
    ConfigError,
    DecodeError,
    EntsoeDayAheadError,
    FetchError,
    InvalidAreaError,
    InvalidMonetaryFormatError,
    MalformedDocumentError,
    TransportError,
    UnknownCurrencyError,
    UnsupportedResolutionError,
)


class TestExceptionHierarchy:
    """Verify the exception class hierarchy."""

    def test_config_is_subclass(self):
        assert issubclass(ConfigError, EntsoeDayAheadError)
        assert not issubclass(ConfigError, FetchError)

    def test_fetch_is_subclass(self):
        assert issubclass(FetchError, EntsoeDayAheadError)

    def test_invalid_area_is_fetch_error(self):
        assert issubclass(InvalidAreaError, FetchError)
        assert not issubclass(InvalidAreaError, DecodeError)

    def test_transport_is_fetch_error(self):
        assert issubclass(TransportError, FetchError)
        assert not issubclass(TransportError, DecodeError)

    @pytest.mark.parametrize(
        "exc_type",
        [
            MalformedDocumentError,
            UnknownCurrencyError,
            UnsupportedResolutionError,
            InvalidMonetaryFormatError,
        ],
    )
    def test_decode_failures_share_base(self, exc_type):
        assert issubclass(exc_type, DecodeError)
        assert issubclass(exc_type, FetchError)


class TestExceptionContext:
    """Verify context dict behavior and carried details."""

    def test_context_preserved(self):
        exc = MalformedDocumentError(
            "bad position",
            context={"field": "position", "value": "x"},
        )
        assert exc.context["field"] == "position"
        assert exc.context["value"] == "x"

    def test_default_context_is_empty_dict(self):
        exc = EntsoeDayAheadError("test error")
        assert exc.context == {}

    def test_context_none_becomes_empty_dict(self):
        exc = TransportError("down", context=None)
        assert exc.context == {}

    def test_str_returns_message(self):
        exc = ConfigError("invalid field")
        assert str(exc) == "invalid field"

    def test_invalid_area_carries_area(self):
        exc = InvalidAreaError("NO1")
        assert exc.area == "NO1"
        assert exc.context == {"area": "NO1"}
        assert "NO1" in str(exc)

    def test_unknown_currency_carries_code(self):
        exc = UnknownCurrencyError("ZZZ")
        assert exc.currency == "ZZZ"
        assert exc.context["currency"] == "ZZZ"

    def test_unsupported_resolution_carries_code(self):
        exc = UnsupportedResolutionError("PT15M")
        assert exc.resolution == "PT15M"
        assert "PT15M" in str(exc)

    def test_can_be_caught_as_fetch_error(self):
        with pytest.raises(FetchError):
            raise UnknownCurrencyError("ZZZ")
