"""Custom exception hierarchy for entsoe-dayahead."""

from typing import Any


class EntsoeDayAheadError(Exception):
    """Base exception for all entsoe-dayahead errors.

    All exceptions carry an optional `context` dict for structured error
    metadata that can be logged or serialized without parsing the message.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}


class ConfigError(EntsoeDayAheadError):
    """Invalid or missing configuration.

    Raised by load_config() during startup. Should be treated as fatal.

    Context keys:
        field: str — the config field that failed validation
        value: Any — the invalid value (never the security token)
    """


class FetchError(EntsoeDayAheadError):
    """Failed to produce day-ahead prices for an area and date.

    Union of area resolution, transport and decode failures. Nothing below
    this class is retried by the library; callers apply their own policy.
    """


class InvalidAreaError(FetchError):
    """The area code is not in the supported allow-list.

    Policy: caller error. Not retryable.

    Context keys:
        area: str — the rejected area code
    """

    def __init__(self, area: str):
        super().__init__(f"the area {area!r} is not supported", context={"area": area})
        self.area = area


class TransportError(FetchError):
    """HTTP request to the provider failed or returned a non-200 status.

    Policy: the caller may retry per its own policy.

    Context keys:
        url: str — endpoint that was called (query string omitted)
        status_code: int | None — HTTP status if a response arrived
        reason: str | None — provider's reason text, when it sent one
        error: str | None — transport exception text
    """


class DecodeError(FetchError):
    """The response body could not be turned into price points.

    Policy: permanent for that response. The whole decode is discarded.
    """


class MalformedDocumentError(DecodeError):
    """Response does not match the expected market document shape.

    Context keys:
        field: str — element or attribute that was missing or invalid
        value: str | None — offending raw value, if any
    """


class UnknownCurrencyError(DecodeError):
    """Declared currency code is not an ISO 4217 code known to the registry.

    Context keys:
        currency: str — the unrecognized code
    """

    def __init__(self, currency: str):
        super().__init__(
            f"the currency {currency!r} is not supported",
            context={"currency": currency},
        )
        self.currency = currency


class UnsupportedResolutionError(DecodeError):
    """Series resolution is anything other than one point per hour.

    Context keys:
        resolution: str — the rejected resolution code
    """

    def __init__(self, resolution: str):
        super().__init__(
            f"the resolution {resolution!r} is not supported",
            context={"resolution": resolution},
        )
        self.resolution = resolution


class InvalidMonetaryFormatError(DecodeError):
    """A price string could not be parsed as a decimal amount.

    Context keys:
        value: str — the raw price string
        position: int — position of the offending point
    """
