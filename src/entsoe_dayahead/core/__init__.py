"""entsoe_dayahead.core — Foundation types, config, and exceptions."""

from entsoe_dayahead.core.config import (
    DayAheadConfig,
    EntsoeConfig,
    load_config,
)
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
from entsoe_dayahead.core.models import (
    AreaCode,
    DocumentType,
    DomainIdentifier,
    PricePoint,
    RawMarketDocument,
    RawPoint,
    Resolution,
)

__all__ = [
    # Type aliases
    "AreaCode",
    "DomainIdentifier",
    # Enums
    "Resolution",
    "DocumentType",
    # Models
    "RawPoint",
    "RawMarketDocument",
    "PricePoint",
    # Config
    "DayAheadConfig",
    "EntsoeConfig",
    "load_config",
    # Exceptions
    "EntsoeDayAheadError",
    "ConfigError",
    "FetchError",
    "InvalidAreaError",
    "TransportError",
    "DecodeError",
    "MalformedDocumentError",
    "UnknownCurrencyError",
    "UnsupportedResolutionError",
    "InvalidMonetaryFormatError",
]
