"""ENTSO-E day-ahead price ingestion: area table, decoder, and HTTP client."""

from entsoe_dayahead.ingestion.areas import (
    AREA_DOMAINS,
    area_timezone,
    resolve_area,
    supported_areas,
)
from entsoe_dayahead.ingestion.client import EntsoeClient, fetch_day_ahead_prices
from entsoe_dayahead.ingestion.decoder import PriceSeriesDecoder, decode_day_ahead_prices

__all__ = [
    "AREA_DOMAINS",
    "area_timezone",
    "resolve_area",
    "supported_areas",
    "EntsoeClient",
    "fetch_day_ahead_prices",
    "PriceSeriesDecoder",
    "decode_day_ahead_prices",
]
