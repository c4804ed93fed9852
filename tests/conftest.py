"""Shared pytest fixtures for entsoe-dayahead."""

from datetime import datetime, timezone

import pytest

from entsoe_dayahead.core.config import EntsoeConfig

NAMESPACE = "urn:iec62325.351:tc57wg16:451-3:publicationdocument:7:0"


def build_document(
    prices: list[str] | None = None,
    positions: list[int | str] | None = None,
    currency: str = "EUR",
    resolution: str = "PT60M",
    start: str = "2022-11-09T23:00Z",
    end: str = "2022-11-10T23:00Z",
    namespace: str | None = NAMESPACE,
) -> bytes:
    """Build a minimal A44 publication document.

    Defaults to 24 hourly points priced "10.00" through "33.00".
    """
    if prices is None:
        prices = [f"{p}.00" for p in range(10, 34)]
    if positions is None:
        positions = list(range(1, len(prices) + 1))

    points = "".join(
        f"<Point><position>{pos}</position><price.amount>{price}</price.amount></Point>"
        for pos, price in zip(positions, prices)
    )
    xmlns = f' xmlns="{namespace}"' if namespace else ""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        f"<Publication_MarketDocument{xmlns}>"
        "<mRID>1d5ab4b0a8a64b3e9d5c7f2c3b1e8a90</mRID>"
        "<type>A44</type>"
        "<TimeSeries>"
        "<mRID>1</mRID>"
        "<businessType>A62</businessType>"
        "<in_Domain.mRID codingScheme=\"A01\">10Y1001A1001A46L</in_Domain.mRID>"
        "<out_Domain.mRID codingScheme=\"A01\">10Y1001A1001A46L</out_Domain.mRID>"
        f"<currency_Unit.name>{currency}</currency_Unit.name>"
        "<price_Measure_Unit.name>MWH</price_Measure_Unit.name>"
        "<curveType>A01</curveType>"
        "<Period>"
        f"<timeInterval><start>{start}</start><end>{end}</end></timeInterval>"
        f"<resolution>{resolution}</resolution>"
        f"{points}"
        "</Period>"
        "</TimeSeries>"
        "</Publication_MarketDocument>"
    ).encode("utf-8")


ACKNOWLEDGEMENT_DOCUMENT = (
    b'<?xml version="1.0" encoding="UTF-8"?>'
    b'<Acknowledgement_MarketDocument '
    b'xmlns="urn:iec62325.351:tc57wg16:451-1:acknowledgementdocument:7:0">'
    b"<mRID>0f7ec0f5-5e5a-4b1d</mRID>"
    b"<Reason><code>999</code>"
    b"<text>No matching data found for Data item Day-ahead Prices</text></Reason>"
    b"</Acknowledgement_MarketDocument>"
)


@pytest.fixture
def make_document():
    """Document builder, for tests that need a variant of the default."""
    return build_document


@pytest.fixture
def acknowledgement_document() -> bytes:
    return ACKNOWLEDGEMENT_DOCUMENT


@pytest.fixture
def day_ahead_document() -> bytes:
    return build_document()


@pytest.fixture
def series_start() -> datetime:
    return datetime(2022, 11, 9, 23, 0, tzinfo=timezone.utc)


@pytest.fixture
def entsoe_config() -> EntsoeConfig:
    return EntsoeConfig(
        security_token="test-token-0000",
        base_url="https://entsoe.test/api",
        request_timeout=5,
    )
