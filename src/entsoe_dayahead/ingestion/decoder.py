"""Decoder for ENTSO-E day-ahead price market documents (document type A44).

A publication document looks like this (namespace and unrelated fields
omitted)::

    <Publication_MarketDocument>
      <TimeSeries>
        <currency_Unit.name>EUR</currency_Unit.name>
        <Period>
          <timeInterval><start>2022-11-09T23:00Z</start>...</timeInterval>
          <resolution>PT60M</resolution>
          <Point><position>1</position><price.amount>10.00</price.amount></Point>
          ...
        </Period>
      </TimeSeries>
    </Publication_MarketDocument>

Points carry an offset from the period start instead of a timestamp, so
position N is the hour starting at ``start + (N - 1) hours``.

Elements are matched by local name; the provider bumps the namespace URI
between schema revisions without changing the element layout.
"""

from __future__ import annotations

import logging
import math
import re
from datetime import date, datetime, timedelta, timezone, tzinfo
from decimal import Decimal, InvalidOperation
from zoneinfo import ZoneInfo

from lxml import etree
from moneyed import Currency, CurrencyDoesNotExist, Money, get_currency

from entsoe_dayahead.core.exceptions import (
    InvalidMonetaryFormatError,
    MalformedDocumentError,
    UnknownCurrencyError,
    UnsupportedResolutionError,
)
from entsoe_dayahead.core.models import (
    PricePoint,
    RawMarketDocument,
    RawPoint,
    Resolution,
)

logger = logging.getLogger(__name__)

_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%MZ"
_ACKNOWLEDGEMENT_ROOT = "Acknowledgement_MarketDocument"

# Plain decimal with '.' separator; no exponent, grouping or NaN/Infinity
_PRICE_PATTERN = re.compile(r"^[+-]?\d+(?:\.\d+)?$")

DEFAULT_MARKET_TZ = ZoneInfo("Europe/Stockholm")


class PriceSeriesDecoder:
    """Turns a raw A44 response body into validated hourly price points.

    Decoding is all-or-nothing: any failure raises a DecodeError subclass
    and no partial list is returned. Instances hold no mutable state and
    may be shared between threads.

    Parameters
    ----------
    market_tz : tzinfo
        Zone whose calendar day the series is expected to cover. Only
        consulted when ``decode`` receives an ``expected_date``.
    """

    def __init__(self, market_tz: tzinfo = DEFAULT_MARKET_TZ) -> None:
        self._market_tz = market_tz

    def decode(
        self,
        body: bytes | str,
        expected_date: date | None = None,
    ) -> list[PricePoint]:
        """Parse and validate a response body.

        Raises:
            MalformedDocumentError: Wrong document shape, bad positions or
                timestamps, or a series for a different day.
            UnknownCurrencyError: Currency code not in the ISO registry.
            UnsupportedResolutionError: Resolution other than PT60M.
            InvalidMonetaryFormatError: A price that is not a plain decimal.
        """
        document = parse_market_document(body)
        currency = resolve_currency(document.currency)

        if document.resolution != Resolution.HOURLY:
            raise UnsupportedResolutionError(document.resolution)

        _check_positions(document.points)
        if expected_date is not None:
            self._check_market_day(document.start, expected_date)

        prices = [
            PricePoint(
                start_time=document.start + timedelta(hours=point.position - 1),
                amount=parse_amount(point.price, currency, position=point.position),
            )
            for point in document.points
        ]

        logger.debug(
            "Decoded %d %s price points starting %s",
            len(prices), currency.code, document.start.isoformat(),
        )
        return prices

    def _check_market_day(self, start: datetime, expected_date: date) -> None:
        local_day = start.astimezone(self._market_tz).date()
        if local_day != expected_date:
            raise MalformedDocumentError(
                f"series starts on market day {local_day}, expected {expected_date}",
                context={
                    "field": "timeInterval.start",
                    "value": start.strftime(_TIMESTAMP_FORMAT),
                    "expected_date": expected_date.isoformat(),
                },
            )


def decode_day_ahead_prices(
    body: bytes | str,
    expected_date: date | None = None,
    market_tz: tzinfo = DEFAULT_MARKET_TZ,
) -> list[PricePoint]:
    """Decode a response body with a one-off PriceSeriesDecoder."""
    return PriceSeriesDecoder(market_tz).decode(body, expected_date)


# --- Document shape ---


def parse_market_document(body: bytes | str) -> RawMarketDocument:
    """Extract the single time series of a market document.

    Raises:
        MalformedDocumentError: If the body is not XML, is a provider
            acknowledgement instead of a publication, or lacks a required
            element.
    """
    if isinstance(body, str):
        body = body.encode("utf-8")

    # Entity expansion and network access are never needed for this schema
    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(body, parser=parser)
    except etree.XMLSyntaxError as e:
        raise MalformedDocumentError(
            f"response is not well-formed XML: {e}",
            context={"field": "document", "value": None},
        ) from e

    if _local_name(root) == _ACKNOWLEDGEMENT_ROOT:
        raise _acknowledgement_error(root)

    series = _only_child(root, "TimeSeries")
    currency = _child_text(series, "currency_Unit.name")
    period = _only_child(series, "Period")
    interval = _only_child(period, "timeInterval")
    start = _parse_timestamp(_child_text(interval, "start"))
    resolution = _child_text(period, "resolution")

    point_elements = _children(period, "Point")
    if not point_elements:
        raise MalformedDocumentError(
            "Period contains no Point elements",
            context={"field": "Point", "value": None},
        )

    points = [
        RawPoint(
            position=_parse_position(_child_text(el, "position")),
            price=_child_text(el, "price.amount"),
        )
        for el in point_elements
    ]
    return RawMarketDocument(
        currency=currency,
        resolution=resolution,
        start=start,
        points=points,
    )


def _local_name(element: etree._Element) -> str | None:
    # Comments and processing instructions have a non-string tag
    if not isinstance(element.tag, str):
        return None
    return etree.QName(element).localname


def _children(parent: etree._Element, name: str) -> list[etree._Element]:
    return [child for child in parent if _local_name(child) == name]


def _only_child(parent: etree._Element, name: str) -> etree._Element:
    found = _children(parent, name)
    if len(found) != 1:
        raise MalformedDocumentError(
            f"expected exactly one {name} in {_local_name(parent)}, found {len(found)}",
            context={"field": name, "value": None},
        )
    return found[0]


def _child_text(parent: etree._Element, name: str) -> str:
    text = (_only_child(parent, name).text or "").strip()
    if not text:
        raise MalformedDocumentError(
            f"{name} is empty",
            context={"field": name, "value": ""},
        )
    return text


def _parse_timestamp(raw: str) -> datetime:
    try:
        return datetime.strptime(raw, _TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)
    except ValueError as e:
        raise MalformedDocumentError(
            f"invalid timeInterval start {raw!r}, expected YYYY-MM-DDTHH:MMZ",
            context={"field": "timeInterval.start", "value": raw},
        ) from e


def _parse_position(raw: str) -> int:
    # int() alone would also take "+1", "1_0" and non-ASCII digits
    if not (raw.isascii() and raw.isdigit()):
        raise MalformedDocumentError(
            f"point position {raw!r} is not an integer",
            context={"field": "position", "value": raw},
        )
    return int(raw)


def _check_positions(points: list[RawPoint]) -> None:
    """Positions must be exactly 1..N in declaration order."""
    for expected, point in enumerate(points, start=1):
        if point.position != expected:
            raise MalformedDocumentError(
                f"point positions must run 1..{len(points)} without gaps or "
                f"duplicates; found {point.position} where {expected} was expected",
                context={"field": "position", "value": str(point.position)},
            )


def _acknowledgement_error(root: etree._Element) -> MalformedDocumentError:
    """Build the error for a provider acknowledgement (no data / rejected)."""
    code = text = None
    reasons = _children(root, "Reason")
    if reasons:
        code_el = _children(reasons[0], "code")
        text_el = _children(reasons[0], "text")
        code = code_el[0].text if code_el else None
        text = text_el[0].text if text_el else None
    return MalformedDocumentError(
        f"provider returned an acknowledgement instead of prices: {text or 'no reason given'}",
        context={"field": _ACKNOWLEDGEMENT_ROOT, "value": text, "reason_code": code},
    )


# --- Currency and amounts ---


def resolve_currency(code: str) -> Currency:
    """Look up an ISO 4217 alphabetic code (exact, upper case).

    Raises:
        UnknownCurrencyError: If the registry does not know the code.
    """
    try:
        currency = get_currency(code)
    except CurrencyDoesNotExist:
        raise UnknownCurrencyError(code) from None
    if currency.code != code:
        raise UnknownCurrencyError(code)
    return currency


def normalize_price(raw: str) -> str:
    """Bring a provider price string into the form Decimal() parses.

    The provider already uses '.' as the decimal separator, which is what
    Decimal expects, so the only change is trimming whitespace. Anything
    carrying other punctuation (',' grouping or separators, exponents)
    is rejected rather than rewritten.

    Raises:
        ValueError: If the string is not a plain decimal number.
    """
    cleaned = raw.strip()
    if not _PRICE_PATTERN.match(cleaned):
        raise ValueError(f"not a plain decimal number: {raw!r}")
    return cleaned


def parse_amount(raw: str, currency: Currency, position: int | None = None) -> Money:
    """Parse a price string into Money, padded to the currency's minor unit.

    "5" becomes 5.00 EUR. Values with more fractional digits than the
    minor unit keep their precision.

    Raises:
        InvalidMonetaryFormatError: If the string is not a plain decimal, or
            has more digits than decimal arithmetic can hold.
    """
    places = _minor_unit_places(currency)
    try:
        amount = Decimal(normalize_price(raw))
        if amount.as_tuple().exponent > -places:
            # Raises InvalidOperation past the context precision
            amount = amount.quantize(Decimal(1).scaleb(-places))
    except (ValueError, InvalidOperation) as e:
        raise InvalidMonetaryFormatError(
            f"invalid money format {raw!r}",
            context={"value": raw, "position": position},
        ) from e
    return Money(amount, currency)


def _minor_unit_places(currency: Currency) -> int:
    # sub_unit is the number of minor units per major unit (100 for EUR)
    if currency.sub_unit <= 1:
        return 0
    return int(math.log10(currency.sub_unit))
