"""Async HTTP client for the ENTSO-E transparency platform day-ahead prices."""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timezone, tzinfo

import httpx
from lxml import etree

from entsoe_dayahead.core.config import EntsoeConfig
from entsoe_dayahead.core.exceptions import TransportError
from entsoe_dayahead.core.models import DocumentType, DomainIdentifier, PricePoint
from entsoe_dayahead.ingestion.areas import area_timezone, resolve_area
from entsoe_dayahead.ingestion.decoder import PriceSeriesDecoder

logger = logging.getLogger(__name__)

# Local-day window sent to the provider
_PERIOD_START = time(0, 0)
_PERIOD_END = time(23, 0)
_PERIOD_FORMAT = "%Y%m%d%H%M"


class EntsoeClient:
    """Async client for the ENTSO-E day-ahead price endpoint.

    One logical GET per call, with the configured timeout and no retries.
    Failures surface as TransportError; what to do about them is the
    caller's decision.

    Use via `async with EntsoeClient(...) as client:`.
    """

    def __init__(
        self,
        config: EntsoeConfig,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(config.request_timeout),
            follow_redirects=True,
        )

    async def __aenter__(self) -> EntsoeClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    def build_query(
        self,
        domain: DomainIdentifier,
        day: date,
        market_tz: tzinfo,
    ) -> dict[str, str]:
        """Query parameters for one day of prices in one bidding zone.

        The window runs from 00:00 to 23:00 of the market's local day,
        expressed in UTC as the API expects, so it overlaps exactly one
        delivery day in both winter and summer time. The same domain is
        used for in_Domain and out_Domain, which is how the provider
        addresses a single zone's price.
        """
        start = datetime.combine(day, _PERIOD_START, tzinfo=market_tz)
        end = datetime.combine(day, _PERIOD_END, tzinfo=market_tz)
        return {
            "securityToken": self._config.security_token,
            "documentType": DocumentType.DAY_AHEAD_PRICES.value,
            "in_Domain": domain,
            "out_Domain": domain,
            "periodStart": start.astimezone(timezone.utc).strftime(_PERIOD_FORMAT),
            "periodEnd": end.astimezone(timezone.utc).strftime(_PERIOD_FORMAT),
        }

    async def fetch_document(self, area: str, day: date) -> bytes:
        """Download the raw A44 document for an area and day.

        Raises:
            InvalidAreaError: If the area is not supported (no request is sent).
            TransportError: Network failure or non-200 status.
        """
        domain = resolve_area(area)
        params = self.build_query(domain, day, area_timezone(area))
        url = self._config.base_url
        logger.debug(
            "Requesting day-ahead prices for %s (%s) %s-%s",
            area, domain, params["periodStart"], params["periodEnd"],
        )

        try:
            response = await self._client.get(url, params=params)
        except httpx.HTTPError as e:
            raise TransportError(
                f"request to ENTSO-E failed: {type(e).__name__}",
                context={"url": url, "error": str(e)},
            ) from e

        if response.status_code != 200:
            reason = _acknowledgement_reason(response.content)
            message = f"HTTP {response.status_code} from ENTSO-E"
            if reason:
                message = f"{message}: {reason}"
            raise TransportError(
                message,
                context={
                    "url": url,
                    "status_code": response.status_code,
                    "reason": reason,
                },
            )

        logger.debug("Received %d bytes for %s on %s", len(response.content), area, day)
        return response.content

    async def get_day_ahead_prices(self, area: str, day: date) -> list[PricePoint]:
        """Fetch and decode one market day of hourly prices.

        Returns:
            Price points in hour order, timestamps in UTC.

        Raises:
            InvalidAreaError, TransportError, or a DecodeError subclass.
        """
        body = await self.fetch_document(area, day)
        decoder = PriceSeriesDecoder(area_timezone(area))
        return decoder.decode(body, expected_date=day)


async def fetch_day_ahead_prices(
    area: str,
    day: date,
    config: EntsoeConfig,
) -> list[PricePoint]:
    """One-shot fetch with a short-lived client."""
    async with EntsoeClient(config) as client:
        return await client.get_day_ahead_prices(area, day)


def _acknowledgement_reason(body: bytes) -> str | None:
    """Reason text from an error acknowledgement body, if it is one."""
    if not body:
        return None
    try:
        parser = etree.XMLParser(resolve_entities=False, no_network=True)
        root = etree.fromstring(body, parser=parser)
    except etree.XMLSyntaxError:
        return None
    texts = root.xpath("//*[local-name()='Reason']/*[local-name()='text']/text()")
    return str(texts[0]).strip() if texts else None
