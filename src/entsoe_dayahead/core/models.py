"""Pydantic data models — the system's type contracts."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone, tzinfo
from enum import StrEnum

from moneyed import Money
from pydantic import BaseModel, ConfigDict, field_validator

# --- Type Aliases ---

AreaCode = str
DomainIdentifier = str

# --- Enumerations ---


class Resolution(StrEnum):
    """Provider resolution codes (ISO 8601 durations).

    Only HOURLY is decoded; the others exist so errors can name them.
    """

    QUARTER_HOURLY = "PT15M"
    HALF_HOURLY = "PT30M"
    HOURLY = "PT60M"
    DAILY = "P1D"


class DocumentType(StrEnum):
    """Provider document type codes."""

    DAY_AHEAD_PRICES = "A44"


# --- Raw (undecoded) document shape ---


class RawPoint(BaseModel):
    """A single `Point` element before its price is parsed."""

    model_config = ConfigDict(frozen=True)

    position: int
    price: str


class RawMarketDocument(BaseModel):
    """Fields pulled out of a market document, not yet validated."""

    model_config = ConfigDict(frozen=True)

    currency: str
    resolution: str
    start: datetime
    points: list[RawPoint]


# --- Decoded output ---


class PricePoint(BaseModel):
    """One hour of day-ahead price.

    `start_time` is always timezone-aware UTC; `amount` carries both the
    decimal value and the document's currency.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    start_time: datetime
    amount: Money

    @field_validator("start_time")
    @classmethod
    def start_time_must_be_aware(cls, v: datetime) -> datetime:
        if v.tzinfo is None or v.utcoffset() is None:
            raise ValueError("start_time must be timezone-aware")
        return v.astimezone(timezone.utc)

    @property
    def currency(self) -> str:
        """ISO 4217 code of the amount."""
        return self.amount.currency.code

    @property
    def end_time(self) -> datetime:
        return self.start_time + timedelta(hours=1)

    def local_time(self, tz: tzinfo) -> datetime:
        """Start time converted to the given zone (e.g. the area's market time)."""
        return self.start_time.astimezone(tz)
