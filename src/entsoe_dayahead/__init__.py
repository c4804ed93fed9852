"""entsoe-dayahead: ENTSO-E day-ahead electricity prices as typed hourly points."""

__version__ = "0.1.0"
