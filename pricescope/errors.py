"""Exception hierarchy shared by the marketplace client and the bank scrapers."""

from __future__ import annotations

from typing import Optional


class PriceScopeError(RuntimeError):
    """Base class for every classified failure raised by pricescope."""


class NetworkError(PriceScopeError):
    """Raised when a request fails in transport or returns a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class ParseError(PriceScopeError):
    """Raised when a response body does not match the expected schema."""


class EmptyResultError(PriceScopeError):
    """Raised when a well-formed response carries no data."""


class PageLayoutError(ParseError):
    """Raised when a scraped page lacks the elements a scraper relies on."""
