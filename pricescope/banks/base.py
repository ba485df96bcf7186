"""
Base interface for bank exchange-rate scrapers
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

import requests

from ..config import Config
from ..errors import NetworkError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExchangeQuote:
    """Buy and sell prices of one foreign currency, in the bank's local currency."""

    currency: str
    buy: Decimal
    sell: Decimal
    source_url: str

    @property
    def average(self) -> Decimal:
        return (self.buy + self.sell) / 2

    def to_foreign(self, amount: Decimal) -> Decimal:
        """Convert a local-currency ``amount`` at the buy/sell average."""
        return amount / self.average


class BankScraper(ABC):
    """Abstract base class for bank exchange-rate scrapers"""

    BASE_URL = ""

    def __init__(self, session: Optional[requests.Session] = None, timeout: Optional[float] = None):
        self.bank_name = "Unknown"
        self.bank_id = "unknown"
        self.timeout = timeout if timeout is not None else Config.REQUEST_TIMEOUT_SECONDS
        if session is None:
            session = requests.Session()
            session.headers.update({'User-Agent': Config.USER_AGENT})
        self.session = session

    @property
    def url(self) -> str:
        return self.BASE_URL

    def fetch_page(self) -> str:
        """
        Download the bank's exchange-rate page

        Returns:
            str: Page HTML

        Raises:
            NetworkError: transport failure or non-2xx status
        """
        logger.info(f"Fetching webpage: {self.url}")
        try:
            response = self.session.get(self.url, timeout=self.timeout)
        except requests.RequestException as e:
            raise NetworkError(f"getting {self.bank_name} website: {e}", url=self.url) from e

        if not 200 <= response.status_code < 300:
            raise NetworkError(
                f"unexpected status from {self.bank_name} website: {response.status_code}",
                status_code=response.status_code,
                url=self.url,
            )
        return response.text

    @abstractmethod
    def parse_quote(self, html: str) -> ExchangeQuote:
        """
        Extract the exchange quote from the page

        Args:
            html: Raw page HTML

        Returns:
            ExchangeQuote: Buy and sell prices

        Raises:
            ParseError: the page does not have the expected shape
        """

    def scrape_quote(self) -> ExchangeQuote:
        """Fetch and parse the current quote. Errors propagate to the caller."""
        quote = self.parse_quote(self.fetch_page())
        logger.info(f"{self.bank_name}: {quote.currency} buy {quote.buy} / sell {quote.sell}")
        return quote
