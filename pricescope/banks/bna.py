"""
Banco de la Nación Argentina exchange-rate scraper
"""
from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation

from bs4 import BeautifulSoup

from ..config import Config
from ..errors import PageLayoutError, ParseError
from .base import BankScraper, ExchangeQuote

logger = logging.getLogger(__name__)

# Label of the title cell that opens the US dollar row
USD_LABEL = "Dolar U.S.A"


def parse_ar_number(text: str) -> Decimal:
    """
    Parse a number written the Argentine way, e.g. ``1.045,50``.

    Dots are thousands separators whenever a decimal comma is present.
    """
    cleaned = text.replace("$", "").replace(" ", "").strip()
    if "," in cleaned:
        cleaned = cleaned.replace(".", "").replace(",", ".")
    try:
        value = Decimal(cleaned)
    except InvalidOperation as exc:
        raise ParseError(f"cannot convert {text!r} to a decimal value") from exc
    if not value.is_finite() or value <= 0:
        raise ParseError(f"{text!r} is not a usable exchange price")
    return value


class BnaScraper(BankScraper):
    """Scraper for the BNA banknote (billetes) quotes"""

    BASE_URL = Config.BNA_URL

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.bank_name = "Banco de la Nación Argentina"
        self.bank_id = "bna"

    def parse_quote(self, html: str) -> ExchangeQuote:
        soup = BeautifulSoup(html, 'html.parser')

        rows = soup.select("#billetes tr")
        if not rows:
            raise PageLayoutError("banknote table #billetes not found")

        for row in rows:
            cells = row.find_all("td")
            if not cells:
                continue

            title = cells[0]
            if "tit" not in (title.get("class") or []) or title.get_text(strip=True) != USD_LABEL:
                continue

            # Title, then buy, then sell
            if len(cells) < 3:
                raise PageLayoutError(f"{USD_LABEL} row has {len(cells)} cells, expected at least 3")

            buy = parse_ar_number(cells[1].get_text(strip=True))
            sell = parse_ar_number(cells[2].get_text(strip=True))
            return ExchangeQuote(currency="USD", buy=buy, sell=sell, source_url=self.url)

        raise PageLayoutError(f"no {USD_LABEL} row in the banknote table")
