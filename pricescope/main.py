"""Command line entry points for the price comparison and the BNA dollar quote."""

from __future__ import annotations

import logging
import sys
from decimal import Decimal
from typing import List, Optional

from .banks import get_bank_scraper
from .banks.bna import parse_ar_number
from .config import Config
from .errors import ParseError, PriceScopeError
from .report import format_failures, format_quote, format_results
from .services import ComparisonService

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.DEBUG if Config.DEBUG else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def main(argv: Optional[List[str]] = None, service: Optional[ComparisonService] = None) -> int:
    """Print the most expensive listing for the search term on every site."""

    args = sys.argv[1:] if argv is None else argv
    search_term = " ".join(args).strip() or Config.DEFAULT_SEARCH_TERM
    _configure_logging()

    service = service or ComparisonService()
    try:
        results = service.run(search_term)
    except PriceScopeError as exc:
        logger.error("Could not obtain marketplace sites: %s", exc)
        print(f"could not obtain marketplace sites: {exc}", file=sys.stderr)
        return 1

    for line in format_results(search_term, results, Config.REFERENCE_CURRENCY):
        print(line)
    for line in format_failures(results):
        print(line, file=sys.stderr)
    return 0


def dollar_main(argv: Optional[List[str]] = None, bank_id: str = "bna") -> int:
    """Convert an ARS amount (default 1) to USD at the bank's buy/sell average."""

    args = sys.argv[1:] if argv is None else argv
    _configure_logging()

    try:
        amount = parse_ar_number(args[0]) if args else Decimal(1)
    except ParseError:
        print(f"not a valid amount: {args[0]!r}", file=sys.stderr)
        return 2

    scraper = get_bank_scraper(bank_id)
    try:
        quote = scraper.scrape_quote()
    except PriceScopeError as exc:
        logger.error("Could not obtain the %s exchange rate: %s", scraper.bank_name, exc)
        print(f"could not obtain the exchange rate: {exc}", file=sys.stderr)
        return 1

    for line in format_quote(scraper.bank_name, quote, amount):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
