"""Human-readable lines for comparison results and exchange quotes."""

from __future__ import annotations

from decimal import ROUND_HALF_EVEN, Decimal
from typing import List

from .banks import ExchangeQuote
from .services import ResultSet

CENTS = Decimal("0.01")


def money(value: Decimal) -> str:
    """Format ``value`` with two decimals, rounding half to even."""
    return str(value.quantize(CENTS, rounding=ROUND_HALF_EVEN))


def format_results(search_term: str, results: ResultSet, reference_currency: str) -> List[str]:
    lines: List[str] = []
    for outcome in results:
        lines.append(
            f"Buying {search_term!r} in {outcome.site.name!r} costs {reference_currency} "
            f"{money(outcome.reference_price)} (that is {outcome.site.default_currency} "
            f"{money(outcome.native_price)} at a ratio of {outcome.ratio}):"
        )
        listed = f"--> Listed as {outcome.item_title!r}"
        if outcome.permalink:
            listed += f" ({outcome.permalink})"
        lines.append(listed)
    return lines


def format_failures(results: ResultSet) -> List[str]:
    return [
        f"Site {failure.site.name!r} failed during {failure.stage}: {failure.detail}"
        for failure in results.failures
    ]


def format_quote(bank_name: str, quote: ExchangeQuote, amount: Decimal) -> List[str]:
    return [
        f"{bank_name} {quote.currency}: buy {money(quote.buy)}, sell {money(quote.sell)}, "
        f"average {money(quote.average)}",
        f"ARS {money(amount)} is {quote.currency} {money(quote.to_foreign(amount))} "
        f"at the buy/sell average",
    ]
