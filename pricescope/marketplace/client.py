"""
HTTP client for the MercadoLibre public API
"""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

import requests

from ..config import Config
from ..errors import EmptyResultError, NetworkError, ParseError
from .models import Listing, Site, parse_ratio, parse_search_results, parse_sites

logger = logging.getLogger(__name__)

# Sort order that puts the most expensive listing first
PRICE_DESC = "price_desc"


class MarketplaceClient:
    """Site discovery, search and currency conversion against the marketplace API"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        reference_currency: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or Config.MARKETPLACE_API_URL).rstrip("/")
        self.reference_currency = reference_currency or Config.REFERENCE_CURRENCY
        self.timeout = timeout if timeout is not None else Config.REQUEST_TIMEOUT_SECONDS
        if session is None:
            session = requests.Session()
            session.headers.update(Config.get_default_headers())
        self.session = session

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def discover_sites(self) -> List[Site]:
        """Return every regional site the marketplace operates."""

        payload = self._get_json(f"{self.base_url}/sites")
        sites = parse_sites(payload)
        logger.info("Discovered %d marketplace sites", len(sites))
        return sites

    def query_top_listing(self, search_term: str, site: Site) -> Listing:
        """
        Search ``site`` for ``search_term`` and return the highest-priced listing.

        Raises:
            NetworkError: transport failure or non-2xx status
            ParseError: the response does not match the search schema
            EmptyResultError: the search matched nothing on this site
        """
        payload = self._get_json(
            f"{self.base_url}/sites/{site.id}/search",
            params={"q": search_term, "sort": PRICE_DESC},
        )
        results = parse_search_results(payload)
        if not results:
            raise EmptyResultError(f"no listings found for {search_term!r} on {site.name}")

        listing = Listing.from_api(results[0])
        logger.debug("%s: top listing %r at %s %s", site.id, listing.title, listing.currency_code, listing.price)
        return listing

    def fetch_currency_ratio(self, source_currency: str, target_currency: Optional[str] = None) -> Decimal:
        """Return how many units of ``target_currency`` one unit of ``source_currency`` buys."""

        target = target_currency or self.reference_currency
        payload = self._get_json(
            f"{self.base_url}/currency_conversions/search",
            params={"from": source_currency, "to": target},
        )
        ratio = parse_ratio(payload)
        logger.debug("Conversion ratio %s->%s is %s", source_currency, target, ratio)
        return ratio

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _get_json(self, url: str, params: Optional[Dict[str, str]] = None) -> Any:
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise NetworkError(f"requesting {url}: {exc}", url=url) from exc

        if not 200 <= response.status_code < 300:
            raise NetworkError(
                f"requesting {url}: HTTP {response.status_code}",
                status_code=response.status_code,
                url=url,
            )

        try:
            return response.json(parse_float=Decimal)
        except ValueError as exc:
            raise ParseError(f"decoding response from {url}: {exc}") from exc
